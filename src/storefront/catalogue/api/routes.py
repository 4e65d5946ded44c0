"""FastAPI endpoints for the catalogue: products, price quotes and reviews."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    AddProductRequest,
    PriceQuoteResponse,
    ProductIdResponse,
    ProductResponse,
    ReviewSubmittedResponse,
    SubmitReviewRequest,
)
from storefront.catalogue.product import queries
from storefront.catalogue.product.creation import AddProduct
from storefront.catalogue.product.pricing import quote_price
from storefront.catalogue.review.submission import SubmitReview
from storefront.errors import ValidationError
from storefront.shared.http import require_admin
from storefront.shared.validation import is_valid_email, is_valid_identifier

product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(prefix="/review", tags=["reviews"])


def _checked_product_id(product_id: str) -> str:
    if not is_valid_identifier(product_id):
        raise ValidationError("Invalid product ID")
    return product_id


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(skip: int = Query(0), limit: int = Query(10)) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in queries.list_products(skip=skip, limit=limit)]


@product_router.post(
    "", status_code=201, response_model=ProductIdResponse, dependencies=[Depends(require_admin)]
)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        category=body.category,
        file_id=body.file_id,
        gallery=json.dumps(body.gallery),
        base_price=body.price,
        discount_percentage=body.discount_percentage,
        stock=body.stock,
        attributes=body.attributes.to_json(),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/search", response_model=list[ProductResponse])
async def search_products(q: str = Query("")) -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in queries.search_products(q)]


@product_router.get("/arrivals", response_model=list[ProductResponse])
async def new_arrivals() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in queries.new_arrivals()]


@product_router.get("/best-sellers", response_model=list[ProductResponse])
async def best_sellers() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in queries.best_sellers()]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = queries.get_product(_checked_product_id(product_id))
    return ProductResponse.from_product(product)


@product_router.get("/{product_id}/price", response_model=PriceQuoteResponse)
async def get_price_quote(
    product_id: str,
    size: str | None = Query(None),
    color: str | None = Query(None),
) -> PriceQuoteResponse:
    product = queries.get_product(_checked_product_id(product_id))
    return PriceQuoteResponse(product_id=str(product.id), size=size, color=color, **quote_price(product, size, color))


# --- Review endpoints ---


@review_router.post("/rate", status_code=201, response_model=ReviewSubmittedResponse)
async def rate_product(body: SubmitReviewRequest) -> ReviewSubmittedResponse:
    if not is_valid_email(body.email):
        raise ValidationError("Invalid email format")
    _checked_product_id(body.product_id)

    result = current_domain.process(
        SubmitReview(
            product_id=body.product_id,
            email=body.email,
            rating=body.rating,
            review=body.review,
        ),
        asynchronous=False,
    )
    return ReviewSubmittedResponse(review_id=result["review_id"], rating=result["rating"])
