"""Pydantic request/response schemas for the catalogue API."""

import json
from datetime import datetime

from pydantic import Field

from storefront.catalogue.product.pricing import quote_price
from storefront.catalogue.product.product import AttributeAxis
from storefront.shared.schemas import CamelModel

# --- Requests ---


class AttributeOptionSchema(CamelModel):
    value: str = Field(..., min_length=1, max_length=100)
    price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)


class ProductAttributesSchema(CamelModel):
    size: list[AttributeOptionSchema] = Field(default_factory=list)
    color: list[AttributeOptionSchema] = Field(default_factory=list)

    def to_json(self) -> str:
        """Flatten into the ``[{"axis", "value", ...}]`` list the command carries."""
        flattened = []
        for axis in AttributeAxis:
            for option in getattr(self, axis.value):
                flattened.append({"axis": axis.value, **option.model_dump()})
        return json.dumps(flattened)


class AddProductRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Tee",
                    "description": "Heavyweight cotton t-shirt",
                    "category": "t-shirts",
                    "fileId": "tee-front",
                    "gallery": ["tee-back"],
                    "price": 100.0,
                    "discountPercentage": 10,
                    "stock": 25,
                    "attributes": {"size": [{"value": "XL", "price": 120.0, "stock": 5}], "color": []},
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    file_id: str | None = Field(None, max_length=255)
    gallery: list[str] = Field(default_factory=list)
    price: float = Field(..., ge=0)
    discount_percentage: float = Field(0.0, ge=0, le=100)
    stock: int = Field(0, ge=0)
    attributes: ProductAttributesSchema = Field(default_factory=ProductAttributesSchema)


class SubmitReviewRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=254)
    product_id: str
    rating: int = Field(..., ge=1, le=5)
    review: str = Field(..., min_length=1)


# --- Responses ---


class ProductIdResponse(CamelModel):
    product_id: str
    message: str = "Product added successfully"


class ProductResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
    category: str | None = None
    file_id: str | None = None
    gallery: list[str] = Field(default_factory=list)
    price: float
    discount_percentage: float = 0.0
    discounted_price: float
    rating: float = 0.0
    stock: int = 0
    attributes: ProductAttributesSchema
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        attributes = {
            axis.value: [
                AttributeOptionSchema(value=a.value, price=a.price, stock=a.stock or 0)
                for a in product.attributes_on(axis)
            ]
            for axis in AttributeAxis
        }
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            category=product.category,
            file_id=product.file_id,
            gallery=product.gallery_entries(),
            price=product.base_price,
            discount_percentage=product.discount_percentage or 0.0,
            discounted_price=quote_price(product)["discounted_price"],
            rating=product.rating or 0.0,
            stock=product.stock or 0,
            attributes=ProductAttributesSchema(**attributes),
            created_at=product.created_at,
        )


class PriceQuoteResponse(CamelModel):
    product_id: str
    size: str | None = None
    color: str | None = None
    unit_price: float
    discount_percentage: float
    discounted_price: float


class ReviewSubmittedResponse(CamelModel):
    message: str = "Review submitted"
    review_id: str
    rating: float
