"""Read-side lookups over the product catalogue."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.errors import ProductNotFound, ValidationError

NEW_ARRIVALS_LIMIT = 10
BEST_SELLERS_LIMIT = 4


def _products():
    return current_domain.repository_for(Product)._dao.query


def get_product(product_id: str) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id) from None


def list_products(skip: int = 0, limit: int = 10) -> list[Product]:
    if skip < 0:
        raise ValidationError("skip must be a non-negative integer")
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    return _products().order_by("created_at").offset(skip).limit(limit).all().items


def search_products(query: str) -> list[Product]:
    """Case-insensitive substring match on name or description."""
    needle = (query or "").strip().lower()
    if not needle:
        raise ValidationError("Query parameter is required")
    # Scans the whole catalogue: descriptions are optional, so matching stays in Python
    return [
        product
        for product in _products().order_by("created_at").limit(None).all().items
        if needle in (product.name or "").lower() or needle in (product.description or "").lower()
    ]


def new_arrivals(limit: int = NEW_ARRIVALS_LIMIT) -> list[Product]:
    return _products().order_by("-created_at").limit(limit).all().items


def best_sellers(limit: int = BEST_SELLERS_LIMIT) -> list[Product]:
    return _products().order_by("-rating").limit(limit).all().items
