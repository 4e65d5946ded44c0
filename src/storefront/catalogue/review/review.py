"""Review aggregate: one shopper's star rating of a product."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.utils.clock import utcnow


@storefront.aggregate
class Review:
    product_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    rating: Integer(required=True, min_value=1, max_value=5)
    review: Text(required=True)
    created_at: DateTime(default=utcnow)
