"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue by an administrator."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    base_price: Float(required=True)
    discount_percentage: Float()
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRated:
    """The product's average rating was recomputed after a review."""

    __version__ = 1

    product_id: Identifier(required=True)
    rating: Float(required=True)
