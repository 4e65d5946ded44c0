"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was placed with a server-computed total."""

    __version__ = 1

    order_id: Identifier(required=True)
    total_amount: Float(required=True)
    currency: String(required=True)
    item_count: Integer(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The payment gateway reported a status that moved the order."""

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    payment_status: String()
    changed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    reason: String(required=True)
    cancelled_at: DateTime(required=True)
