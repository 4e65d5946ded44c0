"""Order aggregate — a shopper's purchase from checkout to delivery.

The order total is computed server-side from the catalogue when the order is
placed and never taken from the client. After that the order only moves
through the fulfilment statuses, either because the payment gateway reported
on it (webhook projection) or because it sat unpaid for too long.

Status:
    pending → processing → shipped → delivered
    pending → cancelled        (abandoned before payment)

Payment status:
    pending → paid | failed
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.utils.clock import utcnow


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# Gateway-reported payment statuses that mean the money has been captured
SUCCESSFUL_PAYMENT_STATUSES = frozenset({"completed", "success", "paid"})


def project_status(payment_status: str | None) -> OrderStatus:
    """Map a gateway payment status onto the order status it implies."""
    if payment_status and payment_status.strip().lower() in SUCCESSFUL_PAYMENT_STATUSES:
        return OrderStatus.PROCESSING
    return OrderStatus.PENDING


@storefront.entity(part_of="Order")
class OrderItem:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    size: String(max_length=100)
    color: String(max_length=100)


@storefront.aggregate
class Order:
    name: String(required=True, max_length=255)
    email: String(max_length=254)
    phone: String(required=True, max_length=30)
    address: Text(required=True)
    items: HasMany(OrderItem)
    total_amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default="INR")
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status: String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_session_id: String(max_length=255)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def place(cls, name, phone, address, items, total_amount, email=None, currency="INR"):
        """Create a pending order from already-priced line items."""
        now = utcnow()
        order = cls(
            name=name,
            email=email,
            phone=phone,
            address=address,
            items=[OrderItem(**item) for item in items],
            total_amount=total_amount,
            currency=currency,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                total_amount=total_amount,
                currency=currency,
                item_count=len(order.items),
                placed_at=now,
            )
        )
        return order

    @property
    def awaiting_payment(self) -> bool:
        return self.status == OrderStatus.PENDING.value and self.payment_status == PaymentStatus.PENDING.value

    def record_payment_session(self, payment_session_id: str):
        self.payment_session_id = payment_session_id
        self.updated_at = utcnow()

    def set_email(self, email: str):
        if not self.awaiting_payment:
            raise ValidationError({"email": ["Email can only be changed before payment"]})
        self.email = email
        self.updated_at = utcnow()

    def apply_payment_status(self, payment_status: str | None) -> bool:
        """Project a gateway payment status onto the order.

        Idempotent: reapplying the same status changes nothing and raises no
        event. Returns whether the order status changed.
        """
        target = project_status(payment_status)
        if self.status == target.value:
            return False

        previous = self.status
        self.status = target.value
        self.updated_at = utcnow()
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                payment_status=payment_status,
                changed_at=self.updated_at,
            )
        )
        return True

    def cancel_abandoned(self):
        """Cancel an order that was never paid for."""
        if not self.awaiting_payment:
            raise ValidationError({"status": [f"Cannot cancel an order that is {self.status}"]})

        self.status = OrderStatus.CANCELLED.value
        self.updated_at = utcnow()
        self.raise_(OrderCancelled(order_id=str(self.id), reason="abandoned", cancelled_at=self.updated_at))
