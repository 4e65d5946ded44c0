"""Payment webhook projection — command and handler.

Moves an order's status according to what the payment gateway reports.
"""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import InvalidOrderId
from storefront.ordering.order.order import Order, OrderStatus, project_status
from storefront.ordering.order.placement import load_order
from storefront.shared.validation import is_valid_identifier
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class ProcessPaymentWebhook:
    """Apply a gateway payment notification to the referenced order."""

    order_id = String(max_length=255)  # unvalidated, as received from the gateway
    payment_status = String(max_length=50)
    event_type = String(max_length=100)


@storefront.command_handler(part_of=Order)
class PaymentWebhookHandler:
    @handle(ProcessPaymentWebhook)
    def process_webhook(self, command):
        if not is_valid_identifier(command.order_id):
            raise InvalidOrderId(f"Invalid order ID: {command.order_id}")

        if project_status(command.payment_status) == OrderStatus.PENDING:
            logger.warning(
                "Payment not successful",
                order_id=command.order_id,
                payment_status=command.payment_status,
                event_type=command.event_type,
            )

        order = load_order(command.order_id)
        changed = order.apply_payment_status(command.payment_status)
        if changed:
            current_domain.repository_for(Order).add(order)

        logger.info(
            "Payment webhook applied",
            order_id=command.order_id,
            payment_status=command.payment_status,
            event_type=command.event_type,
            order_status=order.status,
            changed=changed,
        )
        return order.status
