"""Abandoned order expiry — cancels orders that were never paid for.

Orders are created before the shopper pays, so an abandoned checkout leaves a
pending order behind. Triggered periodically by an external scheduler via the
maintenance API endpoint or ``storefront.manage expire-orders``.
"""

from datetime import timedelta

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import OrderNotFound
from storefront.ordering.order.order import Order, OrderStatus, PaymentStatus
from storefront.ordering.order.placement import load_order
from storefront.utils.clock import as_utc, utcnow
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CancelAbandonedOrder:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class ExpireAbandonedOrders:
    """Cancel unpaid orders older than the threshold."""

    max_age_hours = Integer(default=48, min_value=1)
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=Order)
class AbandonedOrdersHandler:
    @handle(CancelAbandonedOrder)
    def cancel_abandoned_order(self, command):
        order = load_order(command.order_id)
        order.cancel_abandoned()
        current_domain.repository_for(Order).add(order)

    @handle(ExpireAbandonedOrders)
    def expire_abandoned_orders(self, command):
        as_of = as_utc(command.as_of) if command.as_of else utcnow()
        cutoff = as_of - timedelta(hours=command.max_age_hours or 48)

        logger.info("Checking for abandoned orders", cutoff=cutoff.isoformat())

        unpaid = (
            current_domain.repository_for(Order)
            ._dao.query.filter(status=OrderStatus.PENDING.value, payment_status=PaymentStatus.PENDING.value)
            .limit(None)
            .all()
            .items
        )
        stale = [order for order in unpaid if order.created_at and as_utc(order.created_at) <= cutoff]
        if not stale:
            logger.info("No abandoned orders found")
            return 0

        cancelled = 0
        for order in stale:
            try:
                current_domain.process(CancelAbandonedOrder(order_id=str(order.id)), asynchronous=False)
                cancelled += 1
                logger.info("Cancelled abandoned order", order_id=str(order.id), created_at=str(order.created_at))
            except (ValidationError, OrderNotFound) as exc:
                logger.warning("Failed to cancel abandoned order", order_id=str(order.id), error=str(exc))

        logger.info("Abandoned order expiry complete", cancelled_count=cancelled)
        return cancelled
