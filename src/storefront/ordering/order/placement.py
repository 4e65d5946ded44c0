"""Order placement — commands and handler for creating and preparing orders."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.queries import get_product
from storefront.domain import storefront
from storefront.errors import InvalidLineItem, OrderNotFound
from storefront.ordering.order.order import Order
from storefront.ordering.order.pricing import CartLine, compute_order_total
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def load_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise OrderNotFound(order_id) from None


def _cart_lines(items_json: str) -> list[CartLine]:
    try:
        raw_items = json.loads(items_json) if items_json else []
    except (json.JSONDecodeError, TypeError):
        raise InvalidLineItem("Items must be valid JSON") from None
    if not isinstance(raw_items, list):
        raise InvalidLineItem("Items must be a list")

    lines = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise InvalidLineItem("Each item must be an object")
        lines.append(
            CartLine(
                product_id=raw.get("product_id"),
                quantity=raw.get("quantity"),
                size=raw.get("size") or None,
                color=raw.get("color") or None,
            )
        )
    return lines


@storefront.command(part_of="Order")
class PlaceOrder:
    """Price the submitted lines and open a pending order."""

    name: String(required=True, max_length=255)
    email: String(max_length=254)
    phone: String(required=True, max_length=30)
    address: Text(required=True)
    items: Text(required=True)  # JSON list of {"product_id", "quantity", "size", "color"}
    currency: String(max_length=3, default="INR")


@storefront.command(part_of="Order")
class RecordPaymentSession:
    order_id: Identifier(required=True)
    payment_session_id: String(required=True, max_length=255)


@storefront.command(part_of="Order")
class SetOrderEmail:
    order_id: Identifier(required=True)
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=Order)
class OrderPlacementHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_total = compute_order_total(_cart_lines(command.items), get_product)

        order = Order.place(
            name=command.name,
            email=command.email,
            phone=command.phone,
            address=command.address,
            items=[line.as_item() for line in order_total.lines],
            total_amount=order_total.total,
            currency=command.currency or "INR",
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            total_amount=order_total.total,
            item_count=len(order_total.lines),
        )
        return str(order.id)

    @handle(RecordPaymentSession)
    def record_payment_session(self, command):
        order = load_order(command.order_id)
        order.record_payment_session(command.payment_session_id)
        current_domain.repository_for(Order).add(order)

    @handle(SetOrderEmail)
    def set_order_email(self, command):
        order = load_order(command.order_id)
        order.set_email(command.email)
        current_domain.repository_for(Order).add(order)
