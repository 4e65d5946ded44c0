"""Read-side views of orders for shoppers and administrators."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.errors import InvalidOrderId
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import load_order
from storefront.shared.validation import is_valid_identifier

UNKNOWN_PRODUCT = {"name": "Unknown Product", "price": 0.0, "file_id": ""}


def _product_summary(product_id: str, cache: dict) -> dict:
    if product_id not in cache:
        try:
            product = current_domain.repository_for(Product).get(product_id)
            cache[product_id] = {"name": product.name, "price": product.base_price, "file_id": product.file_id or ""}
        except ObjectNotFoundError:
            cache[product_id] = dict(UNKNOWN_PRODUCT)
    return cache[product_id]


def order_view(order: Order, product_cache: dict | None = None) -> dict:
    """Flatten an order, joining each line with its product summary."""
    cache = product_cache if product_cache is not None else {}
    return {
        "order_id": str(order.id),
        "name": order.name,
        "email": order.email,
        "phone": order.phone,
        "address": order.address,
        "status": order.status,
        "payment_status": order.payment_status,
        "total_amount": order.total_amount,
        "currency": order.currency,
        "created_at": order.created_at,
        "items": [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "size": item.size,
                "color": item.color,
                "product": _product_summary(str(item.product_id), cache),
            }
            for item in order.items
        ],
    }


def track_order(order_id: str) -> dict:
    if not is_valid_identifier(order_id):
        raise InvalidOrderId()
    return order_view(load_order(order_id))


def order_status(order_id: str) -> dict:
    if not is_valid_identifier(order_id):
        raise InvalidOrderId()
    order = load_order(order_id)
    return {"order_id": str(order.id), "status": order.status, "payment_status": order.payment_status}


def list_orders() -> list[dict]:
    """All orders, newest first, for the admin dashboard."""
    orders = current_domain.repository_for(Order)._dao.query.order_by("-created_at").limit(None).all().items
    cache = {}
    return [order_view(order, cache) for order in orders]
