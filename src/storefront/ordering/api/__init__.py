"""Ordering API package."""

from storefront.ordering.api.routes import maintenance_router, order_router, orders_admin_router

__all__ = ["order_router", "orders_admin_router", "maintenance_router"]
