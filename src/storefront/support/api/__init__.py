"""Support API package."""

from storefront.support.api.routes import support_router

__all__ = ["support_router"]
