"""Catalogue API package."""

from storefront.catalogue.api.routes import product_router, review_router

__all__ = ["product_router", "review_router"]
