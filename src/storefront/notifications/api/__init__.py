"""Mail API package."""

from storefront.notifications.api.routes import mail_router, verification_maintenance_router

__all__ = ["mail_router", "verification_maintenance_router"]
