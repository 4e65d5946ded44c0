"""Payment gateway factory.

``build_gateway(settings)`` picks the adapter named by ``PAYMENT_GATEWAY``:
- FakeGateway for development and testing
- CashfreeGateway for production
"""

from storefront.config import Settings
from storefront.payments.gateway.cashfree_adapter import CashfreeGateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import CustomerDetails, PaymentGateway, PaymentSessionResult

__all__ = [
    "CashfreeGateway",
    "CustomerDetails",
    "FakeGateway",
    "PaymentGateway",
    "PaymentSessionResult",
    "build_gateway",
]


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.payment_gateway == "fake":
        return FakeGateway()
    if settings.payment_gateway == "cashfree":
        return CashfreeGateway(
            app_id=settings.payment_app_id,
            secret_key=settings.payment_secret,
            environment=settings.cashfree_environment,
            api_version=settings.cashfree_api_version,
            timeout=settings.gateway_timeout_seconds,
        )
    raise ValueError(f"Unknown payment gateway: {settings.payment_gateway}")
