"""Payment gateway port (abstract interface).

Defines the contract every gateway adapter implements, so checkout can swap
between FakeGateway (dev/test) and CashfreeGateway (production) without
touching domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerDetails:
    customer_id: str
    name: str
    phone: str
    email: str | None = None


@dataclass(frozen=True)
class PaymentSessionResult:
    """Result of asking the gateway to open a hosted payment session."""

    success: bool
    payment_session_id: str | None = None
    gateway_order_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_payment_session(
        self,
        order_id: str,
        amount: float,
        currency: str,
        customer: CustomerDetails,
        return_url: str,
        notify_url: str,
    ) -> PaymentSessionResult:
        """Register the order with the gateway and return a session id for the hosted page."""
        ...

    @abstractmethod
    def verify_webhook_signature(self, payload: str, signature: str, timestamp: str) -> bool:
        """Verify that a webhook payload is authentically from the gateway."""
        ...
