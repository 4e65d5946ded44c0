"""Configurable fake payment gateway for development and testing.

Simulates the hosted-checkout gateway without any external calls. It can be
told to fail, which is how tests exercise the "gateway down" path.
"""

from uuid import uuid4

from storefront.payments.gateway.port import CustomerDetails, PaymentGateway, PaymentSessionResult

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_session(
        self,
        order_id: str,
        amount: float,
        currency: str,
        customer: CustomerDetails,
        return_url: str,
        notify_url: str,
    ) -> PaymentSessionResult:
        self.calls.append(
            {
                "method": "create_payment_session",
                "order_id": order_id,
                "amount": amount,
                "currency": currency,
                "customer": customer,
                "return_url": return_url,
                "notify_url": notify_url,
            }
        )

        if self.should_succeed:
            return PaymentSessionResult(
                success=True,
                payment_session_id=f"fake_session_{uuid4().hex[:12]}",
                gateway_order_id=order_id,
            )
        return PaymentSessionResult(success=False, failure_reason=self.failure_reason)

    def verify_webhook_signature(self, payload: str, signature: str, timestamp: str) -> bool:  # noqa: ARG002
        return signature == TEST_SIGNATURE
