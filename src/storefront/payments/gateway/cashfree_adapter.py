"""Cashfree Payment Gateway adapter.

Talks to the Cashfree PG REST API with ``requests``: an order is registered
with ``POST /pg/orders`` and the returned ``payment_session_id`` is what the
browser hands to Cashfree's hosted checkout.

Webhooks are signed with HMAC-SHA256 over ``timestamp + raw_body`` using the
client secret, base64 encoded, and sent in ``x-webhook-signature``.
"""

import base64
import hashlib
import hmac
import re

import requests

from storefront.payments.gateway.port import CustomerDetails, PaymentGateway, PaymentSessionResult
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_CUSTOMER_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def customer_id_for(phone: str) -> str:
    """Cashfree needs a stable alphanumeric customer id; derive it from the phone."""
    return f"cust_{_CUSTOMER_ID_UNSAFE.sub('', phone or '')}"


class CashfreeGateway(PaymentGateway):
    def __init__(
        self,
        app_id: str,
        secret_key: str,
        environment: str = "sandbox",
        api_version: str = "2025-01-01",
        timeout: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.app_id = app_id
        self.secret_key = secret_key
        self.environment = environment
        self.api_version = api_version
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def orders_url(self) -> str:
        host = "api" if self.environment == "production" else self.environment
        return f"https://{host}.cashfree.com/pg/orders"

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-api-version": self.api_version,
            "x-client-id": self.app_id,
            "x-client-secret": self.secret_key,
        }

    def create_payment_session(
        self,
        order_id: str,
        amount: float,
        currency: str,
        customer: CustomerDetails,
        return_url: str,
        notify_url: str,
    ) -> PaymentSessionResult:
        customer_details = {
            "customer_id": customer.customer_id,
            "customer_name": customer.name,
            "customer_phone": customer.phone,
        }
        if customer.email:
            customer_details["customer_email"] = customer.email

        body = {
            "order_id": order_id,
            "order_amount": amount,
            "order_currency": currency,
            "customer_details": customer_details,
            "order_meta": {"return_url": return_url, "notify_url": notify_url},
        }

        try:
            response = self.session.post(self.orders_url, json=body, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Cashfree request failed", order_id=order_id, error=str(exc))
            return PaymentSessionResult(success=False, failure_reason="Payment gateway unreachable")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            reason = data.get("message") or f"Gateway returned HTTP {response.status_code}"
            logger.error("Cashfree rejected order", order_id=order_id, status=response.status_code, reason=reason)
            return PaymentSessionResult(success=False, failure_reason=reason)

        session_id = data.get("payment_session_id")
        if not session_id:
            logger.error("Cashfree response missing payment_session_id", order_id=order_id)
            return PaymentSessionResult(success=False, failure_reason="Failed to create payment session")

        return PaymentSessionResult(
            success=True,
            payment_session_id=session_id,
            gateway_order_id=data.get("cf_order_id") and str(data["cf_order_id"]),
        )

    def sign(self, payload: str, timestamp: str) -> str:
        digest = hmac.new(self.secret_key.encode(), f"{timestamp}{payload}".encode(), hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    def verify_webhook_signature(self, payload: str, signature: str, timestamp: str) -> bool:
        if not signature or not timestamp:
            return False
        return hmac.compare_digest(self.sign(payload, timestamp), signature)
