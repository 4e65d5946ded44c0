"""Checkout service — the server side of the checkout flow.

Placing an order and opening the gateway's payment session are two separate
steps: the order is committed first, then the gateway is called outside the
unit of work. A gateway failure therefore leaves a pending order behind
(swept later by ``ExpireAbandonedOrders``) and surfaces as ``UpstreamError``.
"""

import json
from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.config import Settings
from storefront.errors import UpstreamError, ValidationError
from storefront.notifications.channel.email_port import EmailPort
from storefront.notifications.templates import get_template
from storefront.notifications.verification.confirmation import confirm_email
from storefront.notifications.verification.issuance import IssueOtp
from storefront.ordering.order import queries as order_queries
from storefront.ordering.order.placement import PlaceOrder, RecordPaymentSession, load_order
from storefront.payments.gateway.cashfree_adapter import customer_id_for
from storefront.payments.gateway.port import CustomerDetails, PaymentGateway
from storefront.shared.validation import is_valid_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order_id: str
    payment_session_id: str
    total_amount: float


class CheckoutService:
    def __init__(self, gateway: PaymentGateway, mailer: EmailPort, settings: Settings):
        self.gateway = gateway
        self.mailer = mailer
        self.settings = settings

    def place_order(self, name: str, phone: str, address: str, items: list[dict], email: str | None = None) -> PlacedOrder:
        """Price and persist the order, then open a payment session for it.

        ``items`` are ``{"product_id", "quantity", "size", "color"}`` dicts;
        any client-side price is ignored.
        """
        if email and not is_valid_email(email):
            raise ValidationError("Invalid email format")

        order_id = current_domain.process(
            PlaceOrder(
                name=name,
                email=email,
                phone=phone,
                address=address,
                items=json.dumps(items),
                currency=self.settings.currency,
            ),
            asynchronous=False,
        )
        order = load_order(order_id)

        base_url = self.settings.public_base_url
        result = self.gateway.create_payment_session(
            order_id=order_id,
            amount=order.total_amount,
            currency=order.currency,
            customer=CustomerDetails(customer_id=customer_id_for(phone), name=name, phone=phone, email=email),
            return_url=f"{base_url}/order/success?orderId={order_id}",
            notify_url=f"{base_url}/api/v1/order/webhook",
        )
        if not result.success:
            logger.error("Payment session failed", order_id=order_id, reason=result.failure_reason)
            raise UpstreamError("Failed to create payment session")

        current_domain.process(
            RecordPaymentSession(order_id=order_id, payment_session_id=result.payment_session_id),
            asynchronous=False,
        )
        return PlacedOrder(
            order_id=order_id,
            payment_session_id=result.payment_session_id,
            total_amount=order.total_amount,
        )

    def send_confirmation(self, order_id: str, email: str | None = None) -> str:
        """Issue an OTP for the order and mail it; returns the address it went to."""
        if email and not is_valid_email(email):
            raise ValidationError("Invalid email format")

        issued = current_domain.process(
            IssueOtp(order_id=order_id, email=email, ttl_minutes=self.settings.otp_ttl_minutes),
            asynchronous=False,
        )
        content = get_template("otp_confirmation").render(
            {"otp": issued["otp"], "ttl_minutes": self.settings.otp_ttl_minutes}
        )
        result = self.mailer.send(to=issued["email"], subject=content["subject"], body=content["body"])
        if result.get("status") != "sent":
            logger.error("OTP mail failed", order_id=order_id, error=result.get("error"))
            raise UpstreamError("Failed to send confirmation email")

        logger.info("OTP mailed", order_id=order_id, message_id=result.get("message_id"))
        return issued["email"]

    def verify_email(self, email: str, otp: str) -> None:
        confirm_email(email, otp)

    def order_status(self, order_id: str) -> dict:
        return order_queries.order_status(order_id)

