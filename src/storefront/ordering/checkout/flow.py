"""Checkout flow — the shopper-side state machine for the multi-step checkout.

State Machine:
    CONTACT → EMAIL
    EMAIL → OTP                (immediately when an email was given up front)
    OTP → COMPLETE
    OTP → EMAIL → CONTACT      (back navigation)

Going back discards the OTP state only. The order placed on the contact step
stays behind; re-submitting contact details places a new one and the old one
is left for ``ExpireAbandonedOrders``.

``CheckoutFlow`` drives any backend with the ``CheckoutService`` surface:
the in-process service, or ``HttpCheckoutBackend`` talking to the API.
"""

from enum import Enum
from typing import Protocol

import requests

from storefront.errors import (
    CheckoutStepError,
    InvalidOtp,
    NotFoundError,
    OtpExpired,
    StorefrontError,
    UpstreamError,
    ValidationError,
)
from storefront.ordering.checkout.service import PlacedOrder


class CheckoutStep(Enum):
    CONTACT = "contact"
    EMAIL = "email"
    OTP = "otp"
    COMPLETE = "complete"


_VALID_TRANSITIONS = {
    CheckoutStep.CONTACT: {CheckoutStep.EMAIL},
    CheckoutStep.EMAIL: {CheckoutStep.OTP, CheckoutStep.CONTACT},
    CheckoutStep.OTP: {CheckoutStep.COMPLETE, CheckoutStep.EMAIL},
    CheckoutStep.COMPLETE: set(),
}


class CheckoutBackend(Protocol):
    def place_order(self, name, phone, address, items, email=None) -> PlacedOrder: ...

    def send_confirmation(self, order_id, email=None) -> str: ...

    def verify_email(self, email, otp) -> None: ...


class CheckoutFlow:
    def __init__(self, backend: CheckoutBackend):
        self.backend = backend
        self.step = CheckoutStep.CONTACT
        self.order: PlacedOrder | None = None
        self.email: str | None = None
        self.otp_sent_to: str | None = None

    def _assert_step(self, expected: CheckoutStep):
        if self.step != expected:
            raise CheckoutStepError(f"Expected the {expected.value} step, checkout is at {self.step.value}")

    def _move_to(self, target: CheckoutStep):
        if target not in _VALID_TRANSITIONS[self.step]:
            raise CheckoutStepError(f"Cannot go from {self.step.value} to {target.value}")
        self.step = target

    def submit_contact(self, name, phone, address, items, email=None) -> CheckoutStep:
        """Place the order; mail the code straight away when an email is known."""
        self._assert_step(CheckoutStep.CONTACT)
        self.order = self.backend.place_order(name=name, phone=phone, address=address, items=items, email=email)

        self._move_to(CheckoutStep.EMAIL)
        if email:
            # A failed mail leaves the flow at EMAIL, so a retry does not place a second order
            return self.submit_email(email)
        return self.step

    def submit_email(self, email) -> CheckoutStep:
        self._assert_step(CheckoutStep.EMAIL)
        self.otp_sent_to = self.backend.send_confirmation(self.order.order_id, email=email)
        self.email = email
        self._move_to(CheckoutStep.OTP)
        return self.step

    def resend_otp(self) -> None:
        self._assert_step(CheckoutStep.OTP)
        self.otp_sent_to = self.backend.send_confirmation(self.order.order_id, email=self.email)

    def submit_otp(self, otp) -> str:
        """Verify the code; on success returns the payment session id for the gateway's hosted page.

        A wrong or expired code keeps the flow at the OTP step.
        """
        self._assert_step(CheckoutStep.OTP)
        self.backend.verify_email(self.email, otp)
        self._move_to(CheckoutStep.COMPLETE)
        return self.order.payment_session_id

    def back(self) -> CheckoutStep:
        if self.step == CheckoutStep.OTP:
            self._move_to(CheckoutStep.EMAIL)
            self.otp_sent_to = None
        elif self.step == CheckoutStep.EMAIL:
            self._move_to(CheckoutStep.CONTACT)
        else:
            raise CheckoutStepError(f"Cannot go back from {self.step.value}")
        return self.step


# Client-side mapping of API error bodies back onto the error taxonomy
_ERRORS_BY_MESSAGE = {
    InvalidOtp.default_message: InvalidOtp,
    OtpExpired.default_message: OtpExpired,
}


class HttpCheckoutBackend:
    """Drive checkout through the public API, the way the storefront page does."""

    def __init__(self, base_url: str = "", session=None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, path: str, payload: dict) -> dict:
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code < 400:
            return body

        message = body.get("error") if isinstance(body, dict) else None
        error_cls: type[StorefrontError] = _ERRORS_BY_MESSAGE.get(message) or {
            400: ValidationError,
            404: NotFoundError,
        }.get(response.status_code, UpstreamError)
        raise error_cls(message)

    def place_order(self, name, phone, address, items, email=None) -> PlacedOrder:
        payload = {
            "name": name,
            "phone": phone,
            "address": address,
            "items": [
                {
                    "productId": item["product_id"],
                    "quantity": item.get("quantity"),
                    "size": item.get("size"),
                    "color": item.get("color"),
                }
                for item in items
            ],
        }
        if email:
            payload["email"] = email
        body = self._post("/order", payload)
        return PlacedOrder(
            order_id=body["orderId"],
            payment_session_id=body["paymentSessionId"],
            total_amount=body["totalAmount"],
        )

    def send_confirmation(self, order_id, email=None) -> str:
        payload = {"orderId": order_id}
        if email:
            payload["email"] = email
        return self._post("/mail/send-confirmation", payload)["email"]

    def verify_email(self, email, otp) -> None:
        self._post("/mail/verify", {"email": email, "otp": otp})
