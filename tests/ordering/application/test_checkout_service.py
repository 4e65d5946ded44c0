"""Tests for CheckoutService: placing orders, opening payment sessions and mailing codes."""

import pytest
from protean import current_domain

from storefront.errors import InvalidLineItem, InvalidOtp, InvalidQuantity, ProductNotFound, UpstreamError, ValidationError
from storefront.notifications.verification.verification import MailVerification
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import load_order

CONTACT = {"name": "Asha Rao", "phone": "+91 98450 12345", "address": "12 MG Road, Bengaluru"}


@pytest.fixture()
def tee_id(add_product):
    return add_product(
        base_price=100.0,
        discount_percentage=10.0,
        attributes=[{"axis": "size", "value": "M"}, {"axis": "size", "value": "XL", "price": 120.0}],
    )


def _place(checkout_service, items, email=None):
    return checkout_service.place_order(items=items, email=email, **CONTACT)


class TestPlaceOrder:
    def test_total_is_computed_from_catalogue(self, checkout_service, tee_id):
        placed = _place(
            checkout_service,
            [{"product_id": tee_id, "quantity": 2, "size": "XL", "price": 1.0, "discountedPrice": 1.0}],
        )
        assert placed.total_amount == 216.0
        assert load_order(placed.order_id).total_amount == 216.0

    def test_order_is_pending_with_payment_session(self, checkout_service, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}])
        order = load_order(placed.order_id)
        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert order.payment_session_id == placed.payment_session_id
        assert placed.payment_session_id.startswith("fake_session_")

    def test_gateway_receives_amount_and_urls(self, checkout_service, gateway, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}], email="asha@example.com")
        call = gateway.calls[0]
        assert call["amount"] == 90.0
        assert call["currency"] == "INR"
        assert call["customer"].customer_id == "cust_919845012345"
        assert call["customer"].email == "asha@example.com"
        assert call["return_url"] == f"https://shop.example.com/order/success?orderId={placed.order_id}"
        assert call["notify_url"] == "https://shop.example.com/api/v1/order/webhook"

    def test_gateway_failure_leaves_pending_order(self, checkout_service, gateway, tee_id):
        gateway.configure(should_succeed=False)
        with pytest.raises(UpstreamError):
            _place(checkout_service, [{"product_id": tee_id, "size": "M"}])

        orders = current_domain.repository_for(Order)._dao.query.all().items
        assert len(orders) == 1
        assert orders[0].status == "pending"
        assert orders[0].payment_session_id is None

    def test_unknown_product_creates_nothing(self, checkout_service, gateway):
        with pytest.raises(ProductNotFound):
            _place(checkout_service, [{"product_id": "00000000-0000-4000-8000-000000000000", "quantity": 1}])
        assert current_domain.repository_for(Order)._dao.query.all().items == []
        assert gateway.calls == []

    def test_invalid_quantity(self, checkout_service, tee_id):
        with pytest.raises(InvalidQuantity):
            _place(checkout_service, [{"product_id": tee_id, "quantity": 0, "size": "M"}])

    def test_unknown_size(self, checkout_service, tee_id):
        with pytest.raises(InvalidLineItem):
            _place(checkout_service, [{"product_id": tee_id, "size": "XXL"}])

    def test_invalid_email(self, checkout_service, tee_id):
        with pytest.raises(ValidationError):
            _place(checkout_service, [{"product_id": tee_id, "size": "M"}], email="asha")


class TestSendConfirmation:
    def test_mails_code_to_order_email(self, checkout_service, mailer, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}], email="asha@example.com")
        assert checkout_service.send_confirmation(placed.order_id) == "asha@example.com"

        mail = mailer.last_email_to("asha@example.com")
        verification = current_domain.repository_for(MailVerification)._dao.query.all().items[0]
        assert mail["subject"] == "Order Confirmation and OTP"
        assert verification.otp in mail["body"]
        assert verification.order_id == placed.order_id

    def test_email_given_late_is_recorded_on_order(self, checkout_service, mailer, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}])
        checkout_service.send_confirmation(placed.order_id, email="asha@example.com")
        assert load_order(placed.order_id).email == "asha@example.com"
        assert mailer.last_email_to("asha@example.com") is not None

    def test_no_email_anywhere(self, checkout_service, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}])
        with pytest.raises(ValidationError):
            checkout_service.send_confirmation(placed.order_id)

    def test_mail_failure(self, checkout_service, mailer, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}], email="asha@example.com")
        mailer.configure(should_succeed=False)
        with pytest.raises(UpstreamError):
            checkout_service.send_confirmation(placed.order_id)


class TestVerifyEmail:
    def test_mailed_code_verifies_once(self, checkout_service, mailer, tee_id):
        placed = _place(checkout_service, [{"product_id": tee_id, "size": "M"}], email="asha@example.com")
        checkout_service.send_confirmation(placed.order_id)
        otp = current_domain.repository_for(MailVerification)._dao.query.all().items[0].otp

        checkout_service.verify_email("asha@example.com", otp)
        with pytest.raises(InvalidOtp):
            checkout_service.verify_email("asha@example.com", otp)
