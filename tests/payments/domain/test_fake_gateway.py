"""Tests for the FakeGateway adapter and the gateway factory."""

import pytest

from storefront.config import Settings
from storefront.payments.gateway import CashfreeGateway, FakeGateway, build_gateway
from storefront.payments.gateway.fake_adapter import TEST_SIGNATURE
from storefront.payments.gateway.port import CustomerDetails

CUSTOMER = CustomerDetails(customer_id="cust_9845012345", name="Asha", phone="9845012345")


def _open_session(gateway, **overrides):
    kwargs = {
        "order_id": "order-1",
        "amount": 250.0,
        "currency": "INR",
        "customer": CUSTOMER,
        "return_url": "https://shop.example.com/order/success?orderId=order-1",
        "notify_url": "https://shop.example.com/api/v1/order/webhook",
    }
    kwargs.update(overrides)
    return gateway.create_payment_session(**kwargs)


class TestFakeGateway:
    def test_succeeds_by_default(self):
        result = _open_session(FakeGateway())
        assert result.success
        assert result.payment_session_id.startswith("fake_session_")
        assert result.gateway_order_id == "order-1"

    def test_records_calls(self):
        gateway = FakeGateway()
        _open_session(gateway, amount=99.5)
        assert len(gateway.calls) == 1
        assert gateway.calls[0]["amount"] == 99.5
        assert gateway.calls[0]["customer"] == CUSTOMER

    def test_configured_failure(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Card network down")
        result = _open_session(gateway)
        assert not result.success
        assert result.failure_reason == "Card network down"
        assert result.payment_session_id is None

    def test_signature_check(self):
        gateway = FakeGateway()
        assert gateway.verify_webhook_signature("{}", TEST_SIGNATURE, "1700000000")
        assert not gateway.verify_webhook_signature("{}", "forged", "1700000000")


class TestBuildGateway:
    def test_fake(self):
        assert isinstance(build_gateway(Settings(payment_gateway="fake")), FakeGateway)

    def test_cashfree(self):
        settings = Settings(
            payment_gateway="cashfree",
            payment_app_id="app",
            payment_secret="secret",
            cashfree_environment="sandbox",
        )
        gateway = build_gateway(settings)
        assert isinstance(gateway, CashfreeGateway)
        assert gateway.orders_url == "https://sandbox.cashfree.com/pg/orders"

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_gateway(Settings(payment_gateway="paypal"))
