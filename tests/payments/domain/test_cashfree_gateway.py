"""Tests for the Cashfree adapter against a stubbed HTTP session."""

import base64
import hashlib
import hmac

import pytest
import requests

from storefront.payments.gateway.cashfree_adapter import CashfreeGateway, customer_id_for
from storefront.payments.gateway.port import CustomerDetails


class StubResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _gateway(session, environment="sandbox"):
    return CashfreeGateway(app_id="app-123", secret_key="s3cret", environment=environment, session=session)


def _open_session(gateway, email="asha@example.com"):
    return gateway.create_payment_session(
        order_id="order-1",
        amount=250.0,
        currency="INR",
        customer=CustomerDetails(customer_id="cust_9845012345", name="Asha", phone="9845012345", email=email),
        return_url="https://shop.example.com/order/success?orderId=order-1",
        notify_url="https://shop.example.com/api/v1/order/webhook",
    )


class TestCustomerId:
    def test_keeps_only_safe_characters(self):
        assert customer_id_for("+91 98450-12345") == "cust_9198450-12345"
        assert customer_id_for("+91 (984) 501 2345") == "cust_919845012345"

    def test_empty_phone(self):
        assert customer_id_for("") == "cust_"


class TestCreatePaymentSession:
    def test_success(self):
        session = StubSession(StubResponse(200, {"payment_session_id": "session_abc", "cf_order_id": 42}))
        result = _open_session(_gateway(session))

        assert result.success
        assert result.payment_session_id == "session_abc"
        assert result.gateway_order_id == "42"

    def test_request_shape(self):
        session = StubSession(StubResponse(200, {"payment_session_id": "session_abc"}))
        _open_session(_gateway(session))

        sent = session.requests[0]
        assert sent["url"] == "https://sandbox.cashfree.com/pg/orders"
        assert sent["headers"]["x-client-id"] == "app-123"
        assert sent["headers"]["x-client-secret"] == "s3cret"
        assert sent["headers"]["x-api-version"] == "2025-01-01"
        assert sent["json"]["order_amount"] == 250.0
        assert sent["json"]["customer_details"]["customer_email"] == "asha@example.com"
        assert sent["json"]["order_meta"]["notify_url"] == "https://shop.example.com/api/v1/order/webhook"

    def test_email_omitted_when_unknown(self):
        session = StubSession(StubResponse(200, {"payment_session_id": "session_abc"}))
        _open_session(_gateway(session), email=None)
        assert "customer_email" not in session.requests[0]["json"]["customer_details"]

    def test_production_host(self):
        assert _gateway(StubSession()).orders_url == "https://sandbox.cashfree.com/pg/orders"
        assert _gateway(StubSession(), environment="production").orders_url == "https://api.cashfree.com/pg/orders"

    def test_gateway_error_response(self):
        session = StubSession(StubResponse(400, {"message": "order_amount is invalid"}))
        result = _open_session(_gateway(session))
        assert not result.success
        assert result.failure_reason == "order_amount is invalid"

    def test_error_without_body(self):
        result = _open_session(_gateway(StubSession(StubResponse(502))))
        assert not result.success
        assert result.failure_reason == "Gateway returned HTTP 502"

    def test_missing_session_id(self):
        result = _open_session(_gateway(StubSession(StubResponse(200, {"cf_order_id": 42}))))
        assert not result.success

    def test_network_failure(self):
        session = StubSession(error=requests.ConnectionError("connection refused"))
        result = _open_session(_gateway(session))
        assert not result.success
        assert result.failure_reason == "Payment gateway unreachable"


class TestWebhookSignature:
    @pytest.fixture()
    def gateway(self):
        return _gateway(StubSession())

    def test_valid_signature(self, gateway):
        payload = '{"type":"PAYMENT_SUCCESS_WEBHOOK"}'
        expected = base64.b64encode(
            hmac.new(b"s3cret", f"1700000000{payload}".encode(), hashlib.sha256).digest()
        ).decode()
        assert gateway.sign(payload, "1700000000") == expected
        assert gateway.verify_webhook_signature(payload, expected, "1700000000")

    def test_tampered_payload(self, gateway):
        signature = gateway.sign('{"amount":1}', "1700000000")
        assert not gateway.verify_webhook_signature('{"amount":1000}', signature, "1700000000")

    def test_missing_headers(self, gateway):
        assert not gateway.verify_webhook_signature("{}", "", "1700000000")
        assert not gateway.verify_webhook_signature("{}", "sig", "")
