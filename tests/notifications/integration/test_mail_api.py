"""Integration tests for the mail endpoints: confirmation codes, verification and feedback."""

import re
from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain

from storefront.notifications.api import mail_router, verification_maintenance_router
from storefront.notifications.verification.verification import MailVerification
from storefront.ordering.api import order_router


@pytest.fixture()
def client(make_client):
    return make_client(order_router, mail_router, verification_maintenance_router)


@pytest.fixture()
def order_id(client, add_product):
    product_id = add_product(name="Mug", base_price=250.0)
    response = client.post(
        "/order",
        json={"name": "Asha", "phone": "9845012345", "address": "12 MG Road", "items": [{"productId": product_id}]},
    )
    return response.json()["orderId"]


def _mailed_otp(mailer, address):
    return re.search(r"\b(\d{6})\b", mailer.last_email_to(address)["body"]).group(1)


class TestSendConfirmation:
    def test_sends_code(self, client, mailer, order_id):
        response = client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        assert response.status_code == 200
        assert response.json()["email"] == "asha@example.com"
        assert mailer.last_email_to("asha@example.com")["subject"] == "Order Confirmation and OTP"

    def test_requires_an_email(self, client, order_id):
        response = client.post("/mail/send-confirmation", json={"orderId": order_id})
        assert response.status_code == 400
        assert response.json() == {"error": "Email is required"}

    def test_invalid_email(self, client, order_id):
        response = client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha"})
        assert response.status_code == 400

    def test_unknown_order(self, client):
        response = client.post(
            "/mail/send-confirmation",
            json={"orderId": "00000000-0000-4000-8000-000000000000", "email": "asha@example.com"},
        )
        assert response.status_code == 404

    def test_mail_relay_down(self, client, mailer, order_id):
        mailer.configure(should_succeed=False)
        response = client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send confirmation email"}


class TestVerify:
    def test_verifies_mailed_code(self, client, mailer, order_id):
        client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        otp = _mailed_otp(mailer, "asha@example.com")

        response = client.post("/mail/verify", json={"email": "asha@example.com", "otp": otp})
        assert response.status_code == 200
        assert response.json() == {"message": "Email verified successfully"}

    def test_wrong_code(self, client, mailer, order_id):
        client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        otp = _mailed_otp(mailer, "asha@example.com")
        wrong = "111111" if otp != "111111" else "222222"

        response = client.post("/mail/verify", json={"email": "asha@example.com", "otp": wrong})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid OTP"}

    def test_expired_code(self, client, mailer, order_id):
        client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        otp = _mailed_otp(mailer, "asha@example.com")

        repo = current_domain.repository_for(MailVerification)
        verification = repo._dao.query.all().items[0]
        verification.expires_at = datetime.now(UTC) - timedelta(minutes=1)
        repo.add(verification)

        response = client.post("/mail/verify", json={"email": "asha@example.com", "otp": otp})
        assert response.status_code == 400
        assert response.json() == {"error": "OTP expired"}

        retry = client.post("/mail/verify", json={"email": "asha@example.com", "otp": otp})
        assert retry.json() == {"error": "Invalid OTP"}


class TestFeedback:
    def test_relays_feedback(self, client, mailer, settings):
        response = client.post(
            "/mail/feedback",
            json={"email": "asha@example.com", "subject": "Sizing", "message": "The XL runs small."},
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Feedback sent successfully"}

        mail = mailer.last_email_to(settings.feedback_to)
        assert mail["subject"] == "Feedback: Sizing"
        assert mail["reply_to"] == "asha@example.com"

    def test_invalid_email(self, client):
        response = client.post("/mail/feedback", json={"email": "nope", "subject": "Hi", "message": "Hello"})
        assert response.status_code == 400

    def test_relay_down(self, client, mailer):
        mailer.configure(should_succeed=False)
        response = client.post(
            "/mail/feedback", json={"email": "asha@example.com", "subject": "Hi", "message": "Hello"}
        )
        assert response.status_code == 500


class TestPurge:
    def test_purge_requires_admin(self, client):
        assert client.post("/maintenance/purge-verifications").status_code == 401

    def test_purges_expired(self, client, admin_headers, order_id):
        client.post("/mail/send-confirmation", json={"orderId": order_id, "email": "asha@example.com"})
        repo = current_domain.repository_for(MailVerification)
        verification = repo._dao.query.all().items[0]
        verification.expires_at = datetime.now(UTC) - timedelta(minutes=1)
        repo.add(verification)

        response = client.post("/maintenance/purge-verifications", headers=admin_headers)
        assert response.json() == {"count": 1}
        assert repo._dao.query.all().items == []
