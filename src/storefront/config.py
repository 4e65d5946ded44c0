"""Runtime settings read from the environment.

Protean's own configuration (providers, event store) lives in ``domain.toml``.
Everything else the storefront needs (gateway credentials, the SMTP relay, the
shared admin password and TTLs) is read here once at process start and handed
to the app factory.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    admin_password: str = ""

    payment_gateway: str = "fake"
    payment_app_id: str = ""
    payment_secret: str = ""
    cashfree_environment: str = "sandbox"
    cashfree_api_version: str = "2025-01-01"
    gateway_timeout_seconds: int = 10
    currency: str = "INR"
    public_base_url: str = "http://localhost:8000"

    mail_backend: str = "fake"
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = "no-reply@localhost"
    feedback_to: str = "feedback@localhost"

    otp_ttl_minutes: int = 15
    abandoned_order_hours: int = 48

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            admin_password=os.environ.get("ADMIN_PASSWORD", ""),
            payment_gateway=os.environ.get("PAYMENT_GATEWAY", "fake").lower(),
            payment_app_id=os.environ.get("PAYMENT_APP_ID", ""),
            payment_secret=os.environ.get("PAYMENT_SECRET", ""),
            cashfree_environment=os.environ.get("CASHFREE_ENVIRONMENT", "sandbox"),
            cashfree_api_version=os.environ.get("CASHFREE_API_VERSION", "2025-01-01"),
            gateway_timeout_seconds=_env_int("GATEWAY_TIMEOUT_SECONDS", 10),
            currency=os.environ.get("ORDER_CURRENCY", "INR"),
            public_base_url=os.environ.get("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
            mail_backend=os.environ.get("MAIL_BACKEND", "fake").lower(),
            smtp_host=os.environ.get("SMTP_HOST", "localhost"),
            smtp_port=_env_int("SMTP_PORT", 587),
            smtp_secure=_env_bool("SMTP_SECURE", False),
            smtp_user=os.environ.get("SMTP_USER", ""),
            smtp_password=os.environ.get("SMTP_PASS", ""),
            mail_from=os.environ.get("SMTP_FROM", "no-reply@localhost"),
            feedback_to=os.environ.get("SMTP_FEEDBACK_TO", "feedback@localhost"),
            otp_ttl_minutes=_env_int("OTP_TTL_MINUTES", 15),
            abandoned_order_hours=_env_int("ABANDONED_ORDER_HOURS", 48),
        )
