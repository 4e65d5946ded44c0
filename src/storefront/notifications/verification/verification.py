"""MailVerification aggregate — a one-time code proving the shopper owns an email.

A record lives from the moment the code is mailed until it is used, found
expired on use, or swept by ``PurgeExpiredVerifications``.
"""

import secrets
from datetime import timedelta

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront
from storefront.utils.clock import as_utc, utcnow

OTP_TTL_MINUTES = 15


def generate_otp() -> str:
    """Six-digit numeric code in 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


@storefront.aggregate
class MailVerification:
    email: String(required=True, max_length=254)
    otp: String(required=True, min_length=6, max_length=6)
    order_id: Identifier()
    expires_at: DateTime(required=True)
    created_at: DateTime(default=utcnow)

    @classmethod
    def issue(cls, email, order_id=None, ttl_minutes=OTP_TTL_MINUTES, now=None):
        issued_at = as_utc(now) if now else utcnow()
        return cls(
            email=email,
            otp=generate_otp(),
            order_id=order_id,
            expires_at=issued_at + timedelta(minutes=ttl_minutes),
            created_at=issued_at,
        )

    def is_expired(self, now=None) -> bool:
        current = as_utc(now) if now else utcnow()
        return current > as_utc(self.expires_at)
