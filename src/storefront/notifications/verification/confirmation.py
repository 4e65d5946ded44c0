"""OTP confirmation — command, handler and the ``confirm_email`` entry point.

A code is single-use: the matching record is deleted whether it verifies or
turns out to be expired. The handler reports the outcome instead of raising,
because an exception inside the unit of work would roll the delete back.
"""

from enum import Enum

from protean import handle
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import InvalidOtp, OtpExpired
from storefront.notifications.verification.verification import MailVerification
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class VerificationOutcome(Enum):
    VERIFIED = "verified"
    EXPIRED = "expired"
    INVALID = "invalid"


@storefront.command(part_of="MailVerification")
class VerifyOtp:
    email = String(required=True, max_length=254)
    otp = String(required=True, max_length=6)
    verified_at = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=MailVerification)
class VerifyOtpHandler:
    @handle(VerifyOtp)
    def verify_otp(self, command):
        repo = current_domain.repository_for(MailVerification)
        matches = repo._dao.query.filter(email=command.email, otp=command.otp).limit(None).all().items
        if not matches:
            logger.info("OTP rejected", email=command.email)
            return VerificationOutcome.INVALID.value

        expired = matches[0].is_expired(command.verified_at)
        for verification in matches:
            repo._dao.delete(verification)

        outcome = VerificationOutcome.EXPIRED if expired else VerificationOutcome.VERIFIED
        logger.info("OTP consumed", email=command.email, outcome=outcome.value)
        return outcome.value


def confirm_email(email: str, otp: str, now=None) -> None:
    """Consume ``otp`` for ``email``; raises ``InvalidOtp`` or ``OtpExpired``."""
    outcome = current_domain.process(VerifyOtp(email=email, otp=otp, verified_at=now), asynchronous=False)
    if outcome == VerificationOutcome.INVALID.value:
        raise InvalidOtp()
    if outcome == VerificationOutcome.EXPIRED.value:
        raise OtpExpired()
