"""OTP issuance — command and handler for mailing a fresh code to an order's email."""

from protean import handle
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ValidationError
from storefront.notifications.verification.verification import OTP_TTL_MINUTES, MailVerification
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import load_order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="MailVerification")
class IssueOtp:
    """Issue a code for the order's email, recording ``email`` on the order first when given."""

    order_id = Identifier(required=True)
    email = String(max_length=254)
    ttl_minutes = Integer(default=OTP_TTL_MINUTES, min_value=1)
    issued_at = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=MailVerification)
class IssueOtpHandler:
    @handle(IssueOtp)
    def issue_otp(self, command):
        order = load_order(command.order_id)
        if command.email and command.email != order.email:
            order.set_email(command.email)
            current_domain.repository_for(Order).add(order)
        if not order.email:
            raise ValidationError("Email is required")

        verification = MailVerification.issue(
            email=order.email,
            order_id=str(order.id),
            ttl_minutes=command.ttl_minutes or OTP_TTL_MINUTES,
            now=command.issued_at,
        )
        current_domain.repository_for(MailVerification).add(verification)

        logger.info("OTP issued", order_id=str(order.id), expires_at=str(verification.expires_at))
        return {"email": verification.email, "otp": verification.otp, "expires_at": verification.expires_at}
