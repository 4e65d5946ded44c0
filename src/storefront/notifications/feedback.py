"""Feedback relay — forwards a visitor's message to the support inbox."""

from storefront.errors import UpstreamError, ValidationError
from storefront.notifications.channel.email_port import EmailPort
from storefront.notifications.templates import get_template
from storefront.shared.validation import is_valid_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def send_feedback(mailer: EmailPort, feedback_to: str, email: str, subject: str, message: str) -> str:
    """Mail the feedback to ``feedback_to`` with the visitor as Reply-To; returns the message id."""
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")

    content = get_template("feedback").render({"email": email, "subject": subject, "message": message})
    result = mailer.send(to=feedback_to, subject=content["subject"], body=content["body"], reply_to=email)
    if result.get("status") != "sent":
        logger.error("Feedback mail failed", error=result.get("error"))
        raise UpstreamError("Failed to send feedback")

    logger.info("Feedback relayed", message_id=result.get("message_id"))
    return result.get("message_id")
