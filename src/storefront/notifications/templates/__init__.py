"""Template registry — maps mail kinds to template classes."""

from storefront.notifications.templates.feedback import FeedbackTemplate
from storefront.notifications.templates.otp_confirmation import OtpConfirmationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    "otp_confirmation": OtpConfirmationTemplate,
    "feedback": FeedbackTemplate,
}


def get_template(kind: str):
    """Look up a template class by mail kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for mail kind: {kind}")
    return template_cls
