"""Email channel factory.

Uses the in-memory fake by default; ``MAIL_BACKEND=smtp`` switches to the
SMTP relay configured through the ``SMTP_*`` variables.
"""

from storefront.config import Settings
from storefront.notifications.channel.email_port import EmailPort


def build_mailer(settings: Settings) -> EmailPort:
    if settings.mail_backend == "fake":
        from storefront.notifications.channel.fake_email import FakeEmailAdapter

        return FakeEmailAdapter()
    if settings.mail_backend == "smtp":
        from storefront.notifications.channel.smtp_email import SmtpEmailAdapter

        return SmtpEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_ssl=settings.smtp_secure,
        )
    raise ValueError(f"Unknown mail backend: {settings.mail_backend}")
