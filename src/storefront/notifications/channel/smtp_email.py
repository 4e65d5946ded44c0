"""SMTP email adapter — delivers through a relay with the standard library client."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from storefront.notifications.channel.email_port import EmailPort
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Send through an SMTP relay.

    ``use_ssl`` opens an implicit-TLS connection (port 465 style); otherwise the
    connection is upgraded with STARTTLS when the server offers it.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_ssl: bool = False,
        timeout: int = 10,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.timeout = timeout

    def _build_message(self, to, subject, body, html_body, reply_to) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        if reply_to:
            message["Reply-To"] = reply_to
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        client.ehlo()
        if client.has_extn("starttls"):
            client.starttls()
            client.ehlo()
        return client

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        reply_to: str | None = None,
    ) -> dict:
        message = self._build_message(to, subject, body, html_body, reply_to)
        try:
            with self._connect() as client:
                if self.username:
                    client.login(self.username, self.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
