"""Email channel port — how the storefront hands mail to a relay."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Outbound mail used for confirmation codes and feedback relays.

    Adapters never raise on delivery problems; callers inspect ``status``.
    """

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        reply_to: str | None = None,
    ) -> dict:
        """Deliver one message.

        ``reply_to`` lets support answer a visitor directly from the inbox.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (set when failed)
        """
        ...
