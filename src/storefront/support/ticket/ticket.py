"""Support ticket and message aggregates.

State Machine:
    open → in-progress | resolved | closed
    in-progress → resolved | closed
    resolved → in-progress | closed
    closed (terminal)
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.support.ticket.events import TicketOpened, TicketStatusChanged
from storefront.utils.clock import utcnow


class TicketStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class MessageSender(Enum):
    CUSTOMER = "customer"
    SUPPORT = "support"


_VALID_TRANSITIONS = {
    TicketStatus.OPEN: {TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.CLOSED},
    TicketStatus.IN_PROGRESS: {TicketStatus.RESOLVED, TicketStatus.CLOSED},
    TicketStatus.RESOLVED: {TicketStatus.IN_PROGRESS, TicketStatus.CLOSED},
    TicketStatus.CLOSED: set(),
}


@storefront.aggregate
class Ticket:
    email: String(required=True, max_length=254)
    subject: String(required=True, max_length=255)
    description: Text(required=True)
    status: String(choices=TicketStatus, default=TicketStatus.OPEN.value)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @classmethod
    def open(cls, email, subject, description):
        now = utcnow()
        ticket = cls(email=email, subject=subject, description=description, created_at=now, updated_at=now)
        ticket.raise_(TicketOpened(ticket_id=str(ticket.id), email=email, subject=subject, opened_at=now))
        return ticket

    def _assert_can_transition(self, target_status):
        current = TicketStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, target_status: TicketStatus):
        self._assert_can_transition(target_status)
        previous = self.status
        self.status = target_status.value
        self.updated_at = utcnow()
        self.raise_(
            TicketStatusChanged(
                ticket_id=str(self.id),
                previous_status=previous,
                new_status=target_status.value,
                changed_at=self.updated_at,
            )
        )

    def record_customer_message(self):
        """A customer writing on an untouched ticket puts it in progress."""
        if self.status == TicketStatus.CLOSED.value:
            raise ValidationError({"status": ["Ticket is closed"]})
        if self.status == TicketStatus.OPEN.value:
            self.change_status(TicketStatus.IN_PROGRESS)

    def record_support_reply(self):
        if self.status == TicketStatus.CLOSED.value:
            raise ValidationError({"status": ["Ticket is closed"]})
        self.updated_at = utcnow()


@storefront.aggregate
class Message:
    ticket_id: Identifier(required=True)
    sender: String(required=True, choices=MessageSender)
    content: Text(required=True)
    timestamp: DateTime(default=utcnow)
