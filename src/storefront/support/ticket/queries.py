from protean.utils.globals import current_domain

from storefront.errors import TicketNotFound, ValidationError
from storefront.shared.validation import is_valid_identifier
from storefront.support.ticket.management import load_ticket
from storefront.support.ticket.ticket import Message, Ticket
from storefront.utils.clock import as_utc


def get_ticket(ticket_id: str) -> Ticket:
    if not is_valid_identifier(ticket_id):
        raise ValidationError("Invalid ticket ID")
    return load_ticket(ticket_id)


def messages_for(ticket_id: str, email: str | None) -> list[Message]:
    """Messages on a ticket, oldest first; only the ticket owner may read them."""
    if not is_valid_identifier(ticket_id):
        raise TicketNotFound("Ticket not found or unauthorized")
    ticket = load_ticket(ticket_id)
    if not email or ticket.email != email:
        raise TicketNotFound("Ticket not found or unauthorized")

    messages = current_domain.repository_for(Message)._dao.query.filter(ticket_id=ticket_id).limit(None).all().items
    return sorted(messages, key=lambda m: as_utc(m.timestamp))
