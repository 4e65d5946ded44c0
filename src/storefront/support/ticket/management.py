"""Ticket management — commands and handlers for tickets and their messages."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import TicketNotFound
from storefront.support.ticket.ticket import Message, MessageSender, Ticket, TicketStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def load_ticket(ticket_id: str) -> Ticket:
    try:
        return current_domain.repository_for(Ticket).get(ticket_id)
    except ObjectNotFoundError:
        raise TicketNotFound() from None


@storefront.command(part_of="Ticket")
class OpenTicket:
    email = String(required=True, max_length=254)
    subject = String(required=True, max_length=255)
    description = Text(required=True)


@storefront.command(part_of="Ticket")
class ChangeTicketStatus:
    ticket_id = Identifier(required=True)
    status = String(required=True, choices=TicketStatus)


@storefront.command(part_of="Ticket")
class PostMessage:
    ticket_id = Identifier(required=True)
    content = Text(required=True)
    sender = String(choices=MessageSender, default=MessageSender.CUSTOMER.value)


@storefront.command_handler(part_of=Ticket)
class TicketManagementHandler:
    @handle(OpenTicket)
    def open_ticket(self, command):
        ticket = Ticket.open(email=command.email, subject=command.subject, description=command.description)
        current_domain.repository_for(Ticket).add(ticket)
        logger.info("Support ticket opened", ticket_id=str(ticket.id))
        return str(ticket.id)

    @handle(ChangeTicketStatus)
    def change_ticket_status(self, command):
        ticket = load_ticket(command.ticket_id)
        ticket.change_status(TicketStatus(command.status))
        current_domain.repository_for(Ticket).add(ticket)
        return ticket.status

    @handle(PostMessage)
    def post_message(self, command):
        ticket = load_ticket(command.ticket_id)
        if command.sender == MessageSender.SUPPORT.value:
            ticket.record_support_reply()
        else:
            ticket.record_customer_message()
        current_domain.repository_for(Ticket).add(ticket)

        message = Message(ticket_id=str(ticket.id), sender=command.sender, content=command.content)
        current_domain.repository_for(Message).add(message)
        return str(message.id)
