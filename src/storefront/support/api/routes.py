"""FastAPI endpoints for support tickets and their message threads."""

from fastapi import APIRouter, Depends, Header, Query
from protean.utils.globals import current_domain

from storefront.config import Settings
from storefront.errors import TicketNotFound, ValidationError
from storefront.shared.http import get_settings, require_admin
from storefront.shared.validation import is_valid_email, is_valid_identifier
from storefront.support.api.schemas import (
    ChangeTicketStatusRequest,
    MessageIdResponse,
    MessageResponse,
    OpenTicketRequest,
    PostMessageRequest,
    TicketIdResponse,
    TicketResponse,
)
from storefront.support.ticket.management import ChangeTicketStatus, OpenTicket, PostMessage
from storefront.support.ticket.queries import get_ticket, messages_for
from storefront.support.ticket.ticket import MessageSender

support_router = APIRouter(prefix="/support", tags=["support"])


def _ticket_response(ticket) -> TicketResponse:
    return TicketResponse(id=str(ticket.id), email=ticket.email, subject=ticket.subject, status=ticket.status)


# --- Tickets ---


@support_router.post("/ticket", status_code=201, response_model=TicketIdResponse)
async def open_ticket(body: OpenTicketRequest) -> TicketIdResponse:
    if not is_valid_email(body.email):
        raise ValidationError("Invalid email format")
    result = current_domain.process(
        OpenTicket(email=body.email, subject=body.subject, description=body.description),
        asynchronous=False,
    )
    return TicketIdResponse(ticket_id=result)


@support_router.get("/ticket", response_model=TicketResponse)
async def fetch_ticket(ticket_id: str = Query("", alias="ticketId")) -> TicketResponse:
    if not ticket_id:
        raise ValidationError("Ticket ID is required")
    return _ticket_response(get_ticket(ticket_id))


@support_router.put(
    "/ticket/{ticket_id}/status", response_model=TicketResponse, dependencies=[Depends(require_admin)]
)
async def change_ticket_status(ticket_id: str, body: ChangeTicketStatusRequest) -> TicketResponse:
    get_ticket(ticket_id)
    current_domain.process(ChangeTicketStatus(ticket_id=ticket_id, status=body.status), asynchronous=False)
    return _ticket_response(get_ticket(ticket_id))


# --- Messages ---


@support_router.post("/message", status_code=201, response_model=MessageIdResponse)
async def post_message(
    body: PostMessageRequest,
    x_admin_password: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> MessageIdResponse:
    """Append to a ticket thread; a valid admin password posts as support."""
    sender = MessageSender.CUSTOMER
    if x_admin_password is not None:
        require_admin(x_admin_password, settings)
        sender = MessageSender.SUPPORT

    if not is_valid_identifier(body.ticket_id):
        raise TicketNotFound("Ticket not found or unauthorized")
    result = current_domain.process(
        PostMessage(ticket_id=body.ticket_id, content=body.content, sender=sender.value),
        asynchronous=False,
    )
    return MessageIdResponse(message_id=result)


@support_router.get("/message", response_model=list[MessageResponse])
async def list_messages(
    ticket_id: str = Query("", alias="ticketId"),
    email: str | None = Query(None),
) -> list[MessageResponse]:
    if not ticket_id:
        raise ValidationError("Ticket ID is required")
    return [
        MessageResponse(
            id=str(m.id),
            ticket_id=str(m.ticket_id),
            sender=m.sender,
            content=m.content,
            timestamp=m.timestamp,
        )
        for m in messages_for(ticket_id, email)
    ]
