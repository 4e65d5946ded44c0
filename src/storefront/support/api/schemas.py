"""Pydantic request/response schemas for the support API."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from storefront.shared.schemas import CamelModel


class OpenTicketRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=254)
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)


class ChangeTicketStatusRequest(CamelModel):
    status: Literal["open", "in-progress", "resolved", "closed"]


class PostMessageRequest(CamelModel):
    ticket_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class TicketIdResponse(CamelModel):
    ticket_id: str


class MessageIdResponse(CamelModel):
    message_id: str


class TicketResponse(CamelModel):
    id: str
    email: str
    subject: str
    status: str


class MessageResponse(CamelModel):
    id: str
    ticket_id: str
    sender: str
    content: str
    timestamp: datetime | None = None
