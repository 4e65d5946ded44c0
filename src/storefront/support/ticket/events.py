"""Domain events for the Ticket aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Ticket")
class TicketOpened:
    __version__ = 1

    ticket_id: Identifier(required=True)
    email: String(required=True)
    subject: String(required=True)
    opened_at: DateTime(required=True)


@storefront.event(part_of="Ticket")
class TicketStatusChanged:
    __version__ = 1

    ticket_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)
