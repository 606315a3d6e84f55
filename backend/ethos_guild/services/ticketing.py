"""Event & Ticketing Engine — events, capacity-bounded ticket issuance, one-time scans.

Invariants:
    - tickets_outstanding never exceeds capacity: every issuance reserves seats
      with one conditional UPDATE before any Ticket row exists
    - A ticket is redeemed at most once (conditional VALID -> USED)
    - Refunds release exactly one seat per ticket
    - Buyers must be of legal age

Design Decisions:
    - Reservation and ticket rows commit together; a failed flush rolls back the seats
    - qr_code is secrets.token_urlsafe, never derived from ids or timestamps
"""

import logging
import secrets
import uuid
from datetime import datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import EventId, QREntityType, TicketStatus
from ethos_guild.core.enforce_supply import check_quantity
from ethos_guild.core.errors import (
    BusinessRuleError, InputValidationError, PermissionDeniedError,
    ResourceNotFoundError, SoldOutError, TicketAlreadyUsedError,
)
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.models.event import Event
from ethos_guild.models.ticket import Ticket
from ethos_guild.services.qr_directory import QRDirectory

logger = logging.getLogger(__name__)


def new_ticket_code() -> str:
    return f"tkt_{secrets.token_urlsafe(24)}"


class TicketingService:
    """Owns Event and Ticket."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.qr = QRDirectory(db)

    async def create_event(self, organizer_id: str, fields: dict) -> Event:
        if fields["end_time"] < fields["start_time"]:
            raise InputValidationError(
                "end_time must not precede start_time", field="end_time",
            )
        event = Event(
            id=uuid.uuid4(),
            organizer_id=organizer_id,
            title=fields["title"],
            description=fields.get("description"),
            venue_id=fields.get("venue_id"),
            start_time=fields["start_time"],
            end_time=fields["end_time"],
            ticket_price_cents=fields.get("ticket_price_cents"),
            capacity=fields.get("capacity"),
            tickets_outstanding=0,
            qr_slug=fields.get("qr_slug"),
            tickets=[],
        )
        if event.qr_slug is not None:
            await self.qr.claim(event.qr_slug, QREntityType.EVENT, event.id)
        self.db.add(event)
        await self.db.commit()
        logger.info(
            "Event created",
            extra={"event_id": str(event.id), "actor_id": organizer_id},
        )
        return event

    async def list_events(self, organizer_id: str | None = None) -> list[Event]:
        query = select(Event).order_by(Event.start_time)
        if organizer_id:
            query = query.where(Event.organizer_id == organizer_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_event(self, event_id: EventId) -> Event:
        event = await self.db.get(Event, event_id)
        if event is None:
            raise ResourceNotFoundError("Event", str(event_id))
        return event

    async def issue_tickets(
        self, buyer: Identity, event_id: EventId, quantity: int = 1,
    ) -> list[Ticket]:
        if not buyer.is_of_legal_age:
            raise PermissionDeniedError("Age verification required for this action")
        event = await self.get_event(event_id)
        if not event.ticket_price_cents:
            raise BusinessRuleError(
                "Event tickets are not on sale", "TICKETS_NOT_ON_SALE",
            )
        check_quantity(quantity)

        reserved = await self.db.execute(
            update(Event)
            .where(Event.id == event.id)
            .where(or_(
                Event.capacity.is_(None),
                Event.tickets_outstanding + quantity <= Event.capacity,
            ))
            .values(tickets_outstanding=Event.tickets_outstanding + quantity)
            .execution_options(synchronize_session=False)
        )
        if reserved.rowcount != 1:
            raise SoldOutError("Event is sold out")
        await self.db.refresh(event)

        tickets = [
            Ticket(
                id=uuid.uuid4(),
                event_id=event.id,
                buyer_id=buyer.user_id,
                status=TicketStatus.VALID.value,
                qr_code=new_ticket_code(),
            )
            for _ in range(quantity)
        ]
        event.tickets.extend(tickets)
        await self.db.commit()
        logger.info(
            f"Issued {quantity} ticket(s)",
            extra={"event_id": str(event.id), "actor_id": buyer.user_id},
        )
        return tickets

    async def _ticket_for(self, event_id: EventId, **criteria) -> Ticket:
        query = select(Ticket).where(Ticket.event_id == event_id)
        for column, value in criteria.items():
            query = query.where(getattr(Ticket, column) == value)
        ticket = (await self.db.execute(query)).scalar_one_or_none()
        if ticket is None:
            raise ResourceNotFoundError("Ticket", str(criteria.get("id", "")))
        return ticket

    async def scan_ticket(self, event_id: EventId, qr_code: str | None) -> Ticket:
        """Redeem a ticket at the door. Second scans fail."""
        event = await self.get_event(event_id)
        if not qr_code:
            raise InputValidationError("qr_code required", field="qr_code")
        ticket = await self._ticket_for(event.id, qr_code=qr_code)
        if ticket.status == TicketStatus.USED:
            raise TicketAlreadyUsedError()
        if ticket.status == TicketStatus.REFUNDED:
            raise BusinessRuleError("Ticket was refunded", "TICKET_REFUNDED")

        redeemed = await self.db.execute(
            update(Ticket)
            .where(Ticket.id == ticket.id)
            .where(Ticket.status == TicketStatus.VALID.value)
            .values(
                status=TicketStatus.USED.value,
                used_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        if redeemed.rowcount != 1:
            raise TicketAlreadyUsedError()
        await self.db.commit()
        await self.db.refresh(ticket)
        logger.info(
            "Ticket scanned",
            extra={"event_id": str(event.id), "ticket_id": str(ticket.id)},
        )
        return ticket

    async def refund_ticket(
        self, event_id: EventId, ticket_id: uuid.UUID, user_id: str,
    ) -> Ticket:
        event = await self.get_event(event_id)
        if event.organizer_id != user_id:
            raise PermissionDeniedError("Only the organizer can refund tickets")
        ticket = await self._ticket_for(event.id, id=ticket_id)

        refunded = await self.db.execute(
            update(Ticket)
            .where(Ticket.id == ticket.id)
            .where(Ticket.status != TicketStatus.REFUNDED.value)
            .values(status=TicketStatus.REFUNDED.value)
            .execution_options(synchronize_session=False)
        )
        if refunded.rowcount != 1:
            raise BusinessRuleError(
                "Ticket already refunded", "TICKET_ALREADY_REFUNDED",
            )
        await self.db.execute(
            update(Event)
            .where(Event.id == event.id)
            .where(Event.tickets_outstanding > 0)
            .values(tickets_outstanding=Event.tickets_outstanding - 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        await self.db.refresh(ticket)
        logger.info(
            "Ticket refunded",
            extra={
                "event_id": str(event.id),
                "ticket_id": str(ticket.id),
                "actor_id": user_id,
            },
        )
        return ticket
