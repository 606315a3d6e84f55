"""Event Routes — events, ticket issuance, door scans and refunds.

Invariants:
    - Scans need no bearer identity: the opaque qr_code is the credential
    - Issuing tickets requires an age-verified identity
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import require_identity
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.event import (
    EventCreate, EventResponse, TicketPurchase, TicketResponse, TicketScan,
)
from ethos_guild.services.ticketing import TicketingService

router = APIRouter(prefix="/api/v1/events", tags=["events"])


def _event_json(event) -> dict:
    return EventResponse.model_validate(event).model_dump(mode="json")


def _ticket_json(ticket) -> dict:
    return TicketResponse.model_validate(ticket).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    event = await TicketingService(db).create_event(
        identity.user_id, body.model_dump(),
    )
    return {"event": _event_json(event)}


@router.get("")
async def list_events(
    organizer_id: str | None = None, db: AsyncSession = Depends(get_db),
):
    events = await TicketingService(db).list_events(organizer_id)
    return {"events": [_event_json(e) for e in events]}


@router.get("/{event_id}")
async def get_event(event_id: UUID, db: AsyncSession = Depends(get_db)):
    event = await TicketingService(db).get_event(event_id)
    return {
        "event": _event_json(event),
        "tickets": [_ticket_json(t) for t in event.tickets],
    }


@router.post("/{event_id}/tickets", status_code=status.HTTP_201_CREATED)
async def issue_tickets(
    event_id: UUID,
    body: TicketPurchase,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    tickets = await TicketingService(db).issue_tickets(
        identity, event_id, body.quantity,
    )
    return {"tickets": [_ticket_json(t) for t in tickets]}


@router.post("/{event_id}/scan")
async def scan_ticket(
    event_id: UUID, body: TicketScan, db: AsyncSession = Depends(get_db),
):
    ticket = await TicketingService(db).scan_ticket(event_id, body.qr_code)
    return {"ticket": _ticket_json(ticket)}


@router.post("/{event_id}/tickets/{ticket_id}/refund")
async def refund_ticket(
    event_id: UUID,
    ticket_id: UUID,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    ticket = await TicketingService(db).refund_ticket(
        event_id, ticket_id, identity.user_id,
    )
    return {"ticket": _ticket_json(ticket)}
