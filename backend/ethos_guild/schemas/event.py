"""Event Schemas — event creation, ticket purchase/scan, and ticket shape.

Invariants:
    - EventCreate times are timezone-aware; a naive value is read as UTC
    - EventCreate.end_time must not precede start_time
    - TicketScan.qr_code is optional in the schema; its absence is a validation
      error raised by the ticketing service
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    venue_id: UUID | None = None
    start_time: datetime
    end_time: datetime
    ticket_price_cents: int | None = Field(None, ge=0)
    capacity: int | None = Field(None, ge=0)
    qr_slug: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def validate_time_window(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must not precede start_time")
        return self


class TicketPurchase(BaseModel):
    quantity: int = 1


class TicketScan(BaseModel):
    qr_code: str | None = None


class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    buyer_id: str
    status: str
    qr_code: str
    created_at: datetime
    used_at: datetime | None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    organizer_id: str
    title: str
    description: str | None
    venue_id: UUID | None
    start_time: datetime
    end_time: datetime
    ticket_price_cents: int | None
    capacity: int | None
    tickets_outstanding: int
    qr_slug: str | None
    created_at: datetime
    updated_at: datetime
