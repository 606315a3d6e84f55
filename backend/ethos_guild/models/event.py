"""Event ORM — a ticketed happening with optional capacity and QR slug.

Invariants:
    - tickets_outstanding == count(tickets where status != REFUNDED)
    - tickets_outstanding <= capacity whenever capacity is set
    - end_time >= start_time

Design Decisions:
    - tickets_outstanding denormalized counter: lets issuance reserve capacity with
      one conditional UPDATE instead of COUNT-then-INSERT
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class Event(Base):
    """Event aggregate root — owns its tickets."""
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "capacity IS NULL OR tickets_outstanding <= capacity",
            name="capacity",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    organizer_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    venue_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    ticket_price_cents: Mapped[int | None] = mapped_column(
        Integer, nullable=True,
    )
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tickets_outstanding: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    qr_slug: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket", back_populates="event",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Ticket.created_at",
    )
