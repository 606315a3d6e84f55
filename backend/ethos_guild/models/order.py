"""Order ORM — a checkout awaiting (or having received) payment confirmation.

Invariants:
    - payment_intent_id is unique: one order per gateway intent
    - status transitions PENDING -> PAID exactly once, via a conditional UPDATE
    - Before settlement fees_cents/total_cents hold the checkout estimate;
      after settlement fees_cents is the sum of per-line fees and
      total_cents == subtotal_cents + fees_cents

Design Decisions:
    - Items in their own table with unit_price_cents frozen at checkout time
    - items/payouts loaded with selectin: every read of an order needs them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class Order(Base):
    """Order aggregate root — owns its line items and payouts."""
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    buyer_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    subtotal_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    fees_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="usd",
    )
    payment_intent_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OrderItem.position",
    )
    payouts: Mapped[list["Payout"]] = relationship(
        "Payout", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Payout.position",
    )
