"""Payout ORM — money owed to one recipient for one settled order.

Invariants:
    - Exactly one payout per (order, recipient); amounts merged across lines
    - Created QUEUED at settlement; SENT/FAILED set by the external disbursement job
    - sum(amount_cents) + order.fees_cents == order.subtotal_cents
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class Payout(Base):
    __tablename__ = "payouts"
    __table_args__ = (
        UniqueConstraint("order_id", "recipient_id", name="uq_payouts_order_recipient"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    recipient_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="QUEUED",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    order: Mapped["Order"] = relationship("Order", back_populates="payouts")
