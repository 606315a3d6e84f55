"""Venue ORM — a physical location that can stock artifacts and host events."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class Venue(Base):
    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(320), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    qr_slug: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    catalog: Mapped[list["SellerCatalogItem"]] = relationship(
        "SellerCatalogItem", back_populates="venue",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SellerCatalogItem.created_at",
    )
