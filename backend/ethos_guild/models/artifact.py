"""Artifact ORM — a sellable creative work with a supply class and visibility.

Invariants:
    - supply_limit is NULL whenever supply_class is COMMON
    - supply_sold <= supply_limit whenever supply_limit is set
    - qr_slug, when present, is also registered in qr_slugs (single namespace)

Design Decisions:
    - collaborators and media_urls as JSON lists: read together with the row,
      never queried individually
    - supply_sold mutated only through a single clamped UPDATE (services/settlement.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Artifact(Base):
    """Artifact aggregate root — owned by the catalog."""
    __tablename__ = "artifacts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    collaborators: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_urls: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    source_repo_url: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    supply_class: Mapped[str] = mapped_column(String(20), nullable=False)
    supply_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    supply_sold: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    pod_provider: Mapped[str] = mapped_column(
        String(20), nullable=False, default="NONE",
    )
    price_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="USD",
    )
    visibility: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PRIVATE",
    )
    reviews_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    license: Mapped[str | None] = mapped_column(String(20), nullable=True)
    qr_slug: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
