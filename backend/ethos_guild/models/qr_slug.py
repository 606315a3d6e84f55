"""QRSlug ORM — the single uniqueness namespace for artifact, event and venue slugs.

Invariants:
    - slug is the primary key: a second registration fails at flush, whatever
      entity type it targets
    - Exactly one row per live slugged entity; released on delete or slug change

Design Decisions:
    - One shared table instead of three per-entity unique columns: a unique
      constraint cannot span tables, a primary key on the shared table can
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class QRSlug(Base):
    __tablename__ = "qr_slugs"

    slug: Mapped[str] = mapped_column(String(64), primary_key=True)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
