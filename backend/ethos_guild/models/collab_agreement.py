"""CollabAgreement ORM — a revenue-split contract attached to an artifact.

Invariants:
    - splits is a JSON list of {"user_id", "percent"} whose rounded sum is 100
    - status in DRAFT | ACTIVE | ARCHIVED; only ACTIVE governs settlement

Design Decisions:
    - splits stored as JSON: always read and replaced as a whole set
    - Deleted with their artifact (FK cascade plus an explicit delete in services/catalog.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class CollabAgreement(Base):
    """Collaboration agreement — percentage splits among collaborators."""
    __tablename__ = "collab_agreements"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artifact_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("artifacts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    splits: Mapped[list] = mapped_column(JSON, nullable=False)
    terms_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="DRAFT",
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
