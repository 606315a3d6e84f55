"""Review ORM — a buyer/peer rating of an artifact.

Invariants:
    - Ratings are integers 1-5 (validated at the schema boundary)
    - reviewer_id never equals the artifact owner (enforced in services/reviews.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from ethos_guild.db.base import Base


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    artifact_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("artifacts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    reviewer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    rating_quality: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_style: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_skill_impact: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
