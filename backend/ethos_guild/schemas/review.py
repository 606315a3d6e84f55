"""Review Schemas — ratings bounded 1-5 at the boundary."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    rating_quality: int = Field(ge=1, le=5)
    rating_style: int = Field(ge=1, le=5)
    rating_skill_impact: int = Field(ge=1, le=5)
    comment: str | None = Field(None, max_length=2000)
    tags: list[str] = Field(default_factory=list)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    artifact_id: UUID
    reviewer_id: str
    rating_quality: int
    rating_style: int
    rating_skill_impact: int
    comment: str | None
    tags: list[str]
    created_at: datetime
