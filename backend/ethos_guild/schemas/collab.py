"""Collaboration Schemas — split agreements and their payout preview.

Invariants:
    - Split sums and emptiness are checked in core/enforce_splits.py, not here,
      so the API reports them with the same error kinds as direct service calls
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ethos_guild.core.domain_types import CollabStatus


class SplitIn(BaseModel):
    user_id: str = Field(min_length=1, max_length=64)
    percent: float


class CollabCreate(BaseModel):
    artifact_id: UUID
    splits: list[SplitIn]
    terms_url: str | None = Field(None, max_length=500)
    status: CollabStatus = CollabStatus.DRAFT


class CollabUpdate(BaseModel):
    splits: list[SplitIn] | None = None
    terms_url: str | None = Field(None, max_length=500)
    status: CollabStatus | None = None


class CollabResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    artifact_id: UUID
    splits: list[dict]
    terms_url: str | None
    status: str
    created_at: datetime
    updated_at: datetime
