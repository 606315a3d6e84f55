"""Artifact Schemas — catalog request bodies and the public artifact shape.

Invariants:
    - ArtifactCreate requires title, kind, supply_class
    - supply_limit presence for RARE/LIMITED is a core rule (enforce_supply), not a schema rule,
      so a COMMON artifact may carry a stray limit that is silently cleared
    - ArtifactUpdate fields are all optional; only fields explicitly sent are applied
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ethos_guild.core.domain_types import (
    ArtifactKind, License, PodProvider, SupplyClass, Visibility,
)


class ArtifactCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    kind: ArtifactKind
    supply_class: SupplyClass
    supply_limit: int | None = None
    description: str | None = Field(None, max_length=10_000)
    media_urls: list[str] = Field(default_factory=list)
    source_repo_url: str | None = Field(None, max_length=500)
    collaborators: list[str] = Field(default_factory=list)
    pod_provider: PodProvider = PodProvider.NONE
    price_cents: int | None = Field(None, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    visibility: Visibility = Visibility.PRIVATE
    reviews_enabled: bool = True
    license: License | None = None
    qr_slug: str | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class ArtifactUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    media_urls: list[str] | None = None
    source_repo_url: str | None = None
    supply_class: SupplyClass | None = None
    supply_limit: int | None = None
    pod_provider: PodProvider | None = None
    price_cents: int | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    visibility: Visibility | None = None
    reviews_enabled: bool | None = None
    license: License | None = None
    qr_slug: str | None = None
    collaborators: list[str] | None = None


class ArtifactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: str
    collaborators: list[str]
    title: str
    kind: str
    description: str | None
    media_urls: list[str]
    source_repo_url: str | None
    supply_class: str
    supply_limit: int | None
    supply_sold: int
    pod_provider: str
    price_cents: int | None
    currency: str
    visibility: str
    reviews_enabled: bool
    license: str | None
    qr_slug: str | None
    created_at: datetime
    updated_at: datetime
