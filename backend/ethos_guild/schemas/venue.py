"""Venue Schemas — venues and their seller catalog items."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ethos_guild.core.domain_types import ShippingMode


class VenueCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    contact_email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    address: str | None = Field(None, max_length=500)
    qr_slug: str | None = None


class CatalogItemCreate(BaseModel):
    artifact_id: UUID
    local_inventory: int | None = Field(None, ge=0)
    price_cents: int | None = None
    shipping_mode: ShippingMode | None = None


class VenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    contact_email: str
    address: str | None
    qr_slug: str | None
    created_at: datetime


class CatalogItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    venue_id: UUID
    artifact_id: UUID
    local_inventory: int | None
    price_cents: int
    shipping_mode: str
    created_at: datetime
