"""Venue Routes — venues and their seller catalog."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import require_identity
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.venue import (
    CatalogItemCreate, CatalogItemResponse, VenueCreate, VenueResponse,
)
from ethos_guild.services.venues import VenueService

router = APIRouter(prefix="/api/v1/venues", tags=["venues"])


def _item_json(item) -> dict:
    return CatalogItemResponse.model_validate(item).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_venue(
    body: VenueCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    venue = await VenueService(db).create_venue(identity.user_id, body.model_dump())
    return {"venue": VenueResponse.model_validate(venue).model_dump(mode="json")}


@router.get("/{venue_id}")
async def get_venue(venue_id: UUID, db: AsyncSession = Depends(get_db)):
    venue = await VenueService(db).get_venue(venue_id)
    return {
        "venue": VenueResponse.model_validate(venue).model_dump(mode="json"),
        "catalog": [_item_json(item) for item in venue.catalog],
    }


@router.post("/{venue_id}/catalog", status_code=status.HTTP_201_CREATED)
async def add_catalog_item(
    venue_id: UUID,
    body: CatalogItemCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    item = await VenueService(db).add_catalog_item(venue_id, body.model_dump())
    return {"item": _item_json(item)}
