"""Collab Routes — revenue-split agreements.

Invariants:
    - POST answers with the stored agreement plus a payout preview on a reference sale
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import require_identity
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.collab import CollabCreate, CollabResponse, CollabUpdate
from ethos_guild.services.collaboration import CollaborationService

router = APIRouter(prefix="/api/v1/collabs", tags=["collabs"])


def _collab_json(collab) -> dict:
    return CollabResponse.model_validate(collab).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_collab(
    body: CollabCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    collab, preview = await CollaborationService(db).create(
        identity.user_id,
        body.artifact_id,
        [split.model_dump() for split in body.splits],
        terms_url=body.terms_url,
        status=body.status.value,
    )
    return {"collab": _collab_json(collab), "preview": preview.to_dict()}


@router.get("/{collab_id}")
async def get_collab(
    collab_id: UUID,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    collab = await CollaborationService(db).get(collab_id, identity.user_id)
    return {"collab": _collab_json(collab)}


@router.patch("/{collab_id}")
async def update_collab(
    collab_id: UUID,
    body: CollabUpdate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    collab = await CollaborationService(db).update(
        collab_id, identity.user_id,
        body.model_dump(mode="json", exclude_unset=True),
    )
    return {"collab": _collab_json(collab)}
