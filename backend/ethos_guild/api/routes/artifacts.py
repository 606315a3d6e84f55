"""Artifact Routes — catalog CRUD.

Invariants:
    - Writes require a bearer identity; reads accept anonymous callers
    - Anonymous and non-collaborator callers only see PUBLIC/UNLISTED artifacts
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import get_current_identity, require_identity
from ethos_guild.core.domain_types import ArtifactKind, Visibility
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.artifact import (
    ArtifactCreate, ArtifactResponse, ArtifactUpdate,
)
from ethos_guild.services.catalog import CatalogService

router = APIRouter(prefix="/api/v1/artifacts", tags=["artifacts"])


def _artifact_json(artifact) -> dict:
    return ArtifactResponse.model_validate(artifact).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_artifact(
    body: ArtifactCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    artifact = await CatalogService(db).create(
        identity.user_id, body.model_dump(mode="json"),
    )
    return {"artifact": _artifact_json(artifact)}


@router.get("")
async def list_artifacts(
    owner_id: str | None = None,
    kind: ArtifactKind | None = None,
    visibility: Visibility | None = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: Identity | None = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    artifacts = await CatalogService(db).list_artifacts(
        identity.user_id if identity else None,
        owner_id=owner_id,
        kind=kind.value if kind else None,
        visibility=visibility.value if visibility else None,
        limit=limit,
        offset=offset,
    )
    return {
        "artifacts": [_artifact_json(a) for a in artifacts],
        "pagination": {"limit": limit, "offset": offset},
    }


@router.get("/{artifact_id}")
async def get_artifact(
    artifact_id: UUID,
    identity: Identity | None = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    artifact = await CatalogService(db).get_visible(
        artifact_id, identity.user_id if identity else None,
    )
    return {"artifact": _artifact_json(artifact)}


@router.patch("/{artifact_id}")
async def update_artifact(
    artifact_id: UUID,
    body: ArtifactUpdate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    artifact = await CatalogService(db).update(
        artifact_id, identity.user_id,
        body.model_dump(mode="json", exclude_unset=True),
    )
    return {"artifact": _artifact_json(artifact)}


@router.delete("/{artifact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artifact(
    artifact_id: UUID,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    await CatalogService(db).delete(artifact_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
