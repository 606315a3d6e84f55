"""Discovery Routes — role-shaped entry points for browsing the guild.

Invariants:
    - Anonymous callers allowed; a bearer identity widens what may be seen
    - role defaults to EXPLORER and is echoed back upper-cased
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import get_current_identity
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.artifact import ArtifactResponse
from ethos_guild.schemas.collab import CollabResponse
from ethos_guild.schemas.venue import VenueResponse
from ethos_guild.services.discovery import DiscoveryService

router = APIRouter(prefix="/api/v1/discover", tags=["discover"])


def _artifact_json(artifact) -> dict:
    return ArtifactResponse.model_validate(artifact).model_dump(mode="json")


@router.get("")
async def discover(
    role: str = Query("EXPLORER", max_length=32),
    identity: Identity | None = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    view = await DiscoveryService(db).discover(
        role, identity.user_id if identity else None,
    )
    if view.ranked is not None:
        return {
            "role": view.role,
            "artifacts": [
                {"artifact": _artifact_json(entry.artifact), "ratings": entry.ratings}
                for entry in view.ranked
            ],
        }
    if view.collabs is not None:
        return {
            "role": view.role,
            "collabs": [
                CollabResponse.model_validate(c).model_dump(mode="json")
                for c in view.collabs
            ],
            "venues": [
                VenueResponse.model_validate(v).model_dump(mode="json")
                for v in view.venues
            ],
        }
    return {
        "role": view.role,
        "artifacts": [_artifact_json(a) for a in view.artifacts or []],
    }
