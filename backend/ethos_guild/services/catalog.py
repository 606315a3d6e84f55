"""Artifact Catalog — create, list, read, patch and delete sellable works.

Invariants:
    - supply_limit normalized on every write (cleared for COMMON, required otherwise)
    - supply_limit never drops below supply_sold
    - A slug change releases the old registration and claims the new one
      in the same transaction
    - Artifacts the caller may not view are reported as not found
    - Deleting an artifact deletes its collab agreements and reviews

Design Decisions:
    - Anonymous listings are paged entirely in SQL (PUBLIC and UNLISTED only)
    - Signed-in listings apply core/enforce_access.can_view to SQL batches of
      SCAN_BATCH_SIZE rows, so at most offset + limit + one batch is held in memory
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import (
    ArtifactId, QREntityType, SupplyClass, Visibility,
)
from ethos_guild.core.enforce_access import can_edit, can_view
from ethos_guild.core.enforce_slug import validate_slug
from ethos_guild.core.enforce_supply import normalize_supply_limit
from ethos_guild.core.errors import (
    InputValidationError, PermissionDeniedError, ResourceNotFoundError,
)
from ethos_guild.models.artifact import Artifact
from ethos_guild.models.collab_agreement import CollabAgreement
from ethos_guild.models.review import Review
from ethos_guild.services.qr_directory import QRDirectory

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title", "description", "media_urls", "source_repo_url", "supply_class",
    "supply_limit", "pod_provider", "price_cents", "currency", "visibility",
    "reviews_enabled", "license", "collaborators",
)
REQUIRED_FIELDS = frozenset({
    "title", "supply_class", "pod_provider", "currency", "visibility",
    "reviews_enabled", "media_urls", "collaborators",
})
PUBLICLY_VISIBLE = (Visibility.PUBLIC.value, Visibility.UNLISTED.value)
SCAN_BATCH_SIZE = 200


class CatalogService:
    """Owns the Artifact lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.qr = QRDirectory(db)

    async def get_or_404(self, artifact_id: ArtifactId) -> Artifact:
        artifact = await self.db.get(Artifact, artifact_id)
        if artifact is None:
            raise ResourceNotFoundError("Artifact", str(artifact_id))
        return artifact

    async def create(self, owner_id: str, fields: dict) -> Artifact:
        supply_class = SupplyClass(fields["supply_class"])
        artifact = Artifact(
            id=uuid.uuid4(),
            owner_id=owner_id,
            collaborators=list(fields.get("collaborators") or []),
            title=fields["title"],
            kind=fields["kind"],
            description=fields.get("description"),
            media_urls=list(fields.get("media_urls") or []),
            source_repo_url=fields.get("source_repo_url"),
            supply_class=supply_class.value,
            supply_limit=normalize_supply_limit(
                supply_class, fields.get("supply_limit"),
            ),
            supply_sold=0,
            pod_provider=fields.get("pod_provider") or "NONE",
            price_cents=fields.get("price_cents"),
            currency=fields.get("currency") or "USD",
            visibility=fields.get("visibility") or "PRIVATE",
            reviews_enabled=fields.get("reviews_enabled", True),
            license=fields.get("license"),
            qr_slug=fields.get("qr_slug"),
        )
        if artifact.qr_slug is not None:
            await self.qr.claim(
                artifact.qr_slug, QREntityType.ARTIFACT, artifact.id,
            )
        self.db.add(artifact)
        await self.db.commit()
        logger.info(
            "Artifact created",
            extra={"artifact_id": str(artifact.id), "actor_id": owner_id},
        )
        return artifact

    async def list_artifacts(
        self,
        viewer_id: str | None,
        owner_id: str | None = None,
        kind: str | None = None,
        visibility: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Artifact]:
        query = select(Artifact).order_by(Artifact.created_at.desc(), Artifact.id)
        if owner_id:
            query = query.where(Artifact.owner_id == owner_id)
        if kind:
            query = query.where(Artifact.kind == kind)
        if visibility:
            query = query.where(Artifact.visibility == visibility)
        if viewer_id is None:
            query = query.where(Artifact.visibility.in_(PUBLICLY_VISIBLE))
            result = await self.db.execute(query.limit(limit).offset(offset))
            return list(result.scalars().all())

        # Collaborator membership lives in JSON: scan in fixed-size batches
        visible: list[Artifact] = []
        scanned = 0
        while len(visible) < offset + limit:
            result = await self.db.execute(
                query.limit(SCAN_BATCH_SIZE).offset(scanned),
            )
            batch = result.scalars().all()
            visible.extend(a for a in batch if can_view(a, viewer_id))
            if len(batch) < SCAN_BATCH_SIZE:
                break
            scanned += SCAN_BATCH_SIZE
        return visible[offset:offset + limit]

    async def get_visible(
        self, artifact_id: ArtifactId, viewer_id: str | None,
    ) -> Artifact:
        artifact = await self.db.get(Artifact, artifact_id)
        if artifact is None or not can_view(artifact, viewer_id):
            raise ResourceNotFoundError("Artifact", str(artifact_id))
        return artifact

    async def get_editable(self, artifact_id: ArtifactId, user_id: str) -> Artifact:
        artifact = await self.get_or_404(artifact_id)
        if not can_edit(artifact, user_id):
            raise PermissionDeniedError()
        return artifact

    async def update(
        self, artifact_id: ArtifactId, user_id: str, updates: dict,
    ) -> Artifact:
        """Apply only the fields present in updates."""
        artifact = await self.get_editable(artifact_id, user_id)
        for key in EDITABLE_FIELDS:
            if key not in updates:
                continue
            if updates[key] is None and key in REQUIRED_FIELDS:
                raise InputValidationError(f"{key} cannot be null", field=key)
            setattr(artifact, key, updates[key])

        artifact.supply_limit = normalize_supply_limit(
            artifact.supply_class, artifact.supply_limit,
        )
        if (
            artifact.supply_limit is not None
            and artifact.supply_limit < artifact.supply_sold
        ):
            raise InputValidationError(
                "supply_limit cannot be below units already sold",
                field="supply_limit",
            )

        if "qr_slug" in updates and updates["qr_slug"] != artifact.qr_slug:
            await self._change_slug(artifact, updates["qr_slug"])

        artifact.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        return artifact

    async def _change_slug(self, artifact: Artifact, new_slug: str | None) -> None:
        if new_slug is not None:
            validate_slug(new_slug)
        if artifact.qr_slug:
            await self.qr.release(artifact.qr_slug, artifact.id)
        if new_slug is not None:
            await self.qr.claim(new_slug, QREntityType.ARTIFACT, artifact.id)
        artifact.qr_slug = new_slug

    async def delete(self, artifact_id: ArtifactId, user_id: str) -> None:
        artifact = await self.get_editable(artifact_id, user_id)
        if artifact.qr_slug:
            await self.qr.release(artifact.qr_slug, artifact.id)
        for dependent in (CollabAgreement, Review):
            await self.db.execute(
                delete(dependent).where(dependent.artifact_id == artifact.id),
            )
        await self.db.delete(artifact)
        await self.db.commit()
        logger.info(
            "Artifact deleted",
            extra={"artifact_id": str(artifact_id), "actor_id": user_id},
        )
