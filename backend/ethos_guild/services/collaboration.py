"""Collaboration Agreement Manager — revenue-split contracts attached to artifacts.

Invariants:
    - Only the artifact owner creates or updates agreements
    - Owner and listed collaborators may read
    - Every committed split set passes core/enforce_splits.parse_splits
    - At most one ACTIVE agreement per artifact: activating one archives the others
    - governing_splits() falls back to 100% to the owner when nothing is ACTIVE

Design Decisions:
    - Preview payout computed on a fixed reference sale and never persisted
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import ArtifactId, CollabStatus
from ethos_guild.core.enforce_access import can_edit, is_owner
from ethos_guild.core.enforce_splits import (
    PREVIEW_FEE_PERCENT, PREVIEW_TOTAL_CENTS,
    fallback_splits, parse_splits, splits_from_json, splits_to_json,
)
from ethos_guild.core.errors import PermissionDeniedError, ResourceNotFoundError
from ethos_guild.core.payouts import PayoutPlan, Split, compute_payouts
from ethos_guild.models.artifact import Artifact
from ethos_guild.models.collab_agreement import CollabAgreement
from ethos_guild.services.catalog import CatalogService

logger = logging.getLogger(__name__)


class CollaborationService:
    """Owns CollabAgreement."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.catalog = CatalogService(db)

    async def _get_or_404(self, collab_id: uuid.UUID) -> CollabAgreement:
        collab = await self.db.get(CollabAgreement, collab_id)
        if collab is None:
            raise ResourceNotFoundError("Collab", str(collab_id))
        return collab

    async def create(
        self,
        user_id: str,
        artifact_id: ArtifactId,
        splits: list,
        terms_url: str | None = None,
        status: str = CollabStatus.DRAFT.value,
    ) -> tuple[CollabAgreement, PayoutPlan]:
        artifact = await self.catalog.get_or_404(artifact_id)
        if not is_owner(artifact, user_id):
            raise PermissionDeniedError(
                "Only the owner can create collab agreements",
            )
        parsed = parse_splits(splits)
        status = CollabStatus(status).value
        if status == CollabStatus.ACTIVE:
            await self._archive_active(artifact.id)
        collab = CollabAgreement(
            artifact_id=artifact.id,
            splits=splits_to_json(parsed),
            terms_url=terms_url,
            status=status,
        )
        self.db.add(collab)
        await self.db.commit()
        logger.info(
            f"Collab agreement created ({status})",
            extra={"artifact_id": str(artifact.id), "actor_id": user_id},
        )
        preview = compute_payouts(PREVIEW_TOTAL_CENTS, PREVIEW_FEE_PERCENT, parsed)
        return collab, preview

    async def get(self, collab_id: uuid.UUID, user_id: str) -> CollabAgreement:
        collab = await self._get_or_404(collab_id)
        artifact = await self.db.get(Artifact, collab.artifact_id)
        if artifact is None or not can_edit(artifact, user_id):
            raise PermissionDeniedError()
        return collab

    async def update(
        self, collab_id: uuid.UUID, user_id: str, updates: dict,
    ) -> CollabAgreement:
        collab = await self._get_or_404(collab_id)
        artifact = await self.db.get(Artifact, collab.artifact_id)
        if artifact is None or not is_owner(artifact, user_id):
            raise PermissionDeniedError(
                "Only the owner can update collab agreements",
            )
        if updates.get("splits") is not None:
            collab.splits = splits_to_json(parse_splits(updates["splits"]))
        if "terms_url" in updates:
            collab.terms_url = updates["terms_url"]
        if updates.get("status"):
            status = CollabStatus(updates["status"]).value
            if status == CollabStatus.ACTIVE and collab.status != status:
                await self._archive_active(artifact.id, keep=collab.id)
            collab.status = status
        collab.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        return collab

    async def _archive_active(
        self, artifact_id: ArtifactId, keep: uuid.UUID | None = None,
    ) -> None:
        stmt = (
            update(CollabAgreement)
            .where(CollabAgreement.artifact_id == artifact_id)
            .where(CollabAgreement.status == CollabStatus.ACTIVE.value)
            .values(
                status=CollabStatus.ARCHIVED.value,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session="fetch")
        )
        if keep is not None:
            stmt = stmt.where(CollabAgreement.id != keep)
        await self.db.execute(stmt)

    async def governing_splits(self, artifact: Artifact) -> list[Split]:
        """Splits of the ACTIVE agreement, or 100% to the owner."""
        result = await self.db.execute(
            select(CollabAgreement)
            .where(CollabAgreement.artifact_id == artifact.id)
            .where(CollabAgreement.status == CollabStatus.ACTIVE.value)
            .order_by(CollabAgreement.created_at)
            .limit(1)
        )
        collab = result.scalar_one_or_none()
        if collab is None:
            return fallback_splits(artifact.owner_id)
        return splits_from_json(collab.splits)
