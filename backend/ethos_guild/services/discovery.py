"""Discovery — role-shaped entry views over artifacts, agreements and venues.

Invariants:
    - CLIENT ranks reviewed artifacts by average quality, EXPLORER by average skill impact
    - CREATOR lists DRAFT and ACTIVE agreements on artifacts the caller may edit,
      plus venues
    - Any other role gets the plain artifact listing
    - Every view holds at most DISCOVERY_LIMIT entries and never includes an
      artifact the caller may not view
    - Unreviewed artifacts never appear in ranked views

Design Decisions:
    - Averages computed in SQL (ReviewService.averages_subquery) and ordered there;
      ties go to the older artifact
    - Visibility applied with core/enforce_access on SQL batches, as in the catalog
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import CollabStatus, DiscoveryRole
from ethos_guild.core.enforce_access import can_edit, can_view
from ethos_guild.models.artifact import Artifact
from ethos_guild.models.collab_agreement import CollabAgreement
from ethos_guild.models.venue import Venue
from ethos_guild.services.catalog import (
    PUBLICLY_VISIBLE, SCAN_BATCH_SIZE, CatalogService,
)
from ethos_guild.services.reviews import ReviewService

logger = logging.getLogger(__name__)

DISCOVERY_LIMIT = 10

_RANKING_METRIC = {
    DiscoveryRole.CLIENT: "quality",
    DiscoveryRole.EXPLORER: "skill_impact",
}


@dataclass(frozen=True)
class RankedArtifact:
    artifact: Artifact
    ratings: dict[str, float]


@dataclass
class DiscoveryView:
    role: str
    ranked: list[RankedArtifact] | None = None
    artifacts: list[Artifact] | None = None
    collabs: list[CollabAgreement] | None = None
    venues: list[Venue] = field(default_factory=list)


class DiscoveryService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.catalog = CatalogService(db)

    async def discover(self, role: str, viewer_id: str | None) -> DiscoveryView:
        role = role.strip().upper()
        try:
            known = DiscoveryRole(role)
        except ValueError:
            known = None

        if known in _RANKING_METRIC:
            view = DiscoveryView(
                role=role,
                ranked=await self.ranked(_RANKING_METRIC[known], viewer_id),
            )
        elif known == DiscoveryRole.CREATOR:
            view = DiscoveryView(
                role=role,
                collabs=await self.open_collabs(viewer_id),
                venues=await self.venues(),
            )
        else:
            view = DiscoveryView(
                role=role,
                artifacts=await self.catalog.list_artifacts(
                    viewer_id, limit=DISCOVERY_LIMIT,
                ),
            )
        logger.info(f"Discovery view served for role {role}")
        return view

    async def ranked(
        self, metric: str, viewer_id: str | None,
    ) -> list[RankedArtifact]:
        averages = ReviewService.averages_subquery()
        query = (
            select(
                Artifact,
                averages.c.quality,
                averages.c.style,
                averages.c.skill_impact,
            )
            .join(averages, averages.c.artifact_id == Artifact.id)
            .order_by(averages.c[metric].desc(), Artifact.created_at, Artifact.id)
        )
        if viewer_id is None:
            query = query.where(Artifact.visibility.in_(PUBLICLY_VISIBLE))
        rows = await self._first_matching(
            query, lambda row: can_view(row[0], viewer_id),
        )
        return [
            RankedArtifact(
                artifact=artifact,
                ratings={
                    "quality": float(quality),
                    "style": float(style),
                    "skill_impact": float(skill_impact),
                },
            )
            for artifact, quality, style, skill_impact in rows
        ]

    async def open_collabs(self, viewer_id: str | None) -> list[CollabAgreement]:
        if viewer_id is None:
            return []
        query = (
            select(CollabAgreement, Artifact)
            .join(Artifact, Artifact.id == CollabAgreement.artifact_id)
            .where(CollabAgreement.status.in_(
                (CollabStatus.ACTIVE.value, CollabStatus.DRAFT.value),
            ))
            .order_by(CollabAgreement.created_at, CollabAgreement.id)
        )
        rows = await self._first_matching(
            query, lambda row: can_edit(row[1], viewer_id),
        )
        return [collab for collab, _ in rows]

    async def venues(self) -> list[Venue]:
        result = await self.db.execute(
            select(Venue).order_by(Venue.created_at).limit(DISCOVERY_LIMIT),
        )
        return list(result.scalars().all())

    async def _first_matching(
        self, query: Select, keep: Callable[[tuple], bool],
    ) -> list[tuple]:
        """Scan query in SQL batches until DISCOVERY_LIMIT rows pass keep."""
        kept: list[tuple] = []
        scanned = 0
        while len(kept) < DISCOVERY_LIMIT:
            result = await self.db.execute(
                query.limit(SCAN_BATCH_SIZE).offset(scanned),
            )
            batch = result.all()
            kept.extend(row for row in batch if keep(row))
            if len(batch) < SCAN_BATCH_SIZE:
                break
            scanned += SCAN_BATCH_SIZE
        return kept[:DISCOVERY_LIMIT]
