"""Artifact Reviews — ratings from non-owners, plus an aggregate summary.

Invariants:
    - Reviews only on artifacts with reviews_enabled
    - Owners never review their own artifacts
    - summary() averages are None when an artifact has no reviews
    - averages_subquery() aggregates in SQL, one row per reviewed artifact
"""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import ArtifactId
from ethos_guild.core.errors import BusinessRuleError
from ethos_guild.models.review import Review
from ethos_guild.services.catalog import CatalogService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewSummary:
    average: dict[str, float] | None
    tags: list[str]
    count: int


class ReviewService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.catalog = CatalogService(db)

    @staticmethod
    def averages_subquery():
        """Per-artifact rating averages, keyed by artifact_id."""
        return (
            select(
                Review.artifact_id,
                func.avg(Review.rating_quality).label("quality"),
                func.avg(Review.rating_style).label("style"),
                func.avg(Review.rating_skill_impact).label("skill_impact"),
                func.count(Review.id).label("count"),
            )
            .group_by(Review.artifact_id)
            .subquery()
        )

    async def create(
        self, artifact_id: ArtifactId, reviewer_id: str, fields: dict,
    ) -> Review:
        artifact = await self.catalog.get_or_404(artifact_id)
        if not artifact.reviews_enabled:
            raise BusinessRuleError(
                "Reviews disabled for this artifact", "REVIEWS_DISABLED",
            )
        if artifact.owner_id == reviewer_id:
            raise BusinessRuleError(
                "Owners cannot review their own artifacts", "SELF_REVIEW",
            )
        review = Review(
            artifact_id=artifact.id,
            reviewer_id=reviewer_id,
            rating_quality=fields["rating_quality"],
            rating_style=fields["rating_style"],
            rating_skill_impact=fields["rating_skill_impact"],
            comment=fields.get("comment"),
            tags=list(fields.get("tags") or []),
        )
        self.db.add(review)
        await self.db.commit()
        return review

    async def list_for(self, artifact_id: ArtifactId) -> list[Review]:
        await self.catalog.get_or_404(artifact_id)
        result = await self.db.execute(
            select(Review)
            .where(Review.artifact_id == artifact_id)
            .order_by(Review.created_at)
        )
        return list(result.scalars().all())

    async def summary(self, artifact_id: ArtifactId) -> ReviewSummary:
        reviews = await self.list_for(artifact_id)
        if not reviews:
            return ReviewSummary(average=None, tags=[], count=0)
        count = len(reviews)
        tags: list[str] = []
        for review in reviews:
            for tag in review.tags or []:
                if tag not in tags:
                    tags.append(tag)
        return ReviewSummary(
            average={
                "quality": sum(r.rating_quality for r in reviews) / count,
                "style": sum(r.rating_style for r in reviews) / count,
                "skill_impact": sum(r.rating_skill_impact for r in reviews) / count,
            },
            tags=tags,
            count=count,
        )
