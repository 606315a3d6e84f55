"""Review Routes — artifact ratings nested under /artifacts/{id}/reviews."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.api.deps import require_identity
from ethos_guild.core.repository_protocols import Identity
from ethos_guild.infrastructure.database import get_db
from ethos_guild.schemas.review import ReviewCreate, ReviewResponse
from ethos_guild.services.reviews import ReviewService

router = APIRouter(prefix="/api/v1/artifacts", tags=["reviews"])


@router.post("/{artifact_id}/reviews", status_code=status.HTTP_201_CREATED)
async def create_review(
    artifact_id: UUID,
    body: ReviewCreate,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    review = await ReviewService(db).create(
        artifact_id, identity.user_id, body.model_dump(),
    )
    return {"review": ReviewResponse.model_validate(review).model_dump(mode="json")}


@router.get("/{artifact_id}/reviews")
async def list_reviews(artifact_id: UUID, db: AsyncSession = Depends(get_db)):
    reviews = await ReviewService(db).list_for(artifact_id)
    return {
        "reviews": [
            ReviewResponse.model_validate(r).model_dump(mode="json")
            for r in reviews
        ],
    }


@router.get("/{artifact_id}/reviews/summary")
async def review_summary(artifact_id: UUID, db: AsyncSession = Depends(get_db)):
    summary = await ReviewService(db).summary(artifact_id)
    return asdict(summary)
