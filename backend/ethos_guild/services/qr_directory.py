"""QR Slug Directory — claims, releases and resolves slugs in the shared namespace.

Invariants:
    - claim() runs inside the caller's transaction: the slug and the entity
      commit together or not at all
    - The qr_slugs primary key is the authority; the pre-check only produces a
      friendlier error on the common path
    - resolve() appends exactly one QRScan per successful resolution

Design Decisions:
    - IntegrityError at flush mapped to SlugConflictError: a concurrent claim of the
      same slug loses at the database, not in application code
"""

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import QREntityType
from ethos_guild.core.enforce_slug import redirect_target, validate_slug
from ethos_guild.core.errors import ResourceNotFoundError, SlugConflictError
from ethos_guild.models.qr_scan import QRScan
from ethos_guild.models.qr_slug import QRSlug

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlugResolution:
    slug: str
    entity_type: QREntityType
    entity_id: uuid.UUID
    url: str


class QRDirectory:
    """Single namespace for artifact, event and venue slugs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_available(self, slug: str) -> bool:
        return await self.db.get(QRSlug, slug) is None

    async def claim(
        self, slug: str, entity_type: QREntityType, entity_id: uuid.UUID,
    ) -> None:
        """Register slug for an entity. Flushes; does not commit."""
        validate_slug(slug)
        if not await self.is_available(slug):
            raise SlugConflictError(slug)
        self.db.add(QRSlug(
            slug=slug, entity_type=entity_type.value, entity_id=entity_id,
        ))
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("QR slug lost a concurrent claim", extra={"slug": slug})
            raise SlugConflictError(slug)

    async def release(self, slug: str, entity_id: uuid.UUID) -> None:
        """Drop a registration, but only if it still belongs to entity_id."""
        await self.db.execute(
            delete(QRSlug)
            .where(QRSlug.slug == slug)
            .where(QRSlug.entity_id == entity_id)
        )

    async def resolve(self, slug: str) -> SlugResolution:
        """Resolve slug to its redirect target and record the scan. Commits."""
        registration = await self.db.get(QRSlug, slug)
        if registration is None:
            raise ResourceNotFoundError("QR slug", slug)
        entity_type = QREntityType(registration.entity_type)
        self.db.add(QRScan(
            slug=slug,
            entity_type=entity_type.value,
            entity_id=registration.entity_id,
        ))
        await self.db.commit()
        logger.info(
            f"QR slug resolved to {entity_type.value}", extra={"slug": slug},
        )
        return SlugResolution(
            slug=slug,
            entity_type=entity_type,
            entity_id=registration.entity_id,
            url=redirect_target(entity_type, registration.entity_id),
        )
