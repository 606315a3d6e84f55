"""Venue Manager — physical venues and the artifacts they stock.

Invariants:
    - Venue slugs share the QR namespace with artifacts and events
    - Catalog items reference an existing artifact and carry a positive local price
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ethos_guild.core.domain_types import QREntityType, ShippingMode
from ethos_guild.core.errors import InputValidationError, ResourceNotFoundError
from ethos_guild.models.seller_catalog_item import SellerCatalogItem
from ethos_guild.models.venue import Venue
from ethos_guild.services.catalog import CatalogService
from ethos_guild.services.qr_directory import QRDirectory

logger = logging.getLogger(__name__)


class VenueService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.qr = QRDirectory(db)
        self.catalog = CatalogService(db)

    async def create_venue(self, user_id: str, fields: dict) -> Venue:
        venue = Venue(
            id=uuid.uuid4(),
            name=fields["name"],
            contact_email=fields["contact_email"],
            address=fields.get("address"),
            qr_slug=fields.get("qr_slug"),
            catalog=[],
        )
        if venue.qr_slug is not None:
            await self.qr.claim(venue.qr_slug, QREntityType.VENUE, venue.id)
        self.db.add(venue)
        await self.db.commit()
        logger.info("Venue created", extra={"actor_id": user_id, "slug": venue.qr_slug})
        return venue

    async def get_venue(self, venue_id: uuid.UUID) -> Venue:
        venue = await self.db.get(Venue, venue_id)
        if venue is None:
            raise ResourceNotFoundError("Venue", str(venue_id))
        return venue

    async def add_catalog_item(
        self, venue_id: uuid.UUID, fields: dict,
    ) -> SellerCatalogItem:
        venue = await self.get_venue(venue_id)
        artifact = await self.catalog.get_or_404(fields["artifact_id"])

        price_cents = fields.get("price_cents")
        if price_cents is None or price_cents <= 0:
            raise InputValidationError(
                "price_cents must be greater than zero", field="price_cents",
            )
        if not fields.get("shipping_mode"):
            raise InputValidationError("shipping_mode required", field="shipping_mode")

        item = SellerCatalogItem(
            artifact_id=artifact.id,
            local_inventory=fields.get("local_inventory"),
            price_cents=price_cents,
            shipping_mode=ShippingMode(fields["shipping_mode"]).value,
        )
        venue.catalog.append(item)
        await self.db.commit()
        logger.info(
            "Catalog item added",
            extra={"artifact_id": str(artifact.id), "slug": venue.qr_slug},
        )
        return item
