"""QR Slug Rules — format of slugs in the shared artifact/event/venue namespace.

Invariants:
    - A slug is 3-64 chars: lowercase letters, digits, hyphens; no leading/trailing hyphen
    - redirect_target is the single source of truth for resolved URLs
"""

import re

from ethos_guild.core.domain_types import QREntityType
from ethos_guild.core.errors import InputValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{1,62}[a-z0-9])$")

_REDIRECT_PREFIX = {
    QREntityType.ARTIFACT: "/artifacts",
    QREntityType.EVENT: "/events",
    QREntityType.VENUE: "/venues",
}


def validate_slug(slug: str) -> str:
    if not SLUG_PATTERN.match(slug):
        raise InputValidationError(
            "qr_slug must be 3-64 lowercase letters, digits or hyphens",
            field="qr_slug",
        )
    return slug


def redirect_target(entity_type: QREntityType | str, entity_id: object) -> str:
    return f"{_REDIRECT_PREFIX[QREntityType(entity_type)]}/{entity_id}"
