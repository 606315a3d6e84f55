"""QR Slug Rules — tests for slug format and redirect targets."""

import uuid

import pytest

from ethos_guild.core.domain_types import QREntityType
from ethos_guild.core.enforce_slug import redirect_target, validate_slug
from ethos_guild.core.errors import InputValidationError


@pytest.mark.parametrize("slug", ["aurora", "abc", "night-market-2026", "a" * 64])
def test_valid_slugs(slug):
    assert validate_slug(slug) == slug


@pytest.mark.parametrize("slug", [
    "ab", "a" * 65, "Aurora", "-aurora", "aurora-", "au rora", "auróra", "",
])
def test_invalid_slugs(slug):
    with pytest.raises(InputValidationError):
        validate_slug(slug)


def test_redirect_targets():
    entity_id = uuid.uuid4()
    assert redirect_target(QREntityType.ARTIFACT, entity_id) == f"/artifacts/{entity_id}"
    assert redirect_target("EVENT", entity_id) == f"/events/{entity_id}"
    assert redirect_target(QREntityType.VENUE, entity_id) == f"/venues/{entity_id}"
