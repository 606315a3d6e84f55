"""Supply & Quantity Enforcement — tests for pure checkout checks."""

from types import SimpleNamespace

import pytest

from ethos_guild.core.domain_types import SupplyClass
from ethos_guild.core.enforce_supply import (
    check_for_sale, check_quantity, check_supply_available,
    normalize_supply_limit, remaining_supply,
)
from ethos_guild.core.errors import (
    BusinessRuleError, InputValidationError, SoldOutError,
)


def _artifact(**overrides):
    fields = {
        "id": "a1", "supply_class": "LIMITED", "supply_limit": 10,
        "supply_sold": 0, "price_cents": 500,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


# ─── normalize_supply_limit ──────────────────────────────────────

def test_common_clears_limit():
    assert normalize_supply_limit(SupplyClass.COMMON, 50) is None
    assert normalize_supply_limit("COMMON", None) is None


def test_limited_keeps_limit():
    assert normalize_supply_limit("LIMITED", 10) == 10
    assert normalize_supply_limit(SupplyClass.RARE, 0) == 0


@pytest.mark.parametrize("limit", [None, "10", 2.5, True, -1])
def test_limited_rejects_missing_or_invalid_limit(limit):
    with pytest.raises(InputValidationError):
        normalize_supply_limit("RARE", limit)


# ─── checks ──────────────────────────────────────────────────────

@pytest.mark.parametrize("quantity", [0, -3])
def test_check_quantity_rejects_non_positive(quantity):
    with pytest.raises(InputValidationError):
        check_quantity(quantity)


def test_check_for_sale_returns_price():
    assert check_for_sale(_artifact()) == 500


@pytest.mark.parametrize("price", [None, 0])
def test_check_for_sale_rejects_unpriced(price):
    with pytest.raises(BusinessRuleError) as exc:
        check_for_sale(_artifact(price_cents=price))
    assert exc.value.code == "NOT_FOR_SALE"


def test_remaining_supply():
    assert remaining_supply(_artifact(supply_sold=4)) == 6
    assert remaining_supply(_artifact(supply_class="COMMON", supply_limit=None)) is None


def test_check_supply_available_allows_exact_remaining():
    check_supply_available(_artifact(supply_sold=7), 3)


def test_check_supply_available_rejects_oversell():
    with pytest.raises(SoldOutError) as exc:
        check_supply_available(_artifact(supply_sold=8), 3)
    assert "sold out" in exc.value.message


def test_common_is_never_sold_out():
    check_supply_available(
        _artifact(supply_class="COMMON", supply_limit=None), 1_000_000,
    )
