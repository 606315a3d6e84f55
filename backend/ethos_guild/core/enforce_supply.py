"""Supply & Quantity Enforcement — pure checks run at checkout and ticket issuance.

Invariants:
    - COMMON artifacts are never supply-constrained: normalize_supply_limit returns None
    - RARE/LIMITED artifacts always carry an integer supply_limit
    - check_* functions are PURE: raise a domain error or return, never mutate
    - These checks are advisory reads; the authoritative bound is the conditional
      UPDATE issued by the service layer

Design Decisions:
    - Separate from enforce_splits: supply rules run per cart line, split rules per agreement
"""

from typing import Protocol

from ethos_guild.core.domain_types import SupplyClass
from ethos_guild.core.errors import (
    BusinessRuleError, InputValidationError, SoldOutError,
)


class SupplyLike(Protocol):
    id: object
    supply_class: str
    supply_limit: int | None
    supply_sold: int
    price_cents: int | None


def normalize_supply_limit(
    supply_class: SupplyClass | str, supply_limit: int | None,
) -> int | None:
    """Clear the limit for COMMON; require it for RARE/LIMITED."""
    if SupplyClass(supply_class) == SupplyClass.COMMON:
        return None
    if isinstance(supply_limit, bool) or not isinstance(supply_limit, int):
        raise InputValidationError(
            "supply_limit required for limited or rare artifacts",
            field="supply_limit",
        )
    if supply_limit < 0:
        raise InputValidationError(
            "supply_limit must not be negative", field="supply_limit",
        )
    return supply_limit


def check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise InputValidationError(
            "Quantity must be greater than zero", field="quantity",
        )


def check_for_sale(artifact: SupplyLike) -> int:
    """Return the unit price, or raise if the artifact has none."""
    if not artifact.price_cents:
        raise BusinessRuleError(
            f"Artifact {artifact.id} is not for sale", "NOT_FOR_SALE",
        )
    return artifact.price_cents


def remaining_supply(artifact: SupplyLike) -> int | None:
    """Units left, or None when the artifact is unconstrained."""
    if artifact.supply_class == SupplyClass.COMMON or artifact.supply_limit is None:
        return None
    return artifact.supply_limit - (artifact.supply_sold or 0)


def check_supply_available(artifact: SupplyLike, quantity: int) -> None:
    remaining = remaining_supply(artifact)
    if remaining is not None and remaining < quantity:
        raise SoldOutError(f"Artifact {artifact.id} is sold out")

