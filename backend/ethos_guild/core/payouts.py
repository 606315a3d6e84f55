"""Payout Split Algorithm — cent-exact proportional distribution of a sale.

Invariants:
    - compute_payouts is PURE: no IO, no mutation of its inputs
    - fee_cents + sum(allocation.amount_cents) == total_cents, for every input
    - Rounding remainder lands on the largest allocation; first occurrence wins ties
    - round_half_up rounds .5 toward +infinity (same rule for fees and allocations)

Design Decisions:
    - Decimal arithmetic over float: percent * cents never picks up binary
      representation error, so identical inputs always round identically
    - Single correction point (largest allocation) instead of largest-remainder:
      downstream payout totals depend on this exact policy
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Iterable, Sequence

from ethos_guild.core.domain_types import Cents

_HUNDRED = Decimal(100)
_HALF = Decimal("0.5")


@dataclass(frozen=True)
class Split:
    """One collaborator's share of a sale, in percent."""
    user_id: str
    percent: float


@dataclass(frozen=True)
class Allocation:
    recipient_id: str
    amount_cents: Cents


@dataclass(frozen=True)
class PayoutPlan:
    fee_cents: Cents
    allocations: list[Allocation]

    @property
    def distributed_cents(self) -> Cents:
        return Cents(sum(a.amount_cents for a in self.allocations))

    def to_dict(self) -> dict:
        return {
            "fee_cents": self.fee_cents,
            "payouts": [
                {"recipient_id": a.recipient_id, "amount_cents": a.amount_cents}
                for a in self.allocations
            ],
        }


def _decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 33.33 as 33.33 instead of its binary expansion
    return Decimal(str(value))


def round_half_up(value: float | int | Decimal) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int((_decimal(value) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def percent_of(percent: float | int, amount_cents: Cents) -> Cents:
    """round_half_up(percent / 100 * amount_cents)."""
    return Cents(round_half_up(_decimal(percent) / _HUNDRED * amount_cents))


def splits_total(splits: Iterable[Split]) -> Decimal:
    return sum((_decimal(s.percent) for s in splits), Decimal(0))


def compute_payouts(
    total_cents: Cents, fee_percent: float, splits: Sequence[Split],
) -> PayoutPlan:
    """Split total_cents into a platform fee and per-recipient allocations."""
    fee = percent_of(fee_percent, total_cents)
    distributable = total_cents - fee
    amounts = [percent_of(s.percent, distributable) for s in splits]

    remainder = distributable - sum(amounts)
    if remainder != 0 and amounts:
        max_index = 0
        for index, amount in enumerate(amounts):
            if amount > amounts[max_index]:
                max_index = index
        amounts[max_index] += remainder

    return PayoutPlan(
        fee_cents=fee,
        allocations=[
            Allocation(recipient_id=s.user_id, amount_cents=amount)
            for s, amount in zip(splits, amounts)
        ],
    )


def merge_allocations(plans: Iterable[PayoutPlan]) -> dict[str, Cents]:
    """Sum allocations per recipient across plans, keeping first-seen order."""
    merged: dict[str, Cents] = {}
    for plan in plans:
        for allocation in plan.allocations:
            merged[allocation.recipient_id] = Cents(
                merged.get(allocation.recipient_id, 0) + allocation.amount_cents
            )
    return merged
