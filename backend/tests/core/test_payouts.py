"""Payout Split Algorithm — tests for cent-exact distribution.

Tests cover:
    - round_half_up rounds halves toward +infinity
    - fee + allocations always equals the sale total
    - remainder lands on the largest allocation, first occurrence on ties
    - merge_allocations keeps first-seen recipient order
"""

import pytest

from ethos_guild.core.payouts import (
    PayoutPlan, Split, compute_payouts, merge_allocations, percent_of,
    round_half_up,
)


# ─── round_half_up ───────────────────────────────────────────────

@pytest.mark.parametrize("value,expected", [
    (0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-0.5, 0), (-1.5, -1), (7, 7),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_percent_of_uses_decimal_arithmetic():
    # 1.005 * 100 is 100.49999... in binary floating point
    assert percent_of(1.005, 10_000) == 101
    assert percent_of(10, 1500) == 150


# ─── compute_payouts ─────────────────────────────────────────────

def test_single_owner_limited_sale():
    plan = compute_payouts(1500, 10, [Split("owner", 100)])
    assert plan.fee_cents == 150
    assert [(a.recipient_id, a.amount_cents) for a in plan.allocations] == [
        ("owner", 1350),
    ]


def test_seventy_thirty_split():
    plan = compute_payouts(2000, 10, [Split("owner", 70), Split("collab", 30)])
    assert plan.fee_cents == 200
    assert plan.distributed_cents == 1800
    assert [a.amount_cents for a in plan.allocations] == [1260, 540]


def test_remainder_goes_to_largest_allocation():
    plan = compute_payouts(100, 0, [Split("a", 33.33), Split("b", 33.33), Split("c", 33.34)])
    # 33 + 33 + 33 = 99; the extra cent lands on the first of the equal largest
    assert [a.amount_cents for a in plan.allocations] == [34, 33, 33]


def test_negative_remainder_taken_from_largest_allocation():
    plan = compute_payouts(3, 0, [Split("a", 50), Split("b", 50)])
    # 1.5 rounds up twice: 2 + 2 = 4 > 3
    assert [a.amount_cents for a in plan.allocations] == [1, 2]
    assert plan.fee_cents + plan.distributed_cents == 3


def test_remainder_targets_largest_even_when_not_first():
    plan = compute_payouts(10, 0, [Split("a", 25), Split("b", 50), Split("c", 25)])
    # 3 + 5 + 3 = 11; the largest allocation absorbs the -1
    assert [a.amount_cents for a in plan.allocations] == [3, 4, 3]


def test_tie_break_prefers_first_occurrence():
    plan = compute_payouts(7, 0, [Split("a", 50), Split("b", 50)])
    assert [a.amount_cents for a in plan.allocations] == [3, 4]


@pytest.mark.parametrize("total", [1, 7, 99, 101, 1999, 123_457])
@pytest.mark.parametrize("fee_percent", [0, 2.5, 10, 33.3])
def test_conservation(total, fee_percent):
    splits = [Split("a", 12.5), Split("b", 37.5), Split("c", 50)]
    plan = compute_payouts(total, fee_percent, splits)
    assert plan.fee_cents + plan.distributed_cents == total


def test_compute_payouts_does_not_mutate_splits():
    splits = [Split("a", 60), Split("b", 40)]
    compute_payouts(999, 10, splits)
    assert splits == [Split("a", 60), Split("b", 40)]


def test_plan_to_dict():
    plan = compute_payouts(10_000, 10, [Split("owner", 100)])
    assert plan.to_dict() == {
        "fee_cents": 1000,
        "payouts": [{"recipient_id": "owner", "amount_cents": 9000}],
    }


# ─── merge_allocations ───────────────────────────────────────────

def test_merge_allocations_sums_per_recipient_in_first_seen_order():
    first = compute_payouts(1000, 10, [Split("owner", 50), Split("ana", 50)])
    second = compute_payouts(1000, 10, [Split("bo", 50), Split("owner", 50)])
    merged = merge_allocations([first, second])
    assert list(merged) == ["owner", "ana", "bo"]
    assert merged == {"owner": 900, "ana": 450, "bo": 450}


def test_merge_allocations_empty():
    assert merge_allocations([]) == {}
    assert merge_allocations([PayoutPlan(fee_cents=0, allocations=[])]) == {}
