"""Split Enforcement — validates collaboration split sets before they are committed.

Invariants:
    - parse_splits is PURE: raises on invalid input, never mutates
    - A committed split set is non-empty, every percent is in [0, 100],
      and round_half_up(sum(percent)) == 100
    - fallback_splits always yields 100% to the artifact owner

Design Decisions:
    - Shape problems (empty, missing user_id, out-of-range percent) are validation errors;
      a well-formed set that does not total 100 is a business-rule error
"""

from typing import Any, Iterable

from ethos_guild.core.errors import BusinessRuleError, InputValidationError
from ethos_guild.core.payouts import Split, round_half_up, splits_total


PREVIEW_TOTAL_CENTS: int = 10_000
PREVIEW_FEE_PERCENT: float = 10


def parse_splits(raw: Iterable[Any] | None) -> list[Split]:
    """Validate and normalize incoming splits (dicts or objects with user_id/percent)."""
    if raw is None:
        raise InputValidationError("splits are required", field="splits")
    splits: list[Split] = []
    for item in raw:
        if isinstance(item, dict):
            user_id, percent = item.get("user_id"), item.get("percent")
        else:
            user_id = getattr(item, "user_id", None)
            percent = getattr(item, "percent", None)
        if not user_id:
            raise InputValidationError("each split needs a user_id", field="splits")
        if isinstance(percent, bool) or not isinstance(percent, (int, float)):
            raise InputValidationError("each split needs a numeric percent", field="splits")
        if percent < 0 or percent > 100:
            raise InputValidationError(
                "split percent must be between 0 and 100", field="splits",
            )
        splits.append(Split(user_id=str(user_id), percent=float(percent)))

    if not splits:
        raise InputValidationError("splits must not be empty", field="splits")
    if round_half_up(splits_total(splits)) != 100:
        raise BusinessRuleError(
            "Splits must total 100 percent", "SPLITS_NOT_100",
        )
    return splits


def splits_to_json(splits: Iterable[Split]) -> list[dict]:
    return [{"user_id": s.user_id, "percent": s.percent} for s in splits]


def splits_from_json(data: Iterable[dict]) -> list[Split]:
    return [Split(user_id=d["user_id"], percent=float(d["percent"])) for d in data]


def fallback_splits(owner_id: str) -> list[Split]:
    return [Split(user_id=owner_id, percent=100.0)]
