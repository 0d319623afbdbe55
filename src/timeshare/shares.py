from __future__ import annotations

"""
Share-of-level percentages and goal-sum validation.

Two different percentage semantics live here and are kept apart:
- share_pct(): a category's rolled time against the total of the categories
  shown at the same level. "Exclude from goals" is ignored.
- validate_goal_sum(): the goal percentages configured at one level, where
  categories flagged "exclude from goals" do not count toward the 100% cap.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from .errors import InvalidArgument
from .models import Category


GOAL_CAP_PCT = 100


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------------------------- Shares ----------------------------


def visible_total(rolled: Mapping[str, float], visible_ids: Iterable[str]) -> float:
    return sum(rolled.get(cid, 0) for cid in visible_ids)


def share_pct(category_id: str, rolled: Mapping[str, float], visible_ids: Iterable[str]) -> int:
    ids = list(visible_ids)
    # only members of the browsed level have a share of it
    if category_id not in ids:
        return 0
    total = visible_total(rolled, ids)
    if total <= 0:
        return 0
    return _round_half_up(100 * rolled.get(category_id, 0) / total)


def share_table(rolled: Mapping[str, float], visible_ids: Iterable[str]) -> Dict[str, int]:
    ids = list(visible_ids)
    total = visible_total(rolled, ids)
    if total <= 0:
        return {cid: 0 for cid in ids}
    return {cid: _round_half_up(100 * rolled.get(cid, 0) / total) for cid in ids}


def goal_deviation(share: float, goal_pct: Optional[float]) -> Optional[float]:
    """Signed distance of the actual share from the goal (positive = over goal)."""
    if goal_pct is None:
        return None
    return share - goal_pct


# ---------------------------- Goal input ----------------------------


def clamp_percent(n: float) -> int:
    try:
        value = float(n)
    except (TypeError, ValueError):
        raise InvalidArgument(f"not a percentage: {n!r}") from None
    if math.isnan(value):
        raise InvalidArgument(f"not a percentage: {n!r}")
    return max(0, min(100, _round_half_up(value)))


def sanitize_goal_input(value: str) -> str:
    """Keep only digits and clamp to 0-100; empty input stays empty."""
    digits = "".join(ch for ch in value if ch in "0123456789")
    if digits == "":
        return ""
    return str(clamp_percent(int(digits)))


# ---------------------------- Goal-sum validation ----------------------------


@dataclass(frozen=True)
class GoalCandidate:
    goal_pct: Optional[float]
    id: Optional[str] = None  # None = a category being created
    exclude_from_goals: Optional[bool] = None  # None = keep the existing flag


@dataclass(frozen=True)
class GoalSumResult:
    sum: float
    exceeds: bool


def validate_goal_sum(
    categories: Iterable[Category],
    level_key: Optional[str],
    candidate: Optional[GoalCandidate] = None,
) -> GoalSumResult:
    """Sum goal percentages at one level with ``candidate`` applied.

    ``level_key`` is None for the root level, otherwise the parent id. The
    candidate replaces the sibling with the same id; a candidate without an
    id, or whose id is not at this level, is added as a new sibling. Only
    reports; rejecting the write is up to the caller.
    """
    total: float = 0
    matched = False
    for cat in categories:
        if cat.parent_id != level_key:
            continue
        if candidate is not None and candidate.id is not None and cat.id == candidate.id:
            matched = True
            excluded = cat.exclude_from_goals if candidate.exclude_from_goals is None else candidate.exclude_from_goals
            if not excluded:
                total += candidate.goal_pct or 0
        elif not cat.exclude_from_goals:
            total += cat.goal_pct or 0

    if candidate is not None and not matched and not candidate.exclude_from_goals:
        total += candidate.goal_pct or 0

    return GoalSumResult(sum=total, exceeds=total > GOAL_CAP_PCT)
