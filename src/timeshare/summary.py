"""
One browsing level of the time page, computed from scratch per refresh tick.

Usage:

    from timeshare.summary import summarize_level

    summary = summarize_level(categories, sessions, goal_timers, "Week", now_ms)
    for row in summary.rows:
        print(row.category.name, row.label, f"{row.share_pct}%")

Passing ``freeze_ms`` (e.g. the instant a chart hover began) keeps the chart
values still while the live rows keep counting; both share the same window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from .aggregate import compute_direct_seconds, find_running_session, rollup_seconds, running_total_seconds
from .formatting import format_duration
from .hierarchy import HierarchyIndex
from .models import Category, GoalTimer, Session
from .shares import GoalSumResult, goal_deviation, share_table, validate_goal_sum
from .window import TimeRange, TimeWindow, resolve_window


@dataclass
class CategoryRow:
    category: Category
    seconds: float
    share_pct: int
    goal_pct: Optional[float]
    deviation: Optional[float]
    label: str
    is_highlighted: bool = False


@dataclass
class LevelSummary:
    window: TimeWindow
    parent_id: Optional[str]
    rows: List[CategoryRow] = field(default_factory=list)
    direct: Dict[str, float] = field(default_factory=dict)
    rolled: Dict[str, float] = field(default_factory=dict)
    chart_values: Dict[str, float] = field(default_factory=dict)
    running_category_id: Optional[str] = None
    running_seconds: float = 0
    goal_sum: GoalSumResult = field(default_factory=lambda: GoalSumResult(sum=0, exceeds=False))

    @property
    def total_seconds(self) -> float:
        return sum(row.seconds for row in self.rows)


def is_category_highlighted(
    index: HierarchyIndex,
    category_id: str,
    running_category_id: Optional[str],
    goal_timers: Iterable[GoalTimer],
) -> bool:
    """True when the category or one of its direct children has live time running."""
    related = {category_id, *index.children_of(category_id)}
    if running_category_id is not None and running_category_id in related:
        return True
    return any(g.is_active and g.category_id in related for g in goal_timers)


def summarize_level(
    categories: Iterable[Category],
    sessions: Iterable[Session],
    goal_timers: Iterable[GoalTimer],
    range_: Union[TimeRange, str],
    now_ms: float,
    parent_id: Optional[str] = None,
    freeze_ms: Optional[float] = None,
) -> LevelSummary:
    cats = list(categories)
    sessions = list(sessions)
    goal_timers = list(goal_timers)
    index = HierarchyIndex(cats)
    window = resolve_window(range_, now_ms)

    direct = compute_direct_seconds(sessions, goal_timers, window, now_ms)
    rolled = rollup_seconds(index, direct)
    if freeze_ms is not None:
        chart_rolled = rollup_seconds(index, compute_direct_seconds(sessions, goal_timers, window, freeze_ms))
    else:
        chart_rolled = rolled

    visible = index.level(parent_id)
    visible_ids = [c.id for c in visible]
    shares = share_table(rolled, visible_ids)

    running = find_running_session(sessions)
    running_category_id = running.category_id if running is not None else None

    rows = []
    for cat in visible:
        seconds = rolled.get(cat.id, 0)
        pct = shares[cat.id]
        rows.append(
            CategoryRow(
                category=cat,
                seconds=seconds,
                share_pct=pct,
                goal_pct=cat.goal_pct,
                deviation=goal_deviation(pct, cat.goal_pct),
                label=format_duration(seconds),
                is_highlighted=is_category_highlighted(index, cat.id, running_category_id, goal_timers),
            )
        )

    return LevelSummary(
        window=window,
        parent_id=parent_id,
        rows=rows,
        direct=direct,
        rolled=rolled,
        chart_values={cid: chart_rolled.get(cid, 0) for cid in visible_ids},
        running_category_id=running_category_id,
        running_seconds=running_total_seconds(sessions, direct),
        goal_sum=validate_goal_sum(cats, parent_id),
    )
