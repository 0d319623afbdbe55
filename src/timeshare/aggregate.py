from __future__ import annotations

"""
Direct and rolled-up time totals per category.

Contract:
- compute_direct_seconds(): seconds attributed straight to each category id.
  Session time is clipped to the window; goal-timer time is added in full,
  since a goal timer keeps only a running total with no interval history.
- rollup_seconds(): each known category's direct time plus all descendants'.

Edge cases handled:
- Running sessions and active goal timers are measured up to ``now_ms``,
  which may be a frozen instant (e.g. while a chart is hovered) that differs
  from the window end. The window itself is never moved.
- Ids that reference no known category stay in the direct mapping and are
  simply never reached by rollup.
- Parent loops raise CycleDetected rather than recursing forever.
"""

from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

from .errors import CycleDetected
from .hierarchy import HierarchyIndex
from .models import Category, GoalTimer, Session
from .window import TimeWindow, overlap_ms


# ---------------------------- Goal timers ----------------------------


def live_goal_seconds(timer: GoalTimer, now_ms: float) -> int:
    """Whole seconds elapsed since the timer was last resumed (0 when inactive)."""
    if not timer.is_active or timer.last_start_ms is None:
        return 0
    return max(0, int((now_ms - timer.last_start_ms) // 1000))


def goal_total_seconds(timer: GoalTimer, now_ms: float) -> int:
    return (timer.total_seconds or 0) + live_goal_seconds(timer, now_ms)


def commit_goal_timer(timer: GoalTimer, now_ms: float) -> GoalTimer:
    """Return the record a caller persists when the timer is deactivated."""
    if not timer.is_active:
        return timer
    return replace(
        timer,
        total_seconds=goal_total_seconds(timer, now_ms),
        is_active=False,
        last_start_ms=None,
    )


# ---------------------------- Sessions ----------------------------


def find_running_session(sessions: Iterable[Session]) -> Optional[Session]:
    """The running session, or the most recently started one if several run."""
    running = [s for s in sessions if s.is_running]
    if not running:
        return None
    return max(running, key=lambda s: s.start_ms)


def running_total_seconds(sessions: Iterable[Session], direct: Mapping[str, float]) -> float:
    """Direct seconds of the running session's category (0 when idle)."""
    session = find_running_session(sessions)
    if session is None:
        return 0
    return direct.get(session.category_id, 0)


# ---------------------------- Direct totals ----------------------------


def compute_direct_seconds(
    sessions: Iterable[Session],
    goal_timers: Iterable[GoalTimer],
    window: TimeWindow,
    now_ms: Optional[float] = None,
) -> Dict[str, float]:
    now = window.end_ms if now_ms is None else now_ms
    totals: Dict[str, float] = {}

    for s in sessions:
        end = s.end_ms if s.end_ms is not None else now
        ms = overlap_ms(s.start_ms, end, window.start_ms, window.end_ms)
        if ms > 0:
            totals[s.category_id] = totals.get(s.category_id, 0) + ms / 1000

    for g in goal_timers:
        total = goal_total_seconds(g, now)
        if total > 0:
            totals[g.category_id] = totals.get(g.category_id, 0) + total

    return totals


# ---------------------------- Rollup ----------------------------


def rollup_seconds(
    categories: Union[HierarchyIndex, Iterable[Category]],
    direct: Mapping[str, float],
) -> Dict[str, float]:
    index = categories if isinstance(categories, HierarchyIndex) else HierarchyIndex(categories)
    memo: Dict[str, float] = {}
    in_progress: Set[str] = set()

    for root_id in index:
        if root_id in memo:
            continue
        # Iterative post-order: each frame is (id, remaining children).
        stack: List[Tuple[str, Iterator[str]]] = [(root_id, iter(index.children_of(root_id)))]
        in_progress.add(root_id)
        while stack:
            node, kids = stack[-1]
            child = next(kids, None)
            if child is not None:
                if child in memo:
                    continue
                if child in in_progress:
                    path = [frame[0] for frame in stack]
                    raise CycleDetected(path[path.index(child):] + [child])
                in_progress.add(child)
                stack.append((child, iter(index.children_of(child))))
                continue
            stack.pop()
            in_progress.discard(node)
            memo[node] = direct.get(node, 0) + sum(memo[k] for k in index.children_of(node))

    return memo
