from __future__ import annotations

"""
Snapshot records consumed by the timeshare aggregation engine.

All three collections (categories, sessions, goal timers) are owned by the
caller and handed in per computation; the engine treats them as immutable.

Time representation:
- Instants are milliseconds since the Unix epoch (int or float).
- Committed goal-timer time is whole seconds.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str = ""
    color: str = "#6b7280"
    goal_pct: Optional[float] = None  # target share of the parent's (or global) time, 0-100
    icon: Optional[str] = None
    parent_id: Optional[str] = None  # None = top-level
    exclude_from_goals: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Session:
    id: str
    category_id: str
    start_ms: float
    end_ms: Optional[float] = None  # None while running

    @property
    def is_running(self) -> bool:
        return self.end_ms is None


@dataclass(frozen=True)
class GoalTimer:
    """Commit-on-stop accumulator attached to a vision-board goal.

    ``total_seconds`` only grows when the timer goes active -> inactive;
    ``last_start_ms`` is set on activation and cleared on deactivation.
    """

    id: str
    category_id: str
    total_seconds: int = 0
    is_active: bool = False
    last_start_ms: Optional[float] = None
    text: str = ""
    completed: bool = False
