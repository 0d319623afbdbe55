from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import matplotlib.pyplot as plt

from .summary import LevelSummary


@dataclass
class ChartConfig:
    title: str = "Time by category"
    start_angle: int = 140
    empty_color: str = "#1f2337"  # placeholder slice when nothing was tracked
    empty_label: str = "No time tracked"
    backend: Optional[str] = "TkAgg"  # TIMESHARE_MPL_BACKEND overrides


@dataclass
class ChartSlice:
    label: str
    value: float
    color: str


def chart_slices(summary: LevelSummary) -> List[ChartSlice]:
    """Pie slices for the visible level, using the (possibly frozen) chart values."""
    slices = []
    for row in summary.rows:
        value = summary.chart_values.get(row.category.id, 0)
        if value > 0:
            slices.append(ChartSlice(label=row.category.name, value=value, color=row.category.color))
    return slices


def plot_share_pie(slices: List[ChartSlice], cfg: Optional[ChartConfig] = None, show: bool = True):
    """Draw a pie of tracked time per category and return the figure."""
    cfg = cfg or ChartConfig()

    backend = os.environ.get("TIMESHARE_MPL_BACKEND") or cfg.backend
    if show and backend:
        try:
            plt.switch_backend(backend)
        except Exception:
            pass

    total = sum(s.value for s in slices)
    fig, ax = plt.subplots()  # type: ignore[call-arg]
    if total <= 0:
        # Avoid divide-by-zero; draw a single neutral ring
        ax.pie([1], labels=[cfg.empty_label], colors=[cfg.empty_color], startangle=cfg.start_angle)
    else:
        ax.pie(
            [s.value for s in slices],
            labels=[s.label for s in slices],
            colors=[s.color for s in slices],
            autopct=lambda p: f"{p:.0f}%",
            startangle=cfg.start_angle,
            textprops={"color": "black"},
        )  # type: ignore[call-arg]
    ax.axis("equal")
    ax.set_title(cfg.title)  # type: ignore[call-arg]

    if show:
        try:
            plt.show(block=False)  # type: ignore[call-arg]
        except Exception as e:
            print(f"timeshare: could not show chart: {e}")
    return fig
