"""Nearest-minute lookup and tooltip content for pointer hover."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np

from mouseviz.activity_chart.aggregator import AggregatedPoint, SexSeries


def nearest_index(minutes: np.ndarray, query: float) -> Optional[int]:
    """Index of the minute closest to query in a sorted array.

    Bisects (left) for the insertion point, then compares the neighbour
    before it with the one at it. An exact tie goes to the later point.
    Returns None for an empty array.
    """
    n = len(minutes)
    if n == 0:
        return None
    i = int(np.searchsorted(minutes, query, side="left"))
    if i == 0:
        return 0
    if i >= n:
        return n - 1
    before = query - minutes[i - 1]
    after = minutes[i] - query
    return i if before >= after else i - 1


def nearest_point(series: SexSeries, query: float) -> Optional[AggregatedPoint]:
    """AggregatedPoint of series nearest to query minute, or None if series is empty."""
    i = nearest_index(series.minutes, query)
    if i is None:
        return None
    return AggregatedPoint(
        sex=series.sex,
        minute=float(series.minutes[i]),
        activity=float(series.activity[i]),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class TooltipContent:
    """Text shown in the hover tooltip."""

    minute: int
    points: tuple[AggregatedPoint, ...]

    @property
    def title(self) -> str:
        return f"Minute: {self.minute}"

    def rows(self) -> list[str]:
        return [f"{p.sex}: {p.activity:.1f}" for p in self.points]

    def lines(self) -> list[str]:
        return [self.title, *self.rows()]


def build_tooltip(series: Mapping[str, SexSeries], minute: float) -> TooltipContent:
    """Nearest point per sex for the hovered minute, in series order."""
    points = []
    for s in series.values():
        p = nearest_point(s, minute)
        if p is not None:
            points.append(p)
    return TooltipContent(minute=round_half_up(minute), points=tuple(points))
