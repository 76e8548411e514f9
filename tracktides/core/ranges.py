#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Y-axis range, averages and the chart summary value.

Every function here is total: empty input returns the documented fallback.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Tuple

import numpy as np

from ..shared.models import ChartDataPoint

RANGE_PAD_FRACTION = 0.10
DEFAULT_FLOOR_PAD = 5.0


def y_range(
    points: Sequence[ChartDataPoint],
    fallback: Tuple[float, float],
    floor_pad: float = DEFAULT_FLOOR_PAD,
    hard_min: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Padded Y-axis range for the visible points

    pad = max((max - min) * 0.10, floor_pad); the lower bound is raised to
    hard_min when one is given and it lies below the upper bound, so the
    result always has lower < upper.

    Example:
        >>> y_range([ChartDataPoint(d0, 200.0), ChartDataPoint(d7, 195.0)], (150, 200))
        (190.0, 205.0)
    """
    if not points:
        return fallback

    values = np.asarray([p.value for p in points], dtype=float)
    min_val = float(values.min())
    max_val = float(values.max())
    pad = max((max_val - min_val) * RANGE_PAD_FRACTION, floor_pad)

    lower = min_val - pad
    upper = max_val + pad
    # A floor at or above the padded top would invert the axis; ignore it then
    if hard_min is not None and hard_min < upper:
        lower = max(lower, hard_min)
    return lower, upper


def average(points: Sequence[ChartDataPoint], fallback_average: float) -> float:
    """Arithmetic mean of the point values, or fallback_average when empty."""
    if not points:
        return fallback_average
    return sum(p.value for p in points) / len(points)


def nearest_point(points: Sequence[ChartDataPoint], target: datetime) -> Optional[ChartDataPoint]:
    """Point with the minimal absolute time distance to target; the first such point wins ties."""
    if not points:
        return None
    return min(points, key=lambda p: abs((p.date - target).total_seconds()))


def displayed_value(
    visible_points: Sequence[ChartDataPoint],
    selected: Optional[ChartDataPoint],
    fallback_average: float,
) -> float:
    """The pinned point's value, otherwise the mean of the visible points."""
    if selected is not None:
        return selected.value
    return average(visible_points, fallback_average)


def show_average_label(selected: Optional[ChartDataPoint]) -> bool:
    """
    Whether the summary is labelled as an average

    A pinned raw reading is an exact value, so the label is hidden; a pinned
    bucket point is itself an average.
    """
    if selected is None:
        return True
    return selected.is_aggregate
