#!/usr/bin/env python3
"""
Calendar bucketing for low-zoom chart views.
Does NOT affect stored entries, only what a chart plots.

Long windows would plot hundreds of daily points, so the six-month view
collapses them into ISO weeks and the year view into calendar months, each
bucket drawn as a single averaged point.
"""
from __future__ import annotations

import numpy as np
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List
import logging

from ..shared.models import ChartDataPoint, TimeRange
from ..shared.utils import iso_week_start, month_start

log = logging.getLogger(__name__)

WEEK_MIDPOINT_OFFSET = timedelta(days=3)
MONTH_MIDPOINT_OFFSET = timedelta(days=14)


def _aggregate(
    series: Iterable[ChartDataPoint],
    bucket_start: Callable[[datetime], datetime],
    midpoint_offset: timedelta,
    label: str,
) -> List[ChartDataPoint]:
    """
    Group points by bucket_start(date), average each group, and emit one
    aggregate point per non-empty group at bucket start + midpoint_offset.

    Points whose bucket boundary or midpoint cannot be computed are dropped.
    """
    groups: Dict[datetime, List[float]] = {}
    dropped = 0
    total = 0

    for point in series:
        total += 1
        try:
            midpoint = bucket_start(point.date) + midpoint_offset
        except (OverflowError, ValueError) as e:
            dropped += 1
            log.debug(f"Dropping point at {point.date} from {label} aggregation: {e}")
            continue
        groups.setdefault(midpoint, []).append(point.value)

    aggregated = [
        ChartDataPoint(
            date=midpoint,
            value=float(np.mean(np.asarray(values, dtype=float))),
            is_aggregate=True,
        )
        for midpoint, values in groups.items()
        if values
    ]
    aggregated.sort(key=lambda p: p.date)

    log.debug(f"Aggregated {total} points into {len(aggregated)} {label} buckets ({dropped} dropped)")
    return aggregated


def aggregate_by_week(series: Iterable[ChartDataPoint]) -> List[ChartDataPoint]:
    """
    Average points per ISO-8601 week (Monday start).

    Example:
        >>> mon = datetime(2026, 10, 5)
        >>> pts = [ChartDataPoint(mon + timedelta(days=i), float(i)) for i in range(7)]
        >>> aggregate_by_week(pts)
        [ChartDataPoint(date=datetime.datetime(2026, 10, 8, 0, 0), value=3.0, is_aggregate=True)]
    """
    return _aggregate(series, iso_week_start, WEEK_MIDPOINT_OFFSET, "weekly")


def aggregate_by_month(series: Iterable[ChartDataPoint]) -> List[ChartDataPoint]:
    """Average points per calendar month, plotted on the 15th."""
    return _aggregate(series, month_start, MONTH_MIDPOINT_OFFSET, "monthly")


def display_series(series: Iterable[ChartDataPoint], time_range: TimeRange) -> List[ChartDataPoint]:
    """
    Choose the plotted granularity for a time range

    Args:
        series: Full (unwindowed) series, any order for the bucketed ranges
        time_range: Selected chart range

    Returns:
        D/W/M: the raw points unchanged (as a new list)
        6M: weekly aggregate points
        Y: monthly aggregate points

    Applying it to its own output for the same range returns the same points.
    """
    if time_range is TimeRange.SIX_MONTHS:
        return aggregate_by_week(series)
    if time_range is TimeRange.YEAR:
        return aggregate_by_month(series)
    return list(series)
