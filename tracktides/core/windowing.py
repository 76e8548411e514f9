#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Trailing time-window filter for chart series.

"now" is always passed in by the caller, read once per recomputation pass, so
the window start and end come from the same instant.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Tuple

from ..shared.models import ChartDataPoint, TimeRange


def visible_window(time_range: TimeRange, now: datetime) -> Tuple[datetime, datetime]:
    """Return (start, end) of the window ending at now."""
    return now - time_range.visible_duration, now


def visible_series(
    series: Iterable[ChartDataPoint],
    time_range: TimeRange,
    now: datetime,
) -> List[ChartDataPoint]:
    """
    Keep points with now - visible_duration <= date <= now

    Both edges are inclusive. When a chart has been scrolled, pass its scroll
    anchor as now.
    """
    start, end = visible_window(time_range, now)
    return [p for p in series if start <= p.date <= end]
