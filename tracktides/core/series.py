#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Series extraction: day entries -> typed chart series.

All functions are pure; missing data yields empty series, never errors.
"""
from __future__ import annotations

from typing import Iterable, List

from ..shared.models import ChartDataPoint, DayEntry

FALLBACK_BASELINE_WEIGHT = 180.0


def weight_series(entries: Iterable[DayEntry]) -> List[ChartDataPoint]:
    """One point per entry with a recorded weight, ascending by date."""
    points = [
        ChartDataPoint(date=entry.date, value=float(entry.weight))
        for entry in entries
        if entry.weight is not None
    ]
    return sorted(points, key=lambda p: p.date)


def pain_series(entries: Iterable[DayEntry]) -> List[ChartDataPoint]:
    """One point per shot with a positive pain level, ascending by date."""
    points = [
        ChartDataPoint(date=entry.date, value=float(entry.shot.pain_level))
        for entry in entries
        if entry.shot is not None and entry.shot.pain_level > 0
    ]
    return sorted(points, key=lambda p: p.date)


def starting_weight(entries: Iterable[DayEntry]) -> float:
    weights = weight_series(entries)
    return weights[0].value if weights else FALLBACK_BASELINE_WEIGHT


def weight_change_series(entries: Iterable[DayEntry]) -> List[ChartDataPoint]:
    """
    Weight series re-based on the first chronological weight

    The first point is always exactly 0. With no weights the baseline would be
    FALLBACK_BASELINE_WEIGHT, but there is nothing to re-base.
    """
    weights = weight_series(entries)
    baseline = weights[0].value if weights else FALLBACK_BASELINE_WEIGHT
    return [
        ChartDataPoint(date=p.date, value=p.value - baseline, is_aggregate=p.is_aggregate)
        for p in weights
    ]
