#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Health metrics shown next to the charts: BMI, goal progress, the injection
schedule and shot history statistics.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from ..shared.models import ChartDataPoint, DayEntry, Shot

BMI_IMPERIAL_FACTOR = 703.0


def calculate_bmi(weight_lbs: float, height_inches: float) -> float:
    """BMI from pounds and inches: weight * 703 / height^2"""
    if height_inches <= 0:
        raise ValueError("height_inches must be positive")
    return (weight_lbs * BMI_IMPERIAL_FACTOR) / (height_inches * height_inches)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def goal_progress(start_weight: float, current_weight: float, goal_weight: float) -> float:
    """
    Fraction of the planned loss achieved, clamped to [0, 1]

    A goal equal to the start weight counts as reached.
    """
    planned = start_weight - goal_weight
    if planned == 0:
        return 1.0
    progress = (start_weight - current_weight) / planned
    return min(max(progress, 0.0), 1.0)


def remaining_to_goal(current_weight: float, goal_weight: float) -> float:
    return current_weight - goal_weight


def total_loss(weights: Sequence[ChartDataPoint]) -> Optional[float]:
    """Pounds lost from the earliest to the latest weight; negative means a gain."""
    if not weights:
        return None
    ordered = sorted(weights, key=lambda p: p.date)
    return ordered[0].value - ordered[-1].value


def weekly_loss_rate(weights: Sequence[ChartDataPoint]) -> Optional[float]:
    """
    Average pounds lost per week between the earliest and latest weight

    None when fewer than two weights exist or they share a timestamp.
    """
    if len(weights) < 2:
        return None
    ordered = sorted(weights, key=lambda p: p.date)
    weeks = (ordered[-1].date - ordered[0].date).total_seconds() / (7 * 86_400)
    if weeks <= 0:
        return None
    return (ordered[0].value - ordered[-1].value) / weeks


def shots_from_entries(entries: Iterable[DayEntry]) -> List[Shot]:
    return [entry.shot for entry in entries if entry.shot is not None]


def next_shot_date(shots: Sequence[Shot], interval_days: int = 7) -> Optional[datetime]:
    """Latest shot + interval, or None when nothing is scheduled yet."""
    if not shots:
        return None
    latest = max(shot.date for shot in shots)
    return latest + timedelta(days=interval_days)


def is_overdue(next_date: Optional[datetime], now: datetime) -> bool:
    return next_date is not None and now > next_date


@dataclass
class ShotHistoryStats:
    total_shots: int
    days_since_first_shot: Optional[int] = None
    average_interval_days: Optional[int] = None


def shot_history_stats(shots: Sequence[Shot], now: datetime) -> ShotHistoryStats:
    """
    Summary counters for the shot history screen

    The average interval is the mean gap between consecutive shots in whole
    days (truncated), and needs at least two shots.
    """
    if not shots:
        return ShotHistoryStats(total_shots=0)

    ordered = sorted(shots, key=lambda s: s.date)
    days_since_first = (now - ordered[0].date).days

    avg_interval = None
    if len(ordered) > 1:
        total_seconds = (ordered[-1].date - ordered[0].date).total_seconds()
        avg_interval = int(total_seconds / (len(ordered) - 1) / 86_400)

    return ShotHistoryStats(
        total_shots=len(ordered),
        days_since_first_shot=days_since_first,
        average_interval_days=avg_interval,
    )


def shot_number(shots: Sequence[Shot], shot: Shot) -> int:
    """1-based chronological position of shot, or 0 when it is not in shots."""
    ordered = sorted(shots, key=lambda s: s.date)
    for index, candidate in enumerate(ordered):
        if candidate is shot:
            return index + 1
    return 0


def group_shots_by_month(shots: Iterable[Shot]) -> List[Tuple[str, List[Shot]]]:
    """
    Group shots under "Month YYYY" headings

    Shots inside a group run newest first, and so do the groups.
    """
    groups = {}
    for shot in shots:
        groups.setdefault((shot.date.year, shot.date.month), []).append(shot)

    result = []
    for key in sorted(groups, reverse=True):
        members = sorted(groups[key], key=lambda s: s.date, reverse=True)
        result.append((f"{members[0].date:%B %Y}", members))
    return result
