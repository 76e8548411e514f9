#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Human-readable summaries of chart cards and health metrics for the console.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ..shared.models import DayEntry
from ..shared.utils import format_value
from . import health_metrics
from .chart_model import ChartCard
from .series import weight_series
from .settings import ProfileConfig


@dataclass
class HealthSummary:
    start_weight: Optional[float]
    current_weight: Optional[float]
    bmi: Optional[float]
    bmi_category: Optional[str]
    goal_progress: Optional[float]
    remaining_to_goal: Optional[float]
    total_loss: Optional[float]
    weekly_loss_rate: Optional[float]
    next_shot: Optional[datetime]
    overdue: bool
    shot_stats: health_metrics.ShotHistoryStats


def build_health_summary(entries: Sequence[DayEntry], profile: ProfileConfig, now: datetime) -> HealthSummary:
    """Derive the home-screen numbers from the entries and the user profile."""
    weights = weight_series(entries)
    start = weights[0].value if weights else None
    current = weights[-1].value if weights else None

    bmi = category = progress = remaining = None
    if current is not None:
        bmi = health_metrics.calculate_bmi(current, profile.height_inches)
        category = health_metrics.bmi_category(bmi)
        if profile.goal_weight is not None:
            progress = health_metrics.goal_progress(start, current, profile.goal_weight)
            remaining = health_metrics.remaining_to_goal(current, profile.goal_weight)

    shots = health_metrics.shots_from_entries(entries)
    next_date = health_metrics.next_shot_date(shots, profile.shot_interval_days)
    return HealthSummary(
        start_weight=start,
        current_weight=current,
        bmi=bmi,
        bmi_category=category,
        goal_progress=progress,
        remaining_to_goal=remaining,
        total_loss=health_metrics.total_loss(weights),
        weekly_loss_rate=health_metrics.weekly_loss_rate(weights),
        next_shot=next_date,
        overdue=health_metrics.is_overdue(next_date, now),
        shot_stats=health_metrics.shot_history_stats(shots, now),
    )


def format_card(card: ChartCard) -> str:
    lo, hi = card.y_range
    label = "AVERAGE " if card.show_average_label else ""
    lines = [
        f"{card.title} [{card.time_range.value}]",
        f"  {label}{format_value(card.display_value)} {card.unit}  ({card.date_text})",
        f"  Points: {len(card.visible_points)} visible / {len(card.points)} plotted",
        f"  Y range: {lo:.1f} .. {hi:.1f}",
    ]
    return "\n".join(lines)


def format_health_summary(summary: HealthSummary) -> str:
    lines: List[str] = ["Health Summary:"]
    if summary.current_weight is None:
        lines.append("  No weight data")
    else:
        lines.append(f"  Weight: {summary.current_weight:.1f} lbs (start {summary.start_weight:.1f})")
        lines.append(f"  BMI: {summary.bmi:.1f} ({summary.bmi_category})")
        rate = f"{summary.weekly_loss_rate:.1f} lbs/week" if summary.weekly_loss_rate is not None else "--"
        lines.append(f"  Total loss: {summary.total_loss:.1f} lbs, rate: {rate}")
        if summary.goal_progress is not None:
            lines.append(
                f"  Goal progress: {summary.goal_progress * 100:.0f}% "
                f"({format_value(round(summary.remaining_to_goal, 1))} lbs remaining)"
            )

    next_text = f"{summary.next_shot:%b} {summary.next_shot.day}" if summary.next_shot else "Not scheduled"
    status = " (overdue)" if summary.overdue else ""
    lines.append(f"  Next shot: {next_text}{status}")

    stats = summary.shot_stats
    interval = f"{stats.average_interval_days}d" if stats.average_interval_days is not None else "--"
    since = str(stats.days_since_first_shot) if stats.days_since_first_shot is not None else "--"
    lines.append(f"  Shots: {stats.total_shots}, days since first: {since}, average interval: {interval}")
    return "\n".join(lines)
