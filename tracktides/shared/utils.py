#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility Functions for the Tracktides chart core
Shared helpers for datetime parsing, calendar boundaries and label formatting.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Optional

from .models import TimeRange


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse datetime from various formats

    A trailing 'Z' is read as UTC; other strings without an offset stay naive.

    Args:
        value: String, datetime, or None

    Returns:
        Parsed datetime or None

    Raises:
        ValueError: If datetime format is invalid
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass

        formats = [
            "%Y-%m-%d %H:%M:%S",
            "%Y-%m-%d",
        ]
        for fmt in formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue

        raise ValueError(f"Invalid datetime format: {value}. Expected ISO format like '2025-02-01T00:00:00Z'")

    raise ValueError(f"Datetime must be string or datetime object, got {type(value)}")


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def iso_week_start(dt: datetime) -> datetime:
    """
    Monday 00:00 of the ISO-8601 week containing dt, in dt's own tzinfo

    Raises:
        OverflowError: If the Monday falls before datetime.min
    """
    return start_of_day(dt) - timedelta(days=dt.weekday())


def month_start(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def format_value(value: float) -> str:
    """Whole numbers print without decimals, everything else with one."""
    if math.isfinite(value) and value == math.floor(value):
        return f"{value:.0f}"
    return f"{value:.1f}"


def _month_day(dt: datetime) -> str:
    return f"{dt:%b} {dt.day}"


def date_range_text(time_range: TimeRange, start: datetime, end: datetime) -> str:
    """
    Label for the visible window of a chart

    Examples:
        D:  "Mon, Oct 19, 2026"
        W:  "Oct 12–Oct 19, 2026"
        M:  "Sep 19–Oct 19, 2026"
        6M: "Apr 22, 2026–Oct 19, 2026"
        Y:  "Oct 2025–Oct 2026"
    """
    if time_range is TimeRange.DAY:
        return f"{end:%a}, {_month_day(end)}, {end.year}"
    if time_range is TimeRange.WEEK:
        return f"{_month_day(start)}–{_month_day(end)}, {end.year}"
    if time_range is TimeRange.MONTH:
        return f"{_month_day(start)}–{_month_day(end)}, {end.year}"
    if time_range is TimeRange.SIX_MONTHS:
        return f"{_month_day(start)}, {start.year}–{_month_day(end)}, {end.year}"
    return f"{start:%b %Y}–{end:%b %Y}"


def selected_date_text(time_range: TimeRange, dt: datetime) -> str:
    """Label for a pinned chart point"""
    if time_range is TimeRange.DAY:
        hour = dt.hour % 12 or 12
        return f"{hour}:{dt:%M %p}"
    if time_range is TimeRange.WEEK:
        return f"{dt:%a}, {_month_day(dt)}"
    if time_range in (TimeRange.MONTH, TimeRange.SIX_MONTHS):
        return f"{_month_day(dt)}, {dt.year}"
    return f"{dt:%B %Y}"
