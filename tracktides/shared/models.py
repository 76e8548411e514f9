#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Domain Models for the Tracktides chart core
Defines day entries, shots, chart points and the chart time ranges.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple


MIN_PAIN_LEVEL = 0
MAX_PAIN_LEVEL = 10


class TimeRange(str, Enum):
    """Chart time range selection, valued by its picker label"""
    DAY = "D"
    WEEK = "W"
    MONTH = "M"
    SIX_MONTHS = "6M"
    YEAR = "Y"

    @property
    def visible_duration(self) -> timedelta:
        return timedelta(seconds=VISIBLE_DURATION_SECONDS[self])

    @property
    def visible_seconds(self) -> int:
        return VISIBLE_DURATION_SECONDS[self]

    @classmethod
    def parse(cls, value: "str | TimeRange") -> "TimeRange":
        """
        Parse a picker label ("6M") or member name ("six_months")

        Raises:
            ValueError: If the value names no time range
        """
        if isinstance(value, TimeRange):
            return value
        text = str(value).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValueError(f"Unknown time range '{value}', expected one of {[m.value for m in cls]}")


VISIBLE_DURATION_SECONDS = {
    TimeRange.DAY: 86_400,
    TimeRange.WEEK: 604_800,
    TimeRange.MONTH: 2_592_000,
    TimeRange.SIX_MONTHS: 15_552_000,
    TimeRange.YEAR: 31_536_000,
}


class ChartSection(str, Enum):
    """The three charts on the charts screen"""
    WEIGHT = "weight"
    WEIGHT_CHANGE = "weight_change"
    INJECTION_PAIN = "injection_pain"


@dataclass
class Shot:
    """
    A logged medication injection

    pain_level runs from 0 (none) to 10; a zero means no pain was recorded
    and such shots are left out of the pain chart.
    """
    date: datetime
    medication: str
    dosage: str
    injection_site: str = ""
    pain_level: int = 0
    notes: str = ""

    def __post_init__(self):
        """Validate shot data"""
        if not self.medication or not self.medication.strip():
            raise ValueError("medication cannot be empty")
        if not (MIN_PAIN_LEVEL <= self.pain_level <= MAX_PAIN_LEVEL):
            raise ValueError(f"pain_level must be between {MIN_PAIN_LEVEL} and {MAX_PAIN_LEVEL}")


@dataclass
class DayEntry:
    """
    One day's logged health data

    Entries are not required to be unique per calendar day.
    """
    date: datetime
    shot: Optional[Shot] = None
    weight: Optional[float] = None  # pounds
    calories: Optional[int] = None
    protein: Optional[int] = None
    side_effects: List[str] = field(default_factory=list)
    notes: str = ""

    def __post_init__(self):
        if self.weight is not None and self.weight <= 0:
            raise ValueError("weight must be positive")

    @property
    def pain_level(self) -> Optional[int]:
        return self.shot.pain_level if self.shot is not None else None


@dataclass(frozen=True)
class ChartDataPoint:
    """
    A derived chart point

    Created fresh on every recomputation and never mutated. is_aggregate marks
    points that stand for an averaged week or month bucket.
    """
    date: datetime
    value: float
    is_aggregate: bool = False


@dataclass(frozen=True)
class SeriesStyle:
    """Per-chart presentation parameters that feed the range calculator"""
    title: str
    unit: str
    fallback_range: Tuple[float, float]
    floor_pad: float = 5.0
    hard_min: Optional[float] = None

    def __post_init__(self):
        lo, hi = self.fallback_range
        if lo >= hi:
            raise ValueError(f"fallback_range lower bound must be below upper bound, got {self.fallback_range}")
        if self.floor_pad < 0:
            raise ValueError("floor_pad cannot be negative")


DEFAULT_SERIES_STYLES = {
    ChartSection.WEIGHT: SeriesStyle(title="Weight", unit="lbs", fallback_range=(150.0, 200.0)),
    ChartSection.WEIGHT_CHANGE: SeriesStyle(title="Weight Change", unit="lbs", fallback_range=(-30.0, 5.0), floor_pad=2.0),
    ChartSection.INJECTION_PAIN: SeriesStyle(title="Injection Pain", unit="/10", fallback_range=(0.0, 10.0), hard_min=0.0),
}
