#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Charts model: owns the entry list, the selected time range and per-chart
interaction state, and memoizes derived series.

Derived series are cached under (entries_version, time_range, section). Any
mutation of the entries or the range drops the whole cache; there is no
partial invalidation.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging

from ..shared.models import (
    ChartDataPoint,
    ChartSection,
    DayEntry,
    DEFAULT_SERIES_STYLES,
    SeriesStyle,
    TimeRange,
)
from ..shared.utils import date_range_text, selected_date_text
from . import aggregation, ranges, series, windowing

SERIES_EXTRACTORS: Dict[ChartSection, Callable[[Iterable[DayEntry]], List[ChartDataPoint]]] = {
    ChartSection.WEIGHT: series.weight_series,
    ChartSection.WEIGHT_CHANGE: series.weight_change_series,
    ChartSection.INJECTION_PAIN: series.pain_series,
}

CacheKey = Tuple[int, TimeRange, ChartSection, str]


@dataclass
class ChartState:
    """
    Interaction state of one chart: Idle <-> PointSelected(date)

    scroll_anchor is the right edge of the visible window; None means "now".
    """
    selected_date: Optional[datetime] = None
    scroll_anchor: Optional[datetime] = None

    @property
    def is_idle(self) -> bool:
        return self.selected_date is None

    def select(self, date: datetime) -> None:
        self.selected_date = date

    def clear_selection(self) -> None:
        self.selected_date = None

    def scroll_to(self, anchor: datetime) -> None:
        self.scroll_anchor = anchor

    def reset(self, now: Optional[datetime] = None) -> None:
        """Back to Idle with the window anchored at now."""
        self.selected_date = None
        self.scroll_anchor = now


@dataclass
class ChartCard:
    """Everything the presentation layer needs to draw one chart card"""
    section: ChartSection
    title: str
    unit: str
    time_range: TimeRange
    points: List[ChartDataPoint]
    visible_points: List[ChartDataPoint]
    y_range: Tuple[float, float]
    average: float
    display_value: float
    show_average_label: bool
    date_text: str
    window: Tuple[datetime, datetime]
    selected_point: Optional[ChartDataPoint] = None


class ChartsModel:
    """
    Memoized chart pipeline over an in-memory entry list

    Handles:
    - Series extraction per chart section
    - Display bucketing for the selected range
    - Windowing, ranges and averages for chart cards
    - Selection / scroll state per chart, reset on range changes
    """

    def __init__(
        self,
        entries: Optional[Iterable[DayEntry]] = None,
        time_range: TimeRange = TimeRange.MONTH,
        styles: Optional[Dict[ChartSection, SeriesStyle]] = None,
    ):
        """
        Initialize the model

        Args:
            entries: Initial entries (copied)
            time_range: Initially selected range
            styles: Per-section overrides of DEFAULT_SERIES_STYLES
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._entries: List[DayEntry] = list(entries or [])
        self._time_range = TimeRange.parse(time_range)
        self.styles: Dict[ChartSection, SeriesStyle] = dict(DEFAULT_SERIES_STYLES)
        if styles:
            self.styles.update(styles)
        self.states: Dict[ChartSection, ChartState] = {section: ChartState() for section in ChartSection}
        self.version = 0
        self._cache: Dict[CacheKey, List[ChartDataPoint]] = {}
        self.cache_hits = 0
        self.cache_misses = 0

    # ----- state -----

    @property
    def entries(self) -> List[DayEntry]:
        return list(self._entries)

    @property
    def selected_time_range(self) -> TimeRange:
        return self._time_range

    def set_entries(self, entries: Iterable[DayEntry]) -> None:
        self._entries = list(entries)
        self._bump()

    def add_entry(self, entry: DayEntry) -> None:
        self._entries.append(entry)
        self._bump()

    def select_time_range(self, time_range: TimeRange, now: Optional[datetime] = None) -> None:
        """Switch range; every chart drops its selection and re-anchors at now."""
        self._time_range = TimeRange.parse(time_range)
        self.invalidate()
        for state in self.states.values():
            state.reset(now)
        self.logger.debug(f"Selected time range {self._time_range.value}")

    def invalidate(self) -> None:
        if self._cache:
            self.logger.debug(f"Invalidating {len(self._cache)} cached series")
        self._cache.clear()

    def _bump(self) -> None:
        self.version += 1
        self.invalidate()

    # ----- cached series -----

    def _cached(self, section: ChartSection, kind: str, compute: Callable[[], List[ChartDataPoint]]) -> List[ChartDataPoint]:
        key: CacheKey = (self.version, self._time_range, section, kind)
        hit = self._cache.get(key)
        if hit is not None:
            self.cache_hits += 1
            return hit
        self.cache_misses += 1
        value = compute()
        self._cache[key] = value
        self.logger.debug(f"Computed {kind} series for {section.value}: {len(value)} points")
        return value

    def full_series(self, section: ChartSection) -> List[ChartDataPoint]:
        """Unwindowed raw series for a chart."""
        extractor = SERIES_EXTRACTORS[section]
        return self._cached(section, "full", lambda: extractor(self._entries))

    def display_series(self, section: ChartSection) -> List[ChartDataPoint]:
        """Full series at the plotted granularity of the selected range."""
        return self._cached(
            section, "display",
            lambda: aggregation.display_series(self.full_series(section), self._time_range),
        )

    # ----- window summaries -----

    def visible_data(self, section: ChartSection, now: datetime) -> List[ChartDataPoint]:
        """Raw points inside the trailing window ending at now."""
        return windowing.visible_series(self.full_series(section), self._time_range, now)

    def overall_average(self, section: ChartSection, now: datetime) -> float:
        return ranges.average(self.visible_data(section, now), 0.0)

    def overall_range(self, section: ChartSection, now: datetime) -> Tuple[float, float]:
        style = self.styles[section]
        return ranges.y_range(self.visible_data(section, now), style.fallback_range, style.floor_pad, style.hard_min)

    def card(self, section: ChartSection, now: datetime) -> ChartCard:
        """
        Summarize one chart at its current scroll anchor and selection

        Args:
            section: Which chart
            now: Clock reading for this pass; used when the chart is not scrolled

        Returns:
            ChartCard with the visible slice, Y range and summary value
        """
        style = self.styles[section]
        state = self.states[section]
        points = self.display_series(section)

        window_end = state.scroll_anchor if state.scroll_anchor is not None else now
        window = windowing.visible_window(self._time_range, window_end)
        visible = windowing.visible_series(points, self._time_range, window_end)

        fallback_average = self.overall_average(section, now)
        # Bounded scales (pain 0-10) keep their fixed axis when the window is empty
        if style.hard_min is not None:
            fallback_range = style.fallback_range
        else:
            fallback_range = self.overall_range(section, now)

        selected = None
        if state.selected_date is not None:
            selected = ranges.nearest_point(points, state.selected_date)

        visible_average = ranges.average(visible, fallback_average)
        if selected is not None:
            date_text = selected_date_text(self._time_range, selected.date)
        else:
            date_text = date_range_text(self._time_range, window[0], window[1])

        return ChartCard(
            section=section,
            title=style.title,
            unit=style.unit,
            time_range=self._time_range,
            points=points,
            visible_points=visible,
            y_range=ranges.y_range(visible, fallback_range, style.floor_pad, style.hard_min),
            average=visible_average,
            display_value=ranges.displayed_value(visible, selected, fallback_average),
            show_average_label=ranges.show_average_label(selected),
            date_text=date_text,
            window=window,
            selected_point=selected,
        )

    def cards(self, now: datetime) -> List[ChartCard]:
        """Cards for every chart, all computed from the same now."""
        result = [self.card(section, now) for section in ChartSection]
        self.logger.info(
            f"Built {len(result)} chart cards for range {self._time_range.value} "
            f"(cache hits={self.cache_hits}, misses={self.cache_misses})"
        )
        return result
