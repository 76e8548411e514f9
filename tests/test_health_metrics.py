#!/usr/bin/env python3
"""
Unit tests for the health metrics helpers

Tests cover:
- BMI and its category bands
- Goal progress clamping
- Total loss and weekly rate over the recorded weights
- Next shot / overdue logic and shot history statistics
- Shot numbering and month grouping
"""
import pytest
from datetime import datetime, timedelta
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tracktides.core.health_metrics import (
    bmi_category,
    calculate_bmi,
    goal_progress,
    group_shots_by_month,
    is_overdue,
    next_shot_date,
    remaining_to_goal,
    shot_history_stats,
    shot_number,
    shots_from_entries,
    total_loss,
    weekly_loss_rate,
)
from tracktides.core.report import build_health_summary, format_health_summary
from tracktides.core.settings import ProfileConfig
from tracktides.shared.models import ChartDataPoint, DayEntry, Shot

NOW = datetime(2026, 10, 19, 9, 0)


def _shot(date, pain=2):
    return Shot(date=date, medication="Tirzepatide", dosage="2.5mg", pain_level=pain)


class TestBMI:
    """Test calculate_bmi and bmi_category"""

    def test_calculate_bmi(self):
        assert calculate_bmi(180.0, 70.0) == pytest.approx(25.824, abs=1e-3)

    def test_invalid_height(self):
        with pytest.raises(ValueError):
            calculate_bmi(180.0, 0.0)

    @pytest.mark.parametrize("bmi,expected", [
        (17.0, "Underweight"),
        (18.5, "Normal"),
        (24.9, "Normal"),
        (25.0, "Overweight"),
        (29.9, "Overweight"),
        (30.0, "Obese"),
    ])
    def test_categories(self, bmi, expected):
        assert bmi_category(bmi) == expected


class TestGoalProgress:
    """Test goal_progress and remaining_to_goal"""

    def test_halfway(self):
        assert goal_progress(200.0, 185.0, 170.0) == pytest.approx(0.5)

    def test_clamped(self):
        assert goal_progress(200.0, 205.0, 170.0) == 0.0
        assert goal_progress(200.0, 160.0, 170.0) == 1.0

    def test_goal_equals_start(self):
        assert goal_progress(180.0, 182.0, 180.0) == 1.0

    def test_remaining(self):
        assert remaining_to_goal(185.0, 170.0) == 15.0


class TestWeightChange:
    """Test total_loss and weekly_loss_rate over the recorded weights"""

    def test_loss_over_real_span(self):
        weights = [
            ChartDataPoint(NOW - timedelta(weeks=4), 250.0),
            ChartDataPoint(NOW, 242.0),
            ChartDataPoint(NOW - timedelta(weeks=2), 246.0),
        ]
        assert total_loss(weights) == 8.0
        assert weekly_loss_rate(weights) == pytest.approx(2.0)

    def test_gain_is_negative(self):
        weights = [ChartDataPoint(NOW - timedelta(days=14), 180.0), ChartDataPoint(NOW, 183.0)]
        assert total_loss(weights) == -3.0
        assert weekly_loss_rate(weights) == pytest.approx(-1.5)

    def test_insufficient_data(self):
        assert total_loss([]) is None
        assert weekly_loss_rate([ChartDataPoint(NOW, 180.0)]) is None
        assert weekly_loss_rate([ChartDataPoint(NOW, 180.0), ChartDataPoint(NOW, 179.0)]) is None


class TestShotSchedule:
    """Test next_shot_date, is_overdue and shot_history_stats"""

    def test_next_shot_from_latest(self):
        shots = [_shot(NOW - timedelta(days=14)), _shot(NOW - timedelta(days=3))]
        assert next_shot_date(shots) == NOW + timedelta(days=4)
        assert next_shot_date(shots, interval_days=2) == NOW - timedelta(days=1)

    def test_no_shots(self):
        assert next_shot_date([]) is None
        assert is_overdue(None, NOW) is False

    def test_overdue(self):
        assert is_overdue(NOW - timedelta(minutes=1), NOW) is True
        assert is_overdue(NOW, NOW) is False

    def test_history_stats(self):
        shots = [_shot(NOW - timedelta(days=d)) for d in (1, 15, 8)]
        stats = shot_history_stats(shots, NOW)
        assert stats.total_shots == 3
        assert stats.days_since_first_shot == 15
        assert stats.average_interval_days == 7

    def test_history_stats_single_and_empty(self):
        assert shot_history_stats([], NOW).total_shots == 0
        single = shot_history_stats([_shot(NOW - timedelta(days=2))], NOW)
        assert single.days_since_first_shot == 2
        assert single.average_interval_days is None

    def test_shots_from_entries(self):
        shot = _shot(NOW)
        entries = [DayEntry(date=NOW, shot=shot), DayEntry(date=NOW, weight=180.0)]
        assert shots_from_entries(entries) == [shot]


class TestShotHistory:
    """Test shot_number and group_shots_by_month"""

    def test_shot_number_is_chronological(self):
        first = _shot(datetime(2026, 9, 1))
        second = _shot(datetime(2026, 9, 8))
        shots = [second, first]
        assert shot_number(shots, first) == 1
        assert shot_number(shots, second) == 2
        assert shot_number(shots, _shot(datetime(2026, 9, 1))) == 0

    def test_group_by_month(self):
        shots = [
            _shot(datetime(2026, 9, 1)),
            _shot(datetime(2026, 10, 6)),
            _shot(datetime(2026, 9, 29)),
            _shot(datetime(2026, 10, 13)),
        ]
        groups = group_shots_by_month(shots)
        assert [title for title, _ in groups] == ["October 2026", "September 2026"]
        assert [s.date.day for s in groups[0][1]] == [13, 6]
        assert [s.date.day for s in groups[1][1]] == [29, 1]


class TestHealthSummary:
    """Test build_health_summary and its console rendering"""

    def test_summary(self):
        entries = [
            DayEntry(date=NOW - timedelta(days=14), weight=200.0, shot=_shot(NOW - timedelta(days=14))),
            DayEntry(date=NOW - timedelta(days=7), weight=190.0, shot=_shot(NOW - timedelta(days=7))),
        ]
        profile = ProfileConfig(height_inches=70.0, goal_weight=180.0)
        summary = build_health_summary(entries, profile, NOW)

        assert summary.start_weight == 200.0
        assert summary.current_weight == 190.0
        assert summary.goal_progress == pytest.approx(0.5)
        assert summary.next_shot == NOW
        assert summary.overdue is False
        assert summary.total_loss == 10.0
        assert summary.weekly_loss_rate == pytest.approx(10.0)
        text = format_health_summary(summary)
        assert "Goal progress: 50%" in text
        assert "Total loss: 10.0 lbs, rate: 10.0 lbs/week" in text
        assert "average interval: 7d" in text

    def test_summary_without_data(self):
        summary = build_health_summary([], ProfileConfig(), NOW)
        assert summary.bmi is None
        assert summary.total_loss is None
        text = format_health_summary(summary)
        assert "No weight data" in text
        assert "Not scheduled" in text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
