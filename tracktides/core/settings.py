#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tracktides settings loader

Parses the optional YAML configuration for the chart runner: chart defaults
and per-chart styles, the sample data generator and the user profile used by
the health metrics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from ..shared.models import ChartSection, DEFAULT_SERIES_STYLES, SeriesStyle, TimeRange

log = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(Exception):
    pass


def _is_int(value: Any) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class ChartsConfig:
    """Chart screen defaults"""
    default_time_range: TimeRange = TimeRange.MONTH
    styles: Dict[ChartSection, SeriesStyle] = field(default_factory=lambda: dict(DEFAULT_SERIES_STYLES))

    def __post_init__(self):
        """Coerce the time range, falling back to the month view when unknown"""
        try:
            self.default_time_range = TimeRange.parse(self.default_time_range)
        except ValueError:
            log.warning(f"Invalid default_time_range '{self.default_time_range}', defaulting to 'M'")
            self.default_time_range = TimeRange.MONTH

        # Sections missing from an override keep their defaults
        for section, style in DEFAULT_SERIES_STYLES.items():
            self.styles.setdefault(section, style)


@dataclass
class SampleDataConfig:
    """Synthetic entry generator parameters"""
    days: int = 400
    seed: Optional[int] = None
    skip_probability: float = 0.2
    shot_interval_days: int = 7
    medication: str = "Tirzepatide"
    dosage: str = "2.5mg"
    injection_site: str = "Abdomen"
    base_weight: float = 180.0
    daily_loss: float = 0.03
    weight_jitter: float = 1.5

    def __post_init__(self):
        for name in ("days", "shot_interval_days"):
            if not _is_int(getattr(self, name)):
                raise ValueError(f"sample_data.{name} must be an integer")
        if self.seed is not None and (not _is_int(self.seed) or self.seed < 0):
            raise ValueError("sample_data.seed must be a non-negative integer")
        for name in ("skip_probability", "base_weight", "daily_loss", "weight_jitter"):
            value = getattr(self, name)
            if not (_is_int(value) or isinstance(value, float)):
                raise ValueError(f"sample_data.{name} must be a number")
        for name in ("medication", "dosage", "injection_site"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"sample_data.{name} must be a string")
        if not self.medication.strip():
            raise ValueError("sample_data.medication cannot be empty")
        if self.days < 0:
            raise ValueError("sample_data.days cannot be negative")
        if not (0.0 <= self.skip_probability < 1.0):
            raise ValueError("sample_data.skip_probability must be in [0, 1)")
        if self.shot_interval_days <= 0:
            raise ValueError("sample_data.shot_interval_days must be positive")
        if self.weight_jitter < 0:
            raise ValueError("sample_data.weight_jitter cannot be negative")


@dataclass
class ProfileConfig:
    """User profile driving BMI, goal progress and the shot schedule"""
    height_inches: float = 70.0
    goal_weight: Optional[float] = 180.0
    shot_interval_days: int = 7

    def __post_init__(self):
        if self.height_inches <= 0:
            raise ValueError("profile.height_inches must be positive")
        if self.goal_weight is not None and self.goal_weight <= 0:
            raise ValueError("profile.goal_weight must be positive")
        if self.shot_interval_days <= 0:
            raise ValueError("profile.shot_interval_days must be positive")


@dataclass
class Settings:
    charts: ChartsConfig = field(default_factory=ChartsConfig)
    sample_data: SampleDataConfig = field(default_factory=SampleDataConfig)
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    logging_level: str = "INFO"
    config_path: Optional[Path] = None

    def __post_init__(self):
        level = str(self.logging_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"logging.level must be one of: {list(VALID_LOG_LEVELS)}")
        self.logging_level = level

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the effective settings (for --print-config)"""
        return {
            "charts": {
                "default_time_range": self.charts.default_time_range.value,
                "styles": {
                    section.value: {
                        "title": style.title,
                        "unit": style.unit,
                        "fallback_range": list(style.fallback_range),
                        "floor_pad": style.floor_pad,
                        "hard_min": style.hard_min,
                    }
                    for section, style in self.charts.styles.items()
                },
            },
            "sample_data": dict(vars(self.sample_data)),
            "profile": dict(vars(self.profile)),
            "logging": {"level": self.logging_level},
            "config_path": str(self.config_path) if self.config_path else None,
        }


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise SettingsError(f"'{key}' section must be a mapping")
    return value


def _parse_style(name: str, raw: Any, base: SeriesStyle) -> SeriesStyle:
    if not isinstance(raw, dict):
        raise SettingsError(f"charts.styles.{name} must be a mapping")
    fallback = raw.get("fallback_range", base.fallback_range)
    if not isinstance(fallback, (list, tuple)) or len(fallback) != 2:
        raise SettingsError(f"charts.styles.{name}.fallback_range must be a [low, high] pair")
    # An explicit null removes the section's hard minimum
    hard_min = base.hard_min
    if "hard_min" in raw:
        hard_min = None if raw["hard_min"] is None else float(raw["hard_min"])
    return SeriesStyle(
        title=str(raw.get("title", base.title)),
        unit=str(raw.get("unit", base.unit)),
        fallback_range=(float(fallback[0]), float(fallback[1])),
        floor_pad=float(raw.get("floor_pad", base.floor_pad)),
        hard_min=hard_min,
    )


def _build_charts(raw: Dict[str, Any]) -> ChartsConfig:
    styles = dict(DEFAULT_SERIES_STYLES)
    styles_raw = raw.get("styles") or {}
    if not isinstance(styles_raw, dict):
        raise SettingsError("charts.styles must be a mapping")
    for name, style_raw in styles_raw.items():
        try:
            section = ChartSection(str(name).strip().lower())
        except ValueError:
            raise SettingsError(f"Unknown chart section '{name}', expected one of {[s.value for s in ChartSection]}")
        styles[section] = _parse_style(section.value, style_raw, styles[section])

    range_raw = raw.get("default_time_range", TimeRange.MONTH.value)
    try:
        default_range = TimeRange.parse(range_raw)
    except ValueError as e:
        raise SettingsError(f"charts.default_time_range: {e}")
    return ChartsConfig(default_time_range=default_range, styles=styles)


def _build_settings(raw: Dict[str, Any], path: Optional[Path]) -> Settings:
    try:
        charts = _build_charts(_section(raw, "charts"))
        sample_data = SampleDataConfig(**_section(raw, "sample_data"))
        profile = ProfileConfig(**_section(raw, "profile"))
        level = _section(raw, "logging").get("level", "INFO")
        return Settings(
            charts=charts,
            sample_data=sample_data,
            profile=profile,
            logging_level=level,
            config_path=path,
        )
    except SettingsError:
        raise
    except (ValueError, TypeError) as e:
        raise SettingsError(f"Configuration validation failed: {e}")


def load_settings(config_path: Optional[str | Path] = None) -> Settings:
    """
    Load settings from YAML; with no path, return the built-in defaults.

    Raises:
        SettingsError: If the file is missing, unreadable or invalid
    """
    if config_path is None:
        return Settings()

    path = Path(config_path)
    if not path.exists():
        raise SettingsError(f"Configuration file not found: {config_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {config_path}: {e}")
    except OSError as e:
        raise SettingsError(f"Failed to read {config_path}: {e}")

    if not isinstance(raw, dict):
        raise SettingsError(f"Configuration must be a YAML mapping, got {type(raw).__name__}")

    settings = _build_settings(raw, path)
    log.info(f"Loaded settings from {path} (default range {settings.charts.default_time_range.value})")
    return settings
