#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tracktides chart runner.
- Loads settings (optional YAML)
- Generates sample entries
- Builds the chart model and prints one summary per chart plus health metrics

Usage examples:
  python -m tracktides.main --help
  python -m tracktides.main --range 6M --seed 7
  python -m tracktides.main --config config/tracktides.yaml --now 2026-10-19T08:00:00
  python -m tracktides.main --print-config
"""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .core.chart_model import ChartsModel
from .core.report import build_health_summary, format_card, format_health_summary
from .core.sample_data import generate_from_config
from .core.settings import Settings, SettingsError, load_settings
from .shared.colored_logging import setup_colored_logging
from .shared.logging_setup import resolve_level
from .shared.models import TimeRange
from .shared.utils import parse_datetime


def run(settings: Settings, now: datetime, time_range: Optional[TimeRange] = None,
        seed: Optional[int] = None) -> str:
    """Run one pass over sample data and return the printable report."""
    log = logging.getLogger(__name__)
    entries = generate_from_config(settings.sample_data, now, seed=seed)

    model = ChartsModel(
        entries=entries,
        time_range=settings.charts.default_time_range,
        styles=settings.charts.styles,
    )
    if time_range is not None:
        model.select_time_range(time_range, now)

    blocks = [format_card(card) for card in model.cards(now)]
    blocks.append(format_health_summary(build_health_summary(entries, settings.profile, now)))
    log.info(f"Report built for {len(entries)} entries at {now.isoformat()}")
    return "\n\n".join(blocks)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='tracktides', description='Tracktides chart summaries over sample data')
    parser.add_argument('--config', type=str, default=None, help='Path to a tracktides YAML config')
    parser.add_argument('--range', dest='time_range', type=str, default=None,
                        choices=[r.value for r in TimeRange], help='Chart time range (default from config)')
    parser.add_argument('--now', type=str, default=None, help='Reference time (ISO 8601); defaults to the clock')
    parser.add_argument('--seed', type=int, default=None, help='Sample data seed (overrides config)')
    parser.add_argument('--days', type=int, default=None, help='Number of sample days (overrides config)')
    parser.add_argument('--log-level', type=str, default=None, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default from config)')
    parser.add_argument('--print-config', action='store_true', help='Print effective settings as JSON and exit')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_colored_logging(level=resolve_level(args.log_level or 'INFO'))
    log = logging.getLogger(__name__)

    try:
        settings = load_settings(args.config)
        if args.days is not None:
            settings.sample_data = dataclasses.replace(settings.sample_data, days=args.days)
    except (SettingsError, ValueError) as e:
        log.error(f"Failed to load settings: {e}")
        return 1

    if args.log_level is None:
        logging.getLogger().setLevel(resolve_level(settings.logging_level))

    if args.print_config:
        print(json.dumps(settings.to_dict(), indent=2, sort_keys=True))
        return 0

    try:
        now = parse_datetime(args.now) if args.now else datetime.now().astimezone()
    except ValueError as e:
        log.error(f"Invalid --now value: {e}")
        return 1

    time_range = TimeRange.parse(args.time_range) if args.time_range else None
    print(run(settings, now, time_range=time_range, seed=args.seed))
    return 0


if __name__ == '__main__':
    sys.exit(main())
