#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Synthetic day entries for demos and for exercising the chart pipeline.

Mimics a weekly injection regimen: one candidate entry per day going back
from "now", a random ~20% of days left unlogged, a shot every seventh day with
pain 1-5, and daily weight jitter. Weight drops by daily_loss per day of
offset, so older entries are lighter and the series climbs towards "now".
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np

from ..shared.logging_setup import get_logger
from ..shared.models import DayEntry, Shot
from .settings import SampleDataConfig

log = get_logger(__name__)


def generate_sample_entries(
    now: datetime,
    days: int = 400,
    seed: Optional[int] = None,
    skip_probability: float = 0.2,
    shot_interval_days: int = 7,
    medication: str = "Tirzepatide",
    dosage: str = "2.5mg",
    injection_site: str = "Abdomen",
    base_weight: float = 180.0,
    daily_loss: float = 0.03,
    weight_jitter: float = 1.5,
) -> List[DayEntry]:
    """
    Generate entries for day offsets 0..days-1 before now

    Args:
        now: Reference instant; offset 0 is dated exactly now
        days: Number of candidate days
        seed: Seed for numpy's Generator; same seed, same entries
        skip_probability: Chance a day is left unlogged
        shot_interval_days: Offsets divisible by this get a shot
        base_weight: Weight at offset 0 before jitter
        daily_loss: Pounds subtracted per day of offset (older entries are lighter)
        weight_jitter: Half-width of the uniform weight noise

    Returns:
        Entries sorted ascending by date
    """
    rng = np.random.default_rng(seed)
    entries: List[DayEntry] = []

    for offset in range(days):
        date = now - timedelta(days=offset)
        # Draw all randoms up front so a skipped day does not shift the stream
        skip_roll = rng.random()
        pain = int(rng.integers(1, 6))
        variation = float(rng.uniform(-weight_jitter, weight_jitter)) if weight_jitter > 0 else 0.0
        if skip_roll < skip_probability:
            continue

        shot = None
        if offset % shot_interval_days == 0:
            shot = Shot(
                date=date,
                medication=medication,
                dosage=dosage,
                injection_site=injection_site,
                pain_level=pain,
            )

        entries.append(DayEntry(
            date=date,
            shot=shot,
            weight=base_weight - offset * daily_loss + variation,
        ))

    entries.reverse()
    log.info(f"Generated {len(entries)} sample entries over {days} days "
             f"({sum(1 for e in entries if e.shot is not None)} shots)")
    return entries


def generate_from_config(config: SampleDataConfig, now: datetime, seed: Optional[int] = None) -> List[DayEntry]:
    """Generate entries from a SampleDataConfig; an explicit seed overrides the configured one."""
    return generate_sample_entries(
        now=now,
        days=config.days,
        seed=seed if seed is not None else config.seed,
        skip_probability=config.skip_probability,
        shot_interval_days=config.shot_interval_days,
        medication=config.medication,
        dosage=config.dosage,
        injection_site=config.injection_site,
        base_weight=config.base_weight,
        daily_loss=config.daily_loss,
        weight_jitter=config.weight_jitter,
    )
