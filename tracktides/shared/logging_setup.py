#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import logging
from typing import Union

from .colored_logging import setup_colored_logging


def resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def get_logger(name: str, level: Union[str, int] = logging.INFO) -> logging.Logger:
    """Return a named logger, installing the coloured console handler on first use."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        setup_colored_logging(level=resolve_level(level))
    return logger
