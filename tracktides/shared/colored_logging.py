#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console logging for the Tracktides chart core.

Colours the level name of each record so chart recomputation passes are easy
to follow in a terminal:
- DEBUG: Cyan (cache hits/misses, dropped points)
- INFO: Green (pass summaries)
- WARNING: Yellow (self-corrected configuration)
- ERROR / CRITICAL: Red / Bold Red
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s:%(module)s.%(funcName)s:%(lineno)d] - %(message)s'
DEFAULT_DATEFMT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colour codes."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;31m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: Optional[str] = None,
                 use_colors: bool = True, stream: Optional[TextIO] = None):
        """
        Args:
            fmt: Format string for log messages
            datefmt: Format string for timestamps
            use_colors: Request colours; ignored when the target stream is not a TTY
            stream: Stream the handler writes to (defaults to stderr)
        """
        super().__init__(fmt, datefmt)
        target = stream if stream is not None else sys.stderr
        self.use_colors = use_colors and hasattr(target, 'isatty') and target.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname)
        if not self.use_colors or color is None:
            return super().format(record)
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def setup_colored_logging(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT,
                          datefmt: Optional[str] = DEFAULT_DATEFMT,
                          stream: Optional[TextIO] = None,
                          use_colors: bool = True) -> logging.Handler:
    """
    Replace the root logger's handlers with a single coloured console handler.

    Returns:
        The installed handler (useful for tests that want to inspect it)
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    target = stream if stream is not None else sys.stderr
    console_handler = logging.StreamHandler(target)
    console_handler.setFormatter(ColoredFormatter(fmt=fmt, datefmt=datefmt, use_colors=use_colors, stream=target))

    root.setLevel(level)
    root.addHandler(console_handler)
    return console_handler
