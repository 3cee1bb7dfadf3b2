#!/usr/bin/env python3
"""
Logger setup for tolgee-pull.

Diagnostics go to stderr through loguru; stdout is reserved for the JSON
result printed by the CLI.
"""

import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(verbose: bool = False) -> None:
    """
    Configure loguru for a CLI run.

    Args:
        verbose: Also show DEBUG messages (per-file progress)
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level="DEBUG" if verbose else "INFO",
        colorize=None,
    )
