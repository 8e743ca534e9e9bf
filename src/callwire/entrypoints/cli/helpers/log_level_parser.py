"""Helpers for parsing logger-level CLI options.

Options take the form NAME=LEVEL (repeatable or comma/space-separated). Values
are flattened into individual items and textual level names are converted to
the corresponding numeric logging levels.
"""

import logging
import re

import click

from callwire.logging import QUIET_LIBRARIES

DEFAULT_LIB_LEVELS = dict(QUIET_LIBRARIES)


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Split a string or a sequence of strings on commas and whitespace."""
    chunks = list(value) if isinstance(value, (tuple, list)) else [value]
    return [s for chunk in chunks for s in re.split(r"[,\s]+", chunk) if s]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Combines DEFAULT_LIB_LEVELS with any overrides supplied via the CLI; later
    items win.

    Args:
        ctx: Click context (unused).
        param: Click parameter (unused).
        value: The raw option value(s).

    Returns:
        dict[str, int]: Mapping of logger names to numeric logging levels.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is invalid.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        try:
            name, level_str = item.split("=", 1)
        except ValueError as e:
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}") from e
        lvl = logging.getLevelNamesMapping().get(level_str.strip().upper())
        if lvl is None:
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
