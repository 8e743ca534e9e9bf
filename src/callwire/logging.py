"""Logging setup for the CALLWIRE command line.

Library modules only log through ``logging.getLogger(__name__)``, one logger
per stage of a call (``callwire.registry``, ``callwire.dispatcher``,
``callwire.caller``, ``callwire.pending``, ``callwire.adapters.loopback``).
This module wires those loggers to a terminal and a file:

- `config_console_handler`: Rich console on stderr; each line is tagged with
  the stage that emitted it (``[dispatcher]``) or the library it came from
  (``[asyncio]``).
- `config_flight_recorder`: in-memory buffer of recent records, written to a
  file once something goes wrong (e.g. a handler failure logged at ERROR).
- `log_startup`: one-line summary of the effective settings, including the
  duplicate-registration policy and token generator the process will use.
- `log_registry`: DEBUG listing of a loaded registry.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import pydantic
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from .registry import Registry

# pylint: disable=too-few-public-methods

PROJECT_LOGGER = "callwire"

# Libraries that log while a call is dispatched or while the CLI parses its
# options. asyncio reports slow callbacks and unretrieved task exceptions at
# DEBUG/ERROR; click_extra logs option resolution at DEBUG.
QUIET_LIBRARIES: dict[str, int] = {
    "asyncio": logging.WARNING,
    "click_extra": logging.WARNING,
}


class CallStagePrefixFilter(logging.Filter):
    """Tag each record with the call stage or library that emitted it.

    ``callwire.dispatcher`` becomes ``[dispatcher]``,
    ``callwire.adapters.loopback`` becomes ``[loopback]`` and
    ``asyncio.events`` becomes ``[asyncio]``. The root project logger gets no
    tag. The tag is stored on ``record.prefix``; the record is never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        parts = record.name.split(".")
        if parts[0] != PROJECT_LOGGER:
            record.prefix = f"[{parts[0]}]"
        elif len(parts) > 1:
            record.prefix = f"[{parts[-1]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    stdout is reserved for command output (``dispatch`` prints its JSON
    response there), so the console always targets stderr.

    Args:
        level: Minimum level for console output (DEBUG in debug mode).
        debug_mode: Show timestamps, full logger names and source locations
            instead of the short stage tag.
        color: Enable color output when True.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """

    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(CallStagePrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a memory-buffered handler that dumps recent records to ``path``.

    Rejected envelopes are logged at WARNING and handler failures at ERROR, so
    with the default ``flush_level`` the file holds the DEBUG trail leading
    up to the first failed call. The file is only created on first flush.

    Args:
        path: Destination file.
        capacity: Number of records kept in memory.
        flush_level: Records at or above this level trigger a flush.
        flush_on_close: Also flush whatever is buffered when closed.

    Returns:
        MemoryHandler: Buffering handler targeting a `logging.FileHandler`.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    duplicate_policy: str,
    token_generator: str,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log the effective settings of this run.

    The INFO line carries everything that changes how calls behave; the
    DEBUG lines carry environment details for bug reports.

    Args:
        logger: Logger used to emit startup messages.
        app_version: CALLWIRE version.
        level: Effective console level.
        duplicate_policy: Duplicate-registration policy (``overwrite``/``error``).
        token_generator: Token generator kind (``ulid``/``uuid4``/``counter``).
        handlers: Handlers attached to the root logger.
        log_path: Flight-recorder file, if any.
        flight_recorder: Whether the flight recorder is enabled.
        logger_levels: Per-logger level overrides.
    """
    logger.info(
        "CALLWIRE %s: duplicates=%s, tokens=%s, console=%s, flight-recorder=%s",
        app_version,
        duplicate_policy,
        token_generator,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )
    logger.debug(
        "Python %s on %s %s (pid %s), pydantic %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        os.getpid(),
        pydantic.VERSION,
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug("Flight recorder: path=%s", log_path or "<none>")
    logger.debug(
        "Logger levels: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )


def log_registry(logger: Logger, registry: Registry, source: str) -> None:
    """Log, at DEBUG, each call a registry serves and which handler serves it."""
    logger.debug("Loaded %d call(s) from %s", len(registry), source)
    for name in registry.names():
        entry = registry[name]
        logger.debug("  %s -> %s", entry.declaration, entry.handler_name)
