"""CALLWIRE CLI entry point.

Defines the top-level ``callwire`` command (via Click-Extra) and registers
the subcommands exposed by the project.

Currently available commands
- ``callwire describe`` — list the calls in a registry with their shapes.
- ``callwire dispatch`` — run one envelope through a registry's dispatcher.

Examples
    $ callwire --version
    $ callwire describe myservice.calls:registry
    $ callwire dispatch myservice.calls:registry '["Add", "t1", {"a": 1, "b": 2}]'
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from callwire import __version__, config
from callwire.errors import ConfigError
from callwire.logging import (
    QUIET_LIBRARIES,
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .calls import describe, dispatch
from .helpers import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """CALLWIRE command-line interface.

    Inspect call registries and dispatch envelopes locally, without a
    transport. Useful to check what a service exposes and how it answers a
    given ``(name, token, payload)`` envelope.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (DEBUG console output with source locations).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file written by the flight recorder.",
    default=None,
    envvar="CALLWIRE_LOG_PATH",
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last log records at DEBUG granularity in memory and write "
        "them to --log-path when a WARNING/ERROR occurs."
    ),
    default=False,
    envvar="CALLWIRE_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable "
        "(e.g. -L asyncio=INFO -L callwire.dispatcher=DEBUG). Defaults: "
        + ", ".join(
            f"{name}={logging.getLevelName(lvl)}" for name, lvl in QUIET_LIBRARIES.items()
        )
        + "."
    ),
    default=(),
)
@clickx.pass_context
def callwire(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """CALLWIRE command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console handler
    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        if log_path is None:
            log_path = (
                Path(user_log_dir("callwire", appauthor=False, ensure_exists=True))
                / "latest.log"
            )
        handlers.append(config_flight_recorder(path=log_path))

    # 3) root logger; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    # 5) settings from the environment; fail before any command runs
    try:
        duplicate_policy = config.get_duplicate_policy()
        token_generator = config.get_token_generator_kind()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        duplicate_policy=duplicate_policy,
        token_generator=token_generator,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


callwire.add_command(describe)
callwire.add_command(dispatch)
