"""Registry inspection and local dispatch commands.

Behavior
- Targets are given as ``MODULE:ATTRIBUTE`` and may name a registry, a
  registry builder, or a loader function.
- Results are written to **stdout** as JSON; human-oriented notices go to
  **stderr**.
- Fire-and-forget envelopes (empty token) are dispatched; the result is
  still printed, with a warning that no response would be sent.

Failure modes
- Unloadable target → usage error (exit code 2).
- Invalid JSON arguments → usage error (exit code 2).
- Any dispatch error, or a result that cannot be serialized as JSON → error
  line on stderr, exit code 1.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from callwire.dispatcher import Dispatcher
from callwire.errors import DispatchError, HandlerExecutionError

from .helpers import error, load_target_registry, warn

_WIRE = TypeAdapter(dict[str, Any])


def _parse_json(ctx: click.Context, param: click.Parameter, value: str | None) -> Any:
    del ctx
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON ({e.msg})", param=param) from e


@click.command()
@click.argument("target")
def describe(target: str) -> None:
    """List the calls registered in TARGET (MODULE:ATTRIBUTE)."""
    registry = load_target_registry(target)
    if not registry:
        click.echo("(no calls registered)")
        return
    width = max(len(name) for name in registry)
    for name in registry.names():
        entry = registry[name]
        decl = entry.declaration
        click.echo(
            f"{name:<{width}}  {decl.input_shape.describe()} -> "
            f"{decl.output_shape.describe()}  [{entry.handler_name}]"
        )


@click.command()
@click.argument("target")
@click.argument("envelope", callback=_parse_json)
@click.option(
    "--context",
    "context",
    callback=_parse_json,
    default=None,
    help="JSON value passed to the handler as its context (default: null).",
)
def dispatch(target: str, envelope: Any, context: Any) -> None:
    """Dispatch ENVELOPE (a JSON ``[name, token, payload]`` array) against TARGET."""
    dispatcher: Dispatcher[Any] = Dispatcher(load_target_registry(target))
    try:
        response = asyncio.run(dispatcher.call(context, envelope))
    except HandlerExecutionError as e:
        error(f"{e} (handler raised {type(e.cause).__name__})")
        raise SystemExit(1) from e
    except DispatchError as e:
        error(str(e))
        raise SystemExit(1) from e
    try:
        line = _WIRE.dump_json(response.to_wire()).decode()
    except PydanticSerializationError as e:
        error(f"Result of {envelope[0]!r} cannot be serialized as JSON: {e}")
        raise SystemExit(1) from e
    if not response.expects_response:
        warn("Empty token: a transport would not send this result back")
    click.echo(line)
