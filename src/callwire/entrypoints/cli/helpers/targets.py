"""Resolve ``module:attribute`` targets into registries.

A target may name a sealed `Registry`, an unsealed `RegistryBuilder`, or a
loader function accepting ``register`` (as expected by `load_registry`).
"""

import importlib
import logging

import click

from callwire.logging import log_registry
from callwire.registry import Registry, RegistryBuilder, load_registry

logger = logging.getLogger(__name__)


def load_target_registry(target: str) -> Registry:
    """Import ``target`` and turn it into a `Registry`.

    Args:
        target: ``"package.module:attribute"``.

    Returns:
        Registry: The resolved registry.

    Raises:
        click.BadParameter: If the target is malformed, cannot be imported, or
            does not name a registry, builder or loader.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected MODULE:ATTRIBUTE, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import {module_name!r}: {e}") from e
    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise click.BadParameter(f"{module_name!r} has no attribute {attr!r}") from e

    match obj:
        case Registry():
            registry = obj
        case RegistryBuilder():
            registry = obj.seal()
        case _ if callable(obj):
            registry = load_registry(obj)
        case _:
            raise click.BadParameter(
                f"{target!r} is not a Registry, RegistryBuilder or loader function"
            )
    log_registry(logger, registry, target)
    return registry
