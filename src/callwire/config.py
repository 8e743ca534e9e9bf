"""Configuration utilities for CALLWIRE.

Settings are read from the environment at the point of use:

- ``CALLWIRE_DUPLICATE_POLICY`` — ``overwrite`` (default) or ``error``.
- ``CALLWIRE_TOKEN_GENERATOR`` — ``ulid`` (default), ``uuid4`` or ``counter``.
"""

import os
from typing import Literal, cast

from .adapters import token_generators
from .errors import ConfigError
from .interfaces.token_generator import TokenGenerator

DUPLICATE_POLICY_VAR = "CALLWIRE_DUPLICATE_POLICY"  # pragma: no mutate
TOKEN_GENERATOR_VAR = "CALLWIRE_TOKEN_GENERATOR"  # pragma: no mutate

DUPLICATE_POLICIES = ("overwrite", "error")
TOKEN_GENERATORS = ("ulid", "uuid4", "counter")


def _read_choice(variable: str, allowed: tuple[str, ...], default: str) -> str:
    if not (value := os.environ.get(variable, "").strip()):
        return default
    if (normalized := value.lower()) not in allowed:
        raise ConfigError(variable, value, allowed)
    return normalized


def get_duplicate_policy() -> Literal["overwrite", "error"]:
    """Get the duplicate-registration policy from the environment.

    Returns:
        The value of ``CALLWIRE_DUPLICATE_POLICY``, or ``"overwrite"`` if unset.

    Raises:
        ConfigError: If the variable holds an unsupported value.
    """
    return cast(
        Literal["overwrite", "error"],
        _read_choice(DUPLICATE_POLICY_VAR, DUPLICATE_POLICIES, "overwrite"),
    )


def get_token_generator_kind() -> str:
    """Get the token generator kind from the environment.

    Returns:
        The value of ``CALLWIRE_TOKEN_GENERATOR``, or ``"ulid"`` if unset.

    Raises:
        ConfigError: If the variable holds an unsupported value.
    """
    return _read_choice(TOKEN_GENERATOR_VAR, TOKEN_GENERATORS, "ulid")


def build_token_generator(kind: str | None = None) -> TokenGenerator:
    """Build the configured `TokenGenerator`.

    Args:
        kind: One of ``ulid``, ``uuid4`` or ``counter``. When None, the
            ``CALLWIRE_TOKEN_GENERATOR`` environment variable is used, falling
            back to ``ulid``.

    Returns:
        A fresh token generator instance.

    Raises:
        ConfigError: If the requested kind is not supported.
    """
    if kind is None:
        kind = get_token_generator_kind()

    match kind:
        case "ulid":
            return token_generators.ULIDTokenGenerator()
        case "uuid4":
            return token_generators.UUIDv4TokenGenerator()
        case "counter":
            return token_generators.SeededCounterTokenGenerator()
        case _:
            raise ConfigError(TOKEN_GENERATOR_VAR, kind, TOKEN_GENERATORS)
