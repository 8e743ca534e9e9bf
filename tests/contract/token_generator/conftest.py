"""Fixtures for token generator contract tests."""

from collections.abc import Iterable

import pytest

from callwire.adapters.token_generators import (
    SeededCounterTokenGenerator,
    SimpleTokenGenerator,
    ULIDTokenGenerator,
    UUIDv4TokenGenerator,
)
from callwire.interfaces.token_generator import TokenGenerator


@pytest.fixture(params=["ulid", "uuid4", "counter", "simple"])
def token_generator(request: pytest.FixtureRequest) -> Iterable[TokenGenerator]:
    """Return a fresh TokenGenerator instance for the requested backend.

    Supported params:
      - `"ulid"` → ULIDTokenGenerator
      - `"uuid4"` → UUIDv4TokenGenerator
      - `"counter"` → SeededCounterTokenGenerator
      - `"simple"` → SimpleTokenGenerator
    """
    match request.param:
        case "ulid":
            yield ULIDTokenGenerator()
        case "uuid4":
            yield UUIDv4TokenGenerator()
        case "counter":
            yield SeededCounterTokenGenerator()
        case "simple":
            yield SimpleTokenGenerator()
        case _:
            raise ValueError(f"unknown token generator type: {request.param}")


@pytest.fixture(params=["ulid", "counter"])
def monotonic_token_generator(
    request: pytest.FixtureRequest,
) -> Iterable[TokenGenerator]:
    """Yield TokenGenerators that promise lexicographically increasing tokens."""
    match request.param:
        case "ulid":
            yield ULIDTokenGenerator()
        case "counter":
            yield SeededCounterTokenGenerator()
        case _:
            raise ValueError(f"unknown monotonic token generator type: {request.param}")
