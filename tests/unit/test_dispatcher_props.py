"""Hypothesis property tests for the Dispatcher.

Properties
- **Token echo**: whatever token a well-formed envelope carries (including the
  empty token) comes back unchanged in the dispatch result.
- **Exact routing**: with disjoint names, only the handler registered under the
  envelope's name runs.
- **Unknown names**: names outside the registry always raise
  `UnknownFunctionError` and never reach a handler.
"""

import asyncio
from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from callwire.declaration import declare
from callwire.dispatcher import Dispatcher
from callwire.errors import UnknownFunctionError
from callwire.registry import Registry, RegistryBuilder

pytestmark = [pytest.mark.property]

# ============================================================================
#                               Helpers
# ============================================================================

names = st.text(min_size=1, max_size=12).filter(lambda s: s.strip() != "")
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=8),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=5), children, max_size=3),
    max_leaves=10,
)


def tagging_registry(call_names: set[str]) -> tuple[Registry, list[str]]:
    """Registry with one handler per name, each recording its own name when run."""
    ran: list[str] = []
    builder = RegistryBuilder(on_duplicate="error")
    for name in call_names:

        def handler(ctx: Any, msg: Any, name: str = name) -> str:
            ran.append(name)
            return name

        builder.register(declare(name, Any, str))(handler)
    return builder.seal(), ran


# ============================================================================
#                               Properties
# ============================================================================


@settings(max_examples=50, deadline=None)
@given(token=st.text(max_size=30), payload=json_values)
def test_token_is_echoed(token, payload):
    """The result token always equals the inbound token."""
    registry, _ = tagging_registry({"Echo"})
    result = asyncio.run(Dispatcher(registry).call(None, ["Echo", token, payload]))
    assert result.token == token
    assert result.result == "Echo"


@settings(max_examples=50, deadline=None)
@given(data=st.data(), call_names=st.sets(names, min_size=1, max_size=6))
def test_only_matching_handler_runs(data, call_names):
    """Exactly the handler registered under the dispatched name is invoked."""
    registry, ran = tagging_registry(call_names)
    target = data.draw(st.sampled_from(sorted(call_names)))
    result = asyncio.run(Dispatcher(registry).call(None, [target, "t", None]))
    assert ran == [target]
    assert result.result == target


@settings(max_examples=50, deadline=None)
@given(call_names=st.sets(names, max_size=5), unknown=names)
def test_unknown_names_rejected(call_names, unknown):
    """Names outside the registry raise UnknownFunctionError without running anything."""
    call_names.discard(unknown)
    registry, ran = tagging_registry(call_names)
    with pytest.raises(UnknownFunctionError) as exc_info:
        asyncio.run(Dispatcher(registry).call(None, [unknown, "t", {}]))
    assert exc_info.value.name == unknown
    assert not ran
