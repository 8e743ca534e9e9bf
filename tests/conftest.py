"""Global pytest fixtures and default marks for CALLWIRE."""

from __future__ import annotations

from pathlib import Path

import pytest

from callwire.dispatcher import Dispatcher
from callwire.registry import Registry

from .fixtures import calls

# pylint: disable=unused-argument, redefined-outer-name

TESTS_ROOT = Path(__file__).parent.resolve()
FOLDER_MARKERS = {
    "unit": "unit",
    "integration": "integration",
    "functional": "functional",
    "contract": "contract",
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with the name of its top-level folder under `tests/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        folder = path.relative_to(TESTS_ROOT).parts[0]
        if (marker := FOLDER_MARKERS.get(folder)) is None:
            continue
        if not any(m.name == marker for m in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, marker))


@pytest.fixture(autouse=True)
def _clean_callwire_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test without CALLWIRE_* settings leaking from the environment."""
    monkeypatch.delenv("CALLWIRE_DUPLICATE_POLICY", raising=False)
    monkeypatch.delenv("CALLWIRE_TOKEN_GENERATOR", raising=False)


@pytest.fixture
def registry() -> Registry:
    """A freshly loaded registry of the sample calls."""
    return calls.build_registry()


@pytest.fixture
def dispatcher(registry: Registry) -> Dispatcher:
    """Dispatcher over the sample registry."""
    return Dispatcher(registry)
