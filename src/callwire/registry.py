"""Registry of callable declarations and their handlers.

A registry is built once, before serving begins, and is read-only afterwards:

```py
builder = RegistryBuilder()

@builder.register(Add)
async def add(ctx, msg):
    return msg["a"] + msg["b"]

registry = builder.seal()
```

`load_registry` offers the same thing in loader form, where a single
procedure receives the ``register`` function and performs all registrations.

Duplicate names overwrite the earlier entry by default. The ``error`` policy
turns duplicates into `DuplicateDeclarationError` at build time.
"""

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Generic, Literal, TypeVar

from . import config
from .declaration import Declaration
from .errors import DuplicateDeclarationError, RegistrySealedError

logger = logging.getLogger(__name__)

C = TypeVar("C")  # Context type
I = TypeVar("I")
O = TypeVar("O")

DuplicatePolicy = Literal["overwrite", "error"]

Handler = Callable[[C, I], O | Awaitable[O]]
Register = Callable[[Declaration[Any, Any]], Callable[[Handler], Handler]]

# pylint: disable=too-few-public-methods


@dataclass(frozen=True, slots=True)
class RegistryEntry(Generic[C, I, O]):
    """A declaration and the handler serving it."""

    declaration: Declaration[I, O]
    handler: Callable[[C, I], O | Awaitable[O]]

    @property
    def handler_name(self) -> str:
        """Best-effort name of the handler, for logs and diagnostics."""
        fn = self.handler
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)


class Registry(Mapping[str, RegistryEntry]):
    """Immutable mapping from call name to `RegistryEntry`.

    Instances are produced by `RegistryBuilder.seal` (or `load_registry`); the
    underlying mapping is a read-only proxy, so no entry can be added or
    removed once built.
    """

    def __init__(self, entries: Mapping[str, RegistryEntry]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, name: str) -> RegistryEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry({sorted(self._entries)!r})"

    def names(self) -> list[str]:
        """Return the registered call names, sorted."""
        return sorted(self._entries)

    def declaration(self, name: str) -> Declaration[Any, Any]:
        """Return the declaration registered under ``name`` (KeyError if absent)."""
        return self._entries[name].declaration


class RegistryBuilder:
    """Accumulates registrations, then seals them into a `Registry`.

    Args:
        on_duplicate: ``"overwrite"`` (later registration wins) or ``"error"``
            (raise `DuplicateDeclarationError`). Defaults to the
            ``CALLWIRE_DUPLICATE_POLICY`` setting.
    """

    def __init__(self, on_duplicate: DuplicatePolicy | None = None) -> None:
        self.on_duplicate: DuplicatePolicy = (
            on_duplicate if on_duplicate is not None else config.get_duplicate_policy()
        )
        self._entries: dict[str, RegistryEntry] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        """Whether `seal` has been called."""
        return self._sealed

    def register(
        self, declaration: Declaration[I, O]
    ) -> Callable[[Handler], Handler]:
        """Return a function that registers a handler for ``declaration``.

        Works both as ``builder.register(decl)(fn)`` and as a decorator. The
        handler is returned unchanged.

        Raises:
            RegistrySealedError: If the builder has already been sealed.
            DuplicateDeclarationError: On a duplicate name under the ``error`` policy.
        """

        def bind(handler: Handler) -> Handler:
            name = declaration.name
            if self._sealed:
                raise RegistrySealedError(name)
            if name in self._entries:
                if self.on_duplicate == "error":
                    raise DuplicateDeclarationError(name)
                logger.debug("Overwriting handler registered for %s", name)
            self._entries[name] = RegistryEntry(declaration, handler)
            return handler

        return bind

    def seal(self) -> Registry:
        """Freeze the accumulated entries into a `Registry`.

        The builder refuses further registrations afterwards.
        """
        self._sealed = True
        registry = Registry(self._entries)
        logger.debug("Sealed registry with %d call(s): %s", len(registry), registry.names())
        return registry


def load_registry(
    loader: Callable[[Register], None],
    *,
    on_duplicate: DuplicatePolicy | None = None,
) -> Registry:
    """Build a registry by handing ``register`` to a loader procedure.

    Args:
        loader: Called once with ``register``; ``register(decl)(handler)``
            adds an entry.
        on_duplicate: Duplicate-name policy (see `RegistryBuilder`).

    Returns:
        Registry: The sealed registry.
    """
    builder = RegistryBuilder(on_duplicate=on_duplicate)
    loader(builder.register)
    return builder.seal()
