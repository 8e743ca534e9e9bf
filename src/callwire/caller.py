"""Caller-side wrapper.

`realize` turns a declaration into an awaitable function bound to a
transport's ``send``:

```py
add = realize(Add)(transport.send)
total = await add({"a": 1, "b": 2})
```

``send`` receives the call name, a zero-argument token factory and the input.
The factory is lazy: a send function that wants a response calls it once and
keys its pending call by the token; a fire-and-forget send never calls it and
uses the empty token instead. Whatever ``send`` resolves to is returned
unchanged; validating responses is up to the transport.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, Protocol, TypeVar

from . import config
from .declaration import Declaration
from .interfaces.token_generator import TokenGenerator

logger = logging.getLogger(__name__)

I = TypeVar("I")
O = TypeVar("O")
I_contra = TypeVar("I_contra", contravariant=True)
O_co = TypeVar("O_co", covariant=True)

TokenFactory = Callable[[], str]

# pylint: disable=too-few-public-methods


class Sender(Protocol[I_contra, O_co]):
    """Transport-supplied send function."""

    def __call__(
        self, name: str, make_token: TokenFactory, payload: I_contra, /
    ) -> Awaitable[O_co]: ...


@functools.cache
def default_token_generator() -> TokenGenerator:
    """Process-wide token generator used when `realize` is given none."""
    return config.build_token_generator()


class RemoteCall(Generic[I, O]):
    """Awaitable function for one declaration, bound to a send function.

    Args:
        declaration: The call being made.
        send: Transport send function.
        tokens: Source of correlation tokens.
    """

    def __init__(
        self,
        declaration: Declaration[I, O],
        send: Sender[I, O],
        tokens: TokenGenerator,
    ) -> None:
        self.declaration = declaration
        self._send = send
        self._tokens = tokens

    @property
    def name(self) -> str:
        """Name of the declared call."""
        return self.declaration.name

    async def __call__(self, payload: I) -> O:
        logger.debug("Sending %s", self.declaration.name)
        return await self._send(self.declaration.name, self._tokens.new_token, payload)

    def __repr__(self) -> str:
        return f"RemoteCall({self.declaration.name!r})"


def realize(
    declaration: Declaration[I, O], *, tokens: TokenGenerator | None = None
) -> Callable[[Sender[I, O]], RemoteCall[I, O]]:
    """Realize a declaration into a caller bound to a send function.

    Args:
        declaration: The call declaration.
        tokens: Token generator whose ``new_token`` is handed to ``send`` as the
            token factory. Defaults to a process-wide generator chosen by
            ``CALLWIRE_TOKEN_GENERATOR``.

    Returns:
        A function taking ``send`` and returning the `RemoteCall`.
    """

    def bind(send: Sender[I, O]) -> RemoteCall[I, O]:
        return RemoteCall(declaration, send, tokens or default_token_generator())

    return bind
