"""Receiver-side dispatcher.

`Dispatcher.call` turns one raw envelope into one `DispatchResult`:

1. decode the envelope as ``(name, token, payload)``;
2. look up ``name`` in the registry;
3. decode ``payload`` with the declaration's input shape;
4. invoke the handler with the transport's context and the decoded input;
5. return the handler's result together with the inbound token.

Each step short-circuits with its own error (see `callwire.errors`). The
token is echoed verbatim; deciding whether to send anything back for the
empty token is left to the transport.
"""

import inspect
import logging
from typing import Any, Generic, TypeVar

from .envelope import DispatchResult, decode_envelope
from .errors import (
    EnvelopeDecodeError,
    HandlerExecutionError,
    InputDecodeError,
    UnknownFunctionError,
)
from .interfaces.shape import ShapeError, type_name
from .registry import Registry

logger = logging.getLogger(__name__)

C = TypeVar("C")  # Context type

# pylint: disable=too-few-public-methods


class Dispatcher(Generic[C]):
    """Dispatch raw envelopes against a sealed registry.

    The main responsibility of the dispatcher is to route envelopes to their
    handlers after validating them. It never mutates the registry, so one
    dispatcher can serve any number of concurrent calls.

    Args:
        registry: The sealed registry to dispatch against.
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    async def call(self, context: C, raw_envelope: Any) -> DispatchResult:
        """Dispatch a single raw envelope.

        Args:
            context: Opaque value from the transport (e.g. connection identity),
                passed as the first argument to the handler.
            raw_envelope: Untyped value expected to be ``(name, token, payload)``.

        Returns:
            DispatchResult: The handler's result and the inbound token.

        Raises:
            EnvelopeDecodeError: If ``raw_envelope`` is not a valid triple.
            UnknownFunctionError: If no handler is registered for the name.
            InputDecodeError: If the payload fails the input shape.
            HandlerExecutionError: If the handler raises.
        """
        try:
            name, token, payload = decode_envelope(raw_envelope)
        except EnvelopeDecodeError as e:
            logger.warning("Rejected %s envelope: %s", type_name(raw_envelope), e.detail)
            raise

        if (entry := self.registry.get(name)) is None:
            logger.warning("No handler registered for %s", name)
            raise UnknownFunctionError(name)

        try:
            value = entry.declaration.decode_input(payload)
        except ShapeError as e:
            logger.warning(
                "Invalid input for %s (got %s): %s", name, type_name(payload), e.detail
            )
            raise InputDecodeError(name, e.detail) from e

        logger.debug(
            "Dispatching %s (token=%r) to handler %s", name, token, entry.handler_name
        )
        try:
            result = entry.handler(context, value)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:  # pylint: disable=broad-except
            logger.exception(
                "Exception in handler %s for %s", entry.handler_name, name
            )
            raise HandlerExecutionError(name, e) from e

        return DispatchResult(token=token, result=result)
