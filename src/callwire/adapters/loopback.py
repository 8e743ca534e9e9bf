"""In-process loopback transport.

Connects a caller-side `send` function directly to a receiver-side
`Dispatcher` in the same event loop. It follows the transport contract:

- envelopes are delivered as plain ``[name, token, payload]`` lists;
- the dispatcher is called with the transport's ``context``;
- results with a token are routed back to the pending call keyed by it;
- results and failures of fire-and-forget calls (empty token) are discarded.

Dispatch failures of calls expecting a response fail the caller's awaitable
with the dispatch error, so callers can branch on `UnknownFunctionError`,
`InputDecodeError` and friends.

Note:
    Not a network transport; useful for tests, demos and wiring two
    components of one process together.
"""

import asyncio
import logging
from typing import Any, Generic, TypeVar

from callwire.dispatcher import Dispatcher
from callwire.envelope import NO_RESPONSE, DispatchResult
from callwire.errors import DispatchError
from callwire.interfaces.shape import ShapeError
from callwire.pending import PendingCalls

logger = logging.getLogger(__name__)

C = TypeVar("C")


class LoopbackTransport(Generic[C]):
    """Loopback transport between a caller and a dispatcher.

    Args:
        dispatcher: Receiver-side dispatcher.
        context: Value passed to every handler as its context.
        expect_response: When False, `send` never asks for a token and
            resolves to None once the call has been dispatched.
        validate_output: When True, results are decoded with the declaration's
            output shape before they are handed to the caller.
    """

    def __init__(
        self,
        dispatcher: Dispatcher[C],
        context: C | None = None,
        *,
        expect_response: bool = True,
        validate_output: bool = False,
    ) -> None:
        self.dispatcher = dispatcher
        self.context = context
        self.expect_response = expect_response
        self.validate_output = validate_output
        self.pending = PendingCalls()
        self._tasks: set[asyncio.Task[None]] = set()

    async def send(self, name: str, make_token: Any, payload: Any) -> Any:
        """Caller-side send function (see `callwire.caller.Sender`)."""
        if not self.expect_response:
            await self.receive([name, NO_RESPONSE, payload])
            return None

        token = make_token()
        future = self.pending.open(token)
        task = asyncio.create_task(self._deliver(token, [name, token, payload]))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return await future

    async def receive(self, raw_envelope: Any) -> DispatchResult | None:
        """Receiver-side entry point: dispatch one envelope and route the result.

        Returns:
            The dispatch result, or None if dispatch failed.
        """
        token = _token_of(raw_envelope)
        try:
            response = await self.dispatcher.call(self.context, raw_envelope)
        except DispatchError as e:
            if token:
                self._route_failure(token, e)
            else:
                logger.info("Discarding failure of fire-and-forget call: %s", e)
            return None

        if response.expects_response:
            self._route(raw_envelope, response)
        return response

    async def aclose(self) -> None:
        """Abandon pending calls and wait for in-flight deliveries."""
        self.pending.abandon_all()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _deliver(self, token: str, raw_envelope: list[Any]) -> None:
        """Run `receive` for one awaited call; the caller's future is always settled."""
        try:
            await self.receive(raw_envelope)
        except asyncio.CancelledError:
            # the dispatcher does not wrap cancellation; cancel the waiter too
            self.pending.abandon(token)
            raise
        except BaseException as e:  # pylint: disable=broad-exception-caught
            logger.error("Delivery of call %s failed: %r", token, e)
            if token in self.pending:
                self.pending.reject(token, e)
            if not isinstance(e, Exception):
                raise

    def _route(self, raw_envelope: Any, response: DispatchResult) -> None:
        if response.token not in self.pending:
            logger.debug("No caller waiting on token %s; dropping result", response.token)
            return
        if self.validate_output:
            name = raw_envelope[0]
            declaration = self.dispatcher.registry.declaration(name)
            try:
                response = DispatchResult(
                    response.token, declaration.decode_output(response.result)
                )
            except ShapeError as e:
                logger.warning("Invalid output from %s: %s", name, e.detail)
                self.pending.reject(response.token, e)
                return
        self.pending.resolve(response)

    def _route_failure(self, token: str, exc: DispatchError) -> None:
        if token not in self.pending:
            logger.debug("No caller waiting on token %s; dropping failure", token)
            return
        self.pending.reject(token, exc)


def _token_of(raw_envelope: Any) -> str:
    """Best-effort token extraction, for routing failures of malformed envelopes."""
    if isinstance(raw_envelope, (list, tuple)) and len(raw_envelope) >= 2:
        if isinstance(raw_envelope[1], str):
            return raw_envelope[1]
    return NO_RESPONSE
