"""Caller-side bookkeeping of calls awaiting a response.

The core never stores pending calls; this table is offered to transports that
want the usual "one future per token" correlation:

```py
future = pending.open(token)          # when sending with a token
...
pending.resolve(dispatch_result)      # when a response arrives
```

Entries are removed as soon as their future completes, including when the
waiter is cancelled (e.g. by ``asyncio.wait_for``), so abandoned calls do not
accumulate. The table belongs to a single event loop and is not thread-safe.
"""

import asyncio
import logging
from typing import Any

from .envelope import NO_RESPONSE, DispatchResult
from .errors import DuplicateTokenError, PendingCallError, UnknownTokenError

logger = logging.getLogger(__name__)


class PendingCalls:
    """Mapping of correlation token to the future awaiting its result."""

    def __init__(self) -> None:
        self._futures: dict[str, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        return len(self._futures)

    def __contains__(self, token: object) -> bool:
        return token in self._futures

    def open(self, token: str) -> asyncio.Future[Any]:
        """Register a pending call and return the future for its result.

        Args:
            token: Non-empty correlation token.

        Returns:
            asyncio.Future: Resolved by `resolve`, failed by `reject`,
            cancelled by `abandon`.

        Raises:
            PendingCallError: If ``token`` is the empty (no response) token.
            DuplicateTokenError: If ``token`` is already pending.
        """
        if token == NO_RESPONSE:
            raise PendingCallError("Cannot wait for a response on the empty token")
        if token in self._futures:
            raise DuplicateTokenError(token)

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._futures[token] = future
        future.add_done_callback(lambda f: self._discard(token, f))
        return future

    def resolve(self, response: DispatchResult) -> None:
        """Complete the pending call matching ``response.token`` with its result.

        Raises:
            UnknownTokenError: If nothing is pending for the token.
        """
        future = self._take(response.token)
        if not future.done():
            future.set_result(response.result)

    def reject(self, token: str, exc: BaseException) -> None:
        """Fail the pending call for ``token`` with ``exc``.

        Raises:
            UnknownTokenError: If nothing is pending for the token.
        """
        future = self._take(token)
        if not future.done():
            future.set_exception(exc)

    def abandon(self, token: str) -> bool:
        """Stop waiting on ``token``; returns False if it was not pending."""
        if (future := self._futures.pop(token, None)) is None:
            return False
        logger.debug("Abandoning pending call %s", token)
        future.cancel()
        return True

    def abandon_all(self) -> int:
        """Abandon every pending call (e.g. on transport shutdown); returns the count."""
        tokens = list(self._futures)
        for token in tokens:
            self.abandon(token)
        return len(tokens)

    def _take(self, token: str) -> asyncio.Future[Any]:
        if (future := self._futures.pop(token, None)) is None:
            raise UnknownTokenError(token)
        return future

    def _discard(self, token: str, future: asyncio.Future[Any]) -> None:
        if self._futures.get(token) is future:
            del self._futures[token]
