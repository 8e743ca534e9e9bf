"""Token generators for CALLWIRE."""

import itertools
import secrets
import threading
import uuid

from ulid import monotonic

from callwire.interfaces.token_generator import TokenGenerator

# pylint: disable=too-few-public-methods


class ULIDTokenGenerator(TokenGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers.
    They consist of a millisecond timestamp and a random component; the
    monotonic variant increments the random part within the same millisecond.
    This generator uses the `ulid-py` library to create ULIDs.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_token(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class UUIDv4TokenGenerator(TokenGenerator):
    """UUIDv4 generator.

    UUIDv4 are universally unique identifiers that are randomly generated.
    They are not guaranteed to be sequential or ordered in any way.
    """

    def new_token(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())


class SeededCounterTokenGenerator(TokenGenerator):
    """Random per-instance seed combined with a monotonically increasing counter.

    Tokens look like ``"<seed>-<counter>"``. Two tokens from the same instance
    never collide; tokens from different instances collide only if their
    random seeds do.

    Args:
        seed_bytes: Number of random bytes in the seed (hex-encoded).
        width: Zero-padding width of the counter, so tokens sort in issue order
            up to ``10**width`` tokens.
    """

    def __init__(self, seed_bytes: int = 8, width: int = 12) -> None:
        self.seed = secrets.token_hex(seed_bytes)
        self._width = width
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def new_token(self) -> str:
        """Generate the next token for this instance."""
        with self._lock:
            n = next(self._counter)
        return f"{self.seed}-{n:0{self._width}d}"


class SimpleTokenGenerator(TokenGenerator):
    """A simple generator that produces sequential tokens.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, prefix: str = "tok", length: int = 6) -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix
        self._length = length

    def new_token(self) -> str:
        """Generate a new unique token."""
        return f"{self._prefix}{next(self._counter):0{self._length}d}"
