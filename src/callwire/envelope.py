"""Wire-level envelope and dispatch result.

An envelope is the triple ``(name, token, payload)`` a transport carries from
caller to receiver. The token is chosen by the caller and echoed back in the
`DispatchResult`, so the transport can route the result to whoever is
waiting. The empty token (`NO_RESPONSE`) means nobody is waiting.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple

from .adapters.shapes import ENVELOPE_SHAPE
from .errors import EnvelopeDecodeError
from .interfaces.shape import ShapeError

NO_RESPONSE = ""


class Envelope(NamedTuple):
    """Decoded wire envelope."""

    name: str
    token: str
    payload: Any

    @property
    def expects_response(self) -> bool:
        """True unless the token is the fire-and-forget sentinel."""
        return self.token != NO_RESPONSE


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Result of one dispatch, carrying the token of the inbound envelope."""

    token: str
    result: Any

    @property
    def expects_response(self) -> bool:
        """True unless the token is the fire-and-forget sentinel."""
        return self.token != NO_RESPONSE

    def to_wire(self) -> dict[str, Any]:
        """Return the plain ``{"token": ..., "result": ...}`` mapping."""
        return {"token": self.token, "result": self.result}


def decode_envelope(raw: Any) -> Envelope:
    """Decode a raw value into an `Envelope`.

    Args:
        raw: Untyped value; a 3-item tuple or list whose first two items are strings.

    Returns:
        Envelope: The decoded envelope.

    Raises:
        EnvelopeDecodeError: If ``raw`` is not a ``(str, str, any)`` triple.
    """
    try:
        name, token, payload = ENVELOPE_SHAPE.decode(raw)
    except ShapeError as e:
        raise EnvelopeDecodeError(e.detail) from e
    return Envelope(name, token, payload)
