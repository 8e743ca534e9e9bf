"""Structural validator contract.

A `Shape` knows how to turn an untyped wire value into a typed value, or to
report why it cannot. The core uses shapes for two things: the envelope
itself, and the input of each declared call. Output shapes are carried by
declarations for typing and for transports that opt into validating
responses.
"""

import abc
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# pylint: disable=too-few-public-methods


class ShapeError(Exception):
    """Raised when a raw value does not match a shape.

    Attributes:
        detail: Human-readable description of what did not match.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class Shape(abc.ABC, Generic[T]):
    """Contract for a structural validator over values of type ``T``."""

    @abc.abstractmethod
    def decode(self, raw: Any) -> T:
        """Decode ``raw`` into a value of this shape.

        Args:
            raw: Untyped value, typically straight off the wire.

        Returns:
            The decoded (possibly coerced) value.

        Raises:
            ShapeError: If ``raw`` does not match the shape.
        """

    @abc.abstractmethod
    def describe(self) -> str:
        """Return a short, human-readable name for this shape."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()})"


def type_name(value: Any) -> str:
    """Return the dynamic shape name of ``value`` (e.g. ``"dict"``, ``"NoneType"``)."""
    return type(value).__name__
