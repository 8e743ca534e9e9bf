"""Call declarations.

A `Declaration` is the contract shared by both sides of a call: a name plus an
input shape and an output shape. The receiver registers a handler against it,
the caller realizes it into an awaitable function.

Names are always explicit. Two declarations with the same name describe the
same remote function as far as a registry is concerned.

Example:
    ```py
    class AddInput(TypedDict):
        a: float
        b: float

    Add = declare("Add", AddInput, float)
    ```
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .adapters.shapes import as_shape
from .errors import InvalidDeclarationError
from .interfaces.shape import Shape

I = TypeVar("I")  # Input type
O = TypeVar("O")  # Output type


@dataclass(frozen=True, slots=True)
class Declaration(Generic[I, O]):
    """Named pairing of an input shape and an output shape.

    Attributes:
        name: Unique key of the call within a registry.
        input_shape: Validator applied by the dispatcher to inbound payloads.
        output_shape: Shape of the handler result; advisory for the core,
            available to transports through `decode_output`.
    """

    name: str
    input_shape: Shape[I]
    output_shape: Shape[O]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidDeclarationError(
                f"Declaration name must be a non-empty string, got {self.name!r}"
            )
        if not isinstance(self.input_shape, Shape) or not isinstance(
            self.output_shape, Shape
        ):
            raise InvalidDeclarationError(
                f"Declaration {self.name!r} requires Shape instances for input and output"
            )

    def decode_input(self, raw: Any) -> I:
        """Decode an inbound payload (raises `ShapeError` on mismatch)."""
        return self.input_shape.decode(raw)

    def decode_output(self, raw: Any) -> O:
        """Decode a response value (raises `ShapeError` on mismatch)."""
        return self.output_shape.decode(raw)

    def __str__(self) -> str:
        return (
            f"{self.name}({self.input_shape.describe()}) "
            f"-> {self.output_shape.describe()}"
        )


def declare(
    name: str, input_type: Any, output_type: Any, *, strict: bool = True
) -> Declaration[Any, Any]:
    """Build a `Declaration` from types or shapes.

    Args:
        name: Explicit call name.
        input_type: A `Shape`, or any annotation pydantic can validate.
        output_type: A `Shape`, or any annotation pydantic can validate.
        strict: Use pydantic strict mode for annotations wrapped here (the
            default; payloads are never coerced). False opts into lax mode.

    Returns:
        Declaration: The immutable declaration.

    Raises:
        InvalidDeclarationError: If ``name`` is empty or not a string.
    """
    return Declaration(
        name=name,
        input_shape=as_shape(input_type, strict=strict),
        output_shape=as_shape(output_type, strict=strict),
    )
