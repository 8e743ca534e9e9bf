"""Shapes backed by pydantic.

`TypeShape` wraps a pydantic `TypeAdapter`, so any annotation pydantic can
validate (builtins, generics, `TypedDict`, dataclasses, `BaseModel`
subclasses, ...) can be used as the input or output shape of a declaration.
"""

from typing import Any, TypeVar, get_origin

from pydantic import StrictStr, TypeAdapter, ValidationError

from callwire.interfaces.shape import Shape, ShapeError, type_name

T = TypeVar("T")

# pylint: disable=too-few-public-methods


def _annotation_name(annotation: Any) -> str:
    if get_origin(annotation) is not None:
        return str(annotation).replace("typing.", "")
    return getattr(annotation, "__name__", repr(annotation))


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ``ValidationError`` into a single line.

    Each error is rendered as ``<location>: <message>``; errors at the root of
    the value use ``<root>`` as their location.

    Args:
        exc: The validation error raised by pydantic.

    Returns:
        str: Errors joined by ``"; "``.
    """
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class TypeShape(Shape[T]):
    """Shape for an arbitrary Python annotation, validated by pydantic.

    Args:
        annotation: Any type or annotation understood by ``pydantic.TypeAdapter``.
        strict: When True (the default), pydantic strict mode is used: no
            coercion, so ``"1"`` is not accepted for ``int`` nor ``True`` for
            ``float``. Pass False to opt into pydantic's lax conversions.
    """

    def __init__(self, annotation: Any, *, strict: bool = True) -> None:
        self.annotation = annotation
        self.strict = strict
        self._adapter: TypeAdapter[T] = TypeAdapter(annotation)

    def decode(self, raw: Any) -> T:
        try:
            # None defers to per-field settings such as StrictStr
            return self._adapter.validate_python(raw, strict=self.strict or None)
        except ValidationError as e:
            raise ShapeError(format_validation_error(e)) from e

    def describe(self) -> str:
        return _annotation_name(self.annotation)


class AnyShape(Shape[Any]):
    """Shape that accepts every value unchanged."""

    def decode(self, raw: Any) -> Any:
        return raw

    def describe(self) -> str:
        return "Any"


def as_shape(spec: Any, *, strict: bool = True) -> Shape[Any]:
    """Return ``spec`` if it is already a `Shape`, else wrap it in a `TypeShape`."""
    if isinstance(spec, Shape):
        return spec
    if spec is Any:
        return AnyShape()
    return TypeShape(spec, strict=strict)


class OrderedShape(TypeShape[T]):
    """`TypeShape` restricted to lists and tuples.

    Lax tuple validation accepts any iterable, including sets and generators,
    whose item order is arbitrary. Anything but a list or tuple is rejected
    before pydantic sees it.
    """

    def decode(self, raw: Any) -> T:
        if not isinstance(raw, (list, tuple)):
            raise ShapeError(f"<root>: Input should be a list or tuple, got {type_name(raw)}")
        return super().decode(raw)


# Wire envelope: (name, token, payload). Lax so JSON arrays (lists) decode;
# name and token must still be real strings.
ENVELOPE_SHAPE: Shape[tuple[str, str, Any]] = OrderedShape(
    tuple[StrictStr, StrictStr, Any], strict=False
)
