"""Unit tests for the pydantic-backed shapes."""

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel
from typing_extensions import TypedDict

from callwire.adapters.shapes import (
    ENVELOPE_SHAPE,
    AnyShape,
    OrderedShape,
    TypeShape,
    as_shape,
)
from callwire.interfaces.shape import Shape, ShapeError, type_name

# pylint: disable=magic-value-comparison, too-few-public-methods


class Point(TypedDict):
    """TypedDict input."""

    x: int
    y: int


@dataclass
class Box:
    """Dataclass input."""

    width: float
    height: float


class User(BaseModel):
    """Pydantic model input."""

    name: str
    age: int


class TestTypeShape:
    """Tests for TypeShape."""

    @staticmethod
    def test_typed_dict():
        """TypedDicts decode to dicts."""
        assert TypeShape(Point).decode({"x": 1, "y": 2}) == {"x": 1, "y": 2}

    @staticmethod
    def test_dataclass():
        """Dataclasses decode from mappings."""
        assert TypeShape(Box, strict=False).decode({"width": 1, "height": 2}) == Box(1.0, 2.0)

    @staticmethod
    def test_base_model():
        """BaseModels decode from mappings, coercing in lax mode."""
        assert TypeShape(User, strict=False).decode({"name": "ada", "age": "36"}) == User(
            name="ada", age=36
        )

    @staticmethod
    def test_error_detail_lists_locations():
        """Validation errors are flattened into 'loc: msg' parts."""
        with pytest.raises(ShapeError) as exc_info:
            TypeShape(Point).decode({"x": "left"})
        detail = exc_info.value.detail
        assert detail.startswith("x: ")
        assert "; y: Field required" in detail
        assert str(exc_info.value) == detail

    @staticmethod
    def test_root_error_location():
        """Errors at the root of the value use <root>."""
        with pytest.raises(ShapeError, match="^<root>: "):
            TypeShape(int).decode("not a number")

    @staticmethod
    @pytest.mark.parametrize(
        "annotation, raw",
        [(int, "5"), (float, "1.5"), (float, True), (str, 5), (bool, "yes")],
        ids=["str-int", "str-float", "bool-float", "int-str", "str-bool"],
    )
    def test_strict_by_default(annotation, raw):
        """Shapes do not coerce unless lax mode is asked for."""
        with pytest.raises(ShapeError):
            TypeShape(annotation).decode(raw)

    @staticmethod
    def test_lax_mode_is_opt_in():
        """strict=False enables pydantic's lax conversions."""
        assert TypeShape(int, strict=False).decode("5") == 5
        assert TypeShape(float, strict=False).decode(True) == 1.0

    @staticmethod
    def test_strict_accepts_int_for_float():
        """Ints are valid floats even in strict mode."""
        assert TypeShape(float).decode(2) == 2.0

    @pytest.mark.parametrize(
        "annotation, expected",
        [(int, "int"), (Point, "Point"), (list[int], "list[int]"), (dict[str, Any], "dict[str, Any]")],
    )
    @staticmethod
    def test_describe(annotation, expected):
        """describe() names the annotation."""
        assert TypeShape(annotation).describe() == expected

    @staticmethod
    def test_repr():
        """repr() includes the shape description."""
        assert repr(TypeShape(int)) == "TypeShape(int)"


def test_any_shape_accepts_everything():
    """AnyShape returns its input unchanged."""
    value = object()
    assert AnyShape().decode(value) is value
    assert AnyShape().describe() == "Any"


def test_as_shape():
    """as_shape wraps annotations and passes shapes through."""
    shape = TypeShape(int)
    assert as_shape(shape) is shape
    assert isinstance(as_shape(Any), AnyShape)
    assert isinstance(as_shape(int), TypeShape)
    assert as_shape(int).strict is True
    assert as_shape(int, strict=False).strict is False


def test_envelope_shape():
    """The envelope shape accepts (str, str, any) triples only."""
    assert isinstance(ENVELOPE_SHAPE, Shape)
    assert ENVELOPE_SHAPE.decode(["a", "b", None]) == ("a", "b", None)
    with pytest.raises(ShapeError):
        ENVELOPE_SHAPE.decode([1, "b", None])


@pytest.mark.parametrize(
    "raw",
    [{"a", "b", "c"}, frozenset({"a", "b", "c"}), (s for s in ("a", "b", "c")), "abc"],
    ids=["set", "frozenset", "generator", "string"],
)
def test_envelope_shape_requires_ordered_container(raw):
    """Iterables other than lists and tuples are not envelopes."""
    with pytest.raises(ShapeError, match="list or tuple, got"):
        ENVELOPE_SHAPE.decode(raw)


def test_ordered_shape_still_validates_items():
    """OrderedShape still applies the wrapped annotation to lists and tuples."""
    shape = OrderedShape(tuple[int, int], strict=False)
    assert shape.decode(["1", 2]) == (1, 2)
    with pytest.raises(ShapeError):
        shape.decode({1, 2})


@pytest.mark.parametrize(
    "value, expected", [({}, "dict"), (None, "NoneType"), (1.5, "float"), ([], "list")]
)
def test_type_name(value, expected):
    """type_name identifies a value's dynamic shape."""
    assert type_name(value) == expected
