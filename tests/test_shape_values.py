import copy
import pickle

import numpy as np
import pytest

from symarrays import (
    UNKNOWN,
    ArrayType,
    ContainerKind,
    ShapeAxes,
    ShapeMetadataError,
    Sym,
    Unknown,
    array_symbol,
    attach_shape,
    is_unknown,
    scalar_symbol,
    shape_of,
)
from symarrays.shape import SCALAR_SHAPE, coerce_shape, has_shape, is_known_shape


def test_unknown_is_a_falsy_singleton() -> None:
    assert Unknown() is UNKNOWN
    assert not UNKNOWN
    assert repr(UNKNOWN) == "UNKNOWN"
    assert is_unknown(UNKNOWN)
    assert not is_unknown(None)


def test_unknown_survives_copy_and_pickle() -> None:
    assert copy.copy(UNKNOWN) is UNKNOWN
    assert copy.deepcopy(UNKNOWN) is UNKNOWN
    assert pickle.loads(pickle.dumps(UNKNOWN)) is UNKNOWN


def test_shape_axes_from_lengths_and_ranges() -> None:
    shape = ShapeAxes.from_spec((2, range(1, 4)))
    assert shape == (range(0, 2), range(1, 4))
    assert shape.ndim == 2
    assert shape.lengths() == (2, 3)
    assert shape.total_length() == 6


def test_shape_axes_axis_is_one_based_with_trivial_tail() -> None:
    shape = ShapeAxes.from_spec((2, 3))
    assert shape.axis(1) == range(0, 2)
    assert shape.axis(2) == range(0, 3)
    assert shape.axis(7) == range(0, 1)
    with pytest.raises(ValueError):
        shape.axis(0)


def test_shape_axes_rejects_invalid_axes() -> None:
    with pytest.raises(ValueError):
        ShapeAxes.from_spec((-1,))
    with pytest.raises(TypeError):
        ShapeAxes.from_spec((2.5,))
    with pytest.raises(TypeError):
        ShapeAxes.from_spec((True,))


def test_scalar_shape_is_zero_dimensional() -> None:
    assert SCALAR_SHAPE == ()
    assert SCALAR_SHAPE.total_length() == 1
    assert is_known_shape(SCALAR_SHAPE)
    assert not is_known_shape(UNKNOWN)


def test_coerce_shape_keeps_unknown() -> None:
    assert coerce_shape(UNKNOWN) is UNKNOWN
    assert coerce_shape([3]) == (range(0, 3),)


def test_shape_of_scalars_and_literals() -> None:
    s = scalar_symbol("s", "float64")
    assert shape_of(s) == ()
    assert shape_of(2.0) == ()
    assert shape_of(np.float32(1.0)) == ()


def test_shape_of_concrete_array_reads_array_shape() -> None:
    assert shape_of(np.zeros((2, 5))) == (range(0, 2), range(0, 5))


def test_shape_of_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError):
        shape_of("A")


def test_attach_shape_is_write_once() -> None:
    node = Sym("X", ArrayType(ContainerKind.PLAIN, "float64", 1))
    assert not has_shape(node)
    assert shape_of(node) is UNKNOWN

    attached = attach_shape(node, (3,))
    assert attached == (range(0, 3),)
    assert has_shape(node)

    with pytest.raises(ShapeMetadataError) as error:
        attach_shape(node, (4,))
    assert error.value.code == "shape_already_attached"
    assert shape_of(node) == (range(0, 3),)


def test_attached_unknown_shape_counts_as_written() -> None:
    A = array_symbol("A", ndim=1)
    assert has_shape(A)
    with pytest.raises(ShapeMetadataError):
        attach_shape(A, (3,))


def test_shape_slot_is_ignored_by_equality_and_hashing() -> None:
    left = Sym("X", ArrayType(ContainerKind.PLAIN, "float64", 1))
    right = Sym("X", ArrayType(ContainerKind.PLAIN, "float64", 1))
    attach_shape(left, (3,))
    attach_shape(right, (4,))
    assert left == right
    assert hash(left) == hash(right)
    assert shape_of(left) != shape_of(right)


def test_attach_shape_rejects_non_symbolic_values() -> None:
    with pytest.raises(TypeError):
        attach_shape(np.zeros(3), (3,))  # type: ignore[arg-type]
