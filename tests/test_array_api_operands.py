import numpy as np
import pytest

from symarrays import (
    ArrayType,
    Const,
    ContainerKind,
    DimensionMismatchError,
    array_symbol,
    arrayop,
    constant,
    declared_type,
    index_symbols,
    render,
    shape_of,
)
from symarrays.symbolic import (
    as_operand,
    is_array_typed,
    is_concrete_array,
    is_scalar_literal,
)


def test_constant_reads_shape_and_dtype_from_the_array() -> None:
    c = constant(np.ones((2, 3), dtype=np.float32))

    assert isinstance(c, Const)
    assert declared_type(c) == ArrayType(ContainerKind.PLAIN, np.dtype("float32"), 2)
    assert shape_of(c) == (range(0, 2), range(0, 3))
    assert render(c) == "const[2x3, float32]"


def test_constants_compare_by_identity() -> None:
    data = np.arange(3.0)
    first = constant(data)
    second = constant(data)

    assert first == first
    assert first != second


def test_constant_rejects_non_array_values() -> None:
    with pytest.raises(TypeError):
        constant([1.0, 2.0])


def test_operand_normalization() -> None:
    A = array_symbol("A", shape=(3,))

    assert as_operand(A) is A
    assert as_operand(2) == 2
    assert isinstance(as_operand(np.zeros(3)), Const)
    with pytest.raises(TypeError):
        as_operand("A")


def test_literal_and_array_classification() -> None:
    assert is_scalar_literal(1.5)
    assert is_scalar_literal(np.int32(4))
    assert not is_scalar_literal(np.zeros(2))
    assert is_concrete_array(np.zeros(2))
    assert not is_concrete_array(np.float64(1.0))
    assert is_array_typed(np.zeros(2))
    assert not is_array_typed(3)


def test_arrays_mix_with_symbolic_operands() -> None:
    M = array_symbol("M", shape=(2, 3), dtype="float32")
    x = np.ones((2, 3))

    total = M + x

    assert declared_type(total).eltype == np.dtype("float64")
    assert shape_of(total) == (range(0, 2), range(0, 3))
    assert isinstance(total.args[1], Const)


def test_numpy_defers_to_symbolic_operands() -> None:
    v = array_symbol("v", shape=(3,))

    total = np.ones(3) + v

    assert isinstance(declared_type(total), ArrayType)
    assert shape_of(total) == (range(0, 3),)


def test_constant_shapes_take_part_in_index_checks() -> None:
    (i,) = index_symbols("i")
    c = constant(np.arange(3.0))
    A = array_symbol("A", shape=(3,))
    B = array_symbol("B", shape=(4,))

    assert arrayop((i,), c[i] * A[i]).shape == (range(0, 3),)
    with pytest.raises(DimensionMismatchError):
        arrayop((i,), c[i] * B[i])


def test_constant_with_symbolic_broadcast_mismatch() -> None:
    v = array_symbol("v", shape=(4,))

    with pytest.raises(DimensionMismatchError):
        v + np.zeros(3)


def test_bare_constant_nodes_report_the_array_shape() -> None:
    node = Const(np.zeros((2, 4)))

    assert shape_of(node) == (range(0, 2), range(0, 4))
