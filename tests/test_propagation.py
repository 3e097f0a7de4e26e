import operator
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from symarrays import (
    PROPAGATION_RULES,
    UNKNOWN,
    ArrayType,
    ContainerKind,
    PropagationError,
    PropagationRegistry,
    ScalarType,
    Term,
    array_symbol,
    build_array_term,
    declared_type,
    scalar_symbol,
    shape_of,
)
from symarrays.propagation import (
    combine_container_kinds,
    fold_container_kinds,
    join_element_types,
    propagate_container,
    propagate_eltype,
)
from symarrays.shape import ShapeAxes

PLAIN = ContainerKind.PLAIN
SPECIALIZED = ContainerKind.SPECIALIZED
ABSTRACT = ContainerKind.ABSTRACT


def kron(left: object, right: object) -> object:
    return np.kron(left, right)


def _kron_registry() -> PropagationRegistry:
    registry = PropagationRegistry()

    @registry.ndims_rule(kron, arity=2)
    def kron_ndims(op: object, left: object, right: object) -> int:
        _ = op, left, right
        return 2

    @registry.shape_rule(kron, arity=2)
    def kron_shape(op: object, left: object, right: object) -> object:
        _ = op
        left_shape = shape_of(left)
        right_shape = shape_of(right)
        if left_shape is UNKNOWN or right_shape is UNKNOWN:
            return UNKNOWN
        return tuple(
            len(a) * len(b) for a, b in zip(left_shape, right_shape, strict=True)
        )

    return registry


def test_identical_container_kinds_propagate() -> None:
    for kind in (PLAIN, SPECIALIZED, ABSTRACT):
        assert combine_container_kinds(kind, kind) is kind


def test_mixed_container_kinds_collapse_to_plain() -> None:
    assert combine_container_kinds(PLAIN, SPECIALIZED) is PLAIN
    assert combine_container_kinds(SPECIALIZED, PLAIN) is PLAIN
    assert combine_container_kinds(ABSTRACT, SPECIALIZED) is PLAIN
    assert combine_container_kinds(SPECIALIZED, ABSTRACT) is PLAIN
    assert combine_container_kinds(ABSTRACT, PLAIN) is PLAIN
    assert combine_container_kinds(PLAIN, ABSTRACT) is PLAIN


def test_container_fold_is_order_independent() -> None:
    kinds = (SPECIALIZED, SPECIALIZED, ABSTRACT)
    assert fold_container_kinds(kinds) is PLAIN
    assert fold_container_kinds(reversed(kinds)) is PLAIN
    assert fold_container_kinds((SPECIALIZED,) * 3) is SPECIALIZED


def test_container_fold_of_zero_or_one_kind() -> None:
    assert fold_container_kinds(()) is ABSTRACT
    assert fold_container_kinds((SPECIALIZED,)) is SPECIALIZED


def test_container_propagation_ignores_scalar_operands() -> None:
    a = array_symbol("a", shape=(2,), container=SPECIALIZED)
    b = array_symbol("b", shape=(2,), container=SPECIALIZED)
    s = scalar_symbol("s", "float64")

    assert propagate_container(operator.add, a, s, b, 2.0) is SPECIALIZED
    assert propagate_container(operator.add, s, 2.0) is ABSTRACT


def test_element_type_join_follows_numpy_promotion() -> None:
    assert join_element_types([np.dtype("float32"), np.dtype("int64")]) == np.dtype(
        "float64"
    )
    assert join_element_types([np.dtype("int8"), np.dtype("int16")]) == np.dtype("int16")
    assert join_element_types([]) == np.dtype("float64")
    assert join_element_types([np.dtype("float64"), UNKNOWN]) is UNKNOWN


def test_element_type_propagation_uses_array_operands_only() -> None:
    a = array_symbol("a", shape=(2,), dtype="float32")
    s = scalar_symbol("s", "float64")

    assert propagate_eltype(operator.mul, a, s) == np.dtype("float32")
    assert propagate_eltype(operator.mul, s) == np.dtype("float64")


def test_concrete_scenario_missing_ndims_rule_names_the_operator() -> None:
    M = array_symbol("M", shape=(2, 3))
    v = array_symbol("v", shape=(3,))

    with pytest.raises(PropagationError) as error:
        build_array_term(operator.matmul, M, v, registry=PropagationRegistry())

    assert error.value.code == "missing_ndims_rule"
    assert error.value.data["operator"] == "matmul"
    assert "matmul(M, v)" in error.value.message


def test_missing_shape_rule_is_fatal() -> None:
    registry = PropagationRegistry()
    registry.register_ndims(operator.matmul, lambda op, left, right: 1, arity=2)
    M = array_symbol("M", shape=(2, 3))
    v = array_symbol("v", shape=(3,))

    with pytest.raises(PropagationError) as error:
        build_array_term(operator.matmul, M, v, registry=registry)

    assert error.value.code == "missing_shape_rule"


def test_concrete_scenario_unknown_element_type_keeps_resolved_shape() -> None:
    x = array_symbol("x", shape=(3,), dtype="float64")
    y = array_symbol("y", shape=(3,))

    term = build_array_term(operator.add, x, y)

    assert declared_type(term) == ArrayType(PLAIN, UNKNOWN, 1)
    assert shape_of(term) == (range(0, 3),)


def test_shape_is_attached_when_every_typing_facet_but_rank_is_unknown() -> None:
    x = array_symbol("x", ndim=1)
    y = array_symbol("y", ndim=1)

    term = build_array_term(operator.sub, x, y)

    assert declared_type(term) == ArrayType(PLAIN, UNKNOWN, 1)
    assert shape_of(term) is UNKNOWN


def test_unknown_rank_makes_dimension_count_propagation_fail() -> None:
    x = array_symbol("x", shape=(3,))
    free = array_symbol("free")

    with pytest.raises(PropagationError) as error:
        build_array_term(operator.add, x, free)

    assert error.value.code == "invalid_ndims"


def test_negative_rank_from_a_rule_is_rejected() -> None:
    registry = PropagationRegistry()
    registry.register(
        kron,
        ndims=lambda op, left, right: -1,
        shape=lambda op, left, right: UNKNOWN,
    )
    a = array_symbol("a", shape=(2,))

    with pytest.raises(PropagationError):
        build_array_term(kron, a, a, registry=registry)


def test_shape_rule_must_agree_with_dimension_count() -> None:
    registry = PropagationRegistry()
    registry.register(
        kron,
        ndims=lambda op, left, right: 1,
        shape=lambda op, left, right: (2, 2),
    )
    a = array_symbol("a", shape=(2,))

    with pytest.raises(PropagationError) as error:
        build_array_term(kron, a, a, registry=registry)

    assert error.value.code == "invalid_ndims"


def test_custom_rules_drive_term_construction() -> None:
    registry = _kron_registry()
    A = array_symbol("A", shape=(2, 3), dtype="float32")
    B = array_symbol("B", shape=(4, 5), dtype="float64")

    term = build_array_term(kron, A, B, registry=registry)

    assert isinstance(term, Term)
    assert term.op is kron
    assert term.args == (A, B)
    assert declared_type(term) == ArrayType(PLAIN, np.dtype("float64"), 2)
    assert shape_of(term) == ShapeAxes.from_spec((8, 15))


def test_registry_lookup_prefers_exact_arity() -> None:
    registry = PropagationRegistry()

    def exact(op: object, *args: object) -> int:
        return 1

    def variadic(op: object, *args: object) -> int:
        return 2

    registry.register_ndims(kron, exact, arity=2)
    registry.register_ndims(kron, variadic)

    assert registry.lookup("ndims", kron, 2) is exact
    assert registry.lookup("ndims", kron, 3) is variadic
    assert registry.lookup("shape", kron, 2) is None


def test_registry_lookup_falls_back_to_operator_type() -> None:
    class Scaled:
        def __init__(self, factor: float) -> None:
            self.factor = factor

        def __call__(self, value: object) -> object:
            return value

    registry = PropagationRegistry()

    def family_rule(op: object, *args: object) -> int:
        return 1

    registry.register_ndims(Scaled, family_rule)

    assert registry.lookup("ndims", Scaled(2.0), 1) is family_rule


def test_registry_rejects_invalid_registrations() -> None:
    registry = PropagationRegistry()
    with pytest.raises(TypeError):
        registry.register_ndims(kron, "rule")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        registry.register_ndims(kron, lambda op: 0, arity=-1)


def test_registry_copy_is_independent() -> None:
    registry = PROPAGATION_RULES.copy()
    registry.register(kron, ndims=lambda op, *args: 2, shape=lambda op, *args: UNKNOWN)

    assert registry.lookup("ndims", operator.add, 2) is not None
    assert registry.lookup("ndims", kron, 2) is not None
    assert PROPAGATION_RULES.lookup("ndims", kron, 2) is None


def test_registry_accepts_concurrent_registration() -> None:
    registry = PropagationRegistry()
    operators = [operator.add, operator.sub, operator.mul] * 10

    def register(op: object) -> None:
        registry.register(op, ndims=lambda op, *args: 0, shape=lambda op, *args: ())

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(register, operators))

    for op in (operator.add, operator.sub, operator.mul):
        assert registry.lookup("shape", op, 2) is not None


def test_scalar_applications_are_not_array_terms() -> None:
    s = scalar_symbol("s", "float32")

    term = s * 2

    assert declared_type(term) == ScalarType(np.dtype("float32"))
    assert shape_of(term) == ()
