import operator
from collections.abc import Callable
from numbers import Integral
from typing import Any

import numpy as np

from .propagation.build import build_array_term
from .propagation.eltype import element_type, promote_scalar_operands
from .propagation.registry import PropagationRegistry
from .propagation.rules.elementwise import Elementwise
from .symbolic.base import Symbolic
from .symbolic.factory import as_operand
from .symbolic.introspection import declared_type, is_array_typed
from .symbolic.nodes import Term
from .symbolic.types import ScalarType


def apply(
    op: Callable[..., Any], *args: Any, registry: PropagationRegistry | None = None
) -> Term:
    """Build the application `op(args...)`.

    Applications with at least one array-typed operand become array terms with
    propagated type and shape. Purely scalar applications become scalar terms
    whose element type is the numpy promotion of the operands.

    Raises
    ------
    PropagationError
        If an array term cannot be typed by the registered rules.
    TypeError
        If an operand is neither symbolic, numeric, nor an Array API array.
    """
    operands = tuple(as_operand(arg) for arg in args)
    if any(is_array_typed(operand) for operand in operands):
        return build_array_term(op, *operands, registry=registry)
    return Term(op, operands, promote_scalar_operands(operands))


def _check_index_key(key: Any) -> Any:
    if isinstance(key, bool):
        raise TypeError("boolean index keys are not supported")
    if isinstance(key, Integral):
        return int(key)
    if isinstance(key, Symbolic) and isinstance(declared_type(key), ScalarType):
        return key
    if isinstance(key, slice):
        raise TypeError("slices are not supported; use arrayop to build sub-arrays")
    raise TypeError(f"index keys must be index symbols, scalar nodes, or ints, got {key!r}")


def index(array: Any, key: Any) -> Term:
    """Build the scalar element access `array[key]`.

    Each key takes the next dimension of `array`, starting at dimension 1.
    """
    target = as_operand(array)
    if not is_array_typed(target):
        raise TypeError(f"cannot index non-array value {target!r}")
    keys = key if isinstance(key, tuple) else (key,)
    checked = tuple(_check_index_key(item) for item in keys)
    return Term(operator.getitem, (target, *checked), ScalarType(element_type(target)))


def matmul(left: Any, right: Any, *, registry: PropagationRegistry | None = None) -> Term:
    """Build the matrix product `left @ right`."""
    return apply(operator.matmul, left, right, registry=registry)


def transpose(value: Any, *, registry: PropagationRegistry | None = None) -> Term:
    """Build `numpy.transpose` of one array: axes in reverse order."""
    return apply(np.transpose, value, registry=registry)


def elementwise(
    fn: Callable[..., Any], *args: Any, registry: PropagationRegistry | None = None
) -> Term:
    """Apply `fn` to each element of the broadcast operands."""
    return apply(Elementwise(fn), *args, registry=registry)


__all__ = ["apply", "elementwise", "index", "matmul", "transpose"]
