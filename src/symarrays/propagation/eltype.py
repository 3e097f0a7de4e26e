from collections.abc import Iterable
from typing import Any

import numpy as np

from ..config import DEFAULT_ELEMENT_TYPE
from ..symbolic.base import Symbolic
from ..symbolic.introspection import declared_type, is_array_typed
from ..symbolic.types import ArrayType, ElementType, ScalarType
from ..unknown import UNKNOWN


def join_element_types(items: Iterable[Any]) -> ElementType:
    """Join element types with numpy promotion.

    Items are dtypes, `UNKNOWN`, or Python scalars (promoted as weak scalars).
    Any `UNKNOWN` makes the join unknown; no items gives the default type.
    """
    collected: list[Any] = []
    for item in items:
        if item is UNKNOWN:
            return UNKNOWN
        collected.append(item)
    if not collected:
        return DEFAULT_ELEMENT_TYPE
    return np.result_type(*collected)


def element_type(operand: Any) -> ElementType:
    """Return the declared element dtype of one operand, or `UNKNOWN`."""
    operand_type = declared_type(operand)
    if isinstance(operand_type, ArrayType):
        return operand_type.eltype
    return operand_type.dtype


def propagate_eltype(op: Any, *args: Any) -> ElementType:
    """Element type of array term `op(args...)`, joined over array operands."""
    _ = op
    return join_element_types(element_type(arg) for arg in args if is_array_typed(arg))


def promote_scalar_operands(args: Iterable[Any]) -> ScalarType:
    """Declared type of a scalar application over `args`."""
    items: list[Any] = []
    for arg in args:
        if isinstance(arg, Symbolic):
            items.append(element_type(arg))
        else:
            items.append(arg)
    return ScalarType(join_element_types(items))


__all__ = [
    "element_type",
    "join_element_types",
    "promote_scalar_operands",
    "propagate_eltype",
]
