from numbers import Number
from typing import Any

import numpy as np
from array_api_compat import is_array_api_obj

from .base import Symbolic
from .nodes import concrete_element_type
from .types import ArrayType, ContainerKind, ScalarType, SymType


def is_scalar_literal(value: Any) -> bool:
    """Return whether one value is a plain numeric literal."""
    return isinstance(value, Number | np.generic)


def is_concrete_array(value: Any) -> bool:
    """Return whether one value is a concrete Array API array."""
    return not is_scalar_literal(value) and is_array_api_obj(value)


def is_composite(node: Any) -> bool:
    """Return whether one node is an operator application."""
    return isinstance(node, Symbolic) and node.is_composite()


def head(node: Any) -> Any:
    """Return the operator of one composite node."""
    if not is_composite(node):
        raise TypeError(f"head is undefined for non-composite value {node!r}")
    return node.head()


def children(node: Any) -> tuple[Any, ...]:
    """Return the ordered operands of one composite node."""
    if not is_composite(node):
        raise TypeError(f"children is undefined for non-composite value {node!r}")
    return node.children()


def declared_type(node: Any) -> SymType:
    """Return the static value type of one node, literal, or concrete array.

    Raises
    ------
    TypeError
        If the value is neither symbolic, numeric, nor an Array API array.
    """
    if isinstance(node, Symbolic):
        return node.declared_type()
    if is_scalar_literal(node):
        return ScalarType(np.result_type(node))
    if is_concrete_array(node):
        return ArrayType(
            ContainerKind.PLAIN,
            concrete_element_type(node),
            len(node.shape),
        )
    raise TypeError(f"no declared type for value of type {type(node).__name__!r}")


def is_array_typed(node: Any) -> bool:
    """Return whether one operand is array-valued."""
    if isinstance(node, Symbolic):
        return isinstance(node.declared_type(), ArrayType)
    return is_concrete_array(node)


__all__ = [
    "children",
    "declared_type",
    "head",
    "is_array_typed",
    "is_composite",
    "is_concrete_array",
    "is_scalar_literal",
]
