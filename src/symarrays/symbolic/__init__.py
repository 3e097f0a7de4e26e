from .base import Symbolic
from .factory import array_symbol, as_operand, constant, index_symbols, scalar_symbol
from .introspection import (
    children,
    declared_type,
    head,
    is_array_typed,
    is_composite,
    is_concrete_array,
    is_scalar_literal,
)
from .nodes import Const, Sym, Term
from .render import render
from .types import ArrayType, ContainerKind, ElementType, Rank, ScalarType, SymType

__all__ = [
    "ArrayType",
    "Const",
    "ContainerKind",
    "ElementType",
    "Rank",
    "ScalarType",
    "Sym",
    "SymType",
    "Symbolic",
    "Term",
    "array_symbol",
    "as_operand",
    "children",
    "constant",
    "declared_type",
    "head",
    "index_symbols",
    "is_array_typed",
    "is_composite",
    "is_concrete_array",
    "is_scalar_literal",
    "render",
    "scalar_symbol",
]
