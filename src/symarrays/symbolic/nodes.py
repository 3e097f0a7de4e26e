from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, NoReturn

import numpy as np
from array_api_compat import array_namespace

from ..unknown import UNKNOWN
from .base import Symbolic
from .render import render_application
from .types import ArrayType, ContainerKind, ElementType, ScalarType, SymType


def _validate_identifier(name: str, *, kind: str) -> None:
    """Validate one symbol name."""
    if not isinstance(name, str):
        raise TypeError(f"{kind} name must be a string")
    if not name:
        raise ValueError(f"{kind} name cannot be empty")
    if not name.isidentifier():
        raise ValueError(f"{kind} name must be a valid identifier: {name!r}")


def _not_composite(node: Symbolic, accessor: str) -> NoReturn:
    raise TypeError(f"{accessor} is undefined for leaf node {node.to_text()!r}")


@dataclass(frozen=True, slots=True)
class Sym(Symbolic):
    """Named symbolic leaf (scalar, index, or array variable)."""

    name: str
    symtype: SymType
    _shape: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _validate_identifier(self.name, kind="symbol")
        if not isinstance(self.symtype, ScalarType | ArrayType):
            raise TypeError("symbol type must be ScalarType or ArrayType")

    def is_composite(self) -> bool:
        return False

    def head(self) -> NoReturn:
        _not_composite(self, "head")

    def children(self) -> NoReturn:
        _not_composite(self, "children")

    def declared_type(self) -> SymType:
        return self.symtype

    def to_text(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Term(Symbolic):
    """Application of an operator to an ordered operand tuple."""

    op: Callable[..., Any]
    args: tuple[Any, ...]
    symtype: SymType
    _shape: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not callable(self.op):
            raise TypeError(f"term operator must be callable, got {self.op!r}")
        object.__setattr__(self, "args", tuple(self.args))
        if not isinstance(self.symtype, ScalarType | ArrayType):
            raise TypeError("term type must be ScalarType or ArrayType")

    def is_composite(self) -> bool:
        return True

    def head(self) -> Callable[..., Any]:
        return self.op

    def children(self) -> tuple[Any, ...]:
        return self.args

    def declared_type(self) -> SymType:
        return self.symtype

    def to_text(self) -> str:
        return render_application(self.op, self.args)


def concrete_element_type(value: Any) -> ElementType:
    """Return the numpy dtype of one concrete array, or `UNKNOWN`."""
    try:
        return np.dtype(value.dtype)
    except (AttributeError, TypeError):
        return UNKNOWN


@dataclass(frozen=True, slots=True, eq=False)
class Const(Symbolic):
    """Leaf wrapping one concrete Array API array.

    Constants compare by identity; their shape comes from the wrapped array.
    """

    value: Any
    symtype: ArrayType = field(init=False)
    _shape: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            array_namespace(self.value)
        except TypeError as exc:
            raise TypeError(
                f"constant of type {type(self.value).__name__!r} "
                "is not Array API compatible"
            ) from exc
        object.__setattr__(
            self,
            "symtype",
            ArrayType(
                ContainerKind.PLAIN,
                concrete_element_type(self.value),
                len(self.value.shape),
            ),
        )

    def is_composite(self) -> bool:
        return False

    def head(self) -> NoReturn:
        _not_composite(self, "head")

    def children(self) -> NoReturn:
        _not_composite(self, "children")

    def declared_type(self) -> ArrayType:
        return self.symtype

    def to_text(self) -> str:
        dims = "x".join("?" if dim is None else str(dim) for dim in self.value.shape)
        return f"const[{dims or 'scalar'}, {self.symtype.eltype}]"


__all__ = ["Const", "Sym", "Term", "concrete_element_type"]
