from collections import Counter
from collections.abc import Iterable
from typing import Any

from ..config import INDEX_ELEMENT_TYPE
from ..unknown import UNKNOWN
from .base import Symbolic
from .introspection import is_concrete_array, is_scalar_literal
from .nodes import Const, Sym
from .types import ArrayType, ContainerKind, Rank, ScalarType


def _check_names(names: tuple[str, ...], *, kind: str) -> tuple[str, ...]:
    """Check one-name-per-argument declarations."""
    if not names:
        raise ValueError(f"{kind} declaration requires at least one name")
    if not all(isinstance(name, str) for name in names):
        raise TypeError(f"{kind} names must be strings")
    if any(len(name.split()) > 1 for name in names):
        raise ValueError(f"pass {kind} names one per argument: {names!r}")

    repeated = [name for name, count in Counter(names).items() if count > 1]
    if repeated:
        raise ValueError(f"duplicate {kind} names: {repeated}")
    return names


def index_symbols(*names: str) -> tuple[Sym, ...]:
    """Create integer index symbols.

    Parameters
    ----------
    *names
        Index names, one name per argument.

    Returns
    -------
    tuple[Sym, ...]
        Index symbols in declaration order.

    Raises
    ------
    ValueError
        If no names are provided, if names are duplicated, or if a name is invalid.
    """
    return tuple(
        Sym(name, ScalarType(INDEX_ELEMENT_TYPE)) for name in _check_names(names, kind="index")
    )


def scalar_symbol(name: str, dtype: Any = UNKNOWN) -> Sym:
    """Create one scalar symbol with element type `dtype`."""
    return Sym(name, ScalarType(dtype))


def array_symbol(
    name: str,
    *,
    shape: Iterable[range | int] | None = None,
    dtype: Any = UNKNOWN,
    ndim: Rank | None = None,
    container: ContainerKind = ContainerKind.PLAIN,
) -> Sym:
    """Create one array symbol.

    Parameters
    ----------
    name
        Symbol name.
    shape
        Axis ranges or lengths; omit for an array of unknown shape.
    dtype
        Element type, `UNKNOWN` by default.
    ndim
        Rank; derived from `shape` when given. Required when `shape` is omitted
        unless the rank is meant to stay a free parameter.
    container
        Container kind of the array.

    Raises
    ------
    ValueError
        If `ndim` contradicts the length of `shape`.
    """
    from ..shape.metadata import attach_shape
    from ..shape.value import ShapeAxes

    known_shape = None if shape is None else ShapeAxes.from_spec(shape)
    if known_shape is not None:
        if ndim is not None and ndim is not UNKNOWN and ndim != len(known_shape):
            raise ValueError(
                f"array {name!r} declares ndim={ndim} but its shape has "
                f"{len(known_shape)} axes"
            )
        rank: Rank = len(known_shape)
    else:
        rank = UNKNOWN if ndim is None else ndim

    symbol = Sym(name, ArrayType(container, dtype, rank))
    attach_shape(symbol, UNKNOWN if known_shape is None else known_shape)
    return symbol


def constant(value: Any) -> Const:
    """Wrap one concrete Array API array as a symbolic constant."""
    from ..shape.metadata import attach_shape, shape_of

    node = Const(value)
    attach_shape(node, shape_of(value))
    return node


def as_operand(value: Any) -> Any:
    """Normalize one operand: nodes and literals pass, arrays become constants."""
    if isinstance(value, Symbolic) or is_scalar_literal(value):
        return value
    if is_concrete_array(value):
        return constant(value)
    raise TypeError(f"unsupported operand of type {type(value).__name__!r}")


__all__ = [
    "array_symbol",
    "as_operand",
    "constant",
    "index_symbols",
    "scalar_symbol",
]
