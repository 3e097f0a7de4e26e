"""
Array queries answered from declared types and resolved shapes.

Queries never evaluate data. Anything that is not statically known raises
`UnknownQueryError`, so callers can either check first or catch and branch.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import product
from math import prod
from typing import Any

from .diagnostics import ErrorCode, UnknownQueryError
from .shape.metadata import shape_of
from .shape.value import ShapeAxes
from .symbolic.introspection import declared_type
from .symbolic.render import render
from .symbolic.types import ArrayType
from .unknown import UNKNOWN

IndexTuple = tuple[int, ...]


@dataclass(frozen=True, slots=True)
class IndexSpace:
    """Restartable lazy Cartesian product of array axes."""

    axes: tuple[range, ...]

    def __iter__(self) -> Iterator[IndexTuple]:
        return iter(product(*self.axes))

    def __len__(self) -> int:
        return prod(len(axis) for axis in self.axes)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != len(self.axes):
            return False
        return all(value in axis for value, axis in zip(item, self.axes, strict=True))


def _unknown(node: Any, code: ErrorCode, what: str) -> UnknownQueryError:
    text = render(node)
    return UnknownQueryError(
        code=code,
        message=f"{what} unknown for {text}",
        help="check the inferred value for UNKNOWN before querying it",
        related=("array query",),
        data={"node": text},
    )


def _known_shape(node: Any, what: str) -> ShapeAxes:
    shape = shape_of(node)
    if not isinstance(shape, ShapeAxes):
        raise _unknown(node, ErrorCode.UNKNOWN_SHAPE, what)
    return shape


def _check_dim(dim: Any) -> int:
    if isinstance(dim, bool) or not isinstance(dim, int):
        raise TypeError(f"dimension must be an int, got {dim!r}")
    if dim < 1:
        raise ValueError(f"dimension must be >= 1, got {dim}")
    return dim


def dimension_count(node: Any) -> int:
    """Return the number of dimensions of one node; scalars have zero."""
    node_type = declared_type(node)
    if not isinstance(node_type, ArrayType):
        return 0
    if node_type.ndim is UNKNOWN:
        raise _unknown(node, ErrorCode.UNKNOWN_NDIMS, "dimension count")
    return node_type.ndim


def element_type(node: Any) -> Any:
    """Return the element dtype of one node.

    Raises
    ------
    UnknownQueryError
        If the declared type leaves the element type free.
    """
    node_type = declared_type(node)
    eltype = node_type.eltype if isinstance(node_type, ArrayType) else node_type.dtype
    if eltype is UNKNOWN:
        raise _unknown(node, ErrorCode.UNKNOWN_ELTYPE, "element type")
    return eltype


def total_length(node: Any) -> int:
    """Return the product of the axis lengths of one node."""
    return _known_shape(node, "length").total_length()


def size(node: Any, dim: int | None = None) -> Any:
    """Return all axis lengths, or the length along 1-based `dim`.

    Dimensions past the rank have length 1.

    Raises
    ------
    UnknownQueryError
        If the shape is unknown.
    ValueError
        If `dim` is less than 1.
    """
    if dim is None:
        return _known_shape(node, "size").lengths()
    dim = _check_dim(dim)
    if dim > dimension_count(node):
        return 1
    return len(_known_shape(node, "size").axis(dim))


def axes(node: Any, dim: int | None = None) -> Any:
    """Return all axes, or the axis along 1-based `dim`.

    Dimensions past the rank have the trivial axis.

    Raises
    ------
    UnknownQueryError
        If the shape is unknown.
    ValueError
        If `dim` is less than 1.
    """
    shape = _known_shape(node, "axes")
    if dim is None:
        return tuple(shape)
    return shape.axis(_check_dim(dim))


def index_space(node: Any) -> IndexSpace:
    """Return the index tuples of one node as a restartable lazy sequence."""
    return IndexSpace(tuple(_known_shape(node, "index space")))


__all__ = [
    "IndexSpace",
    "axes",
    "dimension_count",
    "element_type",
    "index_space",
    "size",
    "total_length",
]
