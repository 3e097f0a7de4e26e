import logging
from typing import Any

from ..diagnostics import ErrorCode, ShapeMetadataError
from ..symbolic.base import Symbolic
from ..symbolic.introspection import is_concrete_array, is_scalar_literal
from ..symbolic.nodes import Const
from ..symbolic.types import ScalarType
from ..unknown import UNKNOWN
from .value import SCALAR_SHAPE, Shape, ShapeAxes, coerce_shape

logger = logging.getLogger(__name__)

_SHAPE_SLOT = "_shape"


def _concrete_shape(value: Any) -> Shape:
    """Read the shape of one concrete array; lazy dims make it unknown."""
    dims = tuple(value.shape)
    if any(dim is None for dim in dims):
        return UNKNOWN
    return ShapeAxes.from_spec(int(dim) for dim in dims)


def has_shape(node: Symbolic) -> bool:
    """Return whether shape metadata was attached to one node."""
    return getattr(node, _SHAPE_SLOT, None) is not None


def shape_of(node: Any) -> Shape:
    """Return the shape of one node, or `UNKNOWN` when none was recorded.

    Scalars have the zero-dimensional shape. Concrete arrays report the shape
    of the array itself.

    Raises
    ------
    TypeError
        If the value is neither symbolic, numeric, nor an Array API array.
    """
    if isinstance(node, Symbolic):
        shape = getattr(node, _SHAPE_SLOT, None)
        if shape is not None:
            return shape
        if isinstance(node, Const):
            return _concrete_shape(node.value)
        if isinstance(node.declared_type(), ScalarType):
            return SCALAR_SHAPE
        return UNKNOWN
    if is_scalar_literal(node):
        return SCALAR_SHAPE
    if is_concrete_array(node):
        return _concrete_shape(node)
    raise TypeError(f"no shape for value of type {type(node).__name__!r}")


def attach_shape(node: Symbolic, shape: Any) -> Shape:
    """Record the shape of one node; each node accepts exactly one write.

    Raises
    ------
    ShapeMetadataError
        If a shape was already attached to this node.
    """
    if not isinstance(node, Symbolic):
        raise TypeError("shape metadata can only be attached to symbolic nodes")
    normalized = coerce_shape(shape)
    if has_shape(node):
        raise ShapeMetadataError(
            code=ErrorCode.SHAPE_ALREADY_ATTACHED,
            message=(
                "shape already attached: "
                f"{node.to_text()} already carries {getattr(node, _SHAPE_SLOT)!r}"
            ),
            help="shape metadata is written once, when the node is built",
            related=("shape metadata",),
            data={"node": node.to_text()},
        )
    object.__setattr__(node, _SHAPE_SLOT, normalized)
    logger.debug(f"Attached shape {normalized!r} to {node.to_text()}")
    return normalized


__all__ = ["attach_shape", "has_shape", "shape_of"]
