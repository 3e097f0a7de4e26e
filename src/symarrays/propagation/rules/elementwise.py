import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ...diagnostics import DimensionMismatchError, ErrorCode
from ...shape.metadata import shape_of
from ...shape.value import Shape, ShapeAxes
from ...symbolic.introspection import declared_type
from ...symbolic.render import operator_name, render
from ...symbolic.types import ArrayType, Rank
from ...unknown import UNKNOWN

ELEMENTWISE_OPERATORS: tuple[Callable[..., Any], ...] = (
    operator.add,
    operator.sub,
    operator.mul,
    operator.truediv,
    operator.pow,
    operator.neg,
    operator.pos,
    operator.abs,
)


@dataclass(frozen=True, slots=True)
class Elementwise:
    """Operator applying `fn` to each element of broadcast operands."""

    fn: Callable[..., Any]

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError("elementwise function must be callable")

    @property
    def __name__(self) -> str:
        return f"{operator_name(self.fn)}."

    def __call__(self, *args: Any) -> Any:
        return self.fn(*args)


def operand_rank(operand: Any) -> Rank:
    """Return the declared rank of one operand; scalars have rank 0."""
    operand_type = declared_type(operand)
    if isinstance(operand_type, ArrayType):
        return operand_type.ndim
    return 0


def elementwise_ndims(op: Any, *args: Any) -> Rank:
    """Rank of a broadcast result: the largest operand rank."""
    _ = op
    ranks = [operand_rank(arg) for arg in args]
    if any(rank is UNKNOWN for rank in ranks):
        return UNKNOWN
    return max(ranks, default=0)


def broadcast_axes(op: Any, shapes: list[ShapeAxes]) -> ShapeAxes:
    """Broadcast known shapes, aligning trailing dimensions.

    Length-1 axes stretch; all other axes at one position must be equal.
    """
    ndim = max((len(shape) for shape in shapes), default=0)
    result: list[range] = []
    for position in range(ndim):
        chosen: range | None = None
        stretchable: range | None = None
        for shape in shapes:
            offset = ndim - len(shape)
            if position < offset:
                continue
            axis = shape[position - offset]
            if len(axis) == 1:
                if stretchable is None:
                    stretchable = axis
                continue
            if chosen is None:
                chosen = axis
                continue
            if axis != chosen:
                raise DimensionMismatchError(
                    code=ErrorCode.DIMENSION_MISMATCH,
                    message=(
                        f"dimension mismatch: cannot broadcast {chosen!r} with "
                        f"{axis!r} in {operator_name(op)}"
                    ),
                    help="broadcast operands must agree on every non-singleton axis",
                    related=("broadcasting",),
                    data={
                        "operator": operator_name(op),
                        "dimension": position + 1,
                        "expected": repr(chosen),
                        "got": repr(axis),
                    },
                )
        if chosen is None:
            chosen = stretchable
        assert chosen is not None
        result.append(chosen)
    return ShapeAxes(tuple(result))


def elementwise_shape(op: Any, *args: Any) -> Shape:
    """Shape of a broadcast result, `UNKNOWN` if any operand shape is unknown."""
    shapes = [shape_of(arg) for arg in args]
    known: list[ShapeAxes] = []
    for arg, shape in zip(args, shapes, strict=True):
        if shape is UNKNOWN:
            return UNKNOWN
        if not isinstance(shape, ShapeAxes):
            raise TypeError(f"unexpected shape for {render(arg)}: {shape!r}")
        known.append(shape)
    return broadcast_axes(op, known)


__all__ = [
    "ELEMENTWISE_OPERATORS",
    "Elementwise",
    "broadcast_axes",
    "elementwise_ndims",
    "elementwise_shape",
    "operand_rank",
]
