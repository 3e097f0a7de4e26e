from typing import Any

from ...diagnostics import DimensionMismatchError, ErrorCode, PropagationError
from ...shape.metadata import shape_of
from ...shape.value import Shape, ShapeAxes
from ...symbolic.render import operator_name, render
from ...symbolic.types import Rank
from ...unknown import UNKNOWN
from ..registry import describe_application
from .elementwise import broadcast_axes, operand_rank


def _unsupported(op: Any, args: tuple[Any, ...], reason: str) -> PropagationError:
    return PropagationError(
        code=ErrorCode.UNSUPPORTED_OPERANDS,
        message=f"unsupported operands for {describe_application(op, args)}: {reason}",
        related=(f"{operator_name(op)} rule",),
        data={"operator": operator_name(op), "arity": len(args)},
    )


def matmul_ndims(op: Any, left: Any, right: Any) -> Rank:
    """Rank of `left @ right` following numpy matmul semantics."""
    left_rank = operand_rank(left)
    right_rank = operand_rank(right)
    if left_rank is UNKNOWN or right_rank is UNKNOWN:
        return UNKNOWN
    if left_rank == 0 or right_rank == 0:
        raise _unsupported(op, (left, right), "scalars not allowed as arguments")
    if left_rank == 1 and right_rank == 1:
        return 0
    if left_rank == 1:
        return right_rank - 1
    if right_rank == 1:
        return left_rank - 1
    return max(left_rank, right_rank)


def matmul_shape(op: Any, left: Any, right: Any) -> Shape:
    """Shape of `left @ right`; the contracted axes must agree when known."""
    left_shape = shape_of(left)
    right_shape = shape_of(right)
    if left_shape is UNKNOWN or right_shape is UNKNOWN:
        return UNKNOWN
    if not left_shape or not right_shape:
        raise _unsupported(op, (left, right), "scalars not allowed as arguments")

    left_inner = left_shape[-1]
    right_inner = right_shape[0] if len(right_shape) == 1 else right_shape[-2]
    if left_inner != right_inner:
        raise DimensionMismatchError(
            code=ErrorCode.DIMENSION_MISMATCH,
            message=(
                f"dimension mismatch: contracted axes of {render(left)} and "
                f"{render(right)} differ ({left_inner!r} vs {right_inner!r})"
            ),
            help="the last axis of the left operand must match the contracted axis "
            "of the right operand",
            related=("matmul rule",),
            data={
                "array": render(right),
                "dimension": max(len(right_shape) - 1, 1),
                "expected": repr(left_inner),
                "got": repr(right_inner),
            },
        )

    left_stack = ShapeAxes(left_shape[:-2])
    right_stack = ShapeAxes(right_shape[:-2])
    axes = list(broadcast_axes(op, [left_stack, right_stack]))
    if len(left_shape) >= 2:
        axes.append(left_shape[-2])
    if len(right_shape) >= 2:
        axes.append(right_shape[-1])
    return ShapeAxes(tuple(axes))


def transpose_ndims(op: Any, operand: Any) -> Rank:
    """Rank of `numpy.transpose`: unchanged."""
    _ = op
    return operand_rank(operand)


def transpose_shape(op: Any, operand: Any) -> Shape:
    """Shape of `numpy.transpose`: axes in reverse order, vectors unchanged."""
    _ = op
    shape = shape_of(operand)
    if shape is UNKNOWN:
        return UNKNOWN
    return ShapeAxes(tuple(reversed(shape)))


__all__ = ["matmul_ndims", "matmul_shape", "transpose_ndims", "transpose_shape"]
