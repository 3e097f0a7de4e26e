import logging
from typing import Any

from ..diagnostics import ErrorCode, PropagationError
from ..shape.metadata import attach_shape
from ..shape.value import is_known_shape
from ..symbolic.factory import as_operand
from ..symbolic.nodes import Term
from ..symbolic.render import operator_name
from ..symbolic.types import ArrayType
from .container import propagate_container
from .eltype import propagate_eltype
from .registry import PropagationRegistry, describe_application
from .rules import register_builtin_rules

logger = logging.getLogger(__name__)

PROPAGATION_RULES = register_builtin_rules(PropagationRegistry())


def build_array_term(
    op: Any, *args: Any, registry: PropagationRegistry | None = None
) -> Term:
    """Build the array-typed application `op(args...)`.

    Container kind and element type are derived from the array-typed operands
    and may be `UNKNOWN`. Dimension count and shape come from the rules
    registered for `op` and must exist. The resulting shape is attached to the
    new term.

    Parameters
    ----------
    op
        Operator of the application.
    *args
        Operands; concrete arrays are wrapped as constants.
    registry
        Rule registry, `PROPAGATION_RULES` by default.

    Returns
    -------
    Term
        Term whose declared type is an `ArrayType`.

    Raises
    ------
    PropagationError
        If the dimension-count or shape rule is missing or fails.
    DimensionMismatchError
        If a rule finds contradicting operand axes.
    """
    rules = PROPAGATION_RULES if registry is None else registry
    operands = tuple(as_operand(arg) for arg in args)

    container = propagate_container(op, *operands)
    eltype = propagate_eltype(op, *operands)
    ndim = rules.propagate_ndims(op, *operands)
    shape = rules.propagate_shape(op, *operands)
    if is_known_shape(shape) and len(shape) != ndim:
        raise PropagationError(
            code=ErrorCode.INVALID_NDIMS,
            message=(
                f"shape rule for {operator_name(op)} produced {len(shape)} axes but "
                f"the dimension count is {ndim} for {describe_application(op, operands)}"
            ),
            related=("propagation registry",),
            data={"operator": operator_name(op), "arity": len(operands)},
        )

    term = Term(op, operands, ArrayType(container, eltype, ndim))
    attach_shape(term, shape)
    logger.debug(
        f"Built array term {term.to_text()}: container={container.value}, "
        f"eltype={eltype!r}, ndim={ndim}, shape={shape!r}"
    )
    return term


__all__ = ["PROPAGATION_RULES", "build_array_term"]
