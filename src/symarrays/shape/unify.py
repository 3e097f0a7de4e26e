import logging
from collections.abc import Sequence
from typing import Any

from ..config import TRIVIAL_AXIS
from ..diagnostics import DimensionMismatchError, ErrorCode, UnresolvedIndexError
from ..symbolic.nodes import Sym
from ..symbolic.render import render
from ..unknown import UNKNOWN, Unknown
from .resolve import AxisOccurrence, IndexUsageMap, collect_index_usage
from .value import Shape, ShapeAxes

logger = logging.getLogger(__name__)


def check_index_consistency(usage: IndexUsageMap) -> dict[Sym, range]:
    """Cross-check every statically known axis of each index symbol.

    Returns the reference axis of each symbol that has at least one usage on
    an array of known shape.

    Raises
    ------
    DimensionMismatchError
        If two known usages of one symbol disagree.
    """
    references: dict[Sym, range] = {}
    for symbol, occurrences in usage.items():
        known = [occurrence for occurrence in occurrences if occurrence.has_known_shape()]
        if not known:
            logger.debug(f"Index {symbol.name}: no usage with known shape")
            continue

        reference_occurrence = known[0]
        reference = reference_occurrence.axis()
        references[symbol] = reference
        for occurrence in known[1:]:
            axis = occurrence.axis()
            if axis != reference:
                raise _mismatch(symbol, occurrence, axis=axis, reference=reference)
    return references


def _mismatch(
    symbol: Sym, occurrence: AxisOccurrence, *, axis: Any, reference: range
) -> DimensionMismatchError:
    array_text = render(occurrence.array)
    return DimensionMismatchError(
        code=ErrorCode.DIMENSION_MISMATCH,
        message=(
            f"dimension mismatch: expected axes({array_text}, {occurrence.dimension}) "
            f"= {reference!r} for index {symbol.name}, got {axis!r}"
        ),
        help=f"every array indexed by {symbol.name} must agree on that axis",
        related=("index usage",),
        data={
            "index": symbol.name,
            "array": array_text,
            "dimension": occurrence.dimension,
            "expected": repr(reference),
            "got": repr(axis),
        },
    )


def make_shape(output_idx: Sequence[Sym | int], body: Any) -> Shape:
    """Resolve the output shape of an array op from the usages in `body`.

    Each output index takes the axis of its first usage, so a first usage on
    an array of unknown shape leaves that axis unknown. Integer output entries
    map to the trivial axis. If any output axis is unknown, the whole shape is
    `UNKNOWN`.

    Raises
    ------
    DimensionMismatchError
        If usages of one index disagree on a known axis.
    UnresolvedIndexError
        If an output index never indexes an array in `body`.
    """
    usage = collect_index_usage(body)
    check_index_consistency(usage)

    resolved: list[range | Unknown] = []
    for index in output_idx:
        if isinstance(index, Sym):
            if not usage.get(index):
                raise UnresolvedIndexError(
                    code=ErrorCode.UNRESOLVED_INDEX,
                    message=(
                        f"unresolved index: output index {index.name} "
                        f"does not occur in {render(body)}"
                    ),
                    help="every output index must index some array in the body",
                    related=("output indices",),
                    data={"index": index.name},
                )
            resolved.append(usage[index][0].axis())
            continue
        resolved.append(TRIVIAL_AXIS)

    if any(axis is UNKNOWN for axis in resolved):
        logger.debug(f"Shape of {render(body)} is unknown")
        return UNKNOWN
    shape = ShapeAxes.from_spec(resolved)
    logger.debug(f"Resolved shape {shape!r} for {render(body)}")
    return shape


__all__ = ["check_index_consistency", "make_shape"]
