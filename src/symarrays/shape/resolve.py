import operator
from dataclasses import dataclass
from typing import Any, TypeAlias

from ..symbolic.introspection import children, head, is_composite
from ..symbolic.nodes import Sym
from ..unknown import UNKNOWN, Unknown
from .metadata import shape_of


@dataclass(frozen=True, slots=True)
class AxisOccurrence:
    """One use of an index symbol: `array` indexed along 1-based `dimension`."""

    array: Any
    dimension: int

    def has_known_shape(self) -> bool:
        """Return whether the indexed array has a statically known shape."""
        return shape_of(self.array) is not UNKNOWN

    def axis(self) -> range | Unknown:
        """Return the axis of the indexed dimension, or `UNKNOWN`."""
        shape = shape_of(self.array)
        if shape is UNKNOWN:
            return UNKNOWN
        return shape.axis(self.dimension)


IndexUsageMap: TypeAlias = dict[Sym, list[AxisOccurrence]]


def collect_index_usage(
    node: Any, usage: IndexUsageMap | None = None
) -> IndexUsageMap:
    """Map each index symbol in `node` to every axis position it indexes.

    Within one indexing node, keys are numbered from dimension 1 left to
    right; literal keys take a position but are not recorded. Any other
    composite node is searched through its head and operands.
    """
    if usage is None:
        usage = {}
    if not is_composite(node):
        return usage

    if head(node) is operator.getitem:
        array, *keys = children(node)
        for dimension, key in enumerate(keys, start=1):
            if not isinstance(key, Sym):
                continue
            usage.setdefault(key, []).append(AxisOccurrence(array, dimension))
        return usage

    collect_index_usage(head(node), usage)
    for child in children(node):
        collect_index_usage(child, usage)
    return usage


__all__ = ["AxisOccurrence", "IndexUsageMap", "collect_index_usage"]
