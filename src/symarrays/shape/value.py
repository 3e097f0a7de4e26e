from collections.abc import Iterable
from math import prod
from typing import Any, TypeAlias, TypeGuard

try:
    from typing import Self
except ImportError:  # pragma: no cover
    from typing_extensions import Self

from ..config import TRIVIAL_AXIS
from ..unknown import UNKNOWN, Unknown


def _coerce_axis(spec: Any) -> range:
    """Validate and normalize one axis spec (`range` or non-negative length)."""
    if isinstance(spec, range):
        return spec
    if isinstance(spec, bool) or not isinstance(spec, int):
        raise TypeError(
            f"axis must be a range or a non-negative int length, got {spec!r}"
        )
    if spec < 0:
        raise ValueError(f"axis length must be non-negative, got {spec}")
    return range(0, spec)


class ShapeAxes(tuple[range, ...]):
    """Immutable known shape: one axis range per dimension."""

    @classmethod
    def from_spec(cls, spec: "ShapeAxes | Iterable[range | int]") -> Self:
        """Build a known shape from axis ranges and/or integer lengths."""
        if isinstance(spec, cls):
            return spec
        try:
            items = tuple(spec)
        except TypeError as exc:
            raise TypeError("shape must be an iterable of ranges or ints") from exc
        return cls(tuple(_coerce_axis(item) for item in items))

    @property
    def ndim(self) -> int:
        """Return the number of dimensions."""
        return len(self)

    def lengths(self) -> tuple[int, ...]:
        """Return per-axis lengths in dimension order."""
        return tuple(len(axis) for axis in self)

    def total_length(self) -> int:
        """Return the product of per-axis lengths."""
        return prod(len(axis) for axis in self)

    def axis(self, dim: int) -> range:
        """Return the 1-based `dim`-th axis, or the trivial axis past the rank."""
        if dim < 1:
            raise ValueError(f"dimension must be >= 1, got {dim}")
        if dim <= len(self):
            return self[dim - 1]
        return TRIVIAL_AXIS

    def __repr__(self) -> str:
        return f"ShapeAxes({tuple(self)!r})"


Shape: TypeAlias = ShapeAxes | Unknown

SCALAR_SHAPE = ShapeAxes(())


def is_known_shape(shape: Any) -> TypeGuard[ShapeAxes]:
    """Return whether one shape is statically known."""
    return isinstance(shape, ShapeAxes)


def coerce_shape(spec: Any) -> Shape:
    """Normalize `UNKNOWN`, a `ShapeAxes`, or an axis iterable to a `Shape`."""
    if spec is UNKNOWN:
        return UNKNOWN
    return ShapeAxes.from_spec(spec)


__all__ = [
    "SCALAR_SHAPE",
    "Shape",
    "ShapeAxes",
    "coerce_shape",
    "is_known_shape",
]
