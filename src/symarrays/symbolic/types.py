from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

import numpy as np

from ..unknown import UNKNOWN, Unknown

ElementType: TypeAlias = np.dtype | Unknown
Rank: TypeAlias = int | Unknown


class ContainerKind(str, Enum):
    """Structural category of an array type."""

    PLAIN = "plain"
    SPECIALIZED = "specialized"
    ABSTRACT = "abstract"


def as_element_type(value: object) -> ElementType:
    """Normalize one dtype-like value to `numpy.dtype` (or keep `UNKNOWN`)."""
    if value is UNKNOWN:
        return UNKNOWN
    if value is None:
        raise TypeError("element type cannot be None; use UNKNOWN")
    try:
        return np.dtype(value)  # type: ignore[call-overload]
    except TypeError as exc:
        raise TypeError(f"not a valid element type: {value!r}") from exc


def _render_eltype(eltype: ElementType) -> str:
    return "?" if eltype is UNKNOWN else str(eltype)


@dataclass(frozen=True, slots=True)
class ScalarType:
    """Declared type of a scalar-valued node."""

    dtype: ElementType

    def __post_init__(self) -> None:
        object.__setattr__(self, "dtype", as_element_type(self.dtype))

    def __str__(self) -> str:
        return _render_eltype(self.dtype)


@dataclass(frozen=True, slots=True)
class ArrayType:
    """Declared type of an array-valued node.

    `UNKNOWN` in `eltype` or `ndim` stands for a free type parameter.
    """

    container: ContainerKind
    eltype: ElementType = UNKNOWN
    ndim: Rank = UNKNOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "container", ContainerKind(self.container))
        object.__setattr__(self, "eltype", as_element_type(self.eltype))
        if self.ndim is not UNKNOWN:
            if isinstance(self.ndim, bool) or not isinstance(self.ndim, int):
                raise TypeError("array rank must be an int or UNKNOWN")
            if self.ndim < 0:
                raise ValueError(f"array rank must be non-negative, got {self.ndim}")

    def is_fully_specialized(self) -> bool:
        """Return whether both element type and rank are known."""
        return self.eltype is not UNKNOWN and self.ndim is not UNKNOWN

    def __str__(self) -> str:
        ndim = "?" if self.ndim is UNKNOWN else str(self.ndim)
        return f"{self.container.value}[{_render_eltype(self.eltype)}, {ndim}]"


SymType: TypeAlias = ScalarType | ArrayType


__all__ = [
    "ArrayType",
    "ContainerKind",
    "ElementType",
    "Rank",
    "ScalarType",
    "SymType",
    "as_element_type",
]
