from dataclasses import dataclass
from typing import Any

from . import ops, query
from .query import IndexSpace
from .symbolic.base import Symbolic
from .symbolic.introspection import is_array_typed


def _wrap(value: Any) -> Any:
    if isinstance(value, Symbolic) and is_array_typed(value):
        return Arr(value)
    return value


def _unwrap(value: Any) -> Any:
    return value.node if isinstance(value, Arr) else value


@dataclass(frozen=True, slots=True)
class Arr:
    """Read-only array view over one array-typed symbolic node."""

    node: Symbolic

    def __post_init__(self) -> None:
        if isinstance(self.node, Arr):
            object.__setattr__(self, "node", self.node.node)
        if not isinstance(self.node, Symbolic) or not is_array_typed(self.node):
            raise TypeError(f"Arr wraps array-typed symbolic nodes, got {self.node!r}")

    @property
    def ndim(self) -> int:
        return query.dimension_count(self.node)

    @property
    def dtype(self) -> Any:
        return query.element_type(self.node)

    @property
    def shape(self) -> tuple[int, ...]:
        return query.size(self.node)

    def size(self, dim: int | None = None) -> Any:
        return query.size(self.node, dim)

    def axes(self, dim: int | None = None) -> Any:
        return query.axes(self.node, dim)

    def index_space(self) -> IndexSpace:
        return query.index_space(self.node)

    def __len__(self) -> int:
        return query.total_length(self.node)

    def __getitem__(self, key: Any) -> Any:
        return _wrap(ops.index(self.node, key))

    def transpose(self) -> "Arr":
        return Arr(ops.transpose(self.node))

    @property
    def T(self) -> "Arr":
        return self.transpose()

    def __matmul__(self, other: Any) -> Any:
        return _wrap(ops.matmul(self.node, _unwrap(other)))

    def __rmatmul__(self, other: Any) -> Any:
        return _wrap(ops.matmul(_unwrap(other), self.node))

    def unwrap(self) -> Symbolic:
        """Return the wrapped node."""
        return self.node

    def __str__(self) -> str:
        return self.node.to_text()


__all__ = ["Arr"]
