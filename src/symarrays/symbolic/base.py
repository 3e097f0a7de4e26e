import operator
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, NoReturn

from .types import SymType


def _is_operand(value: Any) -> bool:
    """Return whether `value` can be an operand of a symbolic term."""
    from .introspection import is_concrete_array, is_scalar_literal

    return isinstance(value, Symbolic) or is_scalar_literal(value) or is_concrete_array(value)


class Symbolic(ABC):
    """Abstract base for symbolic expression nodes.

    Concrete nodes are frozen dataclasses. Arithmetic operators build new
    nodes: scalar operands give scalar terms, array-typed operands go through
    shape and type propagation.
    """

    # Keep numpy from broadcasting over symbolic operands.
    __array_ufunc__ = None

    @abstractmethod
    def is_composite(self) -> bool:
        """Return whether this node is an operator application."""

    @abstractmethod
    def head(self) -> Any:
        """Return the operator of a composite node."""

    @abstractmethod
    def children(self) -> tuple[Any, ...]:
        """Return the ordered operands of a composite node."""

    @abstractmethod
    def declared_type(self) -> SymType:
        """Return the static value type of this node."""

    @abstractmethod
    def to_text(self) -> str:
        """Render this node as expression text."""

    def __str__(self) -> str:
        return self.to_text()

    def __iter__(self) -> NoReturn:
        raise TypeError(f"symbolic node {self.to_text()!r} is not iterable")

    def __getitem__(self, key: Any) -> "Symbolic":
        from ..ops import index

        return index(self, key)

    def _binary(self, op: Callable[[Any, Any], Any], other: Any) -> Any:
        from ..ops import apply

        if not _is_operand(other):
            return NotImplemented
        return apply(op, self, other)

    def _reflected(self, op: Callable[[Any, Any], Any], other: Any) -> Any:
        from ..ops import apply

        if not _is_operand(other):
            return NotImplemented
        return apply(op, other, self)

    def __add__(self, other: Any) -> "Symbolic":
        return self._binary(operator.add, other)

    def __radd__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.add, other)

    def __sub__(self, other: Any) -> "Symbolic":
        return self._binary(operator.sub, other)

    def __rsub__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.sub, other)

    def __mul__(self, other: Any) -> "Symbolic":
        return self._binary(operator.mul, other)

    def __rmul__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.mul, other)

    def __truediv__(self, other: Any) -> "Symbolic":
        return self._binary(operator.truediv, other)

    def __rtruediv__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.truediv, other)

    def __pow__(self, other: Any) -> "Symbolic":
        return self._binary(operator.pow, other)

    def __rpow__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.pow, other)

    def __matmul__(self, other: Any) -> "Symbolic":
        return self._binary(operator.matmul, other)

    def __rmatmul__(self, other: Any) -> "Symbolic":
        return self._reflected(operator.matmul, other)

    def __neg__(self) -> "Symbolic":
        from ..ops import apply

        return apply(operator.neg, self)

    def __pos__(self) -> "Symbolic":
        from ..ops import apply

        return apply(operator.pos, self)

    def __abs__(self) -> "Symbolic":
        from ..ops import apply

        return apply(operator.abs, self)


__all__ = ["Symbolic"]
