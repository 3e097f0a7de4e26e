from collections.abc import Iterable
from functools import reduce
from typing import Any

from ..symbolic.introspection import declared_type, is_array_typed
from ..symbolic.types import ArrayType, ContainerKind


def combine_container_kinds(left: ContainerKind, right: ContainerKind) -> ContainerKind:
    """Combine two container kinds: equal kinds propagate, mixes are plain."""
    if left is right:
        return left
    return ContainerKind.PLAIN


def fold_container_kinds(kinds: Iterable[ContainerKind]) -> ContainerKind:
    """Fold container kinds; no kinds at all gives the abstract kind."""
    collected = tuple(ContainerKind(kind) for kind in kinds)
    if not collected:
        return ContainerKind.ABSTRACT
    return reduce(combine_container_kinds, collected)


def container_kind(operand: Any) -> ContainerKind:
    """Project one array-typed operand to its container kind."""
    operand_type = declared_type(operand)
    if not isinstance(operand_type, ArrayType):
        raise TypeError(f"operand {operand!r} is not array-typed")
    return operand_type.container


def propagate_container(op: Any, *args: Any) -> ContainerKind:
    """Container kind of `op(args...)`, from its array-typed operands only."""
    _ = op
    return fold_container_kinds(
        container_kind(arg) for arg in args if is_array_typed(arg)
    )


__all__ = [
    "combine_container_kinds",
    "container_kind",
    "fold_container_kinds",
    "propagate_container",
]
