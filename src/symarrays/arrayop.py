import logging
import operator
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any

from .config import ARRAYOP_OUTPUT_NAME
from .shape.metadata import attach_shape, shape_of
from .shape.unify import make_shape
from .shape.value import Shape
from .symbolic.base import Symbolic
from .symbolic.introspection import declared_type
from .symbolic.nodes import Sym
from .symbolic.render import operator_name, render
from .symbolic.types import ArrayType, ContainerKind, ElementType, ScalarType
from .unknown import UNKNOWN

logger = logging.getLogger(__name__)

OutputIndex = Sym | int


def _normalize_output_idx(output_idx: Any) -> tuple[OutputIndex, ...]:
    """Validate output indices as a flat sequence of index symbols and ints."""
    if not isinstance(output_idx, tuple | list):
        raise TypeError("output indices must be a tuple or list")
    normalized: list[OutputIndex] = []
    for entry in output_idx:
        if isinstance(entry, bool):
            raise TypeError("output indices cannot be booleans")
        if isinstance(entry, Integral):
            normalized.append(int(entry))
            continue
        if isinstance(entry, Sym) and isinstance(entry.symtype, ScalarType):
            normalized.append(entry)
            continue
        raise TypeError(
            f"output indices must be index symbols or int literals, got {entry!r}"
        )
    return tuple(normalized)


def _body_element_type(body: Any) -> ElementType:
    body_type = declared_type(body)
    if isinstance(body_type, ScalarType):
        return body_type.dtype
    return UNKNOWN


@dataclass(frozen=True, slots=True)
class ArrayOp(Symbolic):
    """Array defined by output indices and a body reduced over the other indices.

    The shape is resolved from the index usages in `body` when the node is
    built; `source_term` is informational only.
    """

    output_idx: tuple[OutputIndex, ...]
    body: Any
    reduce: Callable[..., Any] = operator.add
    source_term: Any = None
    container: ContainerKind = ContainerKind.PLAIN
    symtype: ArrayType = field(init=False)
    _shape: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_idx", _normalize_output_idx(self.output_idx))
        if not callable(self.reduce):
            raise TypeError("reduction operator must be callable")
        if self.source_term is not None and not isinstance(self.source_term, Symbolic):
            raise TypeError("source term must be a symbolic node or None")
        object.__setattr__(
            self,
            "symtype",
            ArrayType(self.container, _body_element_type(self.body), len(self.output_idx)),
        )
        object.__setattr__(self, "container", self.symtype.container)
        attach_shape(self, make_shape(self.output_idx, self.body))

    @property
    def shape(self) -> Shape:
        """Resolved shape, `UNKNOWN` if some output axis is not static."""
        return shape_of(self)

    @property
    def ndim(self) -> int:
        """Number of output dimensions."""
        return len(self.output_idx)

    @property
    def eltype(self) -> ElementType:
        """Element type of the body."""
        return self.symtype.eltype

    def is_composite(self) -> bool:
        return True

    def head(self) -> type["ArrayOp"]:
        return ArrayOp

    def children(self) -> tuple[Any, ...]:
        return (self.output_idx, self.body, self.source_term, self.reduce)

    def declared_type(self) -> ArrayType:
        return self.symtype

    def to_text(self) -> str:
        lhs = f"{ARRAYOP_OUTPUT_NAME}[{', '.join(render(i) for i in self.output_idx)}]"
        text = f"{lhs} := {render(self.body)}"
        if self.reduce is not operator.add:
            text += f" (reduce={operator_name(self.reduce)})"
        return text


def arrayop(
    output_idx: Sequence[OutputIndex],
    body: Any,
    reduce: Callable[..., Any] = operator.add,
    *,
    term: Any = None,
    container: ContainerKind = ContainerKind.PLAIN,
) -> ArrayOp:
    """Build an array op from output indices and a body.

    Indices of `body` not listed in `output_idx` are reduced with `reduce`.

    Parameters
    ----------
    output_idx
        Index symbols or int literals, one per output dimension.
    body
        Body expression, or a zero-argument callable returning it.
    reduce
        Reduction over the unbound indices, `operator.add` by default.
    term
        Optional whole-array expression this array op is equivalent to.
    container
        Container kind of the result.

    Returns
    -------
    ArrayOp
        Array op whose shape was resolved from `body`.

    Raises
    ------
    TypeError
        If `output_idx` is not a flat sequence of index symbols and ints.
    DimensionMismatchError
        If two usages of one index disagree on a known axis.
    UnresolvedIndexError
        If an output index does not index any array in `body`.
    """
    if callable(body) and not isinstance(body, Symbolic):
        body = body()
    node = ArrayOp(output_idx, body, reduce, term, container)
    logger.debug(f"Built array op {node.to_text()} with shape {node.shape!r}")
    return node


__all__ = ["ArrayOp", "OutputIndex", "arrayop"]
