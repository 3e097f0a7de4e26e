import logging
from collections.abc import Callable
from threading import RLock
from typing import Any, Literal, TypeAlias, TypeVar

from ..diagnostics import ErrorCode, PropagationError
from ..shape.value import Shape, coerce_shape
from ..symbolic.render import operator_name, render
from ..symbolic.types import Rank
from ..unknown import UNKNOWN

logger = logging.getLogger(__name__)

NdimsRule: TypeAlias = Callable[..., Rank]
ShapeRule: TypeAlias = Callable[..., Shape]
RuleKind: TypeAlias = Literal["ndims", "shape"]
RuleKey: TypeAlias = tuple[Any, int | None]
RuleT = TypeVar("RuleT", bound=Callable[..., Any])


def describe_application(op: Any, args: tuple[Any, ...]) -> str:
    """Render `op(args...)` for diagnostics."""
    rendered_args = ", ".join(render(arg) for arg in args)
    return f"{operator_name(op)}({rendered_args})"


class PropagationRegistry:
    """Per-operator dimension-count and shape rules for array terms.

    Rules are keyed by `(operator, arity)`; an arity of `None` accepts any
    number of operands. Lookup tries the exact arity, then the variadic entry,
    then the same two keys for the operator's type so that one registration
    can cover an operator family.
    """

    def __init__(self) -> None:
        self._rules: dict[RuleKind, dict[RuleKey, Callable[..., Any]]] = {
            "ndims": {},
            "shape": {},
        }
        self._lock = RLock()

    def _register(
        self,
        kind: RuleKind,
        op: Any,
        rule: Callable[..., Any],
        arity: int | None,
    ) -> None:
        if not callable(rule):
            raise TypeError(f"{kind} rule must be callable")
        if arity is not None and (isinstance(arity, bool) or arity < 0):
            raise ValueError(f"rule arity must be a non-negative int or None, got {arity!r}")
        with self._lock:
            self._rules[kind][(op, arity)] = rule
        logger.debug(
            f"Registered {kind} rule for {operator_name(op)} "
            f"(arity {'*' if arity is None else arity})"
        )

    def register_ndims(
        self, op: Any, rule: NdimsRule, *, arity: int | None = None
    ) -> None:
        """Register the dimension-count rule of one operator."""
        self._register("ndims", op, rule, arity)

    def register_shape(
        self, op: Any, rule: ShapeRule, *, arity: int | None = None
    ) -> None:
        """Register the shape rule of one operator."""
        self._register("shape", op, rule, arity)

    def register(
        self,
        op: Any,
        *,
        ndims: NdimsRule,
        shape: ShapeRule,
        arity: int | None = None,
    ) -> None:
        """Register both mandatory rules of one operator."""
        self.register_ndims(op, ndims, arity=arity)
        self.register_shape(op, shape, arity=arity)

    def ndims_rule(
        self, op: Any, *, arity: int | None = None
    ) -> Callable[[RuleT], RuleT]:
        """Decorator form of `register_ndims`."""

        def decorator(rule: RuleT) -> RuleT:
            self.register_ndims(op, rule, arity=arity)
            return rule

        return decorator

    def shape_rule(
        self, op: Any, *, arity: int | None = None
    ) -> Callable[[RuleT], RuleT]:
        """Decorator form of `register_shape`."""

        def decorator(rule: RuleT) -> RuleT:
            self.register_shape(op, rule, arity=arity)
            return rule

        return decorator

    def lookup(self, kind: RuleKind, op: Any, arity: int) -> Callable[..., Any] | None:
        """Return the most specific rule of `kind` for `op` at `arity`."""
        candidates: list[RuleKey] = [(op, arity), (op, None)]
        if not isinstance(op, type):
            candidates.extend(((type(op), arity), (type(op), None)))
        with self._lock:
            rules = self._rules[kind]
            for key in candidates:
                try:
                    rule = rules.get(key)
                except TypeError:
                    continue
                if rule is not None:
                    return rule
        return None

    def copy(self) -> "PropagationRegistry":
        """Return an independent registry holding the same rules."""
        duplicate = PropagationRegistry()
        with self._lock:
            for kind, rules in self._rules.items():
                duplicate._rules[kind].update(rules)
        return duplicate

    def propagate_ndims(self, op: Any, *args: Any) -> int:
        """Return the dimension count of `op(args...)`.

        Raises
        ------
        PropagationError
            If no rule is registered or the rule cannot determine the count.
        """
        rule = self.lookup("ndims", op, len(args))
        if rule is None:
            raise PropagationError(
                code=ErrorCode.MISSING_NDIMS_RULE,
                message=(
                    "could not determine the output dimension of "
                    f"{describe_application(op, args)}"
                ),
                help=f"register a dimension-count rule for {operator_name(op)}",
                related=("propagation registry",),
                data={"operator": operator_name(op), "arity": len(args)},
            )

        ndim = rule(op, *args)
        if ndim is UNKNOWN or isinstance(ndim, bool) or not isinstance(ndim, int) or ndim < 0:
            raise PropagationError(
                code=ErrorCode.INVALID_NDIMS,
                message=(
                    f"dimension-count rule for {operator_name(op)} returned {ndim!r} "
                    f"for {describe_application(op, args)}; expected a non-negative int"
                ),
                help="operand ranks must be known for dimension-count propagation",
                related=("propagation registry",),
                data={"operator": operator_name(op), "arity": len(args)},
            )
        return ndim

    def propagate_shape(self, op: Any, *args: Any) -> Shape:
        """Return the shape of `op(args...)`, which may be `UNKNOWN`.

        Raises
        ------
        PropagationError
            If no shape rule is registered for the operator.
        """
        rule = self.lookup("shape", op, len(args))
        if rule is None:
            raise PropagationError(
                code=ErrorCode.MISSING_SHAPE_RULE,
                message=(
                    "don't know how to propagate shape for "
                    f"{describe_application(op, args)}"
                ),
                help=f"register a shape rule for {operator_name(op)}",
                related=("propagation registry",),
                data={"operator": operator_name(op), "arity": len(args)},
            )
        return coerce_shape(rule(op, *args))


__all__ = [
    "NdimsRule",
    "PropagationRegistry",
    "ShapeRule",
    "describe_application",
]
