import operator
from collections.abc import Callable
from typing import Any

_INFIX_OPERATORS: dict[Callable[..., Any], str] = {
    operator.add: "+",
    operator.sub: "-",
    operator.mul: "*",
    operator.truediv: "/",
    operator.pow: "**",
    operator.matmul: "@",
}
_PREFIX_OPERATORS: dict[Callable[..., Any], str] = {
    operator.neg: "-",
    operator.pos: "+",
}


def render(value: Any) -> str:
    """Render one expression node or literal operand as text."""
    from .base import Symbolic

    if isinstance(value, Symbolic):
        return value.to_text()
    if isinstance(value, tuple):
        return "(" + ", ".join(render(item) for item in value) + ")"
    return str(value)


def operator_name(op: Any) -> str:
    """Return a short display name for one operator."""
    name = getattr(op, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(op)


def render_application(op: Any, args: tuple[Any, ...]) -> str:
    """Render `op(args...)`, using index, infix, or prefix form where known."""
    if op is operator.getitem and args:
        keys = ", ".join(render(key) for key in args[1:])
        return f"{render(args[0])}[{keys}]"

    try:
        infix = _INFIX_OPERATORS.get(op)
        prefix = _PREFIX_OPERATORS.get(op)
    except TypeError:
        infix = prefix = None

    if infix is not None and len(args) == 2:
        return f"({render(args[0])} {infix} {render(args[1])})"
    if prefix is not None and len(args) == 1:
        return f"{prefix}{render(args[0])}"

    rendered_args = ", ".join(render(arg) for arg in args)
    return f"{operator_name(op)}({rendered_args})"


__all__ = ["operator_name", "render", "render_application"]
