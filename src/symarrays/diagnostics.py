import re
from enum import Enum
from typing import Literal, TypeAlias

DiagnosticSeverity: TypeAlias = Literal["error"]
DiagnosticValue: TypeAlias = str | int | bool

_SNAKE_CODE = re.compile(r"[a-z][a-z0-9_]*")
_UPPER_SNAKE_CODE = re.compile(r"[A-Z][A-Z0-9_]*")


class ErrorCode(str, Enum):
    """Canonical internal diagnostic codes."""

    DIMENSION_MISMATCH = "dimension_mismatch"
    UNRESOLVED_INDEX = "unresolved_index"
    MISSING_NDIMS_RULE = "missing_ndims_rule"
    MISSING_SHAPE_RULE = "missing_shape_rule"
    INVALID_NDIMS = "invalid_ndims"
    UNSUPPORTED_OPERANDS = "unsupported_operands"
    UNKNOWN_SHAPE = "unknown_shape"
    UNKNOWN_ELTYPE = "unknown_eltype"
    UNKNOWN_NDIMS = "unknown_ndims"
    SHAPE_ALREADY_ATTACHED = "shape_already_attached"


def diagnostic_code(code: str | ErrorCode) -> str:
    """Return the `snake_case` form of one diagnostic code.

    `UPPER_SNAKE` spellings are accepted and lowered.
    """
    if isinstance(code, ErrorCode):
        return code.value
    if not isinstance(code, str):
        raise TypeError("diagnostic code must be a string or ErrorCode")
    if _SNAKE_CODE.fullmatch(code):
        return code
    if _UPPER_SNAKE_CODE.fullmatch(code):
        return code.lower()
    raise ValueError(f"diagnostic code must be snake_case or UPPER_SNAKE, got {code!r}")


class SymArrayError(ValueError):
    """Structured base error for shape and type inference diagnostics.

    Attributes
    ----------
    code
        `snake_case` diagnostic code; `external_code` is its upper-case form.
    help
        Optional hint on how to fix the expression.
    related
        Short notes naming the stage that raised the error.
    data
        Flat payload for programmatic inspection.
    """

    channel = "error"
    severity: DiagnosticSeverity = "error"

    def __init__(
        self,
        *,
        code: str | ErrorCode,
        message: str,
        help: str | None = None,
        related: tuple[str, ...] = (),
        data: dict[str, DiagnosticValue] | None = None,
    ) -> None:
        if not isinstance(message, str) or not message.strip():
            raise ValueError("diagnostic message must be a non-empty string")
        if help is not None and not isinstance(help, str):
            raise TypeError("diagnostic help must be a string or None")
        if any(not isinstance(note, str) for note in related):
            raise TypeError("related diagnostics must be tuple[str, ...]")
        if any(not note.strip() for note in related):
            raise ValueError("related diagnostic note cannot be empty")

        payload = dict(data or {})
        for key, value in payload.items():
            if not isinstance(key, str) or not isinstance(value, str | int | bool):
                raise TypeError(
                    f"diagnostic data entries must map str to str, int, or bool: {key!r}"
                )

        self.code = diagnostic_code(code)
        self.external_code = self.code.upper()
        self.message = message
        self.help = help
        self.related = tuple(related)
        self.data = payload
        super().__init__(message)


class DimensionMismatchError(SymArrayError):
    """Two usages of one index disagree on a statically known axis."""

    channel = "construction_error"


class UnresolvedIndexError(SymArrayError):
    """An output index never occurs in the body of an array op."""

    channel = "construction_error"


class PropagationError(SymArrayError):
    """Dimension count or shape of an array term cannot be propagated."""

    channel = "construction_error"


class ShapeMetadataError(SymArrayError):
    """Shape metadata was written twice for the same node."""

    channel = "construction_error"


class UnknownQueryError(SymArrayError):
    """Query on a shape, element type, or rank that is not statically known."""

    channel = "query_error"


__all__ = [
    "DimensionMismatchError",
    "ErrorCode",
    "PropagationError",
    "ShapeMetadataError",
    "SymArrayError",
    "UnknownQueryError",
    "UnresolvedIndexError",
    "diagnostic_code",
]
