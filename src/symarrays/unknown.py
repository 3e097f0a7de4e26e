from typing import Any, TypeGuard, final


@final
class Unknown:
    """Sentinel for statically unknown shapes, element types, and ranks."""

    __slots__ = ()
    _instance: "Unknown | None" = None

    def __new__(cls) -> "Unknown":
        instance = cls._instance
        if instance is None:
            instance = super().__new__(cls)
            cls._instance = instance
        return instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown()


def is_unknown(value: Any) -> TypeGuard[Unknown]:
    """Return whether one inferred value is the `UNKNOWN` sentinel."""
    return value is UNKNOWN


__all__ = ["UNKNOWN", "Unknown", "is_unknown"]
