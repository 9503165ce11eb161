from __future__ import annotations

import types
from typing import Any, Final, TypeGuard

PRIMITIVE_TYPES: Final[tuple[type[Any], ...]] = (bool, int, float, complex)
NUMERIC_PRIMITIVE_TYPES: Final[tuple[type[Any], ...]] = (int, float, complex)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: type[Any]) -> bool:
    """Return whether ``candidate`` is a ``typing.Protocol`` definition."""
    return bool(candidate.__dict__.get("_is_protocol", False))


def is_final_class(candidate: type[Any]) -> bool:
    """Return whether ``candidate`` was decorated with ``typing.final``."""
    return candidate.__dict__.get("__final__", False) is True


def is_primitive_type(candidate: object) -> bool:
    """Return whether ``candidate`` is one of the scalar types treated as primitives."""
    return candidate in PRIMITIVE_TYPES


def not_instantiable_reason(candidate: object) -> str | None:
    """Return why ``candidate`` can never be allocated, or ``None`` when it can.

    Args:
        candidate: Requested allocation key.

    """
    if not is_runtime_class(candidate):
        return "it is not a runtime class"
    if candidate is object:
        return "it has no base class to construct through"
    if is_protocol_class(candidate):
        return "it is a protocol"
    return None


__all__ = [
    "NUMERIC_PRIMITIVE_TYPES",
    "PRIMITIVE_TYPES",
    "is_final_class",
    "is_primitive_type",
    "is_protocol_class",
    "is_runtime_class",
    "not_instantiable_reason",
]
