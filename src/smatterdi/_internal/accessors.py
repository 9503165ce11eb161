from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, get_origin, get_type_hints

from smatterdi._internal.type_checks import is_primitive_type
from smatterdi.exceptions import SmatterDIInstanceTypeError, SmatterDIInvalidAccessorError
from smatterdi.markers import is_inject_accessor

_NO_RETURN_ANNOTATION: Any = object()


@dataclass(frozen=True, slots=True)
class AccessorPlan:
    """Dependency accessor that a generated specialization overrides."""

    name: str
    return_type: Any
    owner: type[Any]


def collect_accessors(cls: type[Any]) -> tuple[AccessorPlan, ...]:
    """Return the ``@inject`` accessors of ``cls`` and its bases.

    Classes are visited in MRO order and the first marked definition of a
    name wins, so a subclass may narrow an inherited accessor's return type.
    An unmarked override does not hide a marked definition further up.

    Args:
        cls: Class being specialized.

    Raises:
        SmatterDIInvalidAccessorError: If a marked member is not a valid accessor.

    """
    accessors: dict[str, AccessorPlan] = {}
    for owner in cls.__mro__:
        if owner is object:
            continue
        for name, member in vars(owner).items():
            if name in accessors or not is_inject_accessor(member):
                continue
            accessors[name] = AccessorPlan(
                name=name,
                return_type=_validated_return_type(cls, name, member),
                owner=owner,
            )
    return tuple(accessors.values())


def accessor_return_types(cls: type[Any]) -> dict[str, Any]:
    """Map every accessor name of ``cls`` to the type it resolves."""
    return {accessor.name: accessor.return_type for accessor in collect_accessors(cls)}


def narrow_instance(value: Any, expected: Any) -> Any:
    """Return ``value`` after checking it against an accessor's return type.

    Args:
        value: Instance returned by the injection context.
        expected: Declared return type of the accessor.

    Raises:
        SmatterDIInstanceTypeError: If ``value`` is not an instance of ``expected``.

    """
    runtime_type = get_origin(expected) or expected
    if not isinstance(runtime_type, type):
        return value
    try:
        matches = isinstance(value, runtime_type)
    except TypeError:
        # Protocols that are not runtime checkable.
        return value
    if not matches:
        msg = f"Injection context returned {value!r}, which is not an instance of {expected!r}."
        raise SmatterDIInstanceTypeError(msg)
    return value


def _validated_return_type(cls: type[Any], name: str, member: object) -> Any:
    if not inspect.isfunction(member):
        msg = (
            f"Class {cls.__qualname__} is invalid; @inject member {name!r} "
            "must be a plain instance method."
        )
        raise SmatterDIInvalidAccessorError(msg)

    if getattr(member, "__final__", False) is True:
        msg = (
            f"Class {cls.__qualname__} is invalid; @inject method {name!r} is final "
            "and cannot be overridden."
        )
        raise SmatterDIInvalidAccessorError(msg)

    parameters = list(inspect.signature(member).parameters.values())
    if len(parameters) != 1 or parameters[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        msg = (
            f"Class {cls.__qualname__} is invalid; an @inject method may not have any "
            f"parameters besides self! Method {name!r} has though!"
        )
        raise SmatterDIInvalidAccessorError(msg)

    try:
        hints = get_type_hints(member)
    except NameError as exc:
        msg = f"Class {cls.__qualname__} is invalid; return annotation of {name!r} cannot be resolved."
        raise SmatterDIInvalidAccessorError(msg) from exc

    return_type = hints.get("return", _NO_RETURN_ANNOTATION)
    if return_type is _NO_RETURN_ANNOTATION or return_type is type(None) or is_primitive_type(
        return_type,
    ):
        msg = (
            f"Class {cls.__qualname__} is invalid; an @inject method must return a "
            f"non-primitive, non-None type! Method {name!r} doesn't though!"
        )
        raise SmatterDIInvalidAccessorError(msg)
    return return_type


__all__ = [
    "AccessorPlan",
    "accessor_return_types",
    "collect_accessors",
    "narrow_instance",
]
