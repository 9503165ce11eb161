from __future__ import annotations

import inspect
import numbers
import types
from collections.abc import Sequence
from typing import Annotated, Any, Final, TypeVar, Union, get_args, get_origin

from typing_extensions import get_overloads

from smatterdi._internal.type_checks import NUMERIC_PRIMITIVE_TYPES
from smatterdi.exceptions import (
    SmatterDIAmbiguousConstructorError,
    SmatterDIConstructionFailedError,
    SmatterDINoMatchingConstructorError,
)

MIRRORED_CONSTRUCTORS_ATTRIBUTE: Final[str] = "__smatterdi_constructors__"
REGISTRY_PARAMETER_NAME: Final[str] = "smatterdi_registry"

_VARIADIC_SIGNATURE: Final[inspect.Signature] = inspect.Signature(
    [
        inspect.Parameter("args", inspect.Parameter.VAR_POSITIONAL),
        inspect.Parameter("kwargs", inspect.Parameter.VAR_KEYWORD),
    ],
)


def declared_constructors(cls: type[Any]) -> tuple[inspect.Signature, ...]:
    """Return the constructor signatures of ``cls`` without the ``self`` parameter.

    Overloads registered for ``__init__`` count as separate constructors.
    Generated specializations publish their mirrored signatures directly.

    Args:
        cls: Class whose constructors are inspected.

    """
    mirrored = cls.__dict__.get(MIRRORED_CONSTRUCTORS_ATTRIBUTE)
    if mirrored is not None:
        return tuple(mirrored)

    init = cls.__init__  # type: ignore[misc]
    overloads = get_overloads(init) if inspect.isfunction(init) else []
    if overloads:
        return tuple(_drop_first_parameter(_signature_of(overload)) for overload in overloads)

    try:
        return (_signature_of(cls),)
    except (TypeError, ValueError):
        return (_VARIADIC_SIGNATURE,)


def mirror_constructors(base: type[Any]) -> tuple[inspect.Signature, ...]:
    """Return the constructors of ``base`` with a leading registry parameter.

    Args:
        base: Class being specialized.

    """
    registry_parameter = inspect.Parameter(
        REGISTRY_PARAMETER_NAME,
        inspect.Parameter.POSITIONAL_ONLY,
    )
    mirrored: list[inspect.Signature] = []
    for signature in declared_constructors(base):
        parameters = list(signature.parameters.values())
        mirrored.append(signature.replace(parameters=[registry_parameter, *parameters]))
    return tuple(mirrored)


def construct(cls: type[Any], args: Sequence[Any]) -> Any:
    """Instantiate ``cls`` through the single constructor compatible with ``args``.

    Args:
        cls: Class to instantiate.
        args: Positional constructor arguments.

    Raises:
        SmatterDINoMatchingConstructorError: If no constructor accepts ``args``.
        SmatterDIAmbiguousConstructorError: If several constructors accept ``args``.
        SmatterDIConstructionFailedError: If the constructor raised.

    """
    candidates = [
        signature for signature in declared_constructors(cls) if _is_applicable(signature, args)
    ]
    if len(candidates) != 1:
        described = ", ".join(_describe_argument(argument) for argument in args)
        msg = (
            f"No single constructor of {cls!r} applies for arguments [{described}], "
            f"found {len(candidates)}."
        )
        if candidates:
            raise SmatterDIAmbiguousConstructorError(msg)
        raise SmatterDINoMatchingConstructorError(msg)

    try:
        return cls(*args)
    except Exception as exc:
        msg = f"Unable to call constructor of class {cls!r}."
        raise SmatterDIConstructionFailedError(msg) from exc


def accepts(annotation: Any, value: object) -> bool:
    """Return whether ``value`` may be passed to a parameter annotated with ``annotation``.

    Args:
        annotation: Parameter annotation, possibly unresolved.
        value: Candidate argument.

    """
    if (
        annotation is inspect.Parameter.empty
        or annotation is Any
        or isinstance(annotation, (str, TypeVar))
    ):
        return True

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return any(accepts(member, value) for member in get_args(annotation))
    if origin is Annotated:
        return accepts(get_args(annotation)[0], value)
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return True
    if annotation is type(None):
        return value is None
    if annotation is bool:
        return isinstance(value, bool)
    if annotation in NUMERIC_PRIMITIVE_TYPES:
        return isinstance(value, numbers.Number) and not isinstance(value, bool)
    if value is None:
        return True
    try:
        return isinstance(value, annotation)
    except TypeError:
        # Protocols that are not runtime checkable.
        return True


def _is_applicable(signature: inspect.Signature, args: Sequence[Any]) -> bool:
    try:
        bound = signature.bind(*args)
    except TypeError:
        return False

    for name, value in bound.arguments.items():
        parameter = signature.parameters[name]
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            if not all(accepts(parameter.annotation, item) for item in value):
                return False
        elif not accepts(parameter.annotation, value):
            return False
    return True


def _signature_of(function: Any) -> inspect.Signature:
    try:
        return inspect.signature(function, eval_str=True)
    except NameError:
        return inspect.signature(function)


def _drop_first_parameter(signature: inspect.Signature) -> inspect.Signature:
    parameters = list(signature.parameters.values())
    return signature.replace(parameters=parameters[1:])


def _describe_argument(argument: object) -> str:
    if argument is None:
        return "(any)"
    if isinstance(argument, numbers.Number) and not isinstance(argument, bool):
        return f"{type(argument).__qualname__} (or any numeric slot)"
    return type(argument).__qualname__


__all__ = [
    "MIRRORED_CONSTRUCTORS_ATTRIBUTE",
    "REGISTRY_PARAMETER_NAME",
    "accepts",
    "construct",
    "declared_constructors",
    "mirror_constructors",
]
