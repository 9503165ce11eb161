from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final, TypeVar

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type[Any])

INJECT_ATTRIBUTE: Final[str] = "__smatterdi_inject__"
AUTOWIRE_ATTRIBUTE: Final[str] = "__smatterdi_autowire__"


def inject(method: F) -> F:
    """Mark a zero-argument instance method as a dependency accessor.

    Generated specializations override marked methods with a body that asks the
    injection context for the method's declared return type. The decorator can
    be stacked with ``abc.abstractmethod`` in either order.

    Examples:
        .. code-block:: python

            class Build:
                @inject
                @abstractmethod
                def get_tasks(self) -> TaskGraph: ...

    """
    setattr(method, INJECT_ATTRIBUTE, True)
    return method


def autowire(cls: C) -> C:
    """Mark a class to publish its instances into the injection context early.

    The generated constructor registers the instance for the decorated class
    right after the base constructor returns, or earlier if the base
    constructor already calls one of the accessors. This lets two classes that
    reference each other from their constructors be built. The marker is not
    inherited by subclasses.
    """
    setattr(cls, AUTOWIRE_ATTRIBUTE, True)
    return cls


def is_inject_accessor(candidate: object) -> bool:
    """Return whether ``candidate`` carries the ``inject`` marker.

    Args:
        candidate: Class attribute value, possibly wrapped in ``staticmethod``
            or ``classmethod``.

    """
    if isinstance(candidate, (staticmethod, classmethod)):
        candidate = candidate.__func__
    return getattr(candidate, INJECT_ATTRIBUTE, False) is True


def is_autowired(cls: type[Any]) -> bool:
    """Return whether ``cls`` itself (not a base class) carries the ``autowire`` marker."""
    return cls.__dict__.get(AUTOWIRE_ATTRIBUTE, False) is True
