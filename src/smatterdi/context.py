from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from typing_extensions import Self

from smatterdi.exceptions import SmatterDIInvalidRegistrationError, SmatterDIUnregisteredTypeError
from smatterdi.lazy import Lazy

T = TypeVar("T")

logger = logging.getLogger(__name__)


class InjectionContext(ABC):
    """Interface used by generated specializations to reach their registry."""

    @abstractmethod
    def get_instance(self, dependency: type[T]) -> T:
        """Return the singleton registered for ``dependency``.

        Args:
            dependency: Type key to look up.

        Raises:
            SmatterDIUnregisteredTypeError: If nothing is registered for the key.

        """

    @abstractmethod
    def autowire(self, dependency: type[T], instance: T) -> None:
        """Publish ``instance`` for ``dependency`` unless a slot already exists.

        Args:
            dependency: Type key to register.
            instance: Possibly still initializing instance.

        """


class _InstanceSlot(Generic[T]):
    """Singleton slot whose supplier can be swapped until the value is forced."""

    __slots__ = ("supplier", "value")

    def __init__(self, supplier: Callable[[], T]) -> None:
        self.supplier = supplier
        self.value: Lazy[T] = Lazy(self._supply)

    def _supply(self) -> T:
        return self.supplier()

    @classmethod
    def resolved(cls, instance: T) -> _InstanceSlot[T]:
        slot = cls(lambda: instance)
        slot.value = Lazy.of(instance)
        return slot


class SimpleInjectionContext(InjectionContext):
    """Type-keyed registry of lazily computed singletons.

    Lookups are plain dictionary reads. Slot replacement is serialized by a
    registry lock that never calls user code; each slot computes its value
    under its own lock, so forcing two different types never contends.

    Examples:
        .. code-block:: python

            context = SimpleInjectionContext()
            context.set_implementation(Config, Config(debug=True))
            context.set_provider(Service, lambda: allocator.allocate(Service, context))
            context.get_instance(Service)

    """

    def __init__(self) -> None:
        self._instances: dict[Any, _InstanceSlot[Any]] = {}
        self._lock = threading.Lock()

    def get_instance(self, dependency: type[T]) -> T:
        slot = self._instances.get(dependency)
        if slot is None:
            msg = f"No implementation of type {dependency!r} is registered."
            raise SmatterDIUnregisteredTypeError(msg)
        return slot.value.get()

    def set_implementation(self, dependency: type[T], value: T) -> None:
        """Register ``value`` as the singleton for ``dependency``.

        An unforced slot keeps its identity, so hooks already registered through
        ``configure`` still run. A forced slot is replaced by a new forced one.

        Args:
            dependency: Type key to register.
            value: Instance to return for the key.

        Raises:
            SmatterDIInvalidRegistrationError: If ``value`` is ``None``.

        """
        if value is None:
            msg = f"Cannot register None as the implementation of {dependency!r}."
            raise SmatterDIInvalidRegistrationError(msg)

        def supplier() -> T:
            return value

        self._install(dependency, supplier, replacement=lambda: _InstanceSlot.resolved(value))

    def set_provider(self, dependency: type[T], provider: Callable[[], T]) -> None:
        """Register a zero-argument provider computing the singleton on first use.

        Args:
            dependency: Type key to register.
            provider: Callable producing the instance. Called at most once per slot.

        Raises:
            SmatterDIInvalidRegistrationError: If ``provider`` is not callable.

        """
        if not callable(provider):
            msg = f"Provider for {dependency!r} must be callable, got {provider!r}."
            raise SmatterDIInvalidRegistrationError(msg)
        self._install(dependency, provider, replacement=lambda: _InstanceSlot(provider))

    def _install(
        self,
        dependency: Any,
        supplier: Callable[[], Any],
        *,
        replacement: Callable[[], _InstanceSlot[Any]],
    ) -> None:
        with self._lock:
            slot = self._instances.get(dependency)
            if slot is None:
                self._instances[dependency] = _InstanceSlot(supplier)
                return
            if not slot.value.is_done():
                slot.supplier = supplier
                # The slot may have been forced with the old supplier meanwhile.
                if not slot.value.is_done():
                    return
            self._instances[dependency] = replacement()

    def remove_implementation(self, dependency: type[Any]) -> None:
        """Delete the slot for ``dependency`` if there is one."""
        with self._lock:
            self._instances.pop(dependency, None)

    def autowire(self, dependency: type[T], instance: T) -> None:
        slot = _InstanceSlot.resolved(instance)
        if self._instances.setdefault(dependency, slot) is slot:
            logger.debug("Autowired %r for %r", instance, dependency)
        else:
            logger.debug("Skipped autowiring %r: a slot already exists", dependency)

    def configure(self, dependency: type[T], action: Callable[[T], object]) -> None:
        """Run ``action`` once on the singleton of ``dependency`` after it is computed.

        Args:
            dependency: Registered type key.
            action: Hook receiving the computed instance.

        Raises:
            SmatterDIUnregisteredTypeError: If nothing is registered for the key.

        """
        slot = self._instances.get(dependency)
        if slot is None:
            msg = f"No implementation of type {dependency!r} is registered."
            raise SmatterDIUnregisteredTypeError(msg)
        slot.value.configure(action)

    def copy(self) -> Self:
        """Return a context sharing the current slots but with its own slot table."""
        duplicate = type(self)()
        with self._lock:
            duplicate._instances.update(self._instances)
        return duplicate

    def __contains__(self, dependency: object) -> bool:
        return dependency in self._instances
