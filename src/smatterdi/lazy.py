from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Final, Generic, TypeVar, cast

from typing_extensions import Self

from smatterdi.exceptions import SmatterDIComputeError

T = TypeVar("T")

_UNSET: Final[Any] = object()


def _already_computed() -> Any:
    msg = "An already computed lazy value has no supplier."
    raise RuntimeError(msg)


class Lazy(Generic[T]):
    """Thread-safe, compute-once value holder.

    The supplier runs at most once. A successful result is published after all
    configuration hooks ran on it; a failure of the supplier or of a hook is
    recorded and replayed on every later access.

    Examples:
        .. code-block:: python

            settings = Lazy(load_settings)
            settings.configure(lambda value: value.freeze())
            settings.get()

    """

    __slots__ = ("_configurations", "_failure", "_lock", "_supplier", "_value")

    def __init__(self, supplier: Callable[[], T]) -> None:
        self._supplier = supplier
        self._configurations: list[Callable[[T], object]] = []
        self._value: Any = _UNSET
        self._failure: BaseException | None = None
        # Re-entrant: a supplier may trigger nested lookups on the same thread.
        self._lock = threading.RLock()

    @classmethod
    def of(cls, value: T) -> Lazy[T]:
        """Return a lazy whose value is already computed.

        Args:
            value: The value to publish. Must not be ``None``.

        """
        if value is None:
            msg = "A lazy value may not be None."
            raise ValueError(msg)
        lazy = cls(_already_computed)
        lazy._value = value
        return lazy

    def get(self) -> T:
        """Return the value, computing it on first access.

        Raises:
            SmatterDIComputeError: If this or an earlier computation failed.

        """
        value = self._value
        if value is not _UNSET:
            return cast("T", value)

        failure = self._failure
        if failure is not None:
            msg = "Previous attempt at initializing the value failed."
            raise SmatterDIComputeError(msg) from failure

        with self._lock:
            if self._value is not _UNSET:
                return cast("T", self._value)

            failure = self._failure
            if failure is not None:
                msg = (
                    "Previous attempt at initializing the value failed "
                    "while waiting for the computing thread."
                )
                raise SmatterDIComputeError(msg) from failure

            try:
                value = self._supplier()
                if value is None:
                    msg = "The lazy supplier returned None."
                    raise ValueError(msg)
                for action in self._configurations:
                    action(value)
            except BaseException as exc:
                self._failure = exc
                if not isinstance(exc, Exception):
                    raise
                msg = "Attempt at initializing the value failed."
                raise SmatterDIComputeError(msg) from exc
            finally:
                self._configurations.clear()

            self._value = value
            return cast("T", value)

    def get_if_present(self) -> T | None:
        """Return the computed value, or ``None`` when it was not computed yet."""
        value = self._value
        if value is _UNSET:
            return None
        return cast("T", value)

    def configure(self, action: Callable[[T], object]) -> Self:
        """Register a hook that runs once on the computed value.

        Hooks registered before computation run right after the supplier
        succeeds, before the value becomes visible. Hooks registered afterwards
        run immediately on the calling thread.

        Args:
            action: Callable receiving the computed value.

        Raises:
            SmatterDIComputeError: If the computation already failed.

        """
        value = self._value
        if value is not _UNSET:
            action(value)
            return self

        with self._lock:
            if self._value is not _UNSET:
                action(self._value)
                return self

            failure = self._failure
            if failure is not None:
                msg = "Cannot configure a lazy value whose initialization failed."
                raise SmatterDIComputeError(msg) from failure

            self._configurations.append(action)
        return self

    def is_done(self) -> bool:
        """Return whether a value or a failure was recorded."""
        return self._value is not _UNSET or self._failure is not None

    def __repr__(self) -> str:
        if self._value is not _UNSET:
            return f"Lazy(value={self._value!r})"
        if self._failure is not None:
            return f"Lazy(<failed: {self._failure!r}>)"
        return "Lazy(<pending>)"
