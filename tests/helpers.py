"""Test doubles shared across smatterdi test modules."""

from __future__ import annotations

import threading
from typing import Any

from smatterdi.context import SimpleInjectionContext
from smatterdi.type_loader import ExecTypeLoader


class CountingTypeLoader(ExecTypeLoader):
    """Exec-based loader that records every class it defines."""

    def __init__(self) -> None:
        self.defined_names: list[str] = []
        self._lock = threading.Lock()

    def define_type(self, name: str, code: bytes, super_type: type[Any]) -> type[Any]:
        with self._lock:
            self.defined_names.append(name)
        return super().define_type(name, code, super_type)


class RecordingContext(SimpleInjectionContext):
    """Injection context that records autowire and lookup calls."""

    def __init__(self) -> None:
        super().__init__()
        self.autowired: list[tuple[Any, Any]] = []
        self.lookups: list[Any] = []

    def autowire(self, dependency: type[Any], instance: Any) -> None:
        self.autowired.append((dependency, instance))
        super().autowire(dependency, instance)

    def get_instance(self, dependency: type[Any]) -> Any:
        self.lookups.append(dependency)
        return super().get_instance(dependency)
