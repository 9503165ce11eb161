from __future__ import annotations

import itertools
import logging
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final, TypeVar, cast

from smatterdi._internal.accessors import collect_accessors
from smatterdi._internal.codegen.renderer import SpecializationPlan, SpecializationRenderer
from smatterdi._internal.constructors import construct
from smatterdi._internal.type_checks import is_final_class, not_instantiable_reason
from smatterdi.context import InjectionContext
from smatterdi.exceptions import SmatterDINotInstantiableError, SmatterDITypeDefinitionError
from smatterdi.markers import is_autowired
from smatterdi.settings import SmatterDISettings
from smatterdi.type_loader import ExecTypeLoader, TypeLoader

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Shared by all allocators so generated names never collide within a process.
_GENERATED_TYPE_COUNTER: Final = itertools.count()
_NON_IDENTIFIER_PATTERN: Final = re.compile(r"\W")


class ObjectAllocator(ABC):
    """Interface for objects that build instances against an injection context."""

    @abstractmethod
    def allocate(self, requested: type[T], context: InjectionContext, /, *args: Any) -> T:
        """Return a new instance of ``requested``.

        Args:
            requested: Class to instantiate.
            context: Injection context dependency accessors resolve through.
            args: Positional constructor arguments.

        """


class AllocationStrategy(ABC):
    """Cached decision on how instances of one requested class are built."""

    __slots__ = ()

    @abstractmethod
    def allocate(self, context: InjectionContext, args: Sequence[Any]) -> Any:
        """Build an instance for ``context`` from ``args``."""


@dataclass(frozen=True, slots=True)
class ReflectiveStrategy(AllocationStrategy):
    """Construct the requested class directly through constructor matching."""

    target: type[Any]

    def allocate(self, context: InjectionContext, args: Sequence[Any]) -> Any:
        del context
        return construct(self.target, args)


@dataclass(frozen=True, slots=True)
class SpecializedStrategy(AllocationStrategy):
    """Construct a generated specialization, passing the context first."""

    requested: type[Any]
    specialization: type[Any]

    def allocate(self, context: InjectionContext, args: Sequence[Any]) -> Any:
        return construct(self.specialization, (context, *args))


class CodegenObjectAllocator(ObjectAllocator):
    """Allocator that generates injection specializations at runtime.

    Classes without ``@inject`` accessors and without ``@autowire`` are built
    through constructor matching. For all other classes a subclass is rendered
    as Python source, defined through the type loader and cached; its
    accessors ask the injection context for their return type on every call.

    Strategies are created once per class under an allocator-wide lock that is
    released before any instance is built, so nested allocations from
    constructors and providers never block on it.

    Examples:
        .. code-block:: python

            allocator = CodegenObjectAllocator()
            context = SimpleInjectionContext()
            context.set_provider(Tasks, lambda: allocator.allocate(Tasks, context))
            build = allocator.allocate(Build, context, "release")

    """

    def __init__(
        self,
        type_loader: TypeLoader | None = None,
        *,
        settings: SmatterDISettings | None = None,
    ) -> None:
        self._type_loader: TypeLoader = type_loader if type_loader is not None else ExecTypeLoader()
        self._settings = settings if settings is not None else SmatterDISettings()
        self._renderer = SpecializationRenderer()
        self._strategies: dict[type[Any], AllocationStrategy] = {}
        self._lock = threading.Lock()

    def allocate(self, requested: type[T], context: InjectionContext, /, *args: Any) -> T:
        """Return a new instance of ``requested``.

        Args:
            requested: Class to instantiate.
            context: Injection context the instance's accessors resolve through.
            args: Positional arguments forwarded to the matching constructor.

        Raises:
            SmatterDINotInstantiableError: If ``requested`` cannot be allocated.
            SmatterDIInvalidAccessorError: If an ``@inject`` declaration is invalid.
            SmatterDINoMatchingConstructorError: If no constructor accepts ``args``.
            SmatterDIAmbiguousConstructorError: If several constructors accept ``args``.
            SmatterDIConstructionFailedError: If the constructor raised.

        """
        strategy = self._strategies.get(requested)
        if strategy is None:
            strategy = self.strategy_for(requested)
        return cast("T", strategy.allocate(context, args))

    def strategy_for(self, requested: type[Any]) -> AllocationStrategy:
        """Return the cached strategy for ``requested``, creating it on first use.

        Args:
            requested: Class to build instances of.

        """
        strategy = self._strategies.get(requested)
        if strategy is not None:
            return strategy

        reason = not_instantiable_reason(requested)
        if reason is not None:
            msg = f"Cannot create an instance of {requested!r}: {reason}."
            raise SmatterDINotInstantiableError(msg)

        with self._lock:
            strategy = self._strategies.get(requested)
            if strategy is None:
                strategy = self._create_strategy(requested)
                self._strategies[requested] = strategy
        return strategy

    def _create_strategy(self, requested: type[Any]) -> AllocationStrategy:
        accessors = collect_accessors(requested)
        autowire = is_autowired(requested)

        if not accessors and not autowire:
            logger.info("Allocation strategy for %s: reflective", requested.__qualname__)
            return ReflectiveStrategy(target=requested)

        if is_final_class(requested):
            msg = f"Cannot specialize {requested!r}: it is final."
            raise SmatterDINotInstantiableError(msg)

        serial = next(_GENERATED_TYPE_COUNTER)
        plan = SpecializationPlan(
            class_name=f"generated_{_NON_IDENTIFIER_PATTERN.sub('_', requested.__name__)}_{serial}",
            base=requested,
            accessors=accessors,
            autowire=autowire,
            serial=serial,
        )
        code = self._renderer.render(plan).encode("utf-8")
        if self._settings.debug:
            self._dump(plan.class_name, code)

        try:
            specialization = self._type_loader.define_type(plan.class_name, code, requested)
        except SmatterDITypeDefinitionError:
            raise
        except Exception as exc:
            msg = f"Unable to define injection specialization '{plan.class_name}'."
            raise SmatterDITypeDefinitionError(msg) from exc

        if not isinstance(specialization, type) or not issubclass(specialization, requested):
            msg = (
                f"Type loader returned {specialization!r} for '{plan.class_name}', "
                f"which is not a subclass of {requested!r}."
            )
            raise SmatterDITypeDefinitionError(msg)

        logger.info(
            "Allocation strategy for %s: specialized as %s accessor_count=%d autowire=%s",
            requested.__qualname__,
            plan.class_name,
            len(accessors),
            autowire,
        )
        return SpecializedStrategy(requested=requested, specialization=specialization)

    def _dump(self, name: str, code: bytes) -> None:
        path = self._settings.dump_directory / f"{name}.py"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(code)
        except OSError:
            logger.exception("Unable to write generated specialization source to %s", path)
