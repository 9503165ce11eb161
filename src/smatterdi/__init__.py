from smatterdi.allocator import (
    AllocationStrategy,
    CodegenObjectAllocator,
    ObjectAllocator,
    ReflectiveStrategy,
    SpecializedStrategy,
)
from smatterdi.context import InjectionContext, SimpleInjectionContext
from smatterdi.exceptions import (
    SmatterDIAmbiguousConstructorError,
    SmatterDIComputeError,
    SmatterDIConstructionFailedError,
    SmatterDIConstructorMatchError,
    SmatterDIError,
    SmatterDIInstanceTypeError,
    SmatterDIInvalidAccessorError,
    SmatterDIInvalidRegistrationError,
    SmatterDINoMatchingConstructorError,
    SmatterDINotInstantiableError,
    SmatterDITypeDefinitionError,
    SmatterDIUnregisteredTypeError,
)
from smatterdi.lazy import Lazy
from smatterdi.markers import autowire, inject
from smatterdi.settings import SmatterDISettings
from smatterdi.type_loader import ExecTypeLoader, TypeLoader

__all__ = [
    "AllocationStrategy",
    "CodegenObjectAllocator",
    "ExecTypeLoader",
    "InjectionContext",
    "Lazy",
    "ObjectAllocator",
    "ReflectiveStrategy",
    "SimpleInjectionContext",
    "SmatterDIAmbiguousConstructorError",
    "SmatterDIComputeError",
    "SmatterDIConstructionFailedError",
    "SmatterDIConstructorMatchError",
    "SmatterDIError",
    "SmatterDIInstanceTypeError",
    "SmatterDIInvalidAccessorError",
    "SmatterDIInvalidRegistrationError",
    "SmatterDINoMatchingConstructorError",
    "SmatterDINotInstantiableError",
    "SmatterDISettings",
    "SmatterDITypeDefinitionError",
    "SmatterDIUnregisteredTypeError",
    "SpecializedStrategy",
    "TypeLoader",
    "autowire",
    "inject",
]
