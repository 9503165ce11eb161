"""Shared pytest fixtures for smatterdi tests."""

import pytest

from smatterdi.allocator import CodegenObjectAllocator
from smatterdi.context import SimpleInjectionContext
from smatterdi.settings import SmatterDISettings
from tests.helpers import CountingTypeLoader


@pytest.fixture()
def context() -> SimpleInjectionContext:
    """Empty injection context."""
    return SimpleInjectionContext()


@pytest.fixture()
def type_loader() -> CountingTypeLoader:
    """Exec-based type loader counting generated classes."""
    return CountingTypeLoader()


@pytest.fixture()
def allocator(type_loader: CountingTypeLoader) -> CodegenObjectAllocator:
    """Allocator with source dumping disabled regardless of the environment."""
    return CodegenObjectAllocator(type_loader, settings=SmatterDISettings(debug=False))
