"""Tests for the smatterdi exception hierarchy."""

from __future__ import annotations

import pytest

import smatterdi
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


@pytest.mark.parametrize(
    "error_type",
    [
        SmatterDIAmbiguousConstructorError,
        SmatterDIComputeError,
        SmatterDIConstructionFailedError,
        SmatterDIConstructorMatchError,
        SmatterDIInstanceTypeError,
        SmatterDIInvalidAccessorError,
        SmatterDIInvalidRegistrationError,
        SmatterDINoMatchingConstructorError,
        SmatterDINotInstantiableError,
        SmatterDITypeDefinitionError,
        SmatterDIUnregisteredTypeError,
    ],
)
def test_every_error_derives_from_base_error(error_type: type[Exception]) -> None:
    assert issubclass(error_type, SmatterDIError)
    assert getattr(smatterdi, error_type.__name__) is error_type


def test_constructor_match_errors_share_a_base() -> None:
    assert issubclass(SmatterDINoMatchingConstructorError, SmatterDIConstructorMatchError)
    assert issubclass(SmatterDIAmbiguousConstructorError, SmatterDIConstructorMatchError)


def test_instance_type_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        raise SmatterDIInstanceTypeError
