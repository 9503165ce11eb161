"""Tests for environment configuration and the generated source dump."""

import logging
from pathlib import Path

import pytest

from smatterdi.allocator import CodegenObjectAllocator
from smatterdi.context import SimpleInjectionContext
from smatterdi.markers import inject
from smatterdi.settings import SmatterDISettings


class Repository:
    pass


class Checkout:
    @inject
    def get_repository(self) -> Repository:
        raise NotImplementedError


def test_defaults_disable_dumping(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SMATTERDI_DEBUG", raising=False)
    monkeypatch.delenv("SMATTERDI_DUMP_DIRECTORY", raising=False)

    settings = SmatterDISettings()

    assert settings.debug is False
    assert settings.dump_directory == Path("smatterdi-generated")


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SMATTERDI_DEBUG", "1")
    monkeypatch.setenv("SMATTERDI_DUMP_DIRECTORY", str(tmp_path))

    settings = SmatterDISettings()

    assert settings.debug is True
    assert settings.dump_directory == tmp_path


def test_allocator_reads_environment_when_no_settings_are_given(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    dump_directory = tmp_path / "generated"
    monkeypatch.setenv("SMATTERDI_DEBUG", "true")
    monkeypatch.setenv("SMATTERDI_DUMP_DIRECTORY", str(dump_directory))

    checkout = CodegenObjectAllocator().allocate(Checkout, SimpleInjectionContext())

    assert (dump_directory / f"{type(checkout).__name__}.py").is_file()


def test_debug_dump_writes_generated_source(tmp_path: Path) -> None:
    settings = SmatterDISettings(debug=True, dump_directory=tmp_path / "nested" / "dir")
    allocator = CodegenObjectAllocator(settings=settings)

    checkout = allocator.allocate(Checkout, SimpleInjectionContext())

    name = type(checkout).__name__
    source = (tmp_path / "nested" / "dir" / f"{name}.py").read_text(encoding="utf-8")
    assert f"class {name}(_smatterdi_super):" in source
    assert "def get_repository(self):" in source


def test_no_dump_without_debug(tmp_path: Path) -> None:
    settings = SmatterDISettings(debug=False, dump_directory=tmp_path)

    CodegenObjectAllocator(settings=settings).allocate(Checkout, SimpleInjectionContext())

    assert list(tmp_path.iterdir()) == []


def test_dump_failure_is_logged_and_allocation_continues(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    settings = SmatterDISettings(debug=True, dump_directory=blocker / "generated")
    allocator = CodegenObjectAllocator(settings=settings)

    with caplog.at_level(logging.ERROR, logger="smatterdi.allocator"):
        checkout = allocator.allocate(Checkout, SimpleInjectionContext())

    assert isinstance(checkout, Checkout)
    assert "Unable to write generated specialization source" in caplog.text
