from typing import Any

import pytest

from smatterdi._internal.accessors import AccessorPlan, collect_accessors
from smatterdi._internal.codegen.renderer import SpecializationPlan, SpecializationRenderer
from smatterdi.exceptions import SmatterDIInvalidAccessorError
from smatterdi.markers import inject


class Clock:
    pass


class Scheduler:
    def __init__(self, name: str) -> None:
        self.name = name

    @inject
    def get_clock(self) -> Clock:
        raise NotImplementedError


class Token:
    def __new__(cls, value: str) -> "Token":
        instance = super().__new__(cls)
        instance.value = value  # type: ignore[attr-defined]
        return instance

    @inject
    def get_clock(self) -> Clock:
        raise NotImplementedError


def _plan(base: type[Any], *, autowire: bool = False, serial: int = 7) -> SpecializationPlan:
    return SpecializationPlan(
        class_name=f"generated_{base.__name__}_{serial}",
        base=base,
        accessors=collect_accessors(base),
        autowire=autowire,
        serial=serial,
    )


@pytest.fixture()
def renderer() -> SpecializationRenderer:
    return SpecializationRenderer()


def test_renders_accessor_override(renderer: SpecializationRenderer) -> None:
    source = renderer.render(_plan(Scheduler))

    assert '"""Generated injection specialization of Scheduler.' in source
    assert "Accessors: get_clock" in source
    assert "_dependency_0 = _accessor_types['get_clock']" in source
    assert "class generated_Scheduler_7(_smatterdi_super):" in source
    assert "    def __init__(self, smatterdi_registry, /, *args, **kwargs):" in source
    assert "        self._smatterdi_registry_7 = smatterdi_registry" in source
    assert "    def get_clock(self):" in source
    assert "self._smatterdi_registry_7.get_instance(_dependency_0)" in source


def test_plain_specialization_has_no_autowire_members(renderer: SpecializationRenderer) -> None:
    source = renderer.render(_plan(Scheduler))

    assert "Autowire: False" in source
    assert "_smatterdi_autowire" not in source
    assert "_smatterdi_autowired" not in source
    assert "def __new__" not in source


def test_autowire_specialization_publishes_after_base_constructor(
    renderer: SpecializationRenderer,
) -> None:
    source = renderer.render(_plan(Scheduler, autowire=True))

    init_lines = [
        "        self._smatterdi_registry_7 = smatterdi_registry",
        "        self._smatterdi_autowired_7 = False",
        "        super().__init__(*args, **kwargs)",
        "        self._smatterdi_autowire_7()",
    ]
    assert "\n".join(init_lines) in source
    assert "self._smatterdi_registry_7.autowire(_smatterdi_super, self)" in source
    assert "    def get_clock(self):\n        self._smatterdi_autowire_7()\n" in source


def test_custom_new_drops_registry_argument(renderer: SpecializationRenderer) -> None:
    source = renderer.render(_plan(Token))

    assert "    def __new__(cls, smatterdi_registry, /, *args, **kwargs):" in source
    assert "        return super().__new__(cls, *args, **kwargs)" in source


def test_autowire_without_accessors_renders_constructor_only(
    renderer: SpecializationRenderer,
) -> None:
    source = renderer.render(_plan(Clock, autowire=True))

    assert "Accessors: none" in source
    assert "_dependency_" not in source
    assert "def _smatterdi_autowire_7(self):" in source


@pytest.mark.parametrize("autowire", [False, True])
def test_rendered_source_compiles(renderer: SpecializationRenderer, autowire: bool) -> None:
    source = renderer.render(_plan(Scheduler, autowire=autowire))

    compile(source, "<generated>", "exec")


def test_rejects_accessor_names_that_are_not_identifiers(
    renderer: SpecializationRenderer,
) -> None:
    plan = SpecializationPlan(
        class_name="generated_Scheduler_1",
        base=Scheduler,
        accessors=(AccessorPlan(name="class", return_type=Clock, owner=Scheduler),),
        autowire=False,
        serial=1,
    )

    with pytest.raises(SmatterDIInvalidAccessorError, match="not a valid Python identifier"):
        renderer.render(plan)


def test_plan_names_members_by_serial() -> None:
    plan = _plan(Scheduler, serial=42)

    assert plan.registry_attribute == "_smatterdi_registry_42"
    assert plan.autowired_attribute == "_smatterdi_autowired_42"
    assert plan.autowire_method == "_smatterdi_autowire_42"
    assert plan.forwards_new is False
    assert _plan(Token).forwards_new is True
