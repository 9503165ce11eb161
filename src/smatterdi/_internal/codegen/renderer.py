from __future__ import annotations

import keyword
from dataclasses import dataclass
from textwrap import indent
from typing import Any, Final

from smatterdi._internal.accessors import AccessorPlan
from smatterdi._internal.codegen.snippets import Snippet, SnippetEnvironment
from smatterdi._internal.codegen.templates import (
    ACCESSOR_METHOD_TEMPLATE,
    AUTOWIRE_METHOD_TEMPLATE,
    CLASS_TEMPLATE,
    DEPENDENCY_GLOBAL_TEMPLATE,
    INIT_METHOD_TEMPLATE,
    MODULE_TEMPLATE,
    NEW_METHOD_TEMPLATE,
)
from smatterdi._internal.constructors import REGISTRY_PARAMETER_NAME
from smatterdi.exceptions import SmatterDIInvalidAccessorError
from smatterdi.type_loader import SUPER_TYPE_GLOBAL

_INDENT: Final[str] = " " * 4
_GENERATOR_SOURCE: Final[str] = (
    "smatterdi._internal.codegen.renderer.SpecializationRenderer.render"
)


@dataclass(frozen=True, slots=True)
class SpecializationPlan:
    """Everything needed to render one generated specialization."""

    class_name: str
    base: type[Any]
    accessors: tuple[AccessorPlan, ...]
    autowire: bool
    serial: int

    @property
    def registry_attribute(self) -> str:
        return f"_smatterdi_registry_{self.serial}"

    @property
    def autowired_attribute(self) -> str:
        return f"_smatterdi_autowired_{self.serial}"

    @property
    def autowire_method(self) -> str:
        return f"_smatterdi_autowire_{self.serial}"

    @property
    def forwards_new(self) -> bool:
        """Whether the base overrides ``__new__`` and must not see the registry argument."""
        return self.base.__new__ is not object.__new__


class SpecializationRenderer:
    """Renderer for generated specialization source."""

    def __init__(self) -> None:
        self._env = SnippetEnvironment()
        self._module_template = self._template(MODULE_TEMPLATE)
        self._class_template = self._template(CLASS_TEMPLATE)
        self._new_method_template = self._template(NEW_METHOD_TEMPLATE)
        self._init_method_template = self._template(INIT_METHOD_TEMPLATE)
        self._autowire_method_template = self._template(AUTOWIRE_METHOD_TEMPLATE)
        self._accessor_method_template = self._template(ACCESSOR_METHOD_TEMPLATE)
        self._dependency_global_template = self._template(DEPENDENCY_GLOBAL_TEMPLATE)

    def render(self, plan: SpecializationPlan) -> str:
        """Render the module source defining the specialization described by ``plan``.

        The module expects its super type bound to ``_smatterdi_super`` and
        defines a class named ``plan.class_name``.

        Args:
            plan: Specialization to render.

        Raises:
            SmatterDIInvalidAccessorError: If an accessor name cannot be emitted.

        """
        for accessor in plan.accessors:
            _validate_identifier(plan, accessor.name)

        dependency_globals = [
            self._dependency_global_template.render(
                dependency_global=_dependency_global(index),
                accessor_name_literal=repr(accessor.name),
            )
            for index, accessor in enumerate(plan.accessors)
        ]
        accessor_summary = ", ".join(accessor.name for accessor in plan.accessors) or "none"

        return self._module_template.render(
            base_qualname=plan.base.__qualname__,
            generator_source=_GENERATOR_SOURCE,
            accessor_summary=accessor_summary,
            autowire=plan.autowire,
            super_global=SUPER_TYPE_GLOBAL,
            dependency_globals_block="\n".join(dependency_globals),
            class_block=self._render_class(plan),
        )

    def _render_class(self, plan: SpecializationPlan) -> str:
        methods: list[str] = []
        if plan.forwards_new:
            methods.append(
                self._new_method_template.render(registry_parameter=REGISTRY_PARAMETER_NAME),
            )
        methods.append(
            self._init_method_template.render(
                registry_parameter=REGISTRY_PARAMETER_NAME,
                registry_attribute=plan.registry_attribute,
                autowire=plan.autowire,
                autowired_attribute=plan.autowired_attribute,
                autowire_method=plan.autowire_method,
            ),
        )
        if plan.autowire:
            methods.append(
                self._autowire_method_template.render(
                    autowire_method=plan.autowire_method,
                    autowired_attribute=plan.autowired_attribute,
                    registry_attribute=plan.registry_attribute,
                    super_global=SUPER_TYPE_GLOBAL,
                ),
            )
        methods.extend(
            self._accessor_method_template.render(
                accessor_name=accessor.name,
                autowire=plan.autowire,
                autowire_method=plan.autowire_method,
                registry_attribute=plan.registry_attribute,
                dependency_global=_dependency_global(index),
            )
            for index, accessor in enumerate(plan.accessors)
        )

        return self._class_template.render(
            class_name=plan.class_name,
            super_global=SUPER_TYPE_GLOBAL,
            methods_block=indent("\n\n".join(methods), _INDENT),
        )

    def _template(self, text: str) -> Snippet:
        return self._env.from_string(text)


def _dependency_global(index: int) -> str:
    return f"_dependency_{index}"


def _validate_identifier(plan: SpecializationPlan, name: str) -> None:
    if name.isidentifier() and not keyword.iskeyword(name):
        return
    msg = (
        f"Class {plan.base.__qualname__} is invalid; accessor name {name!r} "
        "is not a valid Python identifier."
    )
    raise SmatterDIInvalidAccessorError(msg)


__all__ = ["SpecializationPlan", "SpecializationRenderer"]
