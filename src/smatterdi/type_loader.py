from __future__ import annotations

from typing import Any, Final, Protocol

from smatterdi.exceptions import SmatterDITypeDefinitionError

SUPER_TYPE_GLOBAL: Final[str] = "_smatterdi_super"
"""Global name under which generated code expects its super type."""


class TypeLoader(Protocol):
    """Host collaborator turning generated code into a usable class."""

    def define_type(self, name: str, code: bytes, super_type: type[Any]) -> type[Any]:
        """Define the class ``name`` from ``code``.

        Args:
            name: Name of the class the code defines.
            code: UTF-8 encoded Python module source.
            super_type: Class being specialized. Must be bound to
                ``_smatterdi_super`` while the code runs.

        """
        ...


class ExecTypeLoader:
    """Define generated classes by compiling and executing their source in-process."""

    def define_type(self, name: str, code: bytes, super_type: type[Any]) -> type[Any]:
        """Execute ``code`` in a fresh namespace and return the class it defines.

        The namespace is named after the super type's module so the generated
        class reports the same ``__module__``.

        Args:
            name: Name of the class the code defines.
            code: UTF-8 encoded Python module source.
            super_type: Class being specialized.

        Raises:
            SmatterDITypeDefinitionError: If the code does not define a subclass
                of ``super_type`` named ``name``.

        """
        namespace: dict[str, Any] = {
            "__name__": super_type.__module__,
            SUPER_TYPE_GLOBAL: super_type,
        }
        compiled = compile(code, f"<smatterdi:{name}>", "exec")
        exec(compiled, namespace)  # noqa: S102

        defined = namespace.get(name)
        if not isinstance(defined, type) or not issubclass(defined, super_type):
            msg = f"Generated code for '{name}' did not define a subclass of {super_type!r}."
            raise SmatterDITypeDefinitionError(msg)
        return defined


__all__ = ["SUPER_TYPE_GLOBAL", "ExecTypeLoader", "TypeLoader"]
