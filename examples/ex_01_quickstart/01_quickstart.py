"""Quickstart: dependency accessors resolved through an injection context.

Declare dependencies as ``@inject`` accessor methods, register providers on a
``SimpleInjectionContext`` and let the allocator build a specialization that
answers the accessors from the context. Constructor arguments are still passed
by the caller.
"""

from abc import ABC, abstractmethod

from smatterdi import CodegenObjectAllocator, SimpleInjectionContext, inject


class TaskGraph:
    def __init__(self) -> None:
        self.tasks = ["compile", "test", "package"]


class Build(ABC):
    def __init__(self, variant: str) -> None:
        self.variant = variant

    @inject
    @abstractmethod
    def get_task_graph(self) -> TaskGraph: ...

    def describe(self) -> str:
        return f"{self.variant}: {' > '.join(self.get_task_graph().tasks)}"


def main() -> None:
    allocator = CodegenObjectAllocator()
    context = SimpleInjectionContext()
    context.set_provider(TaskGraph, lambda: allocator.allocate(TaskGraph, context))

    release = allocator.allocate(Build, context, "release")
    debug = allocator.allocate(Build, context, "debug")

    print(release.describe())  # => release: compile > test > package
    print(f"is_build={isinstance(release, Build)}")  # => is_build=True
    shared = release.get_task_graph() is debug.get_task_graph()
    print(f"shared_graph={shared}")  # => shared_graph=True


if __name__ == "__main__":
    main()
