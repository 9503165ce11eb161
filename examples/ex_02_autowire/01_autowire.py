"""Autowire: break a constructor cycle with early self-registration.

``Project`` and ``Workspace`` reach each other from their constructors.
Marking ``Project`` with ``@autowire`` publishes the half-built project into
the context before its first accessor call, so the workspace provider can find
it instead of recursing.
"""

from smatterdi import CodegenObjectAllocator, SimpleInjectionContext, autowire, inject


@autowire
class Project:
    def __init__(self, name: str) -> None:
        self.name = name
        self.workspace = self.get_workspace()

    @inject
    def get_workspace(self) -> "Workspace":
        raise NotImplementedError


class Workspace:
    def __init__(self) -> None:
        self.project = self.get_project()

    @inject
    def get_project(self) -> Project:
        raise NotImplementedError


def main() -> None:
    allocator = CodegenObjectAllocator()
    context = SimpleInjectionContext()
    context.set_provider(Workspace, lambda: allocator.allocate(Workspace, context))

    project = allocator.allocate(Project, context, "smatterdi")

    print(f"project={project.name}")  # => project=smatterdi
    print(f"cycle_closed={project.get_workspace().project is project}")  # => cycle_closed=True
    print(f"registered={context.get_instance(Project) is project}")  # => registered=True


if __name__ == "__main__":
    main()
