"""Settings: dump generated specializations for inspection.

``SmatterDISettings`` reads ``SMATTERDI_*`` environment variables. With
``debug`` enabled every generated class is written to ``dump_directory``.
"""

import tempfile
from pathlib import Path

from smatterdi import CodegenObjectAllocator, SimpleInjectionContext, SmatterDISettings, inject


class Clock:
    pass


class Scheduler:
    @inject
    def get_clock(self) -> Clock:
        raise NotImplementedError


def main() -> None:
    with tempfile.TemporaryDirectory() as directory:
        settings = SmatterDISettings(debug=True, dump_directory=Path(directory))
        allocator = CodegenObjectAllocator(settings=settings)
        context = SimpleInjectionContext()
        context.set_implementation(Clock, Clock())

        scheduler = allocator.allocate(Scheduler, context)

        dumped = Path(directory) / f"{type(scheduler).__name__}.py"
        source = dumped.read_text(encoding="utf-8")
        print(f"dumped={dumped.is_file()}")  # => dumped=True
        print(f"overrides_accessor={'def get_clock(self):' in source}")  # => overrides_accessor=True


if __name__ == "__main__":
    main()
