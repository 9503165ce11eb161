from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class SmatterDISettings(BaseSettings):
    """Process configuration read from ``SMATTERDI_*`` environment variables.

    Examples:
        .. code-block:: shell

            SMATTERDI_DEBUG=1 SMATTERDI_DUMP_DIRECTORY=build/generated python -m host

    """

    model_config = SettingsConfigDict(env_prefix="SMATTERDI_")

    debug: bool = False
    """Write the source of every generated specialization to ``dump_directory``."""

    dump_directory: Path = Path("smatterdi-generated")
    """Directory receiving ``<generated name>.py`` files when ``debug`` is set."""
