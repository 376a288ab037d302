"""Reporter configuration — env-driven settings.

Centralized config using pydantic-settings for environment variable
support. Reads from a .env file and TASKECHO_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ReporterConfig(BaseSettings):
    """Reporter configuration with environment variable overrides.

    All settings can be overridden via TASKECHO_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export TASKECHO_NOTIFY_PLUGINS=false
        export TASKECHO_LOG_LEVEL=DEBUG

    Or via .env file::

        TASKECHO_DESCRIPTOR_NAME=tasks.toml
        TASKECHO_NO_COLOR=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TASKECHO_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Startup notices
    notify_cwd: bool = True
    notify_plugins: bool = True
    descriptor_name: str = "package.json"

    # Line glyphs
    icon: str = "@_@"
    fatal_icon: str = "@_@;"

    # Output
    no_color: bool = False

    # Diagnostics (CLI only)
    log_level: str = "WARNING"


# Module-level singleton — import as `from taskecho.config import config`
config = ReporterConfig()
