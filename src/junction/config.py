"""Application configuration.

One frozen dataclass carries every setting. Environment variables are
read only by ``AppConfig.from_env()``, never behind the app's back.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(env="production", port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1
    reload: bool = False

    # Environment name. "production" hides error details from clients,
    # "test" silences the default error log.
    env: str = "development"

    # Log errors that reach the terminal handler
    log_errors: bool = True

    @property
    def should_log_errors(self) -> bool:
        """Whether the terminal handler reports errors through the log."""
        return self.log_errors and self.env != "test"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> "AppConfig":
        """Build a config from ``JUNCTION_*`` environment variables.

        Reads the environment once, here. Nothing else in junction looks
        at process state::

            config = AppConfig.from_env()           # os.environ
            config = AppConfig.from_env({"JUNCTION_ENV": "test"})

        Recognised variables: ``JUNCTION_ENV``, ``JUNCTION_HOST``,
        ``JUNCTION_PORT``. Keyword overrides win over the environment.
        """
        source = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if "JUNCTION_ENV" in source:
            values["env"] = source["JUNCTION_ENV"]
        if "JUNCTION_HOST" in source:
            values["host"] = source["JUNCTION_HOST"]
        if "JUNCTION_PORT" in source:
            values["port"] = int(source["JUNCTION_PORT"])
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
