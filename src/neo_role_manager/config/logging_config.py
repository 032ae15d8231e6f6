"""Logging setup for neo-role-manager.

Everything is driven by environment variables and applied through
``logging.config.dictConfig``:

- ``LOG_LEVEL``: explicit root level (DEBUG, INFO, ...); wins over verbosity
- ``LOG_VERBOSITY``: QUIET, NORMAL, VERBOSE or DEBUG (default NORMAL)
- ``LOG_FORMAT``: simple, detailed or json (default simple)
- ``ENABLE_SQL_LOGGING``: let asyncpg log below WARNING when "true"
"""

import logging
import logging.config
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class LogVerbosity(str, Enum):
    """Verbosity presets and the root level each one selects."""

    QUIET = "ERROR"
    NORMAL = "WARNING"
    VERBOSE = "INFO"
    DEBUG = "DEBUG"


LOG_FORMATS: Dict[str, str] = {
    "simple": "%(asctime)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    "json": '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LoggingConfig:
    """Resolved logging options.

    Use ``LoggingConfig.from_env()`` to read them, ``to_dict()`` for the
    ``dictConfig`` mapping and ``configure()`` to apply it.
    """

    level: str = LogVerbosity.NORMAL.value
    log_format: str = "simple"
    sql_logging: bool = False

    # Role stores and the pool log per query; keep them at WARNING unless debugging
    QUIET_LOGGERS = (
        "neo_role_manager.database",
        "neo_role_manager.features.permissions.repositories",
    )
    NOISY_LIBRARIES = ("httpx", "httpcore", "asyncio")

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        explicit = (os.getenv("LOG_LEVEL") or "").upper()
        if explicit in _LEVEL_NAMES:
            level = explicit
        else:
            verbosity = os.getenv("LOG_VERBOSITY", LogVerbosity.NORMAL.name).upper()
            level = LogVerbosity[verbosity].value if verbosity in LogVerbosity.__members__ else LogVerbosity.NORMAL.value

        log_format = os.getenv("LOG_FORMAT", "simple").lower()
        return cls(
            level=level,
            log_format=log_format if log_format in LOG_FORMATS else "simple",
            sql_logging=os.getenv("ENABLE_SQL_LOGGING", "false").lower() == "true",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Build the ``dictConfig`` mapping for these options."""
        def console_logger(level: str) -> Dict[str, Any]:
            return {"level": level, "handlers": ["console"], "propagate": False}

        quiet_level = "DEBUG" if self.level == "DEBUG" else "WARNING"
        loggers = {name: console_logger(quiet_level) for name in self.QUIET_LOGGERS}
        loggers.update({name: console_logger("ERROR") for name in self.NOISY_LIBRARIES})
        if not self.sql_logging:
            loggers["asyncpg"] = console_logger("WARNING")

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMATS[self.log_format], "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": self.level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": self.level, "handlers": ["console"]},
            "loggers": loggers,
        }

    @classmethod
    def build_config(cls) -> Dict[str, Any]:
        """``dictConfig`` mapping for the current environment."""
        return cls.from_env().to_dict()

    @classmethod
    def configure(cls) -> None:
        config = cls.from_env()
        logging.config.dictConfig(config.to_dict())
        logging.getLogger(__name__).debug(f"Logging configured: level={config.level}, format={config.log_format}")


def setup_logging() -> None:
    """Configure logging from the environment. Called once on package import."""
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
