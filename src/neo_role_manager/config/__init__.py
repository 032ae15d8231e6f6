"""Configuration for neo-role-manager."""

from .constants import (
    ClaimKind,
    DatabaseSchemas,
    TableNames,
    PERMISSION_KEY_SEPARATOR,
    ROLE_NAME_MAX_LENGTH,
)
from .logging_config import LoggingConfig, setup_logging, get_logger
from .settings import RoleManagerSettings, get_settings

__all__ = [
    # Constants
    "ClaimKind",
    "DatabaseSchemas",
    "TableNames",
    "PERMISSION_KEY_SEPARATOR",
    "ROLE_NAME_MAX_LENGTH",

    # Logging
    "LoggingConfig",
    "setup_logging",
    "get_logger",

    # Settings
    "RoleManagerSettings",
    "get_settings",
]
