"""Exception hierarchy for neo-role-manager."""

from .base import RoleManagerError, get_http_status_code, create_error_response
from .domain import (
    ConfigurationError,
    DatabaseError,
    ValidationError,
    EntityNotFoundError,
    RoleNotFoundError,
    PersistenceError,
)
from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    # Base Exception
    "RoleManagerError",

    # Domain Exceptions
    "ConfigurationError",
    "DatabaseError",
    "ValidationError",
    "EntityNotFoundError",
    "RoleNotFoundError",
    "PersistenceError",

    # Utility Functions
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",
]
