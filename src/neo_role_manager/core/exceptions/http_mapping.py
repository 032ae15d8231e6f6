"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .base import RoleManagerError
from .domain import (
    ConfigurationError,
    DatabaseError,
    ValidationError,
    EntityNotFoundError,
    RoleNotFoundError,
    PersistenceError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    PersistenceError: 400,

    # 404 Not Found
    EntityNotFoundError: 404,
    RoleNotFoundError: 404,

    # 500 Internal Server Error
    DatabaseError: 500,
    ConfigurationError: 500,
    RoleManagerError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception, walking its class hierarchy.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code (500 for unmapped exceptions)
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
