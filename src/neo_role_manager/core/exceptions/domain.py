"""Domain-specific exceptions for neo-role-manager."""

from typing import Any, Dict, Iterable, Optional

from .base import RoleManagerError


# Configuration Errors
class ConfigurationError(RoleManagerError):
    """Raised when there's a configuration issue."""
    pass


# Database Errors
class DatabaseError(RoleManagerError):
    """Raised when a database operation fails unexpectedly."""
    pass


# Validation Errors
class ValidationError(RoleManagerError):
    """Raised when caller-supplied data fails structural validation."""
    pass


# Lookup Errors
class EntityNotFoundError(RoleManagerError):
    """Raised when a requested entity does not exist."""
    pass


class RoleNotFoundError(EntityNotFoundError):
    """Raised when a role id or name does not resolve in the role store."""

    def __init__(self, role_ref: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Role {role_ref} not found",
            details={"role": str(role_ref), **(details or {})}
        )
        self.role_ref = role_ref


# Persistence Errors
class PersistenceError(RoleManagerError):
    """Raised when the role store rejects a write.

    Carries the store's error descriptions verbatim.
    """

    def __init__(self, message: str, errors: Iterable[str] = (), details: Optional[Dict[str, Any]] = None):
        self.errors = list(errors)
        super().__init__(message, details={"errors": self.errors, **(details or {})})
