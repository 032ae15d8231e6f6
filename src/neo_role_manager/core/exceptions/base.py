"""Root of the neo-role-manager exception hierarchy.

Every error carries a human readable ``message``, a machine readable
``error_code`` (the class name unless given) and a ``details`` mapping that
API error responses pass through unchanged.
"""

from typing import Any, Dict, Optional


class RoleManagerError(Exception):
    """Base exception for all neo-role-manager errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": type(self).__name__,
        }


def get_http_status_code(exception: Exception) -> int:
    """HTTP status code for ``exception`` (500 when unmapped)."""
    # http_mapping imports this module
    from .http_mapping import get_http_status_code as mapped_status_code
    return mapped_status_code(exception)


def create_error_response(exception: RoleManagerError) -> Dict[str, Any]:
    """JSON body for an error response: ``{"error": {...}}``."""
    return {"error": exception.to_dict()}
