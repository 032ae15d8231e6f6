"""Role manager routers."""

from .role_manager_router import role_manager_router, get_role_manager_service

__all__ = [
    "role_manager_router",
    "get_role_manager_service",
]
