"""Role manager API models."""

from .requests import (
    UpdatePermissionsRequest,
    CreateRoleRequest,
    EditRoleRequest,
    RemoveRoleRequest,
)
from .responses import (
    RoleResponse,
    RoleClaimResponse,
    UserResponse,
    PermissionDescriptorResponse,
    RolePermissionsResponse,
    PermissionUpdateResponse,
    PermissionUpdateErrorResponse,
)

__all__ = [
    # Requests
    "UpdatePermissionsRequest",
    "CreateRoleRequest",
    "EditRoleRequest",
    "RemoveRoleRequest",

    # Responses
    "RoleResponse",
    "RoleClaimResponse",
    "UserResponse",
    "PermissionDescriptorResponse",
    "RolePermissionsResponse",
    "PermissionUpdateResponse",
    "PermissionUpdateErrorResponse",
]
