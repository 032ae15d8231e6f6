"""Permission entities package.

Domain entities and protocols for roles, claims and dynamic permissions.
"""

from .operation import OperationMetadata
from .permission import PermissionKey, PermissionDescriptor, PermissionDelta, make_permission_key
from .role import Role, RoleClaim
from .user import User
from .results import StoreResult, ReconcileResult
from .protocols import (
    OperationRegistry,
    PermissionCatalog,
    RoleStore,
    UserStore,
)

__all__ = [
    # Domain entities
    "OperationMetadata",
    "PermissionKey",
    "PermissionDescriptor",
    "PermissionDelta",
    "make_permission_key",
    "Role",
    "RoleClaim",
    "User",

    # Results
    "StoreResult",
    "ReconcileResult",

    # Protocols
    "OperationRegistry",
    "PermissionCatalog",
    "RoleStore",
    "UserStore",
]
