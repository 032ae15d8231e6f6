"""Dynamic permissions and role administration feature.

Provides the operation registries and permission catalog, the permission
reconciler, the role manager service and the role/user stores. The HTTP
surface lives in ``routers`` and is imported separately.
"""

from .decorators import (
    OperationModule,
    OperationAnnotations,
    Authorize,
    authorize,
    display,
    operation_module,
)
from .entities import (
    OperationMetadata,
    PermissionKey,
    PermissionDescriptor,
    PermissionDelta,
    make_permission_key,
    Role,
    RoleClaim,
    User,
    StoreResult,
    ReconcileResult,
    OperationRegistry,
    PermissionCatalog,
    RoleStore,
    UserStore,
)
from .registry import StaticOperationRegistry, RouterOperationRegistry
from .services import (
    PermissionCatalogBuilder,
    CachedPermissionCatalog,
    group_by_area,
    PermissionReconciler,
    diff_permissions,
    apply_delta,
    RoleManagerService,
    RolePermissions,
)
from .repositories import (
    InMemoryRoleStore,
    InMemoryUserStore,
    AsyncPGRoleStore,
    AsyncPGUserStore,
)
from .factory import create_role_manager_service

__all__ = [
    # Annotations
    "OperationModule",
    "OperationAnnotations",
    "Authorize",
    "authorize",
    "display",
    "operation_module",

    # Entities
    "OperationMetadata",
    "PermissionKey",
    "PermissionDescriptor",
    "PermissionDelta",
    "make_permission_key",
    "Role",
    "RoleClaim",
    "User",
    "StoreResult",
    "ReconcileResult",

    # Protocols
    "OperationRegistry",
    "PermissionCatalog",
    "RoleStore",
    "UserStore",

    # Registries
    "StaticOperationRegistry",
    "RouterOperationRegistry",

    # Services
    "PermissionCatalogBuilder",
    "CachedPermissionCatalog",
    "group_by_area",
    "PermissionReconciler",
    "diff_permissions",
    "apply_delta",
    "RoleManagerService",
    "RolePermissions",
    "create_role_manager_service",

    # Stores
    "InMemoryRoleStore",
    "InMemoryUserStore",
    "AsyncPGRoleStore",
    "AsyncPGUserStore",
]
