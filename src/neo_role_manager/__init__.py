"""neo-role-manager - role administration and dynamic permissions.

Discovers the operations of a FastAPI application that are guarded by the
dynamic permission policy, presents them as a permission catalog and lets
administrators grant or revoke them per role.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    ClaimKind,
    RoleManagerSettings,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    RoleManagerError,

    # Domain Exceptions
    ConfigurationError,
    DatabaseError,
    ValidationError,
    RoleNotFoundError,
    PersistenceError,

    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .database import DatabaseManager

from .features.permissions import (
    # Annotations
    authorize,
    display,
    operation_module,

    # Entities
    OperationMetadata,
    PermissionDescriptor,
    PermissionDelta,
    Role,
    RoleClaim,
    User,
    StoreResult,
    ReconcileResult,

    # Registries and services
    StaticOperationRegistry,
    RouterOperationRegistry,
    PermissionCatalogBuilder,
    CachedPermissionCatalog,
    PermissionReconciler,
    diff_permissions,
    RoleManagerService,

    # Stores
    InMemoryRoleStore,
    InMemoryUserStore,
    AsyncPGRoleStore,
    AsyncPGUserStore,
)

__all__ = [
    "__version__",
    "ClaimKind",
    "RoleManagerSettings",
    "get_settings",
    "RoleManagerError",
    "ConfigurationError",
    "DatabaseError",
    "ValidationError",
    "RoleNotFoundError",
    "PersistenceError",
    "get_http_status_code",
    "create_error_response",
    "DatabaseManager",
    "authorize",
    "display",
    "operation_module",
    "OperationMetadata",
    "PermissionDescriptor",
    "PermissionDelta",
    "Role",
    "RoleClaim",
    "User",
    "StoreResult",
    "ReconcileResult",
    "StaticOperationRegistry",
    "RouterOperationRegistry",
    "PermissionCatalogBuilder",
    "CachedPermissionCatalog",
    "PermissionReconciler",
    "diff_permissions",
    "RoleManagerService",
    "InMemoryRoleStore",
    "InMemoryUserStore",
    "AsyncPGRoleStore",
    "AsyncPGUserStore",
]
