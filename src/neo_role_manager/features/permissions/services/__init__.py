"""Permission services package.

Catalog building, permission reconciliation and role administration.
"""

from .catalog_builder import PermissionCatalogBuilder, CachedPermissionCatalog, group_by_area
from .permission_reconciler import PermissionReconciler, diff_permissions, apply_delta
from .role_manager_service import RoleManagerService, RolePermissions

__all__ = [
    "PermissionCatalogBuilder",
    "CachedPermissionCatalog",
    "group_by_area",
    "PermissionReconciler",
    "diff_permissions",
    "apply_delta",
    "RoleManagerService",
    "RolePermissions",
]
