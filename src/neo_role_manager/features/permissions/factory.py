"""Wiring helpers for the role manager service."""

import logging

from ...config.settings import RoleManagerSettings
from ...database import DatabaseManager
from .entities import OperationRegistry
from .repositories import AsyncPGRoleStore, AsyncPGUserStore
from .services import (
    CachedPermissionCatalog,
    PermissionCatalogBuilder,
    PermissionReconciler,
    RoleManagerService,
)


logger = logging.getLogger(__name__)


def create_role_manager_service(
    database: DatabaseManager,
    registry: OperationRegistry,
    settings: RoleManagerSettings
) -> RoleManagerService:
    """Create a role manager service backed by the asyncpg stores.

    Args:
        database: Database manager owning the connection pool
        registry: Operation registry the permission catalog is built from
        settings: Role manager settings (schema and catalog caching)

    Returns:
        Configured RoleManagerService
    """
    role_store = AsyncPGRoleStore(database, schema=settings.db_schema)
    user_store = AsyncPGUserStore(database, schema=settings.db_schema)

    builder = PermissionCatalogBuilder(registry)
    catalog = CachedPermissionCatalog(builder) if settings.catalog_cache_enabled else builder

    logger.debug(
        f"Created role manager service (schema={settings.db_schema}, "
        f"catalog_cache={settings.catalog_cache_enabled})"
    )
    return RoleManagerService(
        role_store=role_store,
        user_store=user_store,
        catalog=catalog,
        reconciler=PermissionReconciler(role_store)
    )
