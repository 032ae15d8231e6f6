"""FastAPI application factory for the role manager.

Mounts the role manager router under ``settings.api_prefix``, builds the
operation registry from it and any extra application routers, and wires the
asyncpg-backed RoleManagerService into the router's placeholder dependency.
"""

import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import APIRouter, FastAPI

from ..__version__ import __version__
from ..config.settings import RoleManagerSettings, get_settings
from ..database import DatabaseManager
from ..features.permissions import RouterOperationRegistry, create_role_manager_service
from ..features.permissions.routers import role_manager_router, get_role_manager_service
from .exception_handlers import register_exception_handlers


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[RoleManagerSettings] = None,
    extra_routers: Iterable[APIRouter] = ()
) -> FastAPI:
    """Create the role manager API.

    Args:
        settings: Role manager settings, defaults to ``get_settings()``
        extra_routers: Application routers to include and expose in the
            permission catalog

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    extra_routers = list(extra_routers)
    database = DatabaseManager.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the connection pool on startup and close it on shutdown."""
        await database.create_pool()
        logger.info(f"{settings.app_name} started ({settings.environment})")
        try:
            yield
        finally:
            await database.close_pool()

    app = FastAPI(
        title="Neo Role Manager",
        version=__version__,
        description="Role administration and dynamic permission management",
        debug=settings.debug,
        lifespan=lifespan
    )

    registry = RouterOperationRegistry([role_manager_router, *extra_routers])
    service = create_role_manager_service(database, registry, settings)

    app.state.settings = settings
    app.state.database = database
    app.state.operation_registry = registry
    app.state.role_manager_service = service

    app.include_router(role_manager_router, prefix=settings.api_prefix)
    for router in extra_routers:
        app.include_router(router)

    app.dependency_overrides[get_role_manager_service] = lambda: app.state.role_manager_service
    register_exception_handlers(app)

    logger.info(f"Created role manager API with {len(registry)} registered operations")
    return app
