"""
asyncpg pool management for the role and user stores.

The pool is created lazily on first use or explicitly from the application
lifespan; stores only ever see connections through ``acquire()`` and
``transaction()``.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import asyncpg

from ..config.settings import RoleManagerSettings

logger = logging.getLogger(__name__)

DEFAULT_POOL_CONFIG: Dict[str, Any] = {
    "min_size": 1,
    "max_size": 10,
    "max_inactive_connection_lifetime": 300,
    "command_timeout": 60,
}


class DatabaseManager:
    """Owns one asyncpg pool for a PostgreSQL DSN."""

    def __init__(self, database_url: str, application_name: str = "neo-role-manager", **pool_config: Any):
        """
        Args:
            database_url: PostgreSQL DSN; a SQLAlchemy-style ``+asyncpg`` driver suffix is dropped
            application_name: Reported to PostgreSQL as ``application_name``
            **pool_config: Overrides for ``asyncpg.create_pool`` options
        """
        self.dsn = database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
        self.application_name = application_name
        self.pool_config = {**DEFAULT_POOL_CONFIG, **pool_config}
        self.pool: Optional[asyncpg.Pool] = None

    @classmethod
    def from_settings(cls, settings: RoleManagerSettings) -> "DatabaseManager":
        return cls(
            settings.database_url,
            application_name=settings.app_name,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

    async def create_pool(self) -> asyncpg.Pool:
        """Create the pool once; later calls return the existing pool."""
        if self.pool is None:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                server_settings={"application_name": self.application_name},
                **self.pool_config
            )
            logger.info(
                f"Opened database pool ({self.pool_config['min_size']}-{self.pool_config['max_size']} connections)"
            )
        return self.pool

    async def close_pool(self) -> None:
        if self.pool is not None:
            pool, self.pool = self.pool, None
            await pool.close()
            logger.info("Closed database pool")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        pool = self.pool or await self.create_pool()
        async with pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection and run the block in one transaction."""
        async with self.acquire() as connection, connection.transaction():
            yield connection
