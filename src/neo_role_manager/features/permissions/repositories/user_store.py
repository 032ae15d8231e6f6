"""AsyncPG-based user store implementation (role membership queries)."""

from typing import List
import logging

import asyncpg

from ....config.constants import DatabaseSchemas, TableNames
from ....core.exceptions import DatabaseError
from ....database import DatabaseManager
from ..entities import Role, User


logger = logging.getLogger(__name__)


class AsyncPGUserStore:
    """AsyncPG implementation of UserStore protocol."""

    def __init__(self, database: DatabaseManager, schema: str = DatabaseSchemas.ADMIN):
        self.database = database
        self.schema = schema

    def _build_user_from_row(self, row: asyncpg.Record) -> User:
        """Build User entity from database row."""
        return User(
            id=str(row['id']),
            user_name=row['user_name'],
            email=row['email']
        )

    async def get_users_in_role(self, role_name: str) -> List[User]:
        """List users belonging to the named role."""
        try:
            async with self.database.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT u.id, u.user_name, u.email
                    FROM {self.schema}.{TableNames.USERS} u
                    JOIN {self.schema}.{TableNames.USER_ROLES} ur ON ur.user_id = u.id
                    JOIN {self.schema}.{TableNames.ROLES} r ON r.id = ur.role_id
                    WHERE r.normalized_name = $1
                    ORDER BY u.user_name
                    """,
                    Role.normalize_name(role_name)
                )
                return [self._build_user_from_row(row) for row in rows]

        except Exception as e:
            logger.error(f"Failed to get users in role {role_name} from {self.schema}: {e}")
            raise DatabaseError(f"Failed to retrieve role users: {e}") from e
