"""AsyncPG-based role store implementation.

Concrete implementation of the RoleStore protocol over the ``roles`` and
``role_claims`` tables of the configured schema. ``update_role`` writes the
role row and its whole claim collection in one transaction and enforces
optimistic concurrency through the role's concurrency stamp.
"""

from dataclasses import replace
from typing import List, Optional
from uuid import uuid4
import logging

import asyncpg
from asyncpg.exceptions import PostgresError, UniqueViolationError

from ....config.constants import DatabaseSchemas, TableNames
from ....core.exceptions import DatabaseError
from ....database import DatabaseManager
from ....utils.datetime import utc_now
from ..entities import Role, RoleClaim, StoreResult


logger = logging.getLogger(__name__)


class AsyncPGRoleStore:
    """AsyncPG implementation of RoleStore protocol."""

    def __init__(self, database: DatabaseManager, schema: str = DatabaseSchemas.ADMIN):
        """Initialize with the database manager and the schema holding the role tables."""
        self.database = database
        self.schema = schema

    @property
    def _roles_table(self) -> str:
        return f"{self.schema}.{TableNames.ROLES}"

    @property
    def _claims_table(self) -> str:
        return f"{self.schema}.{TableNames.ROLE_CLAIMS}"

    @property
    def _user_roles_table(self) -> str:
        return f"{self.schema}.{TableNames.USER_ROLES}"

    def _build_role_from_row(self, row: asyncpg.Record, claims: Optional[List[RoleClaim]] = None) -> Role:
        """Build Role entity from database row."""
        return Role(
            id=row['id'],
            name=row['name'],
            normalized_name=row['normalized_name'],
            concurrency_stamp=row['concurrency_stamp'],
            claims=claims or []
        )

    def _build_claim_from_row(self, row: asyncpg.Record) -> RoleClaim:
        """Build RoleClaim from database row."""
        return RoleClaim(
            id=row['id'],
            claim_type=row['claim_type'],
            claim_value=row['claim_value'],
            granted_at=row['granted_at']
        )

    async def _fetch_role(self, column: str, value: str, with_claims: bool) -> Optional[Role]:
        try:
            async with self.database.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT id, name, normalized_name, concurrency_stamp
                    FROM {self._roles_table}
                    WHERE {column} = $1
                    """,
                    value
                )
                if row is None:
                    return None

                claims = await self._fetch_claims(conn, row['id']) if with_claims else []
                return self._build_role_from_row(row, claims)

        except Exception as e:
            logger.error(f"Failed to get role by {column} {value} from {self.schema}: {e}")
            raise DatabaseError(f"Failed to retrieve role: {e}") from e

    async def _fetch_claims(self, conn: asyncpg.Connection, role_id: str) -> List[RoleClaim]:
        rows = await conn.fetch(
            f"""
            SELECT id, claim_type, claim_value, granted_at
            FROM {self._claims_table}
            WHERE role_id = $1
            ORDER BY id
            """,
            role_id
        )
        return [self._build_claim_from_row(row) for row in rows]

    async def list_roles(self) -> List[Role]:
        """List all roles ordered by name."""
        try:
            async with self.database.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT id, name, normalized_name, concurrency_stamp
                    FROM {self._roles_table}
                    ORDER BY name
                    """
                )
                return [self._build_role_from_row(row) for row in rows]

        except Exception as e:
            logger.error(f"Failed to list roles from {self.schema}: {e}")
            raise DatabaseError(f"Failed to list roles: {e}") from e

    async def find_role_by_name(self, name: str) -> Optional[Role]:
        return await self._fetch_role("normalized_name", Role.normalize_name(name), with_claims=False)

    async def find_role_by_id(self, role_id: str) -> Optional[Role]:
        return await self._fetch_role("id", role_id, with_claims=False)

    async def find_role_with_claims(self, role_id: str) -> Optional[Role]:
        return await self._fetch_role("id", role_id, with_claims=True)

    async def find_role_with_claims_by_name(self, name: str) -> Optional[Role]:
        return await self._fetch_role("normalized_name", Role.normalize_name(name), with_claims=True)

    async def get_claims(self, role: Role) -> List[RoleClaim]:
        try:
            async with self.database.acquire() as conn:
                return await self._fetch_claims(conn, role.id)

        except Exception as e:
            logger.error(f"Failed to get claims of role {role.id} from {self.schema}: {e}")
            raise DatabaseError(f"Failed to retrieve role claims: {e}") from e

    async def _insert_claims(self, conn: asyncpg.Connection, role: Role) -> List[RoleClaim]:
        """Insert the role's unsaved claims and return the collection with IDs assigned."""
        saved = []
        for claim in role.claims:
            if claim.id is None:
                granted_at = claim.granted_at or utc_now()
                claim_id = await conn.fetchval(
                    f"""
                    INSERT INTO {self._claims_table} (role_id, claim_type, claim_value, granted_at)
                    VALUES ($1, $2, $3, $4)
                    RETURNING id
                    """,
                    role.id, claim.claim_type, claim.claim_value, granted_at
                )
                claim = replace(claim, id=claim_id, granted_at=granted_at)
            saved.append(claim)
        return saved

    def _unique_violation_result(self, role: Role, error: UniqueViolationError) -> StoreResult:
        constraint = getattr(error, "constraint_name", None) or ""
        if "claim" in constraint:
            return StoreResult.failed(f"Role '{role.name}' already has one of the submitted claims.")
        return StoreResult.failed(f"Role name '{role.name}' is already taken.")

    async def create_role(self, role: Role) -> StoreResult:
        """Insert a role and its claims, assigning a new ID."""
        role_id = role.id or str(uuid4())
        stamp = str(uuid4())
        try:
            async with self.database.transaction() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {self._roles_table} (id, name, normalized_name, concurrency_stamp)
                    VALUES ($1, $2, $3, $4)
                    """,
                    role_id, role.name, role.normalized_name, stamp
                )
                claims = await self._insert_claims(conn, replace(role, id=role_id))

        except UniqueViolationError as e:
            return self._unique_violation_result(role, e)
        except PostgresError as e:
            logger.error(f"Failed to create role {role.name} in {self.schema}: {e}")
            return StoreResult.failed(f"Failed to create role: {e}")

        role.id = role_id
        role.concurrency_stamp = stamp
        role.claims = claims
        return StoreResult.success()

    async def update_role(self, role: Role) -> StoreResult:
        """Update the role row and synchronise its claims in one transaction.

        Claims without an ID are inserted, stored claims no longer present in
        ``role.claims`` are deleted.
        """
        new_stamp = str(uuid4())
        try:
            async with self.database.transaction() as conn:
                status = await conn.execute(
                    f"""
                    UPDATE {self._roles_table}
                    SET name = $2, normalized_name = $3, concurrency_stamp = $4
                    WHERE id = $1 AND concurrency_stamp IS NOT DISTINCT FROM $5
                    """,
                    role.id, role.name, role.normalized_name, new_stamp, role.concurrency_stamp
                )
                if status == "UPDATE 0":
                    return StoreResult.concurrency_failure()

                kept_ids = [claim.id for claim in role.claims if claim.id is not None]
                await conn.execute(
                    f"""
                    DELETE FROM {self._claims_table}
                    WHERE role_id = $1 AND NOT (id = ANY($2::int[]))
                    """,
                    role.id, kept_ids
                )
                claims = await self._insert_claims(conn, role)

        except UniqueViolationError as e:
            return self._unique_violation_result(role, e)
        except PostgresError as e:
            logger.error(f"Failed to update role {role.id} in {self.schema}: {e}")
            return StoreResult.failed(f"Failed to update role: {e}")

        role.concurrency_stamp = new_stamp
        role.claims = claims
        return StoreResult.success()

    async def delete_role(self, role: Role) -> StoreResult:
        """Delete a role, its claims and its memberships."""
        try:
            async with self.database.transaction() as conn:
                await conn.execute(f"DELETE FROM {self._claims_table} WHERE role_id = $1", role.id)
                await conn.execute(f"DELETE FROM {self._user_roles_table} WHERE role_id = $1", role.id)
                status = await conn.execute(f"DELETE FROM {self._roles_table} WHERE id = $1", role.id)

        except PostgresError as e:
            logger.error(f"Failed to delete role {role.id} from {self.schema}: {e}")
            return StoreResult.failed(f"Failed to delete role: {e}")

        if status == "DELETE 0":
            return StoreResult.concurrency_failure()
        return StoreResult.success()
