"""Role manager service for business logic orchestration.

Coordinates the role and user stores, the permission catalog and the
permission reconciler behind the role manager endpoints.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from ....core.exceptions import PersistenceError, RoleNotFoundError
from ..entities import (
    PermissionCatalog, PermissionDescriptor, PermissionKey, ReconcileResult,
    Role, RoleClaim, RoleStore, StoreResult, User, UserStore
)
from .permission_reconciler import PermissionReconciler


logger = logging.getLogger(__name__)


@dataclass
class RolePermissions:
    """A role, the permission catalog and the keys currently granted to the role."""

    role: Role
    actions: List[PermissionDescriptor] = field(default_factory=list)
    selected_keys: Set[PermissionKey] = field(default_factory=set)

    @property
    def unknown_keys(self) -> Set[PermissionKey]:
        """Granted keys that no longer match an operation in the catalog."""
        return self.selected_keys - {action.key for action in self.actions}


class RoleManagerService:
    """Service orchestrating role administration and dynamic permission updates."""

    def __init__(
        self,
        role_store: RoleStore,
        user_store: UserStore,
        catalog: PermissionCatalog,
        reconciler: Optional[PermissionReconciler] = None
    ):
        self.role_store = role_store
        self.user_store = user_store
        self.catalog = catalog
        self.reconciler = reconciler or PermissionReconciler(role_store)

    # Role queries

    async def list_roles(self) -> List[Role]:
        return await self.role_store.list_roles()

    async def get_role_users(self, role_name: str) -> List[User]:
        """Get the users belonging to a role."""
        role = await self._require_role_by_name(role_name)
        return await self.user_store.get_users_in_role(role.name)

    async def get_role_claims(self, role_name: str) -> List[RoleClaim]:
        """Get every claim of a role, dynamic permissions included."""
        role = await self._require_role_by_name(role_name)
        return await self.role_store.get_claims(role)

    async def get_role_permissions(self, role_name: str) -> RolePermissions:
        """Get a role with the permission catalog and its granted keys."""
        role = await self.role_store.find_role_with_claims_by_name(role_name)
        if role is None:
            raise RoleNotFoundError(role_name)

        return RolePermissions(
            role=role,
            actions=self.catalog.build_catalog(),
            selected_keys=role.permission_keys(self.reconciler.claim_type)
        )

    # Permission updates

    async def update_permissions(self, role_id: str, keys: Iterable[PermissionKey]) -> ReconcileResult:
        """Grant and revoke dynamic permissions so the role holds exactly ``keys``.

        Persistence failures are reported through the returned result.
        """
        return await self.reconciler.reconcile(role_id, keys)

    # Role CRUD

    async def create_role(self, name: str) -> Role:
        role = Role(id=None, name=name)
        self._raise_on_failure(await self.role_store.create_role(role), f"Failed to create role {name}")
        logger.info(f"Created role: {role.name} ({role.id})")
        return role

    async def get_role_for_edit(self, role_name: str) -> Role:
        return await self._require_role_by_name(role_name)

    async def edit_role(self, role_id: str, name: str) -> Role:
        """Rename a role, keeping its claims."""
        role = await self.role_store.find_role_with_claims(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)

        previous_name = role.name
        role.rename(name)
        self._raise_on_failure(await self.role_store.update_role(role), f"Failed to update role {previous_name}")
        logger.info(f"Renamed role {previous_name} to {role.name}")
        return role

    async def remove_role(self, role_id: str) -> Role:
        role = await self.role_store.find_role_by_id(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)

        self._raise_on_failure(await self.role_store.delete_role(role), f"Failed to remove role {role.name}")
        logger.info(f"Removed role: {role.name} ({role.id})")
        return role

    # Helpers

    async def _require_role_by_name(self, role_name: str) -> Role:
        role = await self.role_store.find_role_by_name(role_name)
        if role is None:
            raise RoleNotFoundError(role_name)
        return role

    @staticmethod
    def _raise_on_failure(result: StoreResult, message: str) -> None:
        if not result.succeeded:
            logger.warning(f"{message}: {'; '.join(result.errors)}")
            raise PersistenceError(message, errors=result.errors)
