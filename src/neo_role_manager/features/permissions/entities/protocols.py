"""Protocol interfaces for permission feature dependency injection.

Defines contracts for the operation registry, the role and user stores and
the permission catalog consumed by the role manager services.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable, List, Optional, Sequence

from .operation import OperationMetadata
from .permission import PermissionDescriptor
from .results import StoreResult
from .role import Role, RoleClaim
from .user import User


@runtime_checkable
class OperationRegistry(Protocol):
    """Protocol for enumerating the operations registered in the host application."""

    @abstractmethod
    def list_operations(self) -> Sequence[OperationMetadata]:
        """List every registered operation with its authorization metadata."""
        ...


@runtime_checkable
class PermissionCatalog(Protocol):
    """Protocol for producing the dynamic permission catalog."""

    @abstractmethod
    def build_catalog(self) -> List[PermissionDescriptor]:
        """Build the ordered list of permission descriptors."""
        ...


@runtime_checkable
class RoleStore(Protocol):
    """Protocol for role and role claim persistence."""

    @abstractmethod
    async def list_roles(self) -> List[Role]:
        """List all roles ordered by name (claims not loaded)."""
        ...

    @abstractmethod
    async def find_role_by_name(self, name: str) -> Optional[Role]:
        """Get role by name (case-insensitive), claims not loaded."""
        ...

    @abstractmethod
    async def find_role_by_id(self, role_id: str) -> Optional[Role]:
        """Get role by ID, claims not loaded."""
        ...

    @abstractmethod
    async def find_role_with_claims(self, role_id: str) -> Optional[Role]:
        """Get role by ID with its claims eagerly loaded."""
        ...

    @abstractmethod
    async def find_role_with_claims_by_name(self, name: str) -> Optional[Role]:
        """Get role by name with its claims eagerly loaded."""
        ...

    @abstractmethod
    async def get_claims(self, role: Role) -> List[RoleClaim]:
        """Get all claims of a role."""
        ...

    @abstractmethod
    async def create_role(self, role: Role) -> StoreResult:
        """Persist a new role, assigning its ID."""
        ...

    @abstractmethod
    async def update_role(self, role: Role) -> StoreResult:
        """Atomically persist a role and its claim collection."""
        ...

    @abstractmethod
    async def delete_role(self, role: Role) -> StoreResult:
        """Delete a role together with its claims."""
        ...


@runtime_checkable
class UserStore(Protocol):
    """Protocol for reading role membership."""

    @abstractmethod
    async def get_users_in_role(self, role_name: str) -> List[User]:
        """List users that belong to the named role."""
        ...
