"""In-memory role and user stores.

Implement the RoleStore and UserStore protocols for development, tests and
single-process deployments. Stored roles are copied on the way in and out,
so callers only see changes after a successful write.
"""

import itertools
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Set
from uuid import uuid4

from ....core.exceptions import ValidationError
from ..entities import Role, RoleClaim, StoreResult, User


logger = logging.getLogger(__name__)


def _duplicate_name_error(name: str) -> str:
    return f"Role name '{name}' is already taken."


def _duplicate_claim(role: Role) -> Optional[RoleClaim]:
    """First claim whose (type, value) pair already appeared earlier on ``role``."""
    seen: Set[tuple] = set()
    for claim in role.claims:
        pair = (claim.claim_type, claim.claim_value)
        if pair in seen:
            return claim
        seen.add(pair)
    return None


def _duplicate_claim_error(role: Role, claim: RoleClaim) -> str:
    return f"Role '{role.name}' already has claim {claim}."


class InMemoryRoleStore:
    """RoleStore keeping roles in a dictionary keyed by role ID."""

    def __init__(self, roles: Iterable[Role] = ()):
        self._roles: Dict[str, Role] = {}
        self._claim_ids = itertools.count(1)
        for role in roles:
            duplicate = _duplicate_claim(role)
            if duplicate is not None:
                raise ValidationError(_duplicate_claim_error(role, duplicate))
            self._insert(role)

    def _insert(self, role: Role) -> None:
        if role.id is None:
            role.id = str(uuid4())
        role.concurrency_stamp = str(uuid4())
        role.claims = [self._with_id(claim) for claim in role.claims]
        self._roles[role.id] = role.copy()

    def _with_id(self, claim: RoleClaim) -> RoleClaim:
        if claim.id is not None:
            return claim
        return replace(claim, id=next(self._claim_ids))

    def _name_taken(self, role: Role) -> bool:
        return any(
            other.normalized_name == role.normalized_name and other.id != role.id
            for other in self._roles.values()
        )

    @staticmethod
    def _without_claims(role: Role) -> Role:
        return replace(role, claims=[])

    async def list_roles(self) -> List[Role]:
        return sorted((self._without_claims(role) for role in self._roles.values()), key=lambda r: r.name)

    async def find_role_by_name(self, name: str) -> Optional[Role]:
        role = self._find_by_normalized_name(name)
        return self._without_claims(role) if role else None

    async def find_role_by_id(self, role_id: str) -> Optional[Role]:
        role = self._roles.get(role_id)
        return self._without_claims(role) if role else None

    async def find_role_with_claims(self, role_id: str) -> Optional[Role]:
        role = self._roles.get(role_id)
        return role.copy() if role else None

    async def find_role_with_claims_by_name(self, name: str) -> Optional[Role]:
        role = self._find_by_normalized_name(name)
        return role.copy() if role else None

    async def get_claims(self, role: Role) -> List[RoleClaim]:
        stored = self._roles.get(role.id)
        return list(stored.claims) if stored else []

    async def create_role(self, role: Role) -> StoreResult:
        if self._name_taken(role) or (role.id is not None and role.id in self._roles):
            return StoreResult.failed(_duplicate_name_error(role.name))

        duplicate = _duplicate_claim(role)
        if duplicate is not None:
            return StoreResult.failed(_duplicate_claim_error(role, duplicate))

        self._insert(role)
        return StoreResult.success()

    async def update_role(self, role: Role) -> StoreResult:
        stored = self._roles.get(role.id)
        if stored is None or stored.concurrency_stamp != role.concurrency_stamp:
            return StoreResult.concurrency_failure()

        if self._name_taken(role):
            return StoreResult.failed(_duplicate_name_error(role.name))

        duplicate = _duplicate_claim(role)
        if duplicate is not None:
            return StoreResult.failed(_duplicate_claim_error(role, duplicate))

        role.claims = [self._with_id(claim) for claim in role.claims]
        role.concurrency_stamp = str(uuid4())
        self._roles[role.id] = role.copy()
        logger.debug(f"Stored role {role.name} with {len(role.claims)} claims")
        return StoreResult.success()

    async def delete_role(self, role: Role) -> StoreResult:
        if self._roles.pop(role.id, None) is None:
            return StoreResult.concurrency_failure()
        return StoreResult.success()

    def _find_by_normalized_name(self, name: str) -> Optional[Role]:
        normalized = Role.normalize_name(name)
        for role in self._roles.values():
            if role.normalized_name == normalized:
                return role
        return None


class InMemoryUserStore:
    """UserStore keeping role memberships keyed by normalized role name."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._memberships: Dict[str, List[str]] = {}

    def add_user(self, user: User, *role_names: str) -> None:
        self._users[user.id] = user
        for role_name in role_names:
            members = self._memberships.setdefault(Role.normalize_name(role_name), [])
            if user.id not in members:
                members.append(user.id)

    async def get_users_in_role(self, role_name: str) -> List[User]:
        member_ids = self._memberships.get(Role.normalize_name(role_name), [])
        return [self._users[user_id] for user_id in member_ids]
