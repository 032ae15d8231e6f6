"""Permission reconciler.

Brings a role's stored dynamic permission claims in line with a requested
set of permission keys:

    Loaded -> Diffed -> Mutated -> Committed | RolledBack

The role is loaded with its claims, the requested keys are diffed against the
keys currently granted, the delta is applied to a working copy of the role and
the copy is committed with a single ``RoleStore.update_role`` call. A failed
commit discards the working copy; the reconciler never retries.

Requested keys are deliberately not checked against the live catalog, so keys
of operations that no longer exist are kept or revoked like any other.
"""

import logging
from datetime import datetime
from typing import AbstractSet, Callable, Iterable

from ....config.constants import ClaimKind
from ....core.exceptions import RoleNotFoundError
from ....utils.datetime import ensure_utc, utc_now
from ..entities import (
    PermissionDelta, PermissionKey, ReconcileResult, Role, RoleClaim, RoleStore
)


logger = logging.getLogger(__name__)


def diff_permissions(
    current: AbstractSet[PermissionKey],
    desired: AbstractSet[PermissionKey]
) -> PermissionDelta:
    """Compute ``(desired - current, current - desired)``."""
    return PermissionDelta.between(current, desired)


def apply_delta(
    role: Role,
    delta: PermissionDelta,
    granted_at: datetime,
    claim_type: str = ClaimKind.DYNAMIC_PERMISSION.value
) -> Role:
    """Return a working copy of ``role`` with the delta applied to its claims.

    ``role`` itself is left untouched.
    """
    working = role.copy()

    for key in sorted(delta.to_add):
        working.add_claim(RoleClaim(claim_type=claim_type, claim_value=key, granted_at=granted_at))

    for key in sorted(delta.to_remove):
        removed = working.remove_claim(claim_type, key)
        if removed > 1:
            logger.warning(f"Role {role.name} held {removed} duplicate '{key}' claims, all removed")

    return working


class PermissionReconciler:
    """Diff-based grant/revoke of a role's dynamic permissions."""

    def __init__(
        self,
        role_store: RoleStore,
        clock: Callable[[], datetime] = utc_now,
        claim_type: str = ClaimKind.DYNAMIC_PERMISSION.value
    ):
        self.role_store = role_store
        self.clock = clock
        self.claim_type = str(claim_type)

    async def reconcile(self, role_id: str, desired_keys: Iterable[PermissionKey]) -> ReconcileResult:
        """Make the role's dynamic permission claims match ``desired_keys``.

        Raises:
            RoleNotFoundError: if ``role_id`` does not resolve; nothing is mutated
        """
        role = await self.role_store.find_role_with_claims(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)

        desired = frozenset(desired_keys)
        delta = diff_permissions(role.permission_keys(self.claim_type), desired)

        if delta.is_empty:
            logger.debug(f"Permissions of role {role.name} already up to date")
            return ReconcileResult.unchanged(role)

        working = apply_delta(role, delta, ensure_utc(self.clock()), self.claim_type)

        result = await self.role_store.update_role(working)
        if not result.succeeded:
            logger.warning(
                f"Failed to update permissions of role {role.name}: {'; '.join(result.errors)}"
            )
            return ReconcileResult.rolled_back(role, delta, result.errors)

        logger.info(
            f"Updated permissions of role {role.name}: "
            f"granted {sorted(delta.to_add)}, revoked {sorted(delta.to_remove)}"
        )
        return ReconcileResult.committed_result(working, delta)
