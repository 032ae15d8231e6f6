"""Role domain entity for the role manager.

Represents a role with its owned claim collection. Dynamic permissions are
stored as claims of type ``ClaimKind.DYNAMIC_PERMISSION`` whose value is the
permission key.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Set

from ....config.constants import ClaimKind, ROLE_NAME_MAX_LENGTH
from ....core.exceptions import ValidationError
from ....utils.datetime import utc_now
from .permission import PermissionKey


@dataclass(frozen=True)
class RoleClaim:
    """Immutable (type, value, granted_at) claim owned by a role.

    ``id`` is assigned by the role store once the claim is persisted.
    """

    claim_type: str
    claim_value: str
    granted_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def dynamic_permission(cls, key: PermissionKey, granted_at: Optional[datetime] = None) -> "RoleClaim":
        """Create a dynamic permission claim granting ``key``."""
        return cls(
            claim_type=ClaimKind.DYNAMIC_PERMISSION.value,
            claim_value=key,
            granted_at=granted_at or utc_now(),
        )

    def matches(self, claim_type: str, claim_value: str) -> bool:
        return self.claim_type == claim_type and self.claim_value == claim_value

    def __str__(self) -> str:
        return f"{self.claim_type}={self.claim_value}"


@dataclass
class Role:
    """Domain entity representing a role and the claims granted to it."""

    id: Optional[str]
    name: str
    normalized_name: Optional[str] = None
    concurrency_stamp: Optional[str] = None
    claims: List[RoleClaim] = field(default_factory=list)

    def __post_init__(self):
        """Validate the role name and derive the normalized name."""
        self.name = self._validate_name(self.name)
        if self.normalized_name is None:
            self.normalized_name = self.normalize_name(self.name)

    @staticmethod
    def _validate_name(name: str) -> str:
        if name is None or not name.strip():
            raise ValidationError("Role name cannot be empty")
        name = name.strip()
        if len(name) > ROLE_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Role name cannot exceed {ROLE_NAME_MAX_LENGTH} characters, got: {len(name)}"
            )
        return name

    @staticmethod
    def normalize_name(name: str) -> str:
        """Case-insensitive lookup form of a role name."""
        return name.strip().upper()

    def rename(self, name: str) -> None:
        self.name = self._validate_name(name)
        self.normalized_name = self.normalize_name(self.name)

    def claims_of_type(self, claim_type: str) -> List[RoleClaim]:
        return [claim for claim in self.claims if claim.claim_type == claim_type]

    def permission_keys(self, claim_type: str = ClaimKind.DYNAMIC_PERMISSION.value) -> Set[PermissionKey]:
        """Get the values of all claims of ``claim_type`` (dynamic permissions by default)."""
        return {claim.claim_value for claim in self.claims_of_type(claim_type)}

    def find_claim(self, claim_type: str, claim_value: str) -> Optional[RoleClaim]:
        for claim in self.claims:
            if claim.matches(claim_type, claim_value):
                return claim
        return None

    def has_claim(self, claim_type: str, claim_value: str) -> bool:
        return self.find_claim(claim_type, claim_value) is not None

    def add_claim(self, claim: RoleClaim) -> bool:
        """Attach a claim unless the same (type, value) pair is already present.

        Returns:
            True if the claim was attached
        """
        if self.has_claim(claim.claim_type, claim.claim_value):
            return False
        self.claims.append(claim)
        return True

    def remove_claim(self, claim_type: str, claim_value: str) -> int:
        """Detach every claim matching (type, value).

        Returns:
            Number of claims detached; 0 when none matched
        """
        remaining = [claim for claim in self.claims if not claim.matches(claim_type, claim_value)]
        removed = len(self.claims) - len(remaining)
        self.claims = remaining
        return removed

    def copy(self) -> "Role":
        """Working copy whose claim list can be mutated independently."""
        return replace(self, claims=list(self.claims))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Role(id={self.id!r}, name='{self.name}', claims={len(self.claims)})"
