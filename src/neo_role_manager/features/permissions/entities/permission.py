"""Permission domain objects for the dynamic permission catalog.

Handles permission keys, catalog descriptors and the add/remove delta
computed between a role's granted keys and a requested selection.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Optional

from ....config.constants import PERMISSION_KEY_SEPARATOR
from ....core.exceptions import ValidationError
from .operation import OperationMetadata


# A permission key is the claim value granting one operation, e.g. "Users:read"
PermissionKey = str


def make_permission_key(module_name: str, operation_name: str) -> PermissionKey:
    """Derive the stable permission key of an operation.

    The key depends only on the module and operation names, so re-scanning an
    unchanged registry yields the same keys.
    """
    if not module_name or not operation_name:
        raise ValidationError(
            "Permission keys need both a module and an operation name",
            details={"module_name": module_name, "operation_name": operation_name}
        )
    return f"{module_name}{PERMISSION_KEY_SEPARATOR}{operation_name}"


@dataclass(frozen=True, eq=False)
class PermissionDescriptor:
    """Read-only catalog entry for one grantable operation.

    Two descriptors are equal iff their keys are equal.
    """

    key: PermissionKey
    operation_name: str
    module_name: str
    area_name: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_operation(cls, operation: OperationMetadata) -> "PermissionDescriptor":
        return cls(
            key=make_permission_key(operation.module_name, operation.operation_name),
            operation_name=operation.operation_name,
            module_name=operation.module_name,
            area_name=operation.module_area,
            display_name=operation.operation_display_name,
        )

    @property
    def label(self) -> str:
        """Human readable label, falling back to the operation name."""
        return self.display_name or self.operation_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionDescriptor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        area = f", area='{self.area_name}'" if self.area_name else ""
        return f"PermissionDescriptor(key='{self.key}'{area})"


@dataclass(frozen=True)
class PermissionDelta:
    """Keys to grant and keys to revoke for one reconcile.

    The two sets are disjoint by construction when built through
    ``between``.
    """

    to_add: FrozenSet[PermissionKey] = field(default_factory=frozenset)
    to_remove: FrozenSet[PermissionKey] = field(default_factory=frozenset)

    @classmethod
    def between(
        cls,
        current: AbstractSet[PermissionKey],
        desired: AbstractSet[PermissionKey]
    ) -> "PermissionDelta":
        current = frozenset(current)
        desired = frozenset(desired)
        return cls(to_add=desired - current, to_remove=current - desired)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def apply(self, current: AbstractSet[PermissionKey]) -> FrozenSet[PermissionKey]:
        """Return ``current`` with the delta applied."""
        return (frozenset(current) | self.to_add) - self.to_remove

    def __repr__(self) -> str:
        return f"PermissionDelta(add={sorted(self.to_add)}, remove={sorted(self.to_remove)})"
