"""Result values returned by role stores and the permission reconciler."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from .permission import PermissionDelta
from .role import Role


CONCURRENCY_FAILURE = "Optimistic concurrency failure, object has been modified."


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a role store write: success, or a list of error descriptions."""

    succeeded: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def success(cls) -> "StoreResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: str) -> "StoreResult":
        return cls(succeeded=False, errors=tuple(errors))

    @classmethod
    def concurrency_failure(cls) -> "StoreResult":
        """The role was modified or deleted since it was loaded."""
        return cls.failed(CONCURRENCY_FAILURE)

    def __bool__(self) -> bool:
        return self.succeeded


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling a role's dynamic permissions.

    ``role`` is the committed role on success and the role as loaded (before
    any mutation) on failure.
    """

    role: Role
    delta: PermissionDelta = field(default_factory=PermissionDelta)
    succeeded: bool = True
    errors: Tuple[str, ...] = ()
    committed: bool = False

    @property
    def added(self) -> FrozenSet[str]:
        return self.delta.to_add

    @property
    def removed(self) -> FrozenSet[str]:
        return self.delta.to_remove

    @classmethod
    def unchanged(cls, role: Role) -> "ReconcileResult":
        return cls(role=role)

    @classmethod
    def committed_result(cls, role: Role, delta: PermissionDelta) -> "ReconcileResult":
        return cls(role=role, delta=delta, committed=True)

    @classmethod
    def rolled_back(cls, role: Role, delta: PermissionDelta, errors: Tuple[str, ...]) -> "ReconcileResult":
        return cls(role=role, delta=delta, succeeded=False, errors=tuple(errors))
