"""Operation metadata consumed by the permission catalog.

One OperationMetadata describes one invokable operation of the host
application together with the authorization annotations found on the
operation itself and on the module (router) that owns it.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OperationMetadata:
    """Authorization-relevant metadata of a single registered operation."""

    operation_name: str
    module_name: str
    operation_policy: Optional[str] = None
    module_policy: Optional[str] = None
    module_area: Optional[str] = None
    operation_display_name: Optional[str] = None

    @property
    def effective_policy(self) -> Optional[str]:
        """Operation-level policy if annotated, otherwise the module-level policy."""
        if self.operation_policy is not None:
            return self.operation_policy
        return self.module_policy

    def requires_policy(self, policy_name: str) -> bool:
        """Check whether the effective policy equals ``policy_name``."""
        return self.effective_policy == policy_name

    def __str__(self) -> str:
        return f"{self.module_name}.{self.operation_name}"
