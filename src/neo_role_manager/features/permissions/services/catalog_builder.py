"""Dynamic permission catalog.

Selects the operations whose effective authorization policy is the dynamic
permission policy and turns them into PermissionDescriptors. Building the
catalog is a pure read over registry metadata.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from ....config.constants import ClaimKind
from ..entities import OperationRegistry, PermissionDescriptor


logger = logging.getLogger(__name__)


class PermissionCatalogBuilder:
    """Builds the permission catalog from an operation registry."""

    def __init__(self, registry: OperationRegistry, policy_name: str = ClaimKind.DYNAMIC_PERMISSION.value):
        self.registry = registry
        self.policy_name = str(policy_name)

    def build_catalog(self) -> List[PermissionDescriptor]:
        """Build one descriptor per operation requiring the dynamic permission policy.

        Registry order is preserved and descriptors are not collapsed.
        Operations missing a module or operation name have no permission key
        and are skipped with a warning.
        """
        catalog = []
        for operation in self.registry.list_operations():
            if not operation.requires_policy(self.policy_name):
                continue
            if not operation.module_name or not operation.operation_name:
                logger.warning(f"Skipping operation without a module or operation name: {operation!r}")
                continue
            catalog.append(PermissionDescriptor.from_operation(operation))
        logger.debug(f"Built permission catalog with {len(catalog)} entries")
        return catalog


class CachedPermissionCatalog:
    """Process-wide memo of a catalog builder's output.

    The catalog is deterministic for a fixed registry, so it is built on first
    use and reused until ``invalidate`` is called.
    """

    def __init__(self, builder: PermissionCatalogBuilder):
        self.builder = builder
        self._catalog: Optional[List[PermissionDescriptor]] = None

    def build_catalog(self) -> List[PermissionDescriptor]:
        if self._catalog is None:
            self._catalog = self.builder.build_catalog()
        return list(self._catalog)

    def invalidate(self) -> None:
        self._catalog = None

    @property
    def is_cached(self) -> bool:
        return self._catalog is not None


def group_by_area(descriptors: Iterable[PermissionDescriptor]) -> Dict[Optional[str], List[PermissionDescriptor]]:
    """Group descriptors by area name, keeping first-seen area order."""
    groups: Dict[Optional[str], List[PermissionDescriptor]] = OrderedDict()
    for descriptor in descriptors:
        groups.setdefault(descriptor.area_name, []).append(descriptor)
    return groups
