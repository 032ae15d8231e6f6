"""Operation registries feeding the permission catalog."""

from .static_registry import StaticOperationRegistry
from .router_registry import RouterOperationRegistry

__all__ = [
    "StaticOperationRegistry",
    "RouterOperationRegistry",
]
