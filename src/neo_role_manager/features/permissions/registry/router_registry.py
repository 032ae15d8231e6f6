"""Operation registry built from annotated FastAPI routers.

The scan runs once, when the registry is constructed at application startup,
and produces a fixed table of OperationMetadata.
"""

import logging
from typing import Iterable, List, Sequence

from fastapi import APIRouter
from fastapi.routing import APIRoute

from ..decorators import OperationAnnotations
from ..entities import OperationMetadata


logger = logging.getLogger(__name__)


class RouterOperationRegistry:
    """OperationRegistry listing the endpoints of a set of routers."""

    def __init__(self, routers: Iterable[APIRouter]):
        self._operations: List[OperationMetadata] = []
        for router in routers:
            self._operations.extend(self.scan_router(router))
        logger.debug(f"Registered {len(self._operations)} operations")

    @staticmethod
    def default_module_name(router: APIRouter, route: APIRoute) -> str:
        """Module name for routers without an explicit name.

        Uses the last segment of the router prefix, falling back to the name
        of the Python module defining the endpoint.
        """
        prefix = (router.prefix or "").strip("/")
        if prefix:
            return prefix.rsplit("/", 1)[-1]
        return route.endpoint.__module__.rsplit(".", 1)[-1]

    @classmethod
    def scan_router(cls, router: APIRouter) -> List[OperationMetadata]:
        """Build operation metadata for every API route of ``router``."""
        module = OperationAnnotations.module(router)
        operations = []
        for route in router.routes:
            if not isinstance(route, APIRoute):
                continue
            operations.append(OperationMetadata(
                operation_name=route.name,
                module_name=module.name or cls.default_module_name(router, route),
                operation_policy=OperationAnnotations.policy(route.endpoint),
                module_policy=module.policy,
                module_area=module.area,
                operation_display_name=OperationAnnotations.display_name(route.endpoint),
            ))
        return operations

    def list_operations(self) -> Sequence[OperationMetadata]:
        return tuple(self._operations)

    def __len__(self) -> int:
        return len(self._operations)
