"""
Authorization Annotations

Declarative metadata for FastAPI endpoints and routers consumed by the
operation registry:
- ``@authorize(policy)`` marks an endpoint with an authorization policy
- ``@display(name)`` gives an endpoint a human-readable name
- ``operation_module(router, ...)`` attaches module-level name, policy and area

The annotations only store metadata; enforcing the policy at request time is
left to the host application's authorization dependency.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from fastapi import APIRouter

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Attribute names carrying the annotations
_OPERATION_ATTR = "_operation_annotations"
_MODULE_ATTR = "operation_module"


@dataclass(frozen=True)
class OperationModule:
    """Module-level annotations shared by every operation of a router."""

    name: Optional[str] = None
    policy: Optional[str] = None
    area: Optional[str] = None


class Authorize:
    """
    Decorator class for declaring an endpoint's authorization policy.

    An endpoint decorated with ``Authorize()`` (no policy) is treated as having
    no operation-level policy and inherits the module-level one.
    """

    def __init__(self, policy: Optional[str] = None):
        self.policy = str(policy) if policy is not None else None

    def __call__(self, func: F) -> F:
        annotations = _annotations_of(func)
        annotations["policy"] = self.policy
        logger.debug(f"Applied authorization policy to {func.__name__}: {self.policy}")
        return func


def authorize(policy: Optional[str] = None) -> Authorize:
    """
    Functional decorator for declaring an endpoint's authorization policy.

    Usage Examples:
        @router.get("/{role_name}/claims")
        @authorize(ClaimKind.DYNAMIC_PERMISSION)
        async def role_claims(role_name: str):
            pass
    """
    return Authorize(policy)


def display(name: str) -> Callable[[F], F]:
    """Give an endpoint a human-readable display name."""

    def decorator(func: F) -> F:
        _annotations_of(func)["display_name"] = name
        return func

    return decorator


def operation_module(
    router: APIRouter,
    name: Optional[str] = None,
    policy: Optional[str] = None,
    area: Optional[str] = None
) -> APIRouter:
    """Attach module-level annotations to a router and return it."""
    setattr(
        router,
        _MODULE_ATTR,
        OperationModule(name=name, policy=str(policy) if policy is not None else None, area=area)
    )
    return router


def _annotations_of(func: Callable) -> dict:
    annotations = getattr(func, _OPERATION_ATTR, None)
    if annotations is None:
        annotations = {}
        setattr(func, _OPERATION_ATTR, annotations)
    return annotations


class OperationAnnotations:
    """
    Helper class to extract annotations from decorated endpoints and routers.

    Used by the router operation registry to build operation metadata.
    """

    @staticmethod
    def extract(func: Callable) -> dict:
        """
        Extract operation annotations from a function.

        Follows ``__wrapped__`` so annotations survive other decorators that
        use ``functools.wraps``.
        """
        if hasattr(func, _OPERATION_ATTR):
            return getattr(func, _OPERATION_ATTR)

        if hasattr(func, "__wrapped__"):
            return OperationAnnotations.extract(func.__wrapped__)

        return {}

    @staticmethod
    def policy(func: Callable) -> Optional[str]:
        return OperationAnnotations.extract(func).get("policy")

    @staticmethod
    def display_name(func: Callable) -> Optional[str]:
        return OperationAnnotations.extract(func).get("display_name")

    @staticmethod
    def module(router: APIRouter) -> OperationModule:
        return getattr(router, _MODULE_ATTR, None) or OperationModule()
