"""Role manager router.

JSON endpoints for listing roles, inspecting their users and claims, toggling
dynamic permissions and basic role CRUD. The router is itself annotated with
the dynamic permission policy, so its endpoints appear in the permission
catalog they manage.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status, Depends, Path
from fastapi.responses import JSONResponse

from ....config.constants import ClaimKind
from ....core.exceptions import PersistenceError, RoleNotFoundError
from ..decorators import display, operation_module
from ..entities import Role
from ..models.requests import (
    UpdatePermissionsRequest,
    CreateRoleRequest,
    EditRoleRequest,
    RemoveRoleRequest
)
from ..models.responses import (
    RoleResponse,
    RoleClaimResponse,
    UserResponse,
    PermissionDescriptorResponse,
    RolePermissionsResponse,
    PermissionUpdateResponse,
    PermissionUpdateErrorResponse
)
from ..services import RoleManagerService, RolePermissions


logger = logging.getLogger(__name__)

role_manager_router = operation_module(
    APIRouter(
        tags=["Role Manager"],
        responses={
            404: {"description": "Role not found"},
            400: {"description": "Invalid request"},
            500: {"description": "Internal server error"}
        }
    ),
    name="RoleManager",
    policy=ClaimKind.DYNAMIC_PERMISSION,
    area="Admin"
)


# Placeholder dependency, applications override it via app.dependency_overrides

def get_role_manager_service() -> RoleManagerService:
    """Placeholder for role manager service dependency.

    Applications must override this via:
    app.dependency_overrides[get_role_manager_service] = lambda: actual_service
    """
    raise HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail="Role manager service not configured. Application must provide RoleManagerService implementation."
    )


def _not_found(error: RoleNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)


def _bad_request(error: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": error.message, "errors": list(error.errors)}
    )


def _permissions_to_response(permissions: RolePermissions) -> RolePermissionsResponse:
    return RolePermissionsResponse(
        role=RoleResponse.from_entity(permissions.role),
        actions=[PermissionDescriptorResponse.from_entity(action) for action in permissions.actions],
        selected_keys=sorted(permissions.selected_keys)
    )


# Role queries

@role_manager_router.get("", response_model=List[RoleResponse])
@display("Roles list")
async def list_roles(
    service: RoleManagerService = Depends(get_role_manager_service)
) -> List[RoleResponse]:
    """List all roles."""
    roles = await service.list_roles()
    return [RoleResponse.from_entity(role) for role in roles]


@role_manager_router.get("/{role_name}/users", response_model=List[UserResponse])
@display("Role users")
async def role_users(
    role_name: str = Path(..., description="Role name"),
    service: RoleManagerService = Depends(get_role_manager_service)
) -> List[UserResponse]:
    """List the users belonging to a role."""
    try:
        users = await service.get_role_users(role_name)
    except RoleNotFoundError as e:
        raise _not_found(e)
    return [UserResponse.from_entity(user) for user in users]


@role_manager_router.get("/{role_name}/claims", response_model=List[RoleClaimResponse])
@display("Role claims")
async def role_claims(
    role_name: str = Path(..., description="Role name"),
    service: RoleManagerService = Depends(get_role_manager_service)
) -> List[RoleClaimResponse]:
    """List every claim of a role."""
    try:
        claims = await service.get_role_claims(role_name)
    except RoleNotFoundError as e:
        raise _not_found(e)
    return [RoleClaimResponse.from_entity(claim) for claim in claims]


# Dynamic permissions

@role_manager_router.get("/{role_name}/permissions", response_model=RolePermissionsResponse)
@display("Role permissions")
async def role_permissions(
    role_name: str = Path(..., description="Role name"),
    service: RoleManagerService = Depends(get_role_manager_service)
) -> RolePermissionsResponse:
    """Get the permission catalog with the keys currently granted to a role."""
    try:
        permissions = await service.get_role_permissions(role_name)
    except RoleNotFoundError as e:
        raise _not_found(e)
    return _permissions_to_response(permissions)


@role_manager_router.post(
    "/permissions",
    response_model=PermissionUpdateResponse,
    responses={400: {"model": PermissionUpdateErrorResponse}}
)
@display("Update role permissions")
async def update_permissions(
    request: UpdatePermissionsRequest,
    service: RoleManagerService = Depends(get_role_manager_service)
):
    """Replace the dynamic permissions of a role with the submitted keys.

    When the store rejects the change the submitted keys are returned with
    the store's errors so the caller can present the selection again.
    """
    try:
        result = await service.update_permissions(request.role_id, request.keys)
    except RoleNotFoundError as e:
        raise _not_found(e)

    if not result.succeeded:
        error = PermissionUpdateErrorResponse(
            role_id=request.role_id,
            keys=request.keys,
            errors=list(result.errors)
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.model_dump())

    return PermissionUpdateResponse(
        role=RoleResponse.from_entity(result.role),
        added=sorted(result.added),
        removed=sorted(result.removed),
        selected_keys=sorted(result.role.permission_keys(service.reconciler.claim_type))
    )


# Role CRUD

@role_manager_router.post("/new", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
@display("Create role")
async def create_role(
    request: CreateRoleRequest,
    service: RoleManagerService = Depends(get_role_manager_service)
) -> RoleResponse:
    """Create a new role."""
    try:
        role = await service.create_role(request.name)
    except PersistenceError as e:
        raise _bad_request(e)
    return RoleResponse.from_entity(role)


@role_manager_router.get("/{role_name}/edit", response_model=RoleResponse)
@display("Edit role form")
async def get_role_for_edit(
    role_name: str = Path(..., description="Role name"),
    service: RoleManagerService = Depends(get_role_manager_service)
) -> RoleResponse:
    """Get a role for renaming."""
    try:
        role: Role = await service.get_role_for_edit(role_name)
    except RoleNotFoundError as e:
        raise _not_found(e)
    return RoleResponse.from_entity(role)


@role_manager_router.post("/edit", response_model=RoleResponse)
@display("Edit role")
async def edit_role(
    request: EditRoleRequest,
    service: RoleManagerService = Depends(get_role_manager_service)
) -> RoleResponse:
    """Rename a role."""
    try:
        role = await service.edit_role(request.id, request.name)
    except RoleNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _bad_request(e)
    return RoleResponse.from_entity(role)


@role_manager_router.post("/remove", response_model=RoleResponse)
@display("Remove role")
async def remove_role(
    request: RemoveRoleRequest,
    service: RoleManagerService = Depends(get_role_manager_service)
) -> RoleResponse:
    """Remove a role with its claims and memberships."""
    try:
        role = await service.remove_role(request.role_id)
    except RoleNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _bad_request(e)
    return RoleResponse.from_entity(role)
