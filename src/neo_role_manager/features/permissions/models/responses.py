"""Role manager response models for API endpoints."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from ..entities import PermissionDescriptor, Role, RoleClaim, User


class RoleResponse(BaseModel):
    """Response model for a role."""

    id: str
    name: str
    normalized_name: str

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(id=role.id, name=role.name, normalized_name=role.normalized_name)


class RoleClaimResponse(BaseModel):
    """Response model for a role claim."""

    claim_type: str
    claim_value: str
    granted_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, claim: RoleClaim) -> "RoleClaimResponse":
        return cls(claim_type=claim.claim_type, claim_value=claim.claim_value, granted_at=claim.granted_at)


class UserResponse(BaseModel):
    """Response model for a role member."""

    id: str
    user_name: str
    email: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, user_name=user.user_name, email=user.email)


class PermissionDescriptorResponse(BaseModel):
    """Response model for one selectable dynamic permission."""

    key: str
    operation_name: str
    module_name: str
    area_name: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_entity(cls, descriptor: PermissionDescriptor) -> "PermissionDescriptorResponse":
        return cls(
            key=descriptor.key,
            operation_name=descriptor.operation_name,
            module_name=descriptor.module_name,
            area_name=descriptor.area_name,
            display_name=descriptor.display_name
        )


class RolePermissionsResponse(BaseModel):
    """Response model for a role's permission selection."""

    role: RoleResponse
    actions: List[PermissionDescriptorResponse] = Field(default_factory=list)
    selected_keys: List[str] = Field(default_factory=list, description="Keys currently granted, sorted")


class PermissionUpdateResponse(BaseModel):
    """Response model for a successful permission update."""

    role: RoleResponse
    added: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    selected_keys: List[str] = Field(default_factory=list)


class PermissionUpdateErrorResponse(BaseModel):
    """Response model re-presenting a rejected selection with the store's errors."""

    role_id: str
    keys: List[str] = Field(default_factory=list, description="Keys as submitted")
    errors: List[str] = Field(default_factory=list)
