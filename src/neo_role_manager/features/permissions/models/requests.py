"""Role manager request models for API endpoints."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ....config.constants import ROLE_NAME_MAX_LENGTH


class UpdatePermissionsRequest(BaseModel):
    """Request model for replacing a role's dynamic permissions."""

    role_id: str = Field(..., min_length=1, description="ID of the role to update")
    keys: List[str] = Field(default_factory=list, description="Permission keys the role should hold")

    @field_validator('keys')
    @classmethod
    def validate_keys(cls, v):
        """Strip keys, reject blank ones and drop duplicates (first occurrence wins)."""
        keys = []
        for key in v:
            key = key.strip()
            if not key:
                raise ValueError('Permission keys cannot be blank')
            if key not in keys:
                keys.append(key)
        return keys

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "role_id": "9a3c1e52-2f4e-4d57-9a7c-1f2b6f0d2a11",
            "keys": ["RoleManager:list_roles", "RoleManager:role_users"]
        }
    })


class CreateRoleRequest(BaseModel):
    """Request model for creating a role."""

    name: str = Field(..., min_length=1, max_length=ROLE_NAME_MAX_LENGTH, description="Role name")

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Auditors"}})


class EditRoleRequest(BaseModel):
    """Request model for renaming a role."""

    id: str = Field(..., min_length=1, description="ID of the role to rename")
    name: str = Field(..., min_length=1, max_length=ROLE_NAME_MAX_LENGTH, description="New role name")


class RemoveRoleRequest(BaseModel):
    """Request model for removing a role."""

    role_id: str = Field(..., min_length=1, description="ID of the role to remove")
