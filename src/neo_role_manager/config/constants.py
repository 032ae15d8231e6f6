"""Constants and enums for neo-role-manager.

The claim and policy vocabulary shared by the permission catalog, the
reconciler and the role stores.
"""

from enum import Enum
from typing import Final


class ClaimKind(str, Enum):
    """Claim types understood by the role manager.

    ``DYNAMIC_PERMISSION`` is used both as the authorization policy name that
    marks an operation as permission-checked and as the claim type of the
    role claims that grant those operations.
    """

    DYNAMIC_PERMISSION = "DynamicPermission"

    def __str__(self) -> str:
        return self.value


class DatabaseSchemas:
    """Database schema names."""

    ADMIN: Final[str] = "admin"


class TableNames:
    """Tables read and written by the asyncpg stores."""

    ROLES: Final[str] = "roles"
    ROLE_CLAIMS: Final[str] = "role_claims"
    USERS: Final[str] = "users"
    USER_ROLES: Final[str] = "user_roles"


# Separator between module and operation name in a permission key
PERMISSION_KEY_SEPARATOR: Final[str] = ":"

# Maximum length of a role name (matches the roles.name column)
ROLE_NAME_MAX_LENGTH: Final[int] = 256
