"""Pytest configuration and fixtures for neo-role-manager tests."""

import pytest
from datetime import datetime, timezone

from neo_role_manager.config.constants import ClaimKind
from neo_role_manager.features.permissions import (
    OperationMetadata,
    StaticOperationRegistry,
    PermissionCatalogBuilder,
    PermissionReconciler,
    RoleManagerService,
    InMemoryRoleStore,
    InMemoryUserStore,
    Role,
    RoleClaim,
    User,
)


DYNAMIC = ClaimKind.DYNAMIC_PERMISSION.value

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def sample_operations():
    """Operations covering module-level, operation-level and overridden policies."""
    return [
        OperationMetadata("read", "Users", module_policy=DYNAMIC, module_area="Admin",
                          operation_display_name="Read users"),
        OperationMetadata("write", "Users", module_policy=DYNAMIC, module_area="Admin"),
        OperationMetadata("index", "Roles", operation_policy="AdminOnly", module_policy=DYNAMIC,
                          module_area="Admin"),
        OperationMetadata("export", "Reports", operation_policy=DYNAMIC),
        OperationMetadata("health", "Public"),
        OperationMetadata("read", "Tenants", operation_policy=DYNAMIC, module_policy="AdminOnly",
                          module_area="Platform"),
    ]


@pytest.fixture
def static_registry(sample_operations):
    """Static registry over the sample operations."""
    return StaticOperationRegistry(sample_operations)


@pytest.fixture
def catalog_builder(static_registry):
    return PermissionCatalogBuilder(static_registry)


@pytest.fixture
def editors_role():
    """Role holding two dynamic permissions and one unrelated claim."""
    return Role(
        id="role-editors",
        name="Editors",
        claims=[
            RoleClaim.dynamic_permission("Users:read", FIXED_NOW),
            RoleClaim.dynamic_permission("Users:write", FIXED_NOW),
            RoleClaim("department", "sales", FIXED_NOW),
        ]
    )


@pytest.fixture
def role_store(editors_role):
    """In-memory role store seeded with Editors and an empty Auditors role."""
    return InMemoryRoleStore([editors_role, Role(id="role-auditors", name="Auditors")])


@pytest.fixture
def user_store():
    """In-memory user store with two Editors and one Auditor."""
    store = InMemoryUserStore()
    store.add_user(User("user-1", "alice", "alice@example.com"), "Editors")
    store.add_user(User("user-2", "bob"), "Editors", "Auditors")
    store.add_user(User("user-3", "carol", "carol@example.com"), "Auditors")
    return store


@pytest.fixture
def reconciler(role_store, fixed_clock):
    return PermissionReconciler(role_store, clock=fixed_clock)


@pytest.fixture
def role_manager_service(role_store, user_store, catalog_builder, reconciler):
    """Role manager service over the in-memory stores."""
    return RoleManagerService(
        role_store=role_store,
        user_store=user_store,
        catalog=catalog_builder,
        reconciler=reconciler
    )
