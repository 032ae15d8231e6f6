"""Tests for permission entities."""

import pytest

from neo_role_manager.config.constants import ClaimKind
from neo_role_manager.core.exceptions import ValidationError
from neo_role_manager.features.permissions import (
    OperationMetadata,
    PermissionDescriptor,
    PermissionDelta,
    Role,
    RoleClaim,
    StoreResult,
    make_permission_key,
)


class TestOperationMetadata:
    """Test effective policy resolution."""

    def test_operation_policy_overrides_module_policy(self):
        operation = OperationMetadata("index", "Roles", operation_policy="AdminOnly",
                                      module_policy="DynamicPermission")
        assert operation.effective_policy == "AdminOnly"
        assert not operation.requires_policy("DynamicPermission")

    def test_module_policy_used_when_operation_has_none(self):
        operation = OperationMetadata("read", "Users", module_policy="DynamicPermission")
        assert operation.effective_policy == "DynamicPermission"
        assert operation.requires_policy(ClaimKind.DYNAMIC_PERMISSION)

    def test_no_policy(self):
        operation = OperationMetadata("health", "Public")
        assert operation.effective_policy is None
        assert str(operation) == "Public.health"


class TestPermissionDescriptor:
    """Test permission descriptor construction and identity."""

    def test_make_permission_key(self):
        assert make_permission_key("Users", "read") == "Users:read"

    @pytest.mark.parametrize("module_name, operation_name", [("", "read"), ("Users", "")])
    def test_make_permission_key_rejects_missing_names(self, module_name, operation_name):
        with pytest.raises(ValidationError):
            make_permission_key(module_name, operation_name)

    def test_from_operation(self):
        operation = OperationMetadata("read", "Users", module_policy="DynamicPermission",
                                      module_area="Admin", operation_display_name="Read users")
        descriptor = PermissionDescriptor.from_operation(operation)

        assert descriptor.key == "Users:read"
        assert descriptor.area_name == "Admin"
        assert descriptor.label == "Read users"

    def test_equality_and_hash_use_key_only(self):
        first = PermissionDescriptor("Users:read", "read", "Users", area_name="Admin", display_name="Read")
        second = PermissionDescriptor("Users:read", "read", "Users")

        assert first == second
        assert len({first, second}) == 1
        assert first != PermissionDescriptor("Users:write", "write", "Users")

    def test_label_falls_back_to_operation_name(self):
        assert PermissionDescriptor("Users:read", "read", "Users").label == "read"


class TestPermissionDelta:
    """Test delta computation and application."""

    def test_between(self):
        delta = PermissionDelta.between({"a", "b"}, {"b", "c"})
        assert delta.to_add == {"c"}
        assert delta.to_remove == {"a"}
        assert not delta.is_empty

    def test_apply_reaches_desired(self):
        current, desired = {"a", "b"}, {"b", "c"}
        assert PermissionDelta.between(current, desired).apply(current) == desired

    def test_empty(self):
        assert PermissionDelta.between({"a"}, {"a"}).is_empty
        assert PermissionDelta().is_empty


class TestRole:
    """Test role invariants."""

    def test_normalized_name_derived(self):
        role = Role(id=None, name="  Editors ")
        assert role.name == "Editors"
        assert role.normalized_name == "EDITORS"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 257])
    def test_invalid_names_rejected(self, name):
        with pytest.raises(ValidationError):
            Role(id=None, name=name)

    def test_rename_updates_normalized_name(self):
        role = Role(id="r1", name="Editors")
        role.rename("Writers")
        assert role.normalized_name == "WRITERS"

    def test_add_claim_rejects_duplicate_pair(self):
        role = Role(id="r1", name="Editors")
        assert role.add_claim(RoleClaim.dynamic_permission("Users:read"))
        assert not role.add_claim(RoleClaim.dynamic_permission("Users:read"))
        assert len(role.claims) == 1

    def test_remove_missing_claim_is_noop(self):
        role = Role(id="r1", name="Editors", claims=[RoleClaim.dynamic_permission("Users:read")])
        assert role.remove_claim(ClaimKind.DYNAMIC_PERMISSION.value, "Users:write") == 0
        assert role.permission_keys() == {"Users:read"}

    def test_permission_keys_ignore_other_claim_types(self, editors_role):
        assert editors_role.permission_keys() == {"Users:read", "Users:write"}
        assert editors_role.permission_keys("department") == {"sales"}

    def test_copy_has_independent_claims(self, editors_role):
        working = editors_role.copy()
        working.remove_claim(ClaimKind.DYNAMIC_PERMISSION.value, "Users:read")
        assert editors_role.has_claim(ClaimKind.DYNAMIC_PERMISSION.value, "Users:read")


class TestStoreResult:

    def test_success_is_truthy(self):
        assert StoreResult.success()
        assert StoreResult.success().errors == ()

    def test_failed_carries_errors(self):
        result = StoreResult.failed("first", "second")
        assert not result
        assert result.errors == ("first", "second")

    def test_concurrency_failure(self):
        assert "concurrency" in StoreResult.concurrency_failure().errors[0]
