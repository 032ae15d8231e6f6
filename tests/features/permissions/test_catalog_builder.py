"""Tests for the dynamic permission catalog."""

from unittest.mock import MagicMock

from neo_role_manager.features.permissions import (
    CachedPermissionCatalog,
    OperationMetadata,
    PermissionCatalogBuilder,
    StaticOperationRegistry,
    group_by_area,
)


class TestPermissionCatalogBuilder:
    """Test catalog extraction from an operation registry."""

    def test_includes_exactly_dynamic_permission_operations(self, catalog_builder):
        keys = [descriptor.key for descriptor in catalog_builder.build_catalog()]
        assert keys == ["Users:read", "Users:write", "Reports:export", "Tenants:read"]

    def test_operation_policy_overrides_module(self, catalog_builder):
        keys = {descriptor.key for descriptor in catalog_builder.build_catalog()}
        # Roles:index is overridden to AdminOnly, Tenants:read is overridden to DynamicPermission
        assert "Roles:index" not in keys
        assert "Tenants:read" in keys

    def test_descriptor_fields(self, catalog_builder):
        users_read = catalog_builder.build_catalog()[0]
        assert users_read.module_name == "Users"
        assert users_read.operation_name == "read"
        assert users_read.area_name == "Admin"
        assert users_read.display_name == "Read users"

    def test_missing_annotations_are_absent_fields(self, catalog_builder):
        export = next(d for d in catalog_builder.build_catalog() if d.key == "Reports:export")
        assert export.area_name is None
        assert export.display_name is None

    def test_deterministic(self, catalog_builder):
        first = catalog_builder.build_catalog()
        second = catalog_builder.build_catalog()
        assert [d.key for d in first] == [d.key for d in second]

    def test_empty_registry(self):
        assert PermissionCatalogBuilder(StaticOperationRegistry()).build_catalog() == []

    def test_operations_without_names_are_skipped(self, caplog):
        registry = StaticOperationRegistry([
            OperationMetadata("read", "", operation_policy="DynamicPermission"),
            OperationMetadata("", "Users", operation_policy="DynamicPermission"),
            OperationMetadata("write", "Users", operation_policy="DynamicPermission"),
        ])

        catalog = PermissionCatalogBuilder(registry).build_catalog()

        assert [d.key for d in catalog] == ["Users:write"]
        assert "Skipping operation" in caplog.text

    def test_same_operation_name_in_two_modules(self):
        registry = StaticOperationRegistry([
            OperationMetadata("index", "Users", module_policy="DynamicPermission"),
            OperationMetadata("index", "Roles", module_policy="DynamicPermission"),
        ])
        keys = [d.key for d in PermissionCatalogBuilder(registry).build_catalog()]
        assert keys == ["Users:index", "Roles:index"]

    def test_custom_policy_name(self, static_registry):
        builder = PermissionCatalogBuilder(static_registry, policy_name="AdminOnly")
        assert [d.key for d in builder.build_catalog()] == ["Roles:index"]


class TestCachedPermissionCatalog:
    """Test the process-wide catalog memo."""

    def test_builds_once(self, catalog_builder):
        builder = MagicMock(wraps=catalog_builder)
        cached = CachedPermissionCatalog(builder)

        assert not cached.is_cached
        first = cached.build_catalog()
        second = cached.build_catalog()

        assert first == second
        assert cached.is_cached
        builder.build_catalog.assert_called_once()

    def test_returned_list_is_a_copy(self, catalog_builder):
        cached = CachedPermissionCatalog(catalog_builder)
        cached.build_catalog().clear()
        assert len(cached.build_catalog()) == 4

    def test_invalidate_rebuilds(self, static_registry):
        cached = CachedPermissionCatalog(PermissionCatalogBuilder(static_registry))
        cached.build_catalog()

        static_registry.register(OperationMetadata("delete", "Users", module_policy="DynamicPermission"))
        assert len(cached.build_catalog()) == 4

        cached.invalidate()
        assert len(cached.build_catalog()) == 5


class TestGroupByArea:

    def test_groups_keep_first_seen_order(self, catalog_builder):
        groups = group_by_area(catalog_builder.build_catalog())

        assert list(groups) == ["Admin", None, "Platform"]
        assert [d.key for d in groups["Admin"]] == ["Users:read", "Users:write"]
