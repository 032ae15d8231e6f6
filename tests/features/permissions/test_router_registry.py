"""Tests for authorization annotations and the router operation registry."""

import functools

from fastapi import APIRouter

from neo_role_manager.config.constants import ClaimKind
from neo_role_manager.features.permissions import (
    OperationAnnotations,
    PermissionCatalogBuilder,
    RouterOperationRegistry,
    authorize,
    display,
    operation_module,
)
from neo_role_manager.features.permissions.routers import role_manager_router


def _build_reports_router() -> APIRouter:
    router = operation_module(
        APIRouter(prefix="/reports"),
        name="Reports",
        policy=ClaimKind.DYNAMIC_PERMISSION,
        area="Analytics"
    )

    @router.get("/")
    @display("List reports")
    async def list_reports():
        return []

    @router.get("/public")
    @authorize("Anonymous")
    async def public_reports():
        return []

    @router.post("/export")
    @authorize(ClaimKind.DYNAMIC_PERMISSION)
    async def export_report():
        return {}

    return router


def _logged(func):
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        return await func(*args, **kwargs)
    return wrapper


class TestAnnotations:
    """Test metadata attached by the decorators."""

    def test_authorize_and_display(self):
        @display("Export")
        @authorize(ClaimKind.DYNAMIC_PERMISSION)
        async def export():
            pass

        assert OperationAnnotations.policy(export) == "DynamicPermission"
        assert OperationAnnotations.display_name(export) == "Export"

    def test_annotations_survive_wrapping_decorators(self):
        @_logged
        @authorize("AdminOnly")
        async def purge():
            pass

        assert OperationAnnotations.policy(purge) == "AdminOnly"

    def test_unannotated_function(self):
        async def health():
            pass

        assert OperationAnnotations.extract(health) == {}
        assert OperationAnnotations.policy(health) is None

    def test_unannotated_router_has_empty_module(self):
        module = OperationAnnotations.module(APIRouter())
        assert module.name is None and module.policy is None and module.area is None


class TestRouterOperationRegistry:
    """Test operation discovery from annotated routers."""

    def test_scans_every_route(self):
        registry = RouterOperationRegistry([_build_reports_router()])
        operations = {op.operation_name: op for op in registry.list_operations()}

        assert set(operations) == {"list_reports", "public_reports", "export_report"}
        assert operations["list_reports"].module_name == "Reports"
        assert operations["list_reports"].module_area == "Analytics"
        assert operations["list_reports"].operation_display_name == "List reports"
        assert operations["public_reports"].effective_policy == "Anonymous"
        assert len(registry) == 3

    def test_catalog_from_router(self):
        registry = RouterOperationRegistry([_build_reports_router()])
        keys = [d.key for d in PermissionCatalogBuilder(registry).build_catalog()]
        assert keys == ["Reports:list_reports", "Reports:export_report"]

    def test_module_name_defaults_to_prefix(self):
        router = APIRouter(prefix="/api/v1/invoices")

        @router.get("/")
        @authorize(ClaimKind.DYNAMIC_PERMISSION)
        async def list_invoices():
            return []

        operation = RouterOperationRegistry([router]).list_operations()[0]
        assert operation.module_name == "invoices"
        assert operation.module_policy is None

    def test_rescan_yields_same_keys(self):
        router = _build_reports_router()
        first = PermissionCatalogBuilder(RouterOperationRegistry([router])).build_catalog()
        second = PermissionCatalogBuilder(RouterOperationRegistry([router])).build_catalog()
        assert [d.key for d in first] == [d.key for d in second]

    def test_role_manager_router_is_in_its_own_catalog(self):
        registry = RouterOperationRegistry([role_manager_router])
        catalog = PermissionCatalogBuilder(registry).build_catalog()
        keys = {d.key for d in catalog}

        assert "RoleManager:update_permissions" in keys
        assert "RoleManager:list_roles" in keys
        assert all(d.area_name == "Admin" for d in catalog)
