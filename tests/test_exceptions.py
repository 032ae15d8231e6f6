"""Tests for the exception hierarchy and HTTP mapping."""

import pytest

from neo_role_manager.core.exceptions import (
    ConfigurationError,
    DatabaseError,
    EntityNotFoundError,
    PersistenceError,
    RoleManagerError,
    RoleNotFoundError,
    ValidationError,
    create_error_response,
    get_http_status_code,
)


class TestExceptions:

    def test_error_code_defaults_to_class_name(self):
        error = RoleManagerError("boom")
        assert error.error_code == "RoleManagerError"
        assert error.details == {}
        assert str(error) == "boom"

    def test_role_not_found(self):
        error = RoleNotFoundError("role-1")

        assert isinstance(error, EntityNotFoundError)
        assert error.message == "Role role-1 not found"
        assert error.details == {"role": "role-1"}

    def test_persistence_error_carries_errors(self):
        error = PersistenceError("Failed to create role", errors=("Name taken",))

        assert error.errors == ["Name taken"]
        assert error.details["errors"] == ["Name taken"]

    @pytest.mark.parametrize("error, status_code", [
        (ValidationError("bad"), 400),
        (PersistenceError("rejected"), 400),
        (RoleNotFoundError("r1"), 404),
        (EntityNotFoundError("missing"), 404),
        (DatabaseError("down"), 500),
        (ConfigurationError("bad config"), 500),
        (RoleManagerError("generic"), 500),
        (RuntimeError("unmapped"), 500),
    ])
    def test_http_status_code(self, error, status_code):
        assert get_http_status_code(error) == status_code

    def test_create_error_response(self):
        response = create_error_response(ValidationError("bad name", details={"field": "name"}))

        assert response == {
            "error": {
                "code": "ValidationError",
                "message": "bad name",
                "details": {"field": "name"},
                "type": "ValidationError",
            }
        }
