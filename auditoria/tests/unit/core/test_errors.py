"""
Unit tests for the error hierarchy.

Tests cover:
- Codes and HTTP status hints per error class
- API serialization with sensitive detail redaction
"""

import pytest

from auditoria.core.errors import (
    AuditoriaError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.unit
class TestErrorHierarchy:
    """Test suite for error classes."""

    @pytest.mark.parametrize(
        ("error", "code", "status_code"),
        [
            (ValidationError("bad", field="email"), "VALIDATION_ERROR", 422),
            (NotFoundError("Usuario", "123"), "NOT_FOUND", 404),
            (ConflictError("taken", field="email"), "CONFLICT", 409),
            (ForbiddenError(), "PERMISSION_DENIED", 403),
            (UnauthorizedError("who"), "UNAUTHORIZED", 401),
            (AuditoriaError("oops"), "ERROR", 500),
        ],
    )
    def test_codes_and_status(self, error, code, status_code):
        """Test each class carries its code and status."""
        assert error.code == code
        assert error.status_code == status_code

    def test_code_override(self):
        """Test callers may override the code."""
        assert ConflictError("taken", code="DUPLICATE_EMAIL").code == "DUPLICATE_EMAIL"

    def test_to_dict_includes_field_and_user_message(self):
        """Test API payload shape."""
        error = ValidationError("Invalid email", field="email", user_message="Email inválido")

        assert error.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "Email inválido",
            "details": {"field": "email"},
        }

    def test_not_found_details(self):
        """Test not found errors name the resource."""
        data = NotFoundError("Usuario", "abc").to_dict()

        assert data["message"] == "Usuario no encontrado"
        assert data["details"] == {"resource": "Usuario", "identifier": "abc"}

    def test_sensitive_details_are_redacted(self):
        """Test password-like keys never leave the process."""
        error = AuditoriaError("x", details={"password": "s3cret", "nested": {"api_token": "t"}})

        details = error.to_dict()["details"]

        assert details["password"] == "***REDACTED***"
        assert details["nested"]["api_token"] == "***REDACTED***"
