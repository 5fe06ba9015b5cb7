"""Tests for domain exceptions (error_code, message, details, status_code)."""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WebCoreException,
)


def test_webcore_exception_default_error_code() -> None:
    """Base WebCoreException uses class name as error_code when not provided."""
    exc = WebCoreException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "WebCoreException"
    assert exc.details == {}
    assert exc.status_code == 400


def test_validation_exception_with_field_and_errors() -> None:
    exc = ValidationException(
        "Weak", field="new_password", error_code="WEAK_PASSWORD", errors=["too short"]
    )
    assert exc.error_code == "WEAK_PASSWORD"
    assert exc.details == {"field": "new_password", "errors": ["too short"]}


def test_validation_exception_without_field() -> None:
    """ValidationException with no field has empty details."""
    exc = ValidationException("Invalid")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.status_code == 401


def test_authorization_exception_names_permission() -> None:
    exc = AuthorizationException("users.write")
    assert exc.status_code == 403
    assert exc.error_code == "PERMISSION_DENIED"
    assert "users.write" in exc.message
    assert exc.details == {"permission": "users.write"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("user", "abc")
    assert exc.message == "User not found"
    assert exc.error_code == "USER_NOT_FOUND"
    assert exc.details == {"resource_type": "user", "resource_id": "abc"}
    assert exc.status_code == 404


def test_conflict_exception() -> None:
    exc = ConflictException("username")
    assert exc.message == "Username already exists"
    assert exc.error_code == "USERNAME_ALREADY_EXISTS"
    assert exc.status_code == 409


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.status_code == 503
