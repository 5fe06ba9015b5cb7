"""Domain exceptions for the WebCore application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class WebCoreException(Exception):
    """Base exception for all WebCore application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, details and
    status_code.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        status_code: HTTP status the presentation layer should use.
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(WebCoreException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = "VALIDATION_ERROR",
        errors: list[str] | None = None,
    ) -> None:
        """Initialize with message, optional field name and error list.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Machine-readable code (e.g. WEAK_PASSWORD).
            errors: Optional list of individual failure messages.
        """
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, error_code, details)


class AuthenticationException(WebCoreException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(WebCoreException):
    """Raised when the user lacks the permission required for the operation."""

    status_code = 403

    def __init__(self, permission: str | None = None) -> None:
        """Initialize with the missing permission name, when known.

        Args:
            permission: Permission name that was required (e.g. 'users.write').
        """
        message = (
            f"Permission denied: {permission} required" if permission else "Permission denied"
        )
        details = {"permission": permission} if permission else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(WebCoreException):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user', 'role').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            f"{resource_type.upper()}_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(WebCoreException):
    """Raised when a unique value (email, username, role name) is already taken."""

    status_code = 409

    def __init__(self, field: str, error_code: str | None = None) -> None:
        """Initialize with the conflicting field name.

        Args:
            field: 'email', 'username' or 'name'.
            error_code: Overrides the default <FIELD>_ALREADY_EXISTS code.
        """
        super().__init__(
            f"{field.capitalize()} already exists",
            error_code or f"{field.upper()}_ALREADY_EXISTS",
            {"field": field},
        )


class SqlNotConfiguredException(WebCoreException):
    """Raised when an operation needs the database but no engine is configured."""

    status_code = 503

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
