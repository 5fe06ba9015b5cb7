"""Domain layer: exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WebCoreException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
    "WebCoreException",
]
