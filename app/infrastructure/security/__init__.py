"""Security: access tokens and password hashing."""

from app.infrastructure.security.jwt import (
    AccessToken,
    AccessTokenClaims,
    decode_access_token,
    issue_access_token,
)
from app.infrastructure.security.password import (
    get_password_hash,
    password_strength_errors,
    verify_password,
)

__all__ = [
    "AccessToken",
    "AccessTokenClaims",
    "decode_access_token",
    "get_password_hash",
    "issue_access_token",
    "password_strength_errors",
    "verify_password",
]
