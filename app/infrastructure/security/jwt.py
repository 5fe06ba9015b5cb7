"""Access tokens for the dashboard API (HS256 by default).

Claims: sub (user id), email, iat, exp and typ="access". Tokens are signed
with SECRET_KEY and live for ACCESS_TOKEN_EXPIRE_MINUTES.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import Settings, get_settings
from app.domain.exceptions import AuthenticationException

TOKEN_TYPE = "access"


@dataclass(frozen=True)
class AccessToken:
    token: str
    expires_at: datetime
    expires_in: int


@dataclass(frozen=True)
class AccessTokenClaims:
    user_id: str
    email: str | None
    expires_at: datetime


def issue_access_token(
    user_id: str,
    email: str,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> AccessToken:
    """Sign an access token for the user; expires_in is in seconds."""
    settings = settings or get_settings()
    issued_at = now or datetime.now(UTC)
    lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    expires_at = issued_at + lifetime
    token = jwt.encode(
        {
            "sub": user_id,
            "email": email,
            "typ": TOKEN_TYPE,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        },
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return AccessToken(
        token=token, expires_at=expires_at, expires_in=int(lifetime.total_seconds())
    )


def decode_access_token(token: str, *, settings: Settings | None = None) -> AccessTokenClaims:
    """Verify signature, expiry and token type.

    Raises:
        AuthenticationException: expired, tampered, wrong type or no subject.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError:
        raise AuthenticationException("Token has expired") from None
    except JWTError:
        raise AuthenticationException("Invalid or expired token") from None
    if payload.get("typ") != TOKEN_TYPE or not payload.get("sub"):
        raise AuthenticationException("Invalid or expired token")
    return AccessTokenClaims(
        user_id=payload["sub"],
        email=payload.get("email"),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
