"""Authentication service: credential check, token issue and login audit."""

from __future__ import annotations

from dataclasses import dataclass

from app.application.dtos.user import UserResult, user_to_result
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.repositories import AuditLogRepository, UserRepository
from app.infrastructure.security.jwt import issue_access_token
from app.shared.enums import AuditAction, AuditResource
from app.shared.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    expires_in: int
    user: UserResult
    token_type: str = "bearer"


class AuthService:
    def __init__(self, user_repo: UserRepository, audit_repo: AuditLogRepository) -> None:
        self._user_repo = user_repo
        self._audit_repo = audit_repo

    async def login(self, email: str, password: str, *, ip_address: str | None) -> LoginResult:
        """Authenticate and issue a JWT. Raises AuthenticationException on failure."""
        user = await self._user_repo.authenticate(email, password)
        if not user:
            logger.warning("Failed login attempt for %s", email.lower())
            raise AuthenticationException("Invalid email or password")

        user.last_login_at = utc_now()
        await self._user_repo.update(user)
        await self._audit_repo.record(
            AuditAction.LOGIN,
            AuditResource.AUTH,
            user_id=user.id,
            resource_id=user.id,
            ip_address=ip_address,
        )
        token = issue_access_token(user.id, user.email)
        return LoginResult(
            access_token=token.token,
            expires_in=token.expires_in,
            user=user_to_result(user),
        )
