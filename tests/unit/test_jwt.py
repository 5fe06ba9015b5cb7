"""Tests for access token issue and verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt
from pydantic import SecretStr

from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.security.jwt import decode_access_token, issue_access_token


def test_issue_and_decode_carries_user_and_email() -> None:
    token = issue_access_token("user-1", "jane@example.com")
    claims = decode_access_token(token.token)
    assert claims.user_id == "user-1"
    assert claims.email == "jane@example.com"
    assert claims.expires_at == datetime.fromtimestamp(
        int(token.expires_at.timestamp()), UTC
    )


def test_expires_in_follows_settings() -> None:
    settings = get_settings().model_copy(update={"access_token_expire_minutes": 15})
    now = datetime(2026, 1, 1, tzinfo=UTC)
    token = issue_access_token("user-1", "jane@example.com", settings=settings, now=now)
    assert token.expires_in == 900
    assert token.expires_at == now + timedelta(minutes=15)


def test_expired_token_is_rejected() -> None:
    past = datetime.now(UTC) - timedelta(days=2)
    token = issue_access_token("user-1", "jane@example.com", now=past)
    with pytest.raises(AuthenticationException) as exc_info:
        decode_access_token(token.token)
    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_key_is_rejected() -> None:
    other = get_settings().model_copy(update={"secret_key": SecretStr("x" * 40)})
    token = issue_access_token("user-1", "jane@example.com", settings=other)
    with pytest.raises(AuthenticationException):
        decode_access_token(token.token)


def test_token_without_access_type_is_rejected() -> None:
    settings = get_settings()
    forged = jwt.encode(
        {"sub": "user-1", "exp": int((datetime.now(UTC) + timedelta(hours=1)).timestamp())},
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    with pytest.raises(AuthenticationException):
        decode_access_token(forged)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(AuthenticationException):
        decode_access_token("not-a-jwt")
