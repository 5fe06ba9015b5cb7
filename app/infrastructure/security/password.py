"""Password hashing (bcrypt with SHA-256 pre-hash) and strength rules.

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated.
"""

import base64
import hashlib
import re

import bcrypt

from app.core.config import get_settings

PASSWORD_MIN_LENGTH = 8
_SPECIAL_CHARS_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>\-_=+\[\]\\/;'`~]")


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt).

    Args:
        password: Plaintext password.
        rounds: bcrypt cost factor; defaults to settings.bcrypt_rounds.
    """
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    salt = bcrypt.gensalt(rounds=cost)
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


def password_strength_errors(password: str) -> list[str]:
    """Return the list of strength rules password violates (empty when strong)."""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")
    if not _SPECIAL_CHARS_RE.search(password):
        errors.append("Password must contain at least one special character")
    return errors
