"""Tests for bcrypt password hashing and strength rules."""

import bcrypt

from app.infrastructure.security.password import (
    get_password_hash,
    password_strength_errors,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = get_password_hash("admin123")
        assert hashed != "admin123"
        assert verify_password("admin123", hashed)
        assert not verify_password("admin124", hashed)

    def test_explicit_cost_is_encoded_in_hash(self) -> None:
        hashed = get_password_hash("secret", rounds=5)
        assert hashed.startswith("$2b$05$")

    def test_default_cost_comes_from_settings(self) -> None:
        # conftest sets BCRYPT_ROUNDS=4
        assert get_password_hash("secret").startswith("$2b$04$")

    def test_salted(self) -> None:
        assert get_password_hash("same") != get_password_hash("same")

    def test_long_passwords_are_not_truncated(self) -> None:
        base = "x" * 80
        hashed = get_password_hash(base + "a")
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash_does_not_raise(self) -> None:
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_raw_bcrypt_hash_of_plaintext_does_not_verify(self) -> None:
        raw = bcrypt.hashpw(b"admin123", bcrypt.gensalt(rounds=4)).decode()
        assert verify_password("admin123", raw) is False


class TestPasswordStrength:
    def test_strong_password_has_no_errors(self) -> None:
        assert password_strength_errors("Str0ng!Pass") == []

    def test_reports_every_failed_rule(self) -> None:
        errors = password_strength_errors("abc")
        assert len(errors) == 4
        assert any("8 characters" in e for e in errors)
        assert any("uppercase" in e for e in errors)
        assert any("number" in e for e in errors)
        assert any("special" in e for e in errors)

    def test_missing_lowercase(self) -> None:
        assert password_strength_errors("ABCDEFG1!") == [
            "Password must contain at least one lowercase letter"
        ]
