"""
Unit tests for password hashing and tokens.
"""

import pytest

from app.core.security import (
    TokenError,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    """Tests for bcrypt helpers."""

    def test_hash_roundtrip(self):
        hashed = hash_password("learn2025")
        assert hashed != "learn2025"
        assert verify_password("learn2025", hashed)

    def test_wrong_password(self):
        assert not verify_password("wrong", hash_password("learn2025"))

    def test_malformed_hash(self):
        assert verify_password("learn2025", "not-a-bcrypt-hash") is False


class TestTokens:
    """Tests for JWT helpers."""

    def test_claims_are_preserved(self):
        token = create_access_token("user-1", {"email": "a@test.com", "role": "admin"})
        payload = decode_token(token)
        assert payload["sub"] == "user-1"
        assert payload["role"] == "admin"
        assert payload["type"] == "access"

    def test_subject_cannot_be_overridden(self):
        token = create_access_token("user-1", {"sub": "someone-else"})
        assert decode_token(token)["sub"] == "user-1"

    def test_tampered_token(self):
        token = create_access_token("user-1")
        with pytest.raises(TokenError) as exc_info:
            decode_token(token[:-2] + "xx")
        assert exc_info.value.error_code == "AUTH_TOKEN_INVALID"
