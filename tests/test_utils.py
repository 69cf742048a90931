"""
Tests for the security utilities.

Tests:
- Password hashing and verification
- JWT token creation and validation
- Password policy
- Email validation
"""
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from jobboard import config
from jobboard.errors import Unauthenticated
from jobboard.utils import (
    decode_token, generate_token, get_authenticated_user_id, hash_password, is_password_strong,
    validate_user_email, verify_password,
)

from conftest import FakeRequest


class TestPasswordHashing:

    def test_hash_is_argon2(self):
        hashed = hash_password("Sup3r!Secret#42")
        assert hashed.startswith("$argon2")
        assert hashed != "Sup3r!Secret#42"

    def test_hash_differs_each_time(self):
        assert hash_password("Sup3r!Secret#42") != hash_password("Sup3r!Secret#42")

    def test_verify(self):
        hashed = hash_password("Sup3r!Secret#42")
        assert verify_password(hashed, "Sup3r!Secret#42") is True
        assert verify_password(hashed, "sup3r!secret#42") is False

    def test_verify_garbage_hash(self):
        assert verify_password("not-a-hash", "Sup3r!Secret#42") is False


class TestTokens:

    def test_round_trip(self):
        assert decode_token(generate_token(17)) == 17

    def test_expired(self):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = pyjwt.encode({"sub": "17", "exp": past}, config.SECRET_KEY, algorithm=config.ALGORITHM)
        with pytest.raises(Unauthenticated, match="expired"):
            decode_token(token)

    def test_wrong_signature(self):
        token = pyjwt.encode({"sub": "17"}, "another-secret-key-that-is-long-enough", algorithm="HS256")
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_non_numeric_subject(self):
        token = pyjwt.encode({"sub": "alice"}, config.SECRET_KEY, algorithm=config.ALGORITHM)
        with pytest.raises(Unauthenticated):
            decode_token(token)

    def test_from_request_headers(self):
        context = {"request": FakeRequest({"Authorization": f"Bearer {generate_token(3)}"})}
        assert get_authenticated_user_id(context) == 3

    @pytest.mark.parametrize("context", [
        {},
        {"request": FakeRequest()},
        {"request": FakeRequest({"Authorization": "Token abc"})},
        {"request": FakeRequest({"Authorization": "Bearer "})},
    ])
    def test_missing_or_malformed_header(self, context):
        with pytest.raises(Unauthenticated):
            get_authenticated_user_id(context)


class TestPasswordPolicy:

    def test_strong_password(self):
        assert is_password_strong("Sup3r!Secret#42", username="alice", email="alice@jobboard.io") is True

    @pytest.mark.parametrize("password, message", [
        ("Sh0rt!", "at least 8"),
        ("lowercase1!", "uppercase"),
        ("UPPERCASE1!", "lowercase"),
        ("NoDigits!!", "digit"),
        ("NoSymbols123", "special character"),
    ])
    def test_weak_passwords(self, password, message):
        with pytest.raises(ValueError, match=message):
            is_password_strong(password)

    def test_contains_username(self):
        with pytest.raises(ValueError, match="username"):
            is_password_strong("Alice!2024xyz", username="alice")

    def test_contains_email_prefix(self):
        with pytest.raises(ValueError, match="email"):
            is_password_strong("Jobs#Hunter99", email="hunter@jobboard.io")


class TestEmailValidation:

    def test_normalizes_domain(self):
        assert validate_user_email("Bob@JobBoard.IO") == "Bob@jobboard.io"

    @pytest.mark.parametrize("email", ["", "not-an-email", "two@@jobboard.io"])
    def test_rejects_invalid(self, email):
        with pytest.raises(ValueError):
            validate_user_email(email)
