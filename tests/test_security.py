"""Tests for password hashing, bearer tokens and role dependencies."""

from datetime import timedelta

import pytest
from fastapi import HTTPException

from ward_aqi.core.deps import parse_days, require_officer
from ward_aqi.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ward_aqi.models.user import User, UserRole


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_is_salted(self):
        """The same password hashes differently each time."""
        first = hash_password("officer-secret")
        second = hash_password("officer-secret")

        assert first != "officer-secret"
        assert first != second
        assert verify_password("officer-secret", first) is True
        assert verify_password("officer-secret", second) is True

    def test_wrong_password_rejected(self):
        hashed = hash_password("officer-secret")

        assert verify_password("citizen-guess", hashed) is False

    @pytest.mark.parametrize("password", ["", "पासवर्ड🔒", "a" * 1000])
    def test_unusual_passwords(self, password):
        """Empty, non-ASCII and very long passwords round-trip."""
        assert verify_password(password, hash_password(password)) is True


class TestBearerTokens:
    """Tests for token creation and decoding."""

    def test_claims_survive_round_trip(self):
        token = create_access_token({"sub": "7", "email": "officer@test.com", "role": "officer"})

        payload = decode_access_token(token)

        assert payload is not None
        assert payload["sub"] == "7"
        assert payload["role"] == "officer"
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "7"}, expires_delta=timedelta(hours=-1))

        assert decode_access_token(token) is None

    def test_tampered_token_rejected(self):
        header, payload, signature = create_access_token({"sub": "7"}).split(".")

        assert decode_access_token(f"{header}.{payload}x.{signature}") is None

    @pytest.mark.parametrize("token", ["", "not.a.jwt", "..."])
    def test_malformed_token_rejected(self, token):
        assert decode_access_token(token) is None


class TestRoleDependency:
    """Tests for the officer-only dependency."""

    async def test_officer_allowed(self):
        officer = User(email="officer@test.com", password_hash="x", role=UserRole.OFFICER)

        assert await require_officer(officer) is officer

    async def test_citizen_forbidden(self):
        citizen = User(email="citizen@test.com", password_hash="x", role=UserRole.CITIZEN)

        with pytest.raises(HTTPException) as exc_info:
            await require_officer(citizen)

        assert exc_info.value.status_code == 403


class TestLenientDays:
    """Day-count query values never fail a request."""

    @pytest.mark.parametrize(
        "value,expected",
        [(None, 7), ("30", 30), (" 12 ", 12), ("abc", 7), ("0", 7), ("366", 7), ("365", 365), ("-3", 7)],
    )
    def test_analytics_range(self, value, expected):
        assert parse_days(value, 7, 1, 365) == expected

    @pytest.mark.parametrize("value,expected", [("6", 14), ("7", 7), ("30", 30), ("31", 14)])
    def test_prediction_range(self, value, expected):
        assert parse_days(value, 14, 7, 30) == expected
