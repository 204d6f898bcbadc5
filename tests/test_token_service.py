"""
Tests for JWT issuance / verification and the settings it is built from.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from pydantic import ValidationError

from auth.jwt import InvalidToken, TokenService
from config.settings import Settings

SECRET = "token-service-test-secret-0123456789abcdef"


class TestTokenService:
    def setup_method(self):
        self.tokens = TokenService(SECRET, expiry_seconds=3600)

    def test_issue_then_verify_returns_user_id(self):
        token = self.tokens.issue("3f1c2b9e-1d2a-4c55-8f6e-1234567890ab")
        assert self.tokens.verify(token) == "3f1c2b9e-1d2a-4c55-8f6e-1234567890ab"

    def test_payload_carries_id_and_one_hour_expiry(self):
        token = self.tokens.issue("user-1")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["id"] == "user-1"
        assert payload["exp"] - payload["iat"] == 3600

    def test_expired_token_is_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = self.tokens.issue("user-1", now=issued)
        with pytest.raises(InvalidToken):
            self.tokens.verify(token)

    def test_token_fails_at_expiry_instant(self):
        issued = datetime.now(timezone.utc) - timedelta(seconds=3600)
        token = self.tokens.issue("user-1", now=issued)
        with pytest.raises(InvalidToken):
            self.tokens.verify(token)

    def test_bad_signature_is_rejected(self):
        other = TokenService("a-completely-different-secret-0123456789", 3600)
        with pytest.raises(InvalidToken):
            self.tokens.verify(other.issue("user-1"))

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_is_rejected(self, token):
        with pytest.raises(InvalidToken):
            self.tokens.verify(token)

    def test_token_without_id_claim_is_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "user-1", "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            self.tokens.verify(token)

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            TokenService("", 3600)


class TestSettings:
    def test_missing_secret_fails(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_secret_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-env")
        settings = Settings(_env_file=None)
        assert settings.jwt_secret == "from-env"
        assert settings.jwt_expiry_seconds == 3600
        assert settings.bcrypt_rounds == 10

    def test_settings_are_immutable(self):
        settings = Settings(jwt_secret="x", _env_file=None)
        with pytest.raises(ValidationError):
            settings.jwt_secret = "y"
