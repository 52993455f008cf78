"""Unit tests for JWT decoding and authentication utilities."""

import time
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from jwt.algorithms import ECAlgorithm

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt, get_signing_key

USER_ID = "550e8400-e29b-41d4-a716-446655440000"

SIGNING_KEY = ec.generate_private_key(ec.SECP256R1())
OTHER_KEY = ec.generate_private_key(ec.SECP256R1())


def create_test_token(
    sub: str | None = USER_ID,
    email: str | None = "test@example.com",
    role: str | None = "authenticated",
    exp_offset: int = 3600,
    key: ec.EllipticCurvePrivateKey = SIGNING_KEY,
) -> str:
    """Create an ES256 test token.

    Args:
        sub: Subject (user ID); omitted when None.
        email: User email.
        role: User role.
        exp_offset: Seconds from now for expiration (negative for expired).
        key: Private key to sign with.

    Returns:
        str: Encoded JWT token.
    """
    now = int(time.time())
    payload = {
        "email": email,
        "role": role,
        "exp": now + exp_offset,
        "iat": now,
        "aud": "authenticated",
        "iss": "https://test.supabase.co/auth/v1",
    }
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, key, algorithm="ES256")


@pytest.fixture
def signing_settings() -> Generator[MagicMock, None, None]:
    """Point the signing key setting at the test public key."""
    get_signing_key.cache_clear()
    with patch("src.api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_signing_key_jwk = ECAlgorithm.to_jwk(SIGNING_KEY.public_key())
        yield mock_settings
    get_signing_key.cache_clear()


class TestDecodeJWT:
    """Tests for decode_jwt function."""

    def test_decode_jwt_with_valid_token(self, signing_settings: MagicMock) -> None:
        """Test decode_jwt successfully decodes a valid token."""
        payload = decode_jwt(create_test_token())

        assert payload.sub == USER_ID
        assert payload.email == "test@example.com"
        assert payload.role == "authenticated"
        assert payload.aud == "authenticated"

    def test_decode_jwt_with_expired_token(self, signing_settings: MagicMock) -> None:
        """Test decode_jwt raises TOKEN_EXPIRED for expired tokens."""
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token(exp_offset=-3600))

        assert exc_info.value.code == AuthErrorCode.TOKEN_EXPIRED

    def test_decode_jwt_with_invalid_signature(self, signing_settings: MagicMock) -> None:
        """Test decode_jwt rejects tokens signed by another key."""
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token(key=OTHER_KEY))

        assert exc_info.value.code == AuthErrorCode.INVALID_SIGNATURE

    @pytest.mark.parametrize("token", ["not-a-jwt", ""])
    def test_decode_jwt_with_malformed_token(self, signing_settings: MagicMock, token: str) -> None:
        """Test decode_jwt raises INVALID_TOKEN for garbage input."""
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(token)

        assert exc_info.value.code == AuthErrorCode.INVALID_TOKEN

    def test_decode_jwt_missing_sub_claim(self, signing_settings: MagicMock) -> None:
        """Test decode_jwt requires the sub claim."""
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token(sub=None))

        assert exc_info.value.code == AuthErrorCode.INVALID_TOKEN

    def test_decode_jwt_converts_to_user_context(self, signing_settings: MagicMock) -> None:
        """Test that the payload converts to a UserContext."""
        user = decode_jwt(create_test_token(email=None, role=None)).to_user_context()

        assert str(user.user_id) == USER_ID
        assert user.email is None
        assert user.role is None


class TestGetSigningKey:
    """Tests for get_signing_key function."""

    def test_unconfigured_key(self) -> None:
        """Test that an empty setting is rejected."""
        get_signing_key.cache_clear()
        with patch("src.api.middleware.auth.get_settings") as mock_settings:
            mock_settings.return_value.supabase_signing_key_jwk = ""
            with pytest.raises(AuthError, match="not configured"):
                get_signing_key()
        get_signing_key.cache_clear()

    def test_malformed_jwk(self) -> None:
        """Test that a non-JSON setting is rejected."""
        get_signing_key.cache_clear()
        with patch("src.api.middleware.auth.get_settings") as mock_settings:
            mock_settings.return_value.supabase_signing_key_jwk = "{not json"
            with pytest.raises(AuthError, match="Invalid signing key JWK format"):
                get_signing_key()
        get_signing_key.cache_clear()
