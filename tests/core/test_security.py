"""
Tests for password hashing, access tokens and generated secrets.
"""
import re
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from src.auth.exceptions import TokenExpiredException, InvalidTokenException
from src.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    generate_temporary_password,
    generate_reset_token,
    is_token_expired,
)


@pytest.mark.parametrize("password", ["Senha123", "a", "çãõ-ünicode ✓", "x" * 60])
def test_hash_then_verify(password):
    hashed = hash_password(password)
    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password(password + "!", hashed)


def test_hash_uses_bcrypt_cost_10_with_fresh_salt():
    first = hash_password("Senha123")
    second = hash_password("Senha123")
    assert first.startswith("$2b$10$")
    assert first != second


def test_verify_without_hash_is_false():
    assert verify_password("Senha123", None) is False


def test_token_carries_claims_and_one_hour_expiry():
    token = create_access_token({"user_id": 7, "full_name": "Ana Silva", "role": "Paciente"})
    claims = decode_access_token(token)
    assert claims["user_id"] == 7
    assert claims["full_name"] == "Ana Silva"
    assert claims["role"] == "Paciente"
    assert claims["exp"] - claims["iat"] == 3600


def test_token_past_ttl_is_expired():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=1, seconds=5)
    token = create_access_token({"user_id": 7}, issued_at=issued_at)
    with pytest.raises(TokenExpiredException):
        decode_access_token(token)


def test_token_with_wrong_secret_is_invalid():
    token = create_access_token({"user_id": 7}, secret="another-secret")
    with pytest.raises(InvalidTokenException):
        decode_access_token(token)


def test_tampered_token_is_invalid():
    token = create_access_token({"user_id": 7, "role": "Paciente"})
    claims = jwt.get_unverified_claims(token)
    claims["role"] = "Profissional"
    forged = jwt.encode(claims, "guessed-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenException):
        decode_access_token(forged)
    with pytest.raises(InvalidTokenException):
        decode_access_token("not-a-token")


def test_temporary_password_shape():
    for _ in range(200):
        password = generate_temporary_password()
        assert len(password) == 10
        assert password.isalnum()
        assert any(c.isdigit() for c in password)


def test_reset_token_is_40_hex_chars():
    token = generate_reset_token()
    assert re.fullmatch(r"[0-9a-f]{40}", token)
    assert token != generate_reset_token()


def test_is_token_expired_accepts_naive_utc():
    past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(minutes=1)
    future = datetime.now(timezone.utc) + timedelta(minutes=1)
    assert is_token_expired(past)
    assert not is_token_expired(future)
