from datetime import timedelta

import pytest
from fastapi import HTTPException, status

from portfolio.utils.jwt import (
    create_access_token,
    decode_access_token,
    get_secret_key,
    get_token_lifetime,
)


def test_get_secret_key_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError) as excinfo:
        get_secret_key()
    assert "JWT_SECRET_KEY not set in environment" in str(excinfo.value)


def test_create_and_decode_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "testkey")
    token = create_access_token("owner")
    assert isinstance(token, str)
    claims = decode_access_token(token)
    assert claims.get("sub") == "owner"
    assert "exp" in claims


def test_decode_invalid_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "testkey")
    with pytest.raises(HTTPException) as excinfo:
        decode_access_token("notatoken")
    assert excinfo.value.status_code == status.HTTP_401_UNAUTHORIZED


def test_decode_expired_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "testkey")
    token = create_access_token("owner", expires_delta=timedelta(minutes=-1))
    with pytest.raises(HTTPException) as excinfo:
        decode_access_token(token)
    assert excinfo.value.status_code == status.HTTP_401_UNAUTHORIZED


def test_decode_token_signed_with_other_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "one")
    token = create_access_token("owner")
    monkeypatch.setenv("JWT_SECRET_KEY", "two")
    with pytest.raises(HTTPException):
        decode_access_token(token)


def test_token_lifetime_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)
    assert get_token_lifetime() == timedelta(minutes=60)
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")
    assert get_token_lifetime() == timedelta(minutes=5)
