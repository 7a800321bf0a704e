"""
JWT utility functions for the owner's access tokens.
"""

import os
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from fastapi import HTTPException, status
from jwt import PyJWTError

ALGORITHM = "HS256"
DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 60


def get_secret_key() -> str:
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        msg = "JWT_SECRET_KEY not set in environment"
        raise RuntimeError(msg)
    return secret


def get_token_lifetime() -> timedelta:
    minutes = os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES")
    return timedelta(minutes=int(minutes or DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES))


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or get_token_lifetime())
    claims: dict[str, Any] = {"sub": subject, "exp": expire}
    return jwt.encode(claims, get_secret_key(), algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode a JWT token and return the claims dict. Raises 401 if invalid or expired.
    """
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except PyJWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
