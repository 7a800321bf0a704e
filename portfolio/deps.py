from collections.abc import Generator
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from portfolio.database import SessionLocal
from portfolio.storage import PhotoStorage, get_storage_backend
from portfolio.utils.jwt import decode_access_token

security = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),  # noqa: B008
) -> dict[str, Any]:
    """
    Dependency to get the portfolio owner from a JWT bearer token.
    Raises 401 if the token is invalid; a missing header is rejected by HTTPBearer.
    """
    return decode_access_token(credentials.credentials)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session and closes it when done.
    Yields:
        Session: SQLAlchemy database session
    """
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage() -> PhotoStorage:
    """Dependency returning the configured object storage backend."""
    return get_storage_backend()
