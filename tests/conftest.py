import logging
import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

# Keep the application engine off the working directory during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from portfolio.database import Base  # noqa: E402
from portfolio.deps import get_db, get_storage  # noqa: E402
from portfolio.main import app  # noqa: E402
from portfolio.storage import PhotoStorage  # noqa: E402
from portfolio.utils.jwt import create_access_token  # noqa: E402

# Configure basic logging for tests
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeStorageError(Exception):
    pass


class FakeStorage(PhotoStorage):
    """Records deleted keys; optionally fails like an unreachable bucket."""

    def __init__(self) -> None:
        self.deleted: list[str] = []
        self.fail = False

    def delete_photo(self, object_key: str) -> None:
        if self.fail:
            msg = f"cannot delete {object_key}"
            raise FakeStorageError(msg)
        self.deleted.append(object_key)


# Database Fixture (Overrides get_db dependency)
@pytest.fixture
def session() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def client(session: Session, storage: FakeStorage) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    monkeypatch.setenv("JWT_SECRET_KEY", "testsecret")
    token = create_access_token("owner")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def photo_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a valid create payload; keyword arguments override fields."""

    def make(**overrides: Any) -> dict[str, Any]:  # noqa: ANN401
        payload: dict[str, Any] = {
            "url": "https://p.example.com/photos/sunset.jpg",
            "title": "Sunset",
            "description": "Evening light over the river",
            "aspect_ratio": 1.5,
            "width": 6000.0,
            "height": 4000.0,
            "blur_data": "data:image/jpeg;base64,AAAA",
            "country": "France",
            "country_code": "FR",
            "region": "Ile-de-France",
            "city": "Paris",
        }
        payload.update(overrides)
        return payload

    return make
