import uuid
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.orm import Session

from portfolio.dao import PhotoDAO, effective_city
from portfolio.models import PhotoVisibility


@pytest.fixture
def dao(session: Session) -> PhotoDAO:
    return PhotoDAO(session)


def test_create_and_get_photo(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    created = dao.create(photo_payload(title="DAO test"))
    fetched = dao.get(created.id)
    assert fetched is not None
    assert fetched.title == "DAO test"
    assert fetched.city == "Paris"


def test_created_ids_are_unique(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    ids = {dao.create(photo_payload()).id for _ in range(5)}
    assert len(ids) == 5  # noqa: PLR2004


def test_update_changes_fields_and_refreshes_updated_at(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    created = dao.create(photo_payload())
    before = created.updated_at
    updated = dao.update(created.id, {"title": "Renamed", "iso": 400})
    assert updated is not None
    assert updated.title == "Renamed"
    assert updated.iso == 400  # noqa: PLR2004
    assert updated.description == "Evening light over the river"
    assert updated.updated_at >= before


def test_update_not_found(dao: PhotoDAO) -> None:
    assert dao.update(uuid.uuid4(), {"title": "nope"}) is None


def test_delete_photo(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    created = dao.create(photo_payload())
    assert dao.delete(created.id) is True
    assert dao.get(created.id) is None


def test_delete_not_found(dao: PhotoDAO) -> None:
    assert dao.delete(uuid.uuid4()) is False


def test_list_liked_only_returns_public_favorites(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    liked = dao.create(
        photo_payload(is_favorite=True, visibility=PhotoVisibility.PUBLIC)
    )
    dao.create(photo_payload(is_favorite=True, visibility=PhotoVisibility.PRIVATE))
    dao.create(photo_payload(is_favorite=False, visibility=PhotoVisibility.PUBLIC))
    photos = dao.list_liked(limit=10)
    assert [p.id for p in photos] == [liked.id]


def test_list_liked_respects_limit(
    dao: PhotoDAO, photo_payload: Callable[..., dict[str, Any]]
) -> None:
    for _ in range(4):
        dao.create(photo_payload(is_favorite=True, visibility=PhotoVisibility.PUBLIC))
    assert len(dao.list_liked(limit=3)) == 3  # noqa: PLR2004


@pytest.mark.parametrize(
    ("country_code", "region", "city", "expected"),
    [
        ("FR", "Ile-de-France", "Paris", "Paris"),
        ("JP", "Tokyo", "Shibuya", "Tokyo"),
        ("TW", "Taipei", "Da'an", "Taipei"),
        ("JP", None, "Shibuya", None),
        (None, "Somewhere", "Nowhere", "Nowhere"),
    ],
)
def test_effective_city(
    country_code: str | None, region: str | None, city: str | None, expected: str | None
) -> None:
    assert effective_city(country_code, region, city) == expected
