"""
Photo procedures: the repository operations plus their city-set follow-ups.

Each step commits on its own. A photo insert is kept even when the city set
follow-up fails, and a photo is deleted even when its stored image is not.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.dao import CitySetDAO, PhotoDAO
from portfolio.errors import BadRequestError, InternalError, NotFoundError
from portfolio.models import CitySet, Photo
from portfolio.schemas import (
    CitySetPage,
    CitySetResponse,
    Cursor,
    PhotoCreate,
    PhotoPage,
    PhotoResponse,
    PhotoUpdate,
)
from portfolio.storage import PhotoStorage, object_key_from_url

logger = logging.getLogger(__name__)


def create_photo(db: Session, payload: PhotoCreate) -> Photo:
    try:
        photo = PhotoDAO(db).create(payload.model_dump())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Photo insert failed")
        error_message = "Failed to create photo"
        raise InternalError(error_message) from exc

    try:
        CitySetDAO(db).on_photo_created(photo)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("City set update failed for photo %s", photo.id)
    return photo


def update_photo(db: Session, payload: PhotoUpdate) -> Photo:
    """City sets are not recomputed, even if the location changes."""
    if payload.id is None:
        error_message = "Photo id is required"
        raise BadRequestError(error_message)
    try:
        photo = PhotoDAO(db).update(payload.id, payload.changes())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Photo update failed for %s", payload.id)
        error_message = "Failed to update photo"
        raise InternalError(error_message) from exc
    if photo is None:
        error_message = "Photo not found"
        raise NotFoundError(error_message)
    return photo


def _delete_stored_image(storage: PhotoStorage, url: str) -> None:
    try:
        storage.delete_photo(object_key_from_url(url))
    except Exception:  # noqa: BLE001
        logger.warning("Storage delete failed for %s", url, exc_info=True)


def remove_photo(
    db: Session, photo_id: uuid.UUID, storage: PhotoStorage
) -> PhotoResponse:
    """Delete a photo and return it as it was before deletion."""
    dao = PhotoDAO(db)
    photo = dao.get(photo_id)
    if photo is None:
        error_message = "Photo not found"
        raise NotFoundError(error_message)
    snapshot = PhotoResponse.model_validate(photo)

    try:
        CitySetDAO(db).on_photo_removed(photo)
        _delete_stored_image(storage, snapshot.url)
        dao.delete(photo_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Photo deletion failed for %s", photo_id)
        error_message = "Failed to delete photo"
        raise InternalError(error_message) from exc
    return snapshot


def get_photo(db: Session, photo_id: uuid.UUID) -> Photo | None:
    return PhotoDAO(db).get(photo_id)


def list_photos(
    db: Session,
    cursor: Cursor | None,
    limit: int | None,
    *,
    include_private: bool = False,
) -> PhotoPage:
    dao = PhotoDAO(db)
    if include_private:
        photos, next_cursor = dao.list_all(cursor, limit)
    else:
        photos, next_cursor = dao.list_public(cursor, limit)
    return PhotoPage(
        items=[PhotoResponse.model_validate(p) for p in photos],
        next_cursor=next_cursor,
    )


def list_liked_photos(db: Session, limit: int | None) -> list[PhotoResponse]:
    return [PhotoResponse.model_validate(p) for p in PhotoDAO(db).list_liked(limit)]


def list_city_sets(db: Session, cursor: Cursor | None, limit: int | None) -> CitySetPage:
    city_sets, next_cursor = CitySetDAO(db).list_page(cursor, limit)
    return CitySetPage(
        items=[CitySetResponse.model_validate(c) for c in city_sets],
        next_cursor=next_cursor,
    )


def get_city_set_by_city(db: Session, city: str) -> CitySet | None:
    return CitySetDAO(db).get_by_city(city)
