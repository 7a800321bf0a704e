from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session
from starlette.status import HTTP_201_CREATED

from portfolio import services
from portfolio.deps import get_current_user, get_db, get_storage
from portfolio.models import Photo
from portfolio.pagination import DEFAULT_LIMIT, MAX_LIMIT, cursor_from_query
from portfolio.schemas import PhotoCreate, PhotoPage, PhotoResponse, PhotoUpdate
from portfolio.storage import PhotoStorage

router = APIRouter(prefix="/photos", tags=["photos"])

Limit = Annotated[int, Query(ge=1, le=MAX_LIMIT)]
CursorId = Annotated[UUID | None, Query()]
CursorUpdatedAt = Annotated[datetime | None, Query()]


@router.post(
    "",
    response_model=PhotoResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_photo(
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[PhotoCreate, Body(...)],
) -> Photo:
    return services.create_photo(db, body)


@router.get("", response_model=PhotoPage)
def get_photos(
    db: Annotated[Session, Depends(get_db)],
    cursor_id: CursorId = None,
    cursor_updated_at: CursorUpdatedAt = None,
    limit: Limit = DEFAULT_LIMIT,
) -> PhotoPage:
    cursor = cursor_from_query(cursor_id, cursor_updated_at)
    return services.list_photos(db, cursor, limit)


@router.get(
    "/private",
    response_model=PhotoPage,
    dependencies=[Depends(get_current_user)],
)
def get_photos_with_private(
    db: Annotated[Session, Depends(get_db)],
    cursor_id: CursorId = None,
    cursor_updated_at: CursorUpdatedAt = None,
    limit: Limit = DEFAULT_LIMIT,
) -> PhotoPage:
    cursor = cursor_from_query(cursor_id, cursor_updated_at)
    return services.list_photos(db, cursor, limit, include_private=True)


@router.get("/liked", response_model=list[PhotoResponse])
def get_liked_photos(
    db: Annotated[Session, Depends(get_db)],
    limit: Limit = DEFAULT_LIMIT,
) -> list[PhotoResponse]:
    return services.list_liked_photos(db, limit)


@router.get("/{photo_id}", response_model=PhotoResponse | None)
def get_photo(
    photo_id: UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Photo | None:
    return services.get_photo(db, photo_id)


@router.patch(
    "/{photo_id}",
    response_model=PhotoResponse,
    dependencies=[Depends(get_current_user)],
)
def update_photo(
    photo_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[PhotoUpdate, Body(...)],
) -> Photo:
    payload = body.model_copy(update={"id": photo_id})
    return services.update_photo(db, payload)


@router.delete(
    "/{photo_id}",
    response_model=PhotoResponse,
    dependencies=[Depends(get_current_user)],
)
def remove_photo(
    photo_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[PhotoStorage, Depends(get_storage)],
) -> PhotoResponse:
    """
    Delete a photo, its city set membership and its stored image.
    The image deletion is best effort; failures are only logged.
    """
    return services.remove_photo(db, photo_id, storage)
