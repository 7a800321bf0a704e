from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from portfolio import services
from portfolio.deps import get_db
from portfolio.models import CitySet
from portfolio.pagination import DEFAULT_LIMIT, MAX_LIMIT, cursor_from_query
from portfolio.schemas import CitySetPage, CitySetResponse

router = APIRouter(prefix="/city-sets", tags=["city-sets"])


@router.get("", response_model=CitySetPage)
def get_city_sets(
    db: Annotated[Session, Depends(get_db)],
    cursor_id: Annotated[UUID | None, Query()] = None,
    cursor_updated_at: Annotated[datetime | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=MAX_LIMIT)] = DEFAULT_LIMIT,
) -> CitySetPage:
    cursor = cursor_from_query(cursor_id, cursor_updated_at)
    return services.list_city_sets(db, cursor, limit)


@router.get("/{city}", response_model=CitySetResponse | None)
def get_city_set_by_city(
    city: str,
    db: Annotated[Session, Depends(get_db)],
) -> CitySet | None:
    return services.get_city_set_by_city(db, city)
