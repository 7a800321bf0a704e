import logging
import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Uuid, delete, func, literal, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import CompileError
from sqlalchemy.orm import Session, selectinload

from portfolio.models import CitySet, Photo, PhotoVisibility, utcnow
from portfolio.pagination import clamp_limit, paginate
from portfolio.schemas import Cursor

logger = logging.getLogger(__name__)

# Addresses in these countries carry the city-level name in `region`
REGION_AS_CITY_COUNTRY_CODES = frozenset({"JP", "TW"})


def effective_city(
    country_code: str | None, region: str | None, city: str | None
) -> str | None:
    """City name used to group a photo into a city set."""
    if country_code in REGION_AS_CITY_COUNTRY_CODES:
        return region
    return city


class PhotoDAO:
    """Data Access Object for Photo."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, photo_id: uuid.UUID) -> Photo | None:
        return self.db.get(Photo, photo_id)

    def create(self, values: dict[str, Any]) -> Photo:
        photo = Photo(**values)
        self.db.add(photo)
        self.db.commit()
        self.db.refresh(photo)
        return photo

    def update(self, photo_id: uuid.UUID, changes: dict[str, Any]) -> Photo | None:
        photo = self.get(photo_id)
        if photo is None:
            return None
        for field, value in changes.items():
            setattr(photo, field, value)
        photo.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(photo)
        return photo

    def delete(self, photo_id: uuid.UUID) -> bool:
        photo = self.get(photo_id)
        if photo is None:
            return False
        self.db.delete(photo)
        self.db.commit()
        return True

    def list_public(
        self, cursor: Cursor | None, limit: int | None
    ) -> tuple[list[Photo], Cursor | None]:
        # Visibility is only checked among rows tied on the cursor's updated_at
        return paginate(
            self.db,
            select(Photo),
            Photo,
            cursor,
            limit,
            tie_break_filters=[Photo.visibility == PhotoVisibility.PUBLIC],
        )

    def list_all(
        self, cursor: Cursor | None, limit: int | None
    ) -> tuple[list[Photo], Cursor | None]:
        return paginate(self.db, select(Photo), Photo, cursor, limit)

    def list_liked(self, limit: int | None) -> Sequence[Photo]:
        stmt = (
            select(Photo)
            .where(
                Photo.is_favorite.is_(True),
                Photo.visibility == PhotoVisibility.PUBLIC,
            )
            .order_by(Photo.updated_at.desc())
            .limit(clamp_limit(limit))
        )
        return self.db.scalars(stmt).all()


class CitySetDAO:
    """Keeps city_sets consistent with the photos tagged with each city."""

    _INSERT_BY_DIALECT = {
        "postgresql": postgresql.insert,
        "sqlite": sqlite.insert,
    }

    def __init__(self, db: Session) -> None:
        self.db = db

    def _upsert_insert(self) -> Any:  # noqa: ANN401
        dialect = self.db.get_bind().dialect.name
        try:
            return self._INSERT_BY_DIALECT[dialect]
        except KeyError:
            error_message = f"City set upsert not supported on {dialect}"
            raise CompileError(error_message) from None

    def get(self, country: str, city: str) -> CitySet | None:
        stmt = select(CitySet).where(CitySet.country == country, CitySet.city == city)
        return self.db.scalars(stmt).first()

    def on_photo_created(self, photo: Photo) -> CitySet | None:
        """
        Count a newly inserted photo towards its city set.

        Creates the set on the first photo for a city. Later photos bump the
        count in the same statement; the first cover photo is kept.
        """
        city = effective_city(photo.country_code, photo.region, photo.city)
        if not (photo.country and city and photo.country_code):
            logger.info("No geo information available for photo %s", photo.id)
            return None

        insert = self._upsert_insert()
        stmt = insert(CitySet).values(
            country=photo.country,
            country_code=photo.country_code,
            city=city,
            photo_count=1,
            cover_photo_id=photo.id,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["country", "city"],
            set_={
                "country_code": stmt.excluded.country_code,
                "photo_count": CitySet.photo_count + 1,
                "cover_photo_id": func.coalesce(
                    CitySet.cover_photo_id, literal(photo.id, Uuid)
                ),
                "updated_at": utcnow(),
            },
        )
        self.db.execute(stmt)
        self.db.commit()

        city_set = self.get(photo.country, city)
        if city_set is not None:
            logger.info(
                "City set %s/%s now holds %d photos",
                city_set.country,
                city_set.city,
                city_set.photo_count,
            )
        return city_set

    def on_photo_removed(self, photo: Photo) -> None:
        """
        Uncount a photo that is about to be deleted.

        Looked up by the photo's stored city, not the JP/TW region name.
        """
        if not (photo.country and photo.city):
            return
        city_set = self.get(photo.country, photo.city)
        if city_set is None:
            return

        matches_city = (CitySet.country == photo.country) & (CitySet.city == photo.city)
        if city_set.photo_count == 1:
            self.db.execute(delete(CitySet).where(CitySet.id == city_set.id))
            logger.info("Deleted city set %s/%s", photo.country, photo.city)
        elif city_set.cover_photo_id == photo.id:
            # No ordering: any remaining photo of the city may become the cover
            new_cover_id = self.db.scalars(
                select(Photo.id)
                .where(
                    Photo.country == photo.country,
                    Photo.city == photo.city,
                    Photo.id != photo.id,
                )
                .limit(1)
            ).first()
            self.db.execute(
                update(CitySet)
                .where(matches_city)
                .values(
                    photo_count=CitySet.photo_count - 1,
                    cover_photo_id=new_cover_id,
                    updated_at=utcnow(),
                )
            )
            logger.info(
                "City set %s/%s cover moved to %s",
                photo.country,
                photo.city,
                new_cover_id,
            )
        else:
            self.db.execute(
                update(CitySet)
                .where(matches_city)
                .values(photo_count=CitySet.photo_count - 1, updated_at=utcnow())
            )
        self.db.commit()

    def list_page(
        self, cursor: Cursor | None, limit: int | None
    ) -> tuple[list[CitySet], Cursor | None]:
        stmt = select(CitySet).options(
            selectinload(CitySet.cover_photo), selectinload(CitySet.photos)
        )
        return paginate(self.db, stmt, CitySet, cursor, limit)

    def get_by_city(self, city: str) -> CitySet | None:
        stmt = (
            select(CitySet)
            .where(CitySet.city == city)
            .options(selectinload(CitySet.cover_photo), selectinload(CitySet.photos))
            .limit(1)
        )
        return self.db.scalars(stmt).first()
