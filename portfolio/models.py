import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.database import Base


def utcnow() -> datetime:
    return datetime.now(UTC)


class PhotoVisibility(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    visibility: Mapped[PhotoVisibility] = mapped_column(
        Enum(
            PhotoVisibility,
            name="photo_visibility",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=PhotoVisibility.PRIVATE,
        nullable=False,
    )
    aspect_ratio: Mapped[float] = mapped_column(Float, nullable=False)
    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    blur_data: Mapped[str] = mapped_column(Text, nullable=False)

    # Geolocation, resolved by the client before upload
    country: Mapped[str | None] = mapped_column(Text)
    country_code: Mapped[str | None] = mapped_column(Text)
    region: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(Text, index=True)
    district: Mapped[str | None] = mapped_column(Text)
    full_address: Mapped[str | None] = mapped_column(Text)
    place_formatted: Mapped[str | None] = mapped_column(Text)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    gps_altitude: Mapped[float | None] = mapped_column(Float)

    # EXIF
    make: Mapped[str | None] = mapped_column(String(255))
    model: Mapped[str | None] = mapped_column(String(255))
    lens_model: Mapped[str | None] = mapped_column(String(255))
    focal_length: Mapped[float | None] = mapped_column(Float)
    focal_length_35mm: Mapped[float | None] = mapped_column(Float)
    f_number: Mapped[float | None] = mapped_column(Float)
    iso: Mapped[int | None] = mapped_column(Integer)
    exposure_time: Mapped[float | None] = mapped_column(Float)
    exposure_compensation: Mapped[float | None] = mapped_column(Float)
    date_time_original: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class CitySet(Base):
    """Photos grouped by (country, city); maintained by CitySetDAO only."""

    __tablename__ = "city_sets"
    __table_args__ = (UniqueConstraint("country", "city", name="unique_city_set"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    description: Mapped[str | None] = mapped_column(Text)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    country_code: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    cover_photo_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("photos.id", ondelete="SET NULL")
    )
    photo_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    cover_photo: Mapped[Photo | None] = relationship(
        Photo, foreign_keys=[cover_photo_id]
    )
    photos: Mapped[list[Photo]] = relationship(
        Photo,
        primaryjoin=(
            "and_(CitySet.country == foreign(Photo.country), "
            "CitySet.city == foreign(Photo.city))"
        ),
        order_by=Photo.updated_at.desc(),
        viewonly=True,
    )
