from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from portfolio.models import PhotoVisibility


def _blank_to_none(value: Any) -> Any:  # noqa: ANN401
    """Form inputs send "" for untouched fields; treat it as not provided."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Numbers may arrive as numbers or numeric strings (EXIF readers, HTML forms)
OptionalFloat = Annotated[float | None, BeforeValidator(_blank_to_none)]
OptionalInt = Annotated[int | None, BeforeValidator(_blank_to_none)]
OptionalDatetime = Annotated[datetime | None, BeforeValidator(_blank_to_none)]


class PhotoCreate(BaseModel):
    url: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    visibility: PhotoVisibility = PhotoVisibility.PRIVATE
    is_favorite: bool = False
    aspect_ratio: float
    width: float
    height: float
    blur_data: str

    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    city: str | None = None
    district: str | None = None
    full_address: str | None = None
    place_formatted: str | None = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    gps_altitude: OptionalFloat = None

    make: str | None = Field(default=None, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    lens_model: str | None = Field(default=None, max_length=255)
    focal_length: OptionalFloat = None
    focal_length_35mm: OptionalFloat = None
    f_number: OptionalFloat = None
    iso: OptionalInt = None
    exposure_time: OptionalFloat = None
    exposure_compensation: OptionalFloat = None
    date_time_original: OptionalDatetime = None


class PhotoUpdate(BaseModel):
    """
    Partial update of the editable fields.
    Fields left out (or sent as null / "") keep their stored value.
    """

    id: UUID | None = None
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    is_favorite: bool | None = None
    visibility: PhotoVisibility | None = None
    latitude: OptionalFloat = None
    longitude: OptionalFloat = None
    make: str | None = Field(default=None, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    lens_model: str | None = Field(default=None, max_length=255)
    focal_length: OptionalFloat = None
    focal_length_35mm: OptionalFloat = None
    f_number: OptionalFloat = None
    iso: OptionalInt = None
    exposure_time: OptionalFloat = None
    exposure_compensation: OptionalFloat = None
    date_time_original: OptionalDatetime = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    url: str
    title: str
    description: str
    visibility: PhotoVisibility
    is_favorite: bool
    aspect_ratio: float
    width: float
    height: float
    blur_data: str

    country: str | None
    country_code: str | None
    region: str | None
    city: str | None
    district: str | None
    full_address: str | None
    place_formatted: str | None
    latitude: float | None
    longitude: float | None
    gps_altitude: float | None

    make: str | None
    model: str | None
    lens_model: str | None
    focal_length: float | None
    focal_length_35mm: float | None
    f_number: float | None
    iso: int | None
    exposure_time: float | None
    exposure_compensation: float | None
    date_time_original: datetime | None

    created_at: datetime
    updated_at: datetime


class CitySetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str | None
    country: str
    country_code: str
    city: str
    cover_photo_id: UUID | None
    photo_count: int
    created_at: datetime
    updated_at: datetime
    cover_photo: PhotoResponse | None
    photos: list[PhotoResponse]


class Cursor(BaseModel):
    """Sort key of the last item on a page."""

    id: UUID
    updated_at: datetime


class PhotoPage(BaseModel):
    items: list[PhotoResponse]
    next_cursor: Cursor | None


class CitySetPage(BaseModel):
    items: list[CitySetResponse]
    next_cursor: Cursor | None


class LoginRequest(BaseModel):
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
