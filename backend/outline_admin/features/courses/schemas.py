"""
Course schemas.

Pydantic models for courses as stored in the document store. Stored
field names are camelCase (aliases); attributes are snake_case.
"""

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Coordinate(_Document):
    """Geographic point in degrees. No range checks, finite only."""

    latitude: float
    longitude: float

    @field_validator("latitude", "longitude")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinate must be a finite number")
        return v


class PlaceRecord(_Document):
    """Reverse-geocoded place. Missing components are empty strings."""

    name: str = ""
    iso_country_code: str = Field(default="", alias="isoCountryCode")
    administrative_area: str = Field(default="", alias="administrativeArea")
    sub_administrative_area: str = Field(default="", alias="subAdministrativeArea")
    locality: str = ""
    sub_locality: str = Field(default="", alias="subLocality")
    throughfare: str = ""
    sub_throughfare: str = Field(default="", alias="subThroughfare")


class CourseLevel(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class AlleyLevel(str, Enum):
    """How many alleys the course runs through."""
    NONE = "none"
    FEW = "few"
    LOTS = "lots"


class HotSpot(_Document):
    """Point of interest along a course."""

    title: str = ""
    spot_description: str = Field(default="", alias="spotDescription")
    location: Optional[Coordinate] = None

    @field_validator("location", mode="before")
    @classmethod
    def blank_location(cls, v: Any) -> Any:
        # A hot spot added but never filled in is stored with empty strings
        if isinstance(v, dict) and any(v.get(k) in ("", None) for k in ("latitude", "longitude")):
            return None
        return v


class ThumbnailKind(str, Enum):
    """Thumbnail slots of a course, valued by their stored field name."""
    MAIN = "thumbnail"
    NEON = "thumbnailNeon"
    LONG = "thumbnailLong"


class Course(_Document):
    """
    A GPS art course.

    `id` is the document id; it is None for a draft that was never
    created and is not part of the stored field map.
    """

    id: Optional[str] = Field(default=None, exclude=True)
    course_name: str = Field(default="", alias="courseName")
    course_length: str = Field(default="", alias="courseLength")
    course_duration: str = Field(default="", alias="courseDuration")
    description: str = ""
    region_display_name: str = Field(default="", alias="regionDisplayName")
    producer: str = ""
    thumbnail: str = ""
    thumbnail_neon: str = Field(default="", alias="thumbnailNeon")
    thumbnail_long: str = Field(default="", alias="thumbnailLong")
    course_paths: list[Coordinate] = Field(default_factory=list, alias="coursePaths")
    location_info: Optional[PlaceRecord] = Field(default=None, alias="locationInfo")
    level: CourseLevel = CourseLevel.NORMAL
    alley: AlleyLevel = AlleyLevel.NONE
    hot_spots: list[HotSpot] = Field(default_factory=list, alias="hotSpots")

    @field_validator("course_length", "course_duration", mode="before")
    @classmethod
    def number_as_text(cls, v: Any) -> str:
        """Form fields are free text; stored numbers are read back as text."""
        if v is None:
            return ""
        return str(v)

    def to_fields(self) -> dict[str, Any]:
        """Field map as written to the document store."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, doc_id: str, fields: dict[str, Any]) -> "Course":
        return cls.model_validate({**fields, "id": doc_id})
