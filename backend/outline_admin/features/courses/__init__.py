"""
Course catalog module.

Usage:
    from outline_admin.features.courses import TrackFileParser, PlaceResolver
    from outline_admin.features.courses import CourseIngestionPipeline, CourseService

Components:
- TrackFileParser: KML text -> ordered coordinates
- PlaceResolver: coordinate -> PlaceRecord via reverse geocoding
- CourseIngestionPipeline: merge a parsed track and its start place into a draft
- CourseRepository: course documents in the document store
- CourseService: drafts, hot spots, thumbnails, create/save
"""

from .schemas import (
    AlleyLevel,
    Coordinate,
    Course,
    CourseLevel,
    HotSpot,
    PlaceRecord,
    ThumbnailKind,
)
from .kml_parser import TrackFileParser
from .geocoding import PlaceResolver
from .ingestion import CourseIngestionPipeline
from .repository import CourseRepository
from .service import CourseService, parse_location_input

__all__ = [
    # Schemas
    "AlleyLevel",
    "Coordinate",
    "Course",
    "CourseLevel",
    "HotSpot",
    "PlaceRecord",
    "ThumbnailKind",
    # Services
    "TrackFileParser",
    "PlaceResolver",
    "CourseIngestionPipeline",
    "CourseRepository",
    "CourseService",
    "parse_location_input",
]
