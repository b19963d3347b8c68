"""
CourseService: creating and editing courses.

Drafts are plain Course objects edited in memory; nothing reaches the
store until create() or save(). A failed write raises PersistenceFailure
and leaves the draft as it was, so the edit can be retried.
"""

import logging
from typing import Optional

from outline_admin.shared.errors import PersistenceFailure
from outline_admin.storage.blobs import BlobStore

from .ingestion import CourseIngestionPipeline
from .repository import CourseRepository
from .schemas import Coordinate, Course, HotSpot, ThumbnailKind

logger = logging.getLogger(__name__)

THUMBNAIL_PREFIX = "thumbnails"


def parse_location_input(text: str) -> Coordinate:
    """
    Parse the hot spot location field.

    Args:
        text: "longitude, latitude" (e.g. "127.1, 37.5")

    Raises:
        ValueError: If the text is not two numbers
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'longitude, latitude', got {text!r}")
    longitude, latitude = (float(p) for p in parts)
    return Coordinate(latitude=latitude, longitude=longitude)


class CourseService:
    """Course catalog and editor operations."""

    def __init__(
        self,
        repository: CourseRepository,
        blobs: BlobStore,
        pipeline: CourseIngestionPipeline,
    ):
        self.repository = repository
        self.blobs = blobs
        self.pipeline = pipeline

    @staticmethod
    def new_draft() -> Course:
        """Blank course with one empty hot spot."""
        return Course(hot_spots=[HotSpot()])

    @staticmethod
    def add_hot_spot(
        draft: Course,
        title: str = "",
        description: str = "",
        location: Optional[Coordinate] = None,
    ) -> Course:
        """Append a hot spot. Returns the updated copy."""
        spot = HotSpot(title=title, spot_description=description, location=location)
        return draft.model_copy(update={"hot_spots": [*draft.hot_spots, spot]}, deep=True)

    async def list_courses(self) -> list[Course]:
        return await self.repository.list_all()

    async def load(self, course_id: str) -> Optional[Course]:
        return await self.repository.get_by_id(course_id)

    async def ingest_track(self, draft: Course, file_contents: str) -> Course:
        """Replace the draft's track from KML text (see CourseIngestionPipeline)."""
        return await self.pipeline.ingest(draft, file_contents)

    async def upload_thumbnail(
        self,
        draft: Course,
        data: bytes,
        filename: str,
        kind: ThumbnailKind = ThumbnailKind.MAIN,
    ) -> Course:
        """
        Upload a thumbnail image and point the draft at it.

        Raises:
            PersistenceFailure: If the upload fails
        """
        ref = await self.blobs.upload(f"{THUMBNAIL_PREFIX}/{filename}", data)
        url = self.blobs.public_url(ref)
        return draft.model_copy(update={self._thumbnail_attr(kind): url}, deep=True)

    @staticmethod
    def _thumbnail_attr(kind: ThumbnailKind) -> str:
        return {
            ThumbnailKind.MAIN: "thumbnail",
            ThumbnailKind.NEON: "thumbnail_neon",
            ThumbnailKind.LONG: "thumbnail_long",
        }[kind]

    async def create(self, draft: Course) -> Course:
        """
        Store a new course.

        Returns:
            The draft with its new id

        Raises:
            PersistenceFailure: If the store rejects the write
        """
        course_id = await self.repository.create(draft)
        logger.info(f"Created course {course_id} '{draft.course_name}'")
        return draft.model_copy(update={"id": course_id})

    async def save(self, course: Course) -> None:
        """
        Write an existing course back to the store.

        Raises:
            PersistenceFailure: If the course has no id or the write is rejected
        """
        if not course.id:
            raise PersistenceFailure("Course has no id; create it first")
        await self.repository.save(course)
        logger.info(f"Saved course {course.id} '{course.course_name}'")
