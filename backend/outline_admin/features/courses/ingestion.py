"""
Course ingestion pipeline.

Uploaded KML -> track path -> place of the first point -> updated draft.
Nothing is persisted here; saving the draft is the caller's job.
"""

import logging

from .geocoding import PlaceResolver
from .kml_parser import TrackFileParser
from .schemas import Course

logger = logging.getLogger(__name__)


class CourseIngestionPipeline:
    """Merges a parsed track and its resolved start place into a draft course."""

    def __init__(self, parser: TrackFileParser, resolver: PlaceResolver):
        self.parser = parser
        self.resolver = resolver

    async def ingest(self, draft: Course, file_contents: str) -> Course:
        """
        Ingest a KML track into a draft course.

        The draft passed in is never modified. An empty track leaves
        coursePaths as it was; an unresolved place leaves locationInfo
        as it was.

        Args:
            draft: Course being edited
            file_contents: KML document text

        Returns:
            Updated copy of the draft

        Raises:
            ParseError: If the KML has no coordinates element
        """
        path = self.parser.parse(file_contents)
        if not path:
            logger.info("Track file has no valid coordinates; course paths unchanged")
            return draft.model_copy(deep=True)

        updates = {"course_paths": path}
        place = await self.resolver.resolve(path[0])
        if place is not None:
            updates["location_info"] = place
        else:
            logger.info("Start point unresolved; location info unchanged")

        logger.info(f"Ingested track with {len(path)} points for '{draft.course_name}'")
        return draft.model_copy(update=updates, deep=True)
