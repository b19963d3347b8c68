"""
CategoryEditor: choosing and ordering the courses of a category.

Holds the working state of the category editor: the loaded categories
and courses, the selected category, its ordered course selection and a
staged thumbnail. save() writes courseIdList and thumbnailUrl in a
single update and resets the working state.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from outline_admin.features.courses.repository import CourseRepository
from outline_admin.features.courses.schemas import Course
from outline_admin.features.courses.service import THUMBNAIL_PREFIX
from outline_admin.storage.blobs import BlobStore

from .ordering import CategoryOrderingModel
from .repository import CategoryRepository
from .schemas import Category

logger = logging.getLogger(__name__)


@dataclass
class StagedThumbnail:
    """Thumbnail picked in the editor, uploaded on save."""

    filename: str
    data: bytes


class CategoryEditor:
    """Working state of the category editor screen."""

    def __init__(
        self,
        categories: CategoryRepository,
        courses: CourseRepository,
        blobs: BlobStore,
    ):
        self.category_repository = categories
        self.course_repository = courses
        self.blobs = blobs

        self.categories: list[Category] = []
        self.courses: list[Course] = []
        self.selected_category: Optional[Category] = None
        self.ordering = CategoryOrderingModel()
        self.thumbnail_url: Optional[str] = None
        self.staged_thumbnail: Optional[StagedThumbnail] = None

    async def load(self) -> None:
        """Load all categories and courses; the first category is selected."""
        self.categories = await self.category_repository.list_all()
        self.courses = await self.course_repository.list_all()
        if self.categories:
            self.select(self.categories[0])

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def select(self, category: Category) -> tuple[list[str], dict[str, int]]:
        """Make a category the one being edited."""
        self.selected_category = category
        self.thumbnail_url = category.thumbnail_url
        self.staged_thumbnail = None
        return self.ordering.select(category)

    def toggle(self, course_id: str) -> tuple[list[str], dict[str, int]]:
        """Add or remove a course from the selected category."""
        return self.ordering.toggle(course_id)

    def set_thumbnail(self, data: bytes, filename: str) -> None:
        """Stage a new category thumbnail."""
        self.staged_thumbnail = StagedThumbnail(filename=filename, data=data)

    async def save(self) -> None:
        """
        Persist the selection of the selected category.

        Does nothing if no category is selected.

        Raises:
            PersistenceFailure: If the upload or the update fails; the
                working state is kept so save can be retried
        """
        category = self.selected_category
        if category is None:
            return

        thumbnail_url = self.thumbnail_url
        if self.staged_thumbnail is not None:
            ref = await self.blobs.upload(
                f"{THUMBNAIL_PREFIX}/{self.staged_thumbnail.filename}",
                self.staged_thumbnail.data,
            )
            thumbnail_url = self.blobs.public_url(ref)

        course_id_list = self.ordering.course_id_list()
        await self.category_repository.update_selection(
            category.id, course_id_list, thumbnail_url
        )
        logger.info(f"Saved category {category.id} '{category.title}' with {len(course_id_list)} courses")

        updated = category.model_copy(
            update={"course_id_list": course_id_list, "thumbnail_url": thumbnail_url}
        )
        self.categories = [updated if c.id == category.id else c for c in self.categories]
        self.reset()

    def reset(self) -> None:
        self.selected_category = None
        self.ordering.clear()
        self.thumbnail_url = None
        self.staged_thumbnail = None
