"""
Dashboard: browsing the course catalog.

Shows every course or the courses of one category (in category order),
optionally narrowed by a case-insensitive search on the course name.
"""

import logging
from dataclasses import dataclass, field

from outline_admin.features.categories.repository import CategoryRepository
from outline_admin.features.categories.schemas import Category
from outline_admin.features.courses.repository import CourseRepository
from outline_admin.features.courses.schemas import Course

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


@dataclass
class CategoryView:
    """A category with its course ids resolved to courses."""

    category: Category
    courses: list[Course] = field(default_factory=list)


class DashboardService:
    """Catalog overview with category and name filters."""

    def __init__(self, courses: CourseRepository, categories: CategoryRepository):
        self.course_repository = courses
        self.category_repository = categories
        self.courses: list[Course] = []
        self.categories: list[CategoryView] = []

    async def load(self) -> None:
        """Load all courses and resolve each category's course list."""
        self.courses = await self.course_repository.list_all()
        by_id = {course.id: course for course in self.courses}

        views = []
        for category in await self.category_repository.list_all():
            resolved = [by_id[cid] for cid in category.course_id_list if cid in by_id]
            missing = len(category.course_id_list) - len(resolved)
            if missing:
                logger.warning(f"Category '{category.title}' references {missing} missing courses")
            views.append(CategoryView(category=category, courses=resolved))
        self.categories = views

    @property
    def category_titles(self) -> list[str]:
        return [ALL_CATEGORIES, *(view.category.title for view in self.categories)]

    def filter(self, category_title: str = ALL_CATEGORIES, search: str = "") -> list[Course]:
        """
        Courses shown for a category chip and search term.

        Args:
            category_title: "All" or a category title; unknown titles show nothing
            search: Substring of the course name, case-insensitive

        Returns:
            Matching courses (catalog order for "All", category order otherwise)
        """
        if category_title == ALL_CATEGORIES:
            courses = list(self.courses)
        else:
            view = next((v for v in self.categories if v.category.title == category_title), None)
            courses = list(view.courses) if view else []

        if search:
            needle = search.lower()
            courses = [c for c in courses if needle in c.course_name.lower()]
        return courses
