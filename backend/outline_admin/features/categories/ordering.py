"""
Category ordering model.

Working selection of courses for one category. The selection is an
ordered list of course ids; ordinals are derived from it and always
run 1..N in list order, so removing a course closes the gap.
"""

from .schemas import Category


class CategoryOrderingModel:
    """Selected course ids of a category and their 1-based ordinals."""

    def __init__(self) -> None:
        self._selected: list[str] = []

    @property
    def selected(self) -> list[str]:
        return list(self._selected)

    @property
    def ordinals(self) -> dict[str, int]:
        return {course_id: i + 1 for i, course_id in enumerate(self._selected)}

    def is_selected(self, course_id: str) -> bool:
        return course_id in self._selected

    def select(self, category: Category) -> tuple[list[str], dict[str, int]]:
        """Seed the selection from the category's stored order."""
        self._selected = list(dict.fromkeys(category.course_id_list))
        return self.selected, self.ordinals

    def toggle(self, course_id: str) -> tuple[list[str], dict[str, int]]:
        """
        Remove a selected course or append an unselected one.

        An appended course gets ordinal N + 1; after a removal the
        remaining courses are renumbered 1..N.
        """
        if course_id in self._selected:
            self._selected.remove(course_id)
        else:
            self._selected.append(course_id)
        return self.selected, self.ordinals

    def clear(self) -> None:
        self._selected = []

    def course_id_list(self) -> list[str]:
        """The sequence to persist. Ordinals are never stored."""
        return self.selected
