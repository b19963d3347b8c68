"""
Category schemas.

A category is an ordered list of course ids; a course's position in
courseIdList is its display order.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(BaseModel):
    """Course grouping shown as a chip on the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, exclude=True)
    title: str = ""
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
    course_id_list: list[str] = Field(default_factory=list, alias="courseIdList")

    @field_validator("course_id_list", mode="before")
    @classmethod
    def drop_duplicates(cls, v: Any) -> Any:
        """Keep the first occurrence of each id."""
        if v is None:
            return []
        if isinstance(v, list):
            return list(dict.fromkeys(v))
        return v

    @classmethod
    def from_document(cls, doc_id: str, fields: dict[str, Any]) -> "Category":
        return cls.model_validate({**fields, "id": doc_id})
