"""
Category module.

Usage:
    from outline_admin.features.categories import CategoryOrderingModel, CategoryEditor

Components:
- Category: pydantic schema of a category document
- CategoryOrderingModel: ordered course selection with 1..N ordinals
- CategoryRepository: category documents in the document store
- CategoryEditor: load/select/toggle/save workflow
"""

from .schemas import Category
from .ordering import CategoryOrderingModel
from .repository import CategoryRepository
from .service import CategoryEditor, StagedThumbnail

__all__ = [
    "Category",
    "CategoryOrderingModel",
    "CategoryRepository",
    "CategoryEditor",
    "StagedThumbnail",
]
