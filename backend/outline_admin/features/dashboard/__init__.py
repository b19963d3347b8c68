"""Course catalog overview."""

from .service import ALL_CATEGORIES, CategoryView, DashboardService

__all__ = ["ALL_CATEGORIES", "CategoryView", "DashboardService"]
