"""Rule-based icon categorization."""

from .catalog import CategoryCatalog
from .engine import categorize, group_by_category, matches
from .models import Category, system_categories

__all__ = [
    "Category",
    "CategoryCatalog",
    "categorize",
    "group_by_category",
    "matches",
    "system_categories",
]
