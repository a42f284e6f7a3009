"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.catalog_repository import (
    CatalogRepository,
    UnitRepository,
    IngredientRepository,
)
from repositories.recipe_repository import RecipeRepository

__all__ = [
    "BaseRepository",
    "CatalogRepository",
    "UnitRepository",
    "IngredientRepository",
    "RecipeRepository",
]
