"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.unit import Unit
from domain.models.ingredient import Ingredient
from domain.models.recipe import Recipe, RecipeIngredient, Step

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Catalog models
    "Unit",
    "Ingredient",
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "Step",
]
