"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.catalog_schemas import (
    UnitCreate,
    UnitResponse,
    UnitCreatedResponse,
    UnitsPage,
    IngredientCreate,
    IngredientResponse,
    IngredientCreatedResponse,
    IngredientsPage,
)
from domain.schemas.recipe_schemas import (
    RecipeStepSchema,
    CompactRecipeIngredient,
    RecipeCreate,
    RecipeCreatedResponse,
    DetailedRecipeIngredient,
    RecipeResponse,
    RecipesPage,
)

__all__ = [
    # Catalog schemas
    "UnitCreate",
    "UnitResponse",
    "UnitCreatedResponse",
    "UnitsPage",
    "IngredientCreate",
    "IngredientResponse",
    "IngredientCreatedResponse",
    "IngredientsPage",
    # Recipe schemas
    "RecipeStepSchema",
    "CompactRecipeIngredient",
    "RecipeCreate",
    "RecipeCreatedResponse",
    "DetailedRecipeIngredient",
    "RecipeResponse",
    "RecipesPage",
]
