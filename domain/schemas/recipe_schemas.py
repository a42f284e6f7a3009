"""Pydantic schemas for recipe requests and responses.

Write requests use the compact ingredient line (ids only); read responses embed
the full ingredient and unit records.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from domain.schemas.catalog_schemas import IngredientResponse, UnitResponse


class RecipeStepSchema(BaseModel):
    """A single preparation step."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    step_number: int
    instruction: str


class CompactRecipeIngredient(BaseModel):
    """Recipe ingredient line expressed by ids."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    ingredient_id: int
    unit_id: int
    quantity: str = Field(..., max_length=50, examples=["3/4"])


class RecipeCreate(BaseModel):
    """Unvalidated recipe as received from a client.

    Nothing about it is guaranteed; it must go through
    domain.recipe_validation.validate_recipe before it can be stored.

    Example:
        {
            "name": "Very Tasty Soup",
            "description": "Finger-licking good!",
            "ingredients": [{"ingredient_id": 1, "unit_id": 1, "quantity": "3/4"}],
            "steps": [
                {"step_number": 1, "instruction": "Put the apple in boiling water."},
                {"step_number": 2, "instruction": "Eat the apple."}
            ]
        }
    """

    recipe_id: Optional[int] = None
    name: str
    description: str = ""
    ingredients: List[CompactRecipeIngredient] = []
    steps: List[RecipeStepSchema] = []


class RecipeCreatedResponse(BaseModel):
    recipe_id: int


class DetailedRecipeIngredient(BaseModel):
    """Recipe ingredient line with the ingredient and unit records embedded."""

    ingredient: IngredientResponse
    unit: UnitResponse
    quantity: str


class RecipeResponse(BaseModel):
    """Recipe as read back from the database."""

    recipe_id: int
    name: str
    description: str
    ingredients: List[DetailedRecipeIngredient]
    steps: List[RecipeStepSchema]


class RecipesPage(BaseModel):
    """One page of detailed recipes, see UnitsPage for the cursor semantics."""

    recipes: List[RecipeResponse]
    next_start_from: Optional[int] = None
