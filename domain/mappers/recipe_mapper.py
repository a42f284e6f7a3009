"""
Recipe domain mappers.
Handles transformation between ORM rows and DTOs for recipe-related entities.
"""

from typing import List, Sequence, Tuple

from domain.models import Ingredient, Recipe, Step, Unit
from domain.schemas.catalog_schemas import IngredientResponse, UnitResponse
from domain.schemas.recipe_schemas import (
    DetailedRecipeIngredient,
    RecipeResponse,
    RecipeStepSchema,
)


class RecipeMapper:
    """Mapper for recipe transformations."""

    @staticmethod
    def to_response(
        recipe: Recipe,
        ingredient_lines: Sequence[Tuple[Ingredient, Unit, str]],
        steps: Sequence[Step],
    ) -> RecipeResponse:
        """
        Convert a recipe row and its child rows to a RecipeResponse DTO.

        Args:
            recipe: Recipe ORM instance
            ingredient_lines: (ingredient, unit, quantity) per ingredient line
            steps: Step rows, already ordered by step_number

        Returns:
            RecipeResponse DTO with ingredients and units embedded
        """
        ingredients: List[DetailedRecipeIngredient] = [
            DetailedRecipeIngredient(
                ingredient=IngredientResponse.model_validate(ingredient),
                unit=UnitResponse.model_validate(unit),
                quantity=quantity,
            )
            for ingredient, unit, quantity in ingredient_lines
        ]

        return RecipeResponse(
            recipe_id=recipe.recipe_id,
            name=recipe.name,
            description=recipe.description or "",
            ingredients=ingredients,
            steps=[RecipeStepSchema.model_validate(step) for step in steps],
        )
