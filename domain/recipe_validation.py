"""Recipe validation - turns an unvalidated RecipeCreate into a ValidatedRecipe.

A ValidatedRecipe can only be built by validate_recipe in this module, and the
recipe repository only accepts ValidatedRecipe values, so nothing reaches the
database without passing both the structural and the referential checks.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from app.exceptions import (
    InvalidIngredientIdError,
    InvalidUnitIdError,
    RecipeIdNotPositiveError,
    StepNumbersOutOfOrderError,
)
from domain.schemas.recipe_schemas import (
    CompactRecipeIngredient,
    RecipeCreate,
    RecipeStepSchema,
)

if TYPE_CHECKING:
    from services.identifier_cache import IdentifierCache

logger = logging.getLogger("recipe_catalog.recipe_validation")


@dataclass(frozen=True)
class ValidatedRecipe:
    """
    Recipe that passed structural and referential validation.

    Every unit and ingredient id it references was present in the identifier
    cache at validation time; its steps are numbered 1..n and kept in that
    order. Being validated does not mean the recipe exists in the database.

    Instances are immutable and cannot be constructed outside this module:
    calling the class, dataclasses.replace() included, raises TypeError.
    """

    recipe_id: Optional[int]
    name: str
    description: str
    ingredients: Tuple[CompactRecipeIngredient, ...]
    steps: Tuple[RecipeStepSchema, ...]

    def __post_init__(self):
        raise TypeError("ValidatedRecipe can only be created by validate_recipe()")


def _build_validated(**values) -> ValidatedRecipe:
    # Skips __init__, the only way past the __post_init__ guard
    recipe = object.__new__(ValidatedRecipe)
    for name, value in values.items():
        object.__setattr__(recipe, name, value)
    return recipe


def structurally_validate(recipe: RecipeCreate) -> List[RecipeStepSchema]:
    """
    Check the recipe id and the step numbering.

    Returns the steps sorted by step_number; the recipe's own list is left as is.

    Raises:
        RecipeIdNotPositiveError: explicit recipe_id is negative
        StepNumbersOutOfOrderError: no steps, first step is not 1, or a gap/duplicate
    """
    # An absent recipe_id is not checked at all
    if recipe.recipe_id is not None and recipe.recipe_id < 0:
        raise RecipeIdNotPositiveError(details={"recipe_id": recipe.recipe_id})

    ordered_steps = sorted(recipe.steps, key=lambda step: step.step_number)

    if not ordered_steps:
        raise StepNumbersOutOfOrderError("Recipe must have at least one step")

    if ordered_steps[0].step_number != 1:
        raise StepNumbersOutOfOrderError(
            "Step numbers must start at 1",
            details={"first_step_number": ordered_steps[0].step_number},
        )

    for current, following in zip(ordered_steps, ordered_steps[1:]):
        if current.step_number + 1 != following.step_number:
            raise StepNumbersOutOfOrderError(
                details={
                    "step_number": current.step_number,
                    "next_step_number": following.step_number,
                }
            )

    return ordered_steps


def validate_recipe(recipe: RecipeCreate, cache: "IdentifierCache") -> ValidatedRecipe:
    """
    Validate a recipe for writing.

    Structural checks run first, then every ingredient id is checked against
    the cache, then every unit id. A recipe that is wrong in both ways is
    therefore reported as an ingredient error. Duplicate ingredient ids are
    left to the database unique constraint.

    Raises:
        RecipeIdNotPositiveError, StepNumbersOutOfOrderError: structural errors
        InvalidIngredientIdError: first ingredient id missing from the cache
        InvalidUnitIdError: first unit id missing from the cache
    """
    ordered_steps = structurally_validate(recipe)

    for line in recipe.ingredients:
        if not cache.contains_ingredient(line.ingredient_id):
            logger.warning(
                "Rejecting recipe %r: unknown ingredient id %s",
                recipe.name,
                line.ingredient_id,
            )
            raise InvalidIngredientIdError(
                details={"ingredient_id": line.ingredient_id}
            )

    for line in recipe.ingredients:
        if not cache.contains_unit(line.unit_id):
            logger.warning(
                "Rejecting recipe %r: unknown unit id %s", recipe.name, line.unit_id
            )
            raise InvalidUnitIdError(details={"unit_id": line.unit_id})

    return _build_validated(
        recipe_id=recipe.recipe_id,
        name=recipe.name,
        description=recipe.description,
        ingredients=tuple(recipe.ingredients),
        steps=tuple(ordered_steps),
    )
