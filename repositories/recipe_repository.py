"""
Recipe Repository - Data access layer for recipes and their child rows.

Write methods accept ValidatedRecipe only and never commit; RecipeService runs
them inside a single transaction.
"""

from typing import List, Tuple
from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.exceptions import DuplicateIngredientIdError, InvalidIngredientIdError
from domain.models import Ingredient, Recipe, RecipeIngredient, Step, Unit
from domain.recipe_validation import ValidatedRecipe
from repositories.base import BaseRepository
from repositories.integrity import map_database_error


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for the recipe, recipe_ingredient and step tables"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe, Recipe.recipe_id)

    # Writes

    def insert_recipe(self, recipe: ValidatedRecipe) -> int:
        """Insert the recipe row and return the generated recipe_id"""
        row = Recipe(name=recipe.name, description=recipe.description)
        self.db.add(row)
        try:
            self.db.flush()
        except DBAPIError as exc:
            raise map_database_error(exc) from exc
        return row.recipe_id

    def bulk_insert_recipe_ingredients(
        self, recipe: ValidatedRecipe, recipe_id: int
    ) -> None:
        """
        Insert every ingredient line of the recipe with one multi-row INSERT.

        Raises:
            InvalidIngredientIdError: a referenced ingredient/unit row is missing
                (the identifier cache was stale)
            DuplicateIngredientIdError: the same ingredient appears twice
            InternalServerError: any other database failure
        """
        if not recipe.ingredients:
            return
        rows = [
            {
                "recipe_id": recipe_id,
                "ingredient_id": line.ingredient_id,
                "unit_id": line.unit_id,
                "quantity": line.quantity,
            }
            for line in recipe.ingredients
        ]
        try:
            self.db.execute(insert(RecipeIngredient).values(rows))
        except DBAPIError as exc:
            raise map_database_error(
                exc,
                on_foreign_key=InvalidIngredientIdError,
                on_unique=DuplicateIngredientIdError,
            ) from exc

    def bulk_insert_steps(self, recipe: ValidatedRecipe, recipe_id: int) -> None:
        """Insert every step of the recipe with one multi-row INSERT"""
        if not recipe.steps:
            return
        rows = [
            {
                "recipe_id": recipe_id,
                "step_number": step.step_number,
                "instruction": step.instruction,
            }
            for step in recipe.steps
        ]
        try:
            self.db.execute(insert(Step).values(rows))
        except DBAPIError as exc:
            raise map_database_error(exc) from exc

    def update_recipe(self, recipe_id: int, recipe: ValidatedRecipe) -> int:
        """
        Set name and description, skipping the write when neither changed.

        Returns:
            Number of rows affected; 0 means either a missing id or no change
        """
        stmt = (
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .where(
                or_(
                    Recipe.name.is_distinct_from(recipe.name),
                    Recipe.description.is_distinct_from(recipe.description),
                )
            )
            .values(name=recipe.name, description=recipe.description)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
        except DBAPIError as exc:
            raise map_database_error(exc) from exc
        return result.rowcount

    def delete_recipe_ingredients(self, recipe_id: int) -> int:
        result = self.db.execute(
            delete(RecipeIngredient)
            .where(RecipeIngredient.recipe_id == recipe_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_recipe_steps(self, recipe_id: int) -> int:
        result = self.db.execute(
            delete(Step)
            .where(Step.recipe_id == recipe_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_by_id(self, recipe_id: int) -> int:
        """
        Delete the recipe row. Ingredient lines and steps go with it through
        ON DELETE CASCADE.

        Returns:
            Number of rows affected (0 when the id does not exist)
        """
        try:
            result = self.db.execute(
                delete(Recipe)
                .where(Recipe.recipe_id == recipe_id)
            )
        except DBAPIError as exc:
            raise map_database_error(exc) from exc
        return result.rowcount

    # Reads

    def get_ingredient_lines(
        self, recipe_id: int
    ) -> List[Tuple[Ingredient, Unit, str]]:
        """Ingredient lines of a recipe joined with their ingredient and unit rows"""
        stmt = (
            select(Ingredient, Unit, RecipeIngredient.quantity)
            .select_from(RecipeIngredient)
            .join(Ingredient, RecipeIngredient.ingredient_id == Ingredient.ingredient_id)
            .join(Unit, RecipeIngredient.unit_id == Unit.unit_id)
            .where(RecipeIngredient.recipe_id == recipe_id)
            .order_by(RecipeIngredient.ingredient_id)
            .execution_options(populate_existing=True)
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    def get_steps(self, recipe_id: int) -> List[Step]:
        """Steps of a recipe ordered by step_number"""
        return list(
            self.db.scalars(
                select(Step)
                .where(Step.recipe_id == recipe_id)
                .order_by(Step.step_number)
                .execution_options(populate_existing=True)
            ).all()
        )
