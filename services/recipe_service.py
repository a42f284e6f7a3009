"""Recipe service - validation and transactional persistence of recipes.

Every write runs as one transaction: RecipeRepository only flushes, and this
service commits at the end or rolls back on any failure, so a recipe is never
stored without its ingredient lines and steps.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.mappers.recipe_mapper import RecipeMapper
from domain.recipe_validation import validate_recipe
from domain.schemas.recipe_schemas import RecipeCreate, RecipeResponse
from repositories.recipe_repository import RecipeRepository
from services.identifier_cache import IdentifierCache
from services.pagination import Page, paginate

logger = logging.getLogger("recipe_catalog.recipe")


class RecipeService:
    @staticmethod
    def create(db: Session, body: RecipeCreate, cache: IdentifierCache) -> int:
        """
        Validate and store a new recipe.

        The recipe row is inserted first to obtain its id, then all ingredient
        lines and all steps are inserted, each with a single statement.

        Args:
            db: Database session
            body: Unvalidated recipe from the client
            cache: Identifier cache used for the referential checks

        Returns:
            The generated recipe_id

        Raises:
            RecipeParsingError subclasses: validation or constraint failures
            InternalServerError: any other database failure
        """
        recipe = validate_recipe(body, cache)
        repo = RecipeRepository(db)

        try:
            recipe_id = repo.insert_recipe(recipe)
            logger.debug(f"Inserted recipe row {recipe_id}")

            repo.bulk_insert_recipe_ingredients(recipe, recipe_id)
            logger.debug(
                f"Inserted {len(recipe.ingredients)} ingredient lines for recipe {recipe_id}"
            )

            repo.bulk_insert_steps(recipe, recipe_id)
            logger.debug(f"Inserted {len(recipe.steps)} steps for recipe {recipe_id}")

            db.commit()
        except Exception:
            db.rollback()
            logger.warning("Rolled back creation of recipe %r", recipe.name)
            raise

        logger.info(f"Created recipe {recipe_id}")
        return recipe_id

    @staticmethod
    def update(
        db: Session, recipe_id: int, body: RecipeCreate, cache: IdentifierCache
    ) -> None:
        """
        Replace a recipe's name, description, ingredient lines and steps.

        The id in the path identifies the recipe; a recipe_id in the body is
        validated but not used. Ingredient lines and steps are deleted and
        re-inserted within the same transaction.

        Raises:
            NotFoundError: no recipe with that id
            RecipeParsingError subclasses: validation or constraint failures
        """
        recipe = validate_recipe(body, cache)
        repo = RecipeRepository(db)

        try:
            affected = repo.update_recipe(recipe_id, recipe)
            # Zero rows is either an unchanged name/description or a missing recipe
            if affected == 0 and not repo.exists(recipe_id):
                raise NotFoundError(f"Recipe not found: {recipe_id}")

            repo.delete_recipe_ingredients(recipe_id)
            repo.delete_recipe_steps(recipe_id)
            repo.bulk_insert_recipe_ingredients(recipe, recipe_id)
            repo.bulk_insert_steps(recipe, recipe_id)

            db.commit()
        except Exception:
            db.rollback()
            logger.warning("Rolled back update of recipe %s", recipe_id)
            raise

        logger.info(f"Updated recipe {recipe_id}")

    @staticmethod
    def delete(db: Session, recipe_id: int) -> None:
        """
        Delete a recipe together with its ingredient lines and steps.

        Raises:
            NotFoundError: no recipe with that id
        """
        repo = RecipeRepository(db)
        try:
            if repo.delete_by_id(recipe_id) == 0:
                raise NotFoundError(f"Recipe not found: {recipe_id}")
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Deleted recipe {recipe_id}")

    @staticmethod
    def _load_detail(repo: RecipeRepository, recipe_id: int) -> Optional[RecipeResponse]:
        recipe = repo.get_by_id(recipe_id)
        if recipe is None:
            return None
        return RecipeMapper.to_response(
            recipe, repo.get_ingredient_lines(recipe_id), repo.get_steps(recipe_id)
        )

    @staticmethod
    def get_recipe(db: Session, recipe_id: int) -> RecipeResponse:
        """Load a recipe with its ingredients, units and steps"""
        detail = RecipeService._load_detail(RecipeRepository(db), recipe_id)
        if detail is None:
            raise NotFoundError(f"Recipe not found: {recipe_id}")
        return detail

    @staticmethod
    def list_recipes(db: Session, limit: int, start_from: int = 0) -> Page[RecipeResponse]:
        """
        One page of detailed recipes; every id on the page is loaded separately.

        A recipe deleted between the id query and its detail load is left out
        of the page; the cursor is unaffected.
        """
        repo = RecipeRepository(db)
        id_page = paginate(repo.get_page_ids, limit, start_from, key=lambda rid: rid)

        recipes = []
        for rid in id_page.items:
            detail = RecipeService._load_detail(repo, rid)
            if detail is None:
                logger.info(f"Recipe {rid} vanished while listing; skipped")
                continue
            recipes.append(detail)
        return Page(items=recipes, next_start_from=id_page.next_start_from)
