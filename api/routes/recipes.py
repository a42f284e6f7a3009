"""Recipe routes"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_identifier_cache
from domain.models import get_db_session
from domain.schemas.recipe_schemas import (
    RecipeCreate,
    RecipeCreatedResponse,
    RecipeResponse,
    RecipesPage,
)
from services.identifier_cache import IdentifierCache
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("recipe_catalog.api.recipes")


@router.post("", response_model=RecipeCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """
    Create a recipe with its ingredient lines and steps.

    Steps may arrive in any order but must be numbered 1..n without gaps.
    Every ingredient_id and unit_id must refer to an existing record.
    Violations are reported with 422 and a specific error code.
    """
    recipe_id = RecipeService.create(db, payload, cache)
    return RecipeCreatedResponse(recipe_id=recipe_id)


@router.get("", response_model=RecipesPage)
def list_recipes(
    limit: int = Query(..., description="Page size, 1 to 15"),
    start_from: int = Query(0, description="Smallest recipe_id to include"),
    db: Session = Depends(get_db_session),
):
    """List detailed recipes in recipe_id order, one page at a time"""
    page = RecipeService.list_recipes(db, limit, start_from)
    return RecipesPage(recipes=page.items, next_start_from=page.next_start_from)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: int, db: Session = Depends(get_db_session)):
    """Get a recipe with its ingredients, units and steps"""
    return RecipeService.get_recipe(db, recipe_id)


@router.put("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_recipe(
    recipe_id: int,
    payload: RecipeCreate,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """Replace a recipe's name, description, ingredient lines and steps"""
    RecipeService.update(db, recipe_id, payload, cache)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: int, db: Session = Depends(get_db_session)):
    RecipeService.delete(db, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
