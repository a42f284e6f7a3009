"""Ingredient catalog routes"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_identifier_cache
from domain.models import get_db_session
from domain.schemas.catalog_schemas import (
    IngredientCreate,
    IngredientCreatedResponse,
    IngredientResponse,
    IngredientsPage,
)
from services.catalog_service import IngredientService
from services.identifier_cache import IdentifierCache

router = APIRouter(prefix="/ingredients", tags=["Ingredients"])
logger = logging.getLogger("recipe_catalog.api.ingredients")


@router.post("", response_model=IngredientCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    payload: IngredientCreate,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """Create an ingredient"""
    ingredient_id = IngredientService.create(db, payload, cache)
    return IngredientCreatedResponse(ingredient_id=ingredient_id)


@router.get("", response_model=IngredientsPage)
def list_ingredients(
    limit: int = Query(..., description="Page size, 1 to 15"),
    start_from: int = Query(0, description="Smallest ingredient_id to include"),
    db: Session = Depends(get_db_session),
):
    """List ingredients in ingredient_id order, one page at a time"""
    page = IngredientService.list(db, limit, start_from)
    return IngredientsPage(
        ingredients=[IngredientResponse.model_validate(i) for i in page.items],
        next_start_from=page.next_start_from,
    )


@router.get("/all", response_model=List[IngredientResponse])
def list_all_ingredients(db: Session = Depends(get_db_session)):
    """Every ingredient, ordered by singular name"""
    return [IngredientResponse.model_validate(i) for i in IngredientService.list_all(db)]


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(ingredient_id: int, db: Session = Depends(get_db_session)):
    return IngredientResponse.model_validate(IngredientService.get(db, ingredient_id))


@router.put("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_ingredient(ingredient_id: int, payload: IngredientCreate, db: Session = Depends(get_db_session)):
    IngredientService.update(db, ingredient_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: int,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """Delete an ingredient; fails with 409 while a recipe still uses it"""
    IngredientService.delete(db, ingredient_id, cache)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
