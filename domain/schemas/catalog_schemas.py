"""Pydantic schemas for units and ingredients."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CatalogEntryBase(BaseModel):
    """Fields shared by units and ingredients."""

    singular_name: str = Field(..., min_length=1, examples=["cup"])
    plural_name: str = Field(..., min_length=1, examples=["cups"])


class UnitCreate(CatalogEntryBase):
    """Body of POST /units and PUT /units/{unit_id}."""


class UnitResponse(CatalogEntryBase):
    model_config = ConfigDict(from_attributes=True)

    unit_id: Optional[int] = None


class UnitCreatedResponse(BaseModel):
    unit_id: int


class IngredientCreate(CatalogEntryBase):
    """Body of POST /ingredients and PUT /ingredients/{ingredient_id}."""


class IngredientResponse(CatalogEntryBase):
    model_config = ConfigDict(from_attributes=True)

    ingredient_id: Optional[int] = None


class IngredientCreatedResponse(BaseModel):
    ingredient_id: int


class UnitsPage(BaseModel):
    """One page of units.

    next_start_from is the id the next request should start from; that unit is
    the first one of the next page. It is None when there are no more units.
    """

    units: List[UnitResponse]
    next_start_from: Optional[int] = None


class IngredientsPage(BaseModel):
    """One page of ingredients, see UnitsPage for the cursor semantics."""

    ingredients: List[IngredientResponse]
    next_start_from: Optional[int] = None
