"""Unit catalog routes"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_identifier_cache
from domain.models import get_db_session
from domain.schemas.catalog_schemas import (
    UnitCreate,
    UnitCreatedResponse,
    UnitResponse,
    UnitsPage,
)
from services.catalog_service import UnitService
from services.identifier_cache import IdentifierCache

router = APIRouter(prefix="/units", tags=["Units"])
logger = logging.getLogger("recipe_catalog.api.units")


@router.post("", response_model=UnitCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_unit(
    payload: UnitCreate,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """Create a unit of measurement"""
    unit_id = UnitService.create(db, payload, cache)
    return UnitCreatedResponse(unit_id=unit_id)


@router.get("", response_model=UnitsPage)
def list_units(
    limit: int = Query(..., description="Page size, 1 to 15"),
    start_from: int = Query(0, description="Smallest unit_id to include"),
    db: Session = Depends(get_db_session),
):
    """List units in unit_id order, one page at a time"""
    page = UnitService.list(db, limit, start_from)
    return UnitsPage(
        units=[UnitResponse.model_validate(u) for u in page.items],
        next_start_from=page.next_start_from,
    )


@router.get("/all", response_model=List[UnitResponse])
def list_all_units(db: Session = Depends(get_db_session)):
    """Every unit, ordered by singular name"""
    return [UnitResponse.model_validate(u) for u in UnitService.list_all(db)]


@router.get("/{unit_id}", response_model=UnitResponse)
def get_unit(unit_id: int, db: Session = Depends(get_db_session)):
    return UnitResponse.model_validate(UnitService.get(db, unit_id))


@router.put("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_unit(unit_id: int, payload: UnitCreate, db: Session = Depends(get_db_session)):
    UnitService.update(db, unit_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(
    unit_id: int,
    db: Session = Depends(get_db_session),
    cache: IdentifierCache = Depends(get_identifier_cache),
):
    """Delete a unit; fails with 409 while a recipe still uses it"""
    UnitService.delete(db, unit_id, cache)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
