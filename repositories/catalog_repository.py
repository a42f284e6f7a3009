"""
Catalog repositories - data access for the unit and ingredient tables.

Both tables have the same shape (id, singular_name, plural_name) and only
differ in their id column, so one implementation serves both.
"""

from typing import List, Type, TypeVar
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError
from domain.models import Ingredient, Unit
from repositories.base import BaseRepository
from repositories.integrity import map_database_error

CatalogModel = TypeVar("CatalogModel", Unit, Ingredient)


class CatalogRepository(BaseRepository[CatalogModel]):
    """Repository for a (singular_name, plural_name) catalog table"""

    def __init__(self, db: Session, model: Type[CatalogModel], id_column):
        super().__init__(db, model, id_column)

    def insert(self, singular_name: str, plural_name: str) -> int:
        """
        Insert a row and return its generated id.

        Raises:
            ConflictError: the (singular_name, plural_name) pair already exists
            InternalServerError: any other database failure
        """
        entity = self.model(singular_name=singular_name, plural_name=plural_name)
        self.db.add(entity)
        try:
            self.db.flush()
        except DBAPIError as exc:
            raise map_database_error(exc, on_unique=ConflictError) from exc
        return entity.id

    def update_names(self, entity_id: int, singular_name: str, plural_name: str) -> int:
        """
        Overwrite both names.

        Returns:
            Number of rows affected (0 when the id does not exist)

        Raises:
            ConflictError: the new name pair is already taken
        """
        stmt = (
            update(self.model)
            .where(self.id_column == entity_id)
            .values(singular_name=singular_name, plural_name=plural_name)
        )
        try:
            result = self.db.execute(stmt)
        except DBAPIError as exc:
            raise map_database_error(exc, on_unique=ConflictError) from exc
        return result.rowcount

    def delete_by_id(self, entity_id: int) -> int:
        """
        Delete a row.

        Returns:
            Number of rows affected (0 when the id does not exist)

        Raises:
            ConflictError: the row is still referenced by a recipe
        """
        stmt = delete(self.model).where(self.id_column == entity_id)
        try:
            result = self.db.execute(stmt)
        except DBAPIError as exc:
            raise map_database_error(exc, on_foreign_key=ConflictError) from exc
        return result.rowcount

    def get_all_by_name(self) -> List[CatalogModel]:
        """Every row ordered by singular name"""
        return list(
            self.db.scalars(
                select(self.model)
                .order_by(self.model.singular_name, self.id_column)
                .execution_options(populate_existing=True)
            ).all()
        )

    def get_all_ids(self) -> List[int]:
        return list(self.db.scalars(select(self.id_column)).all())


class UnitRepository(CatalogRepository[Unit]):
    """Repository for the unit table"""

    def __init__(self, db: Session):
        super().__init__(db, Unit, Unit.unit_id)


class IngredientRepository(CatalogRepository[Ingredient]):
    """Repository for the ingredient table"""

    def __init__(self, db: Session):
        super().__init__(db, Ingredient, Ingredient.ingredient_id)
