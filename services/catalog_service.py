"""Unit and ingredient catalog services.

Both resources share the same operations; the subclasses only pick the
repository and the identifier cache hooks. The cache is mutated strictly after
the database commit, so a failed write never leaves it out of step.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Type

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.schemas.catalog_schemas import CatalogEntryBase
from repositories.catalog_repository import (
    CatalogRepository,
    IngredientRepository,
    UnitRepository,
)
from services.identifier_cache import IdentifierCache
from services.pagination import Page, paginate

logger = logging.getLogger("recipe_catalog.catalog")


class CatalogService(ABC):
    """Catalog operations shared by units and ingredients"""

    repository_class: Type[CatalogRepository] = CatalogRepository
    entity_name = "Entry"

    @classmethod
    @abstractmethod
    def _on_created(cls, cache: IdentifierCache, entity_id: int) -> None:
        """Record a committed insert in the identifier cache"""

    @classmethod
    @abstractmethod
    def _on_deleted(cls, cache: IdentifierCache, entity_id: int) -> None:
        """Evict a committed delete from the identifier cache"""

    @classmethod
    def create(cls, db: Session, body: CatalogEntryBase, cache: IdentifierCache) -> int:
        """
        Insert a new entry and register its id in the cache.

        Raises:
            ConflictError: the (singular_name, plural_name) pair already exists
        """
        repo = cls.repository_class(db)
        try:
            entity_id = repo.insert(body.singular_name, body.plural_name)
            db.commit()
        except Exception:
            db.rollback()
            logger.warning(
                "Failed to create %s %r/%r",
                cls.entity_name.lower(),
                body.singular_name,
                body.plural_name,
            )
            raise

        cls._on_created(cache, entity_id)
        logger.info(f"Created {cls.entity_name.lower()} {entity_id}")
        return entity_id

    @classmethod
    def get(cls, db: Session, entity_id: int):
        entity = cls.repository_class(db).get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{cls.entity_name} not found: {entity_id}")
        return entity

    @classmethod
    def update(cls, db: Session, entity_id: int, body: CatalogEntryBase) -> None:
        """
        Overwrite both names of an entry. The id does not change, so the
        cache is left alone.

        Raises:
            NotFoundError: no entry with that id
            ConflictError: the new name pair is already taken
        """
        repo = cls.repository_class(db)
        try:
            affected = repo.update_names(entity_id, body.singular_name, body.plural_name)
            if affected == 0:
                raise NotFoundError(f"{cls.entity_name} not found: {entity_id}")
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Updated {cls.entity_name.lower()} {entity_id}")

    @classmethod
    def delete(cls, db: Session, entity_id: int, cache: IdentifierCache) -> None:
        """
        Delete an entry and evict its id from the cache.

        Raises:
            NotFoundError: no entry with that id
            ConflictError: a recipe still uses the entry
        """
        repo = cls.repository_class(db)
        try:
            affected = repo.delete_by_id(entity_id)
            if affected == 0:
                raise NotFoundError(f"{cls.entity_name} not found: {entity_id}")
            db.commit()
        except Exception:
            db.rollback()
            raise

        cls._on_deleted(cache, entity_id)
        logger.info(f"Deleted {cls.entity_name.lower()} {entity_id}")

    @classmethod
    def list(cls, db: Session, limit: int, start_from: int = 0) -> Page:
        repo = cls.repository_class(db)
        return paginate(repo.get_page, limit, start_from)

    @classmethod
    def list_all(cls, db: Session) -> List:
        return cls.repository_class(db).get_all_by_name()


class UnitService(CatalogService):
    repository_class = UnitRepository
    entity_name = "Unit"

    @classmethod
    def _on_created(cls, cache: IdentifierCache, entity_id: int) -> None:
        cache.record_unit_created(entity_id)

    @classmethod
    def _on_deleted(cls, cache: IdentifierCache, entity_id: int) -> None:
        cache.record_unit_deleted(entity_id)


class IngredientService(CatalogService):
    repository_class = IngredientRepository
    entity_name = "Ingredient"

    @classmethod
    def _on_created(cls, cache: IdentifierCache, entity_id: int) -> None:
        cache.record_ingredient_created(entity_id)

    @classmethod
    def _on_deleted(cls, cache: IdentifierCache, entity_id: int) -> None:
        cache.record_ingredient_deleted(entity_id)
