"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.

Repositories only flush; committing or rolling back is the calling service's job,
so one service operation can span several repository calls in one transaction.
Reads use populate_existing: bulk UPDATE statements bypass the identity map.
"""

from typing import Generic, TypeVar, Optional, List, Type
from sqlalchemy import select
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common read operations keyed by an integer id.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType], id_column):
        self.db = db
        self.model = model
        self.id_column = id_column

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity id

        Returns:
            Entity or None if not found
        """
        return self.db.scalars(
            select(self.model)
            .where(self.id_column == entity_id)
            .execution_options(populate_existing=True)
        ).first()

    def get_page(self, start_from: int, max_rows: int) -> List[ModelType]:
        """Entities with id >= start_from in ascending id order, at most max_rows"""
        return list(
            self.db.scalars(
                select(self.model)
                .where(self.id_column >= start_from)
                .order_by(self.id_column)
                .limit(max_rows)
                .execution_options(populate_existing=True)
            ).all()
        )

    def get_page_ids(self, start_from: int, max_rows: int) -> List[int]:
        """Like get_page but only the ids"""
        return list(
            self.db.scalars(
                select(self.id_column)
                .where(self.id_column >= start_from)
                .order_by(self.id_column)
                .limit(max_rows)
            ).all()
        )

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists"""
        return (
            self.db.scalar(select(self.id_column).where(self.id_column == entity_id))
            is not None
        )
