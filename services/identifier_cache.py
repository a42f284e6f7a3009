"""Identifier cache - in-memory sets of valid unit and ingredient ids.

Recipe validation checks every referenced unit/ingredient id against this cache
instead of querying the database per line. The database stays authoritative:
the cache is seeded from it at startup and only mutated after a commit.
"""

import logging
import threading
from typing import FrozenSet, Iterable

from sqlalchemy.orm import Session

from repositories.catalog_repository import IngredientRepository, UnitRepository

logger = logging.getLogger("recipe_catalog.identifier_cache")


class _IdSet:
    """A set of ints guarded by its own lock."""

    def __init__(self, ids: Iterable[int] = ()):
        self._lock = threading.Lock()
        self._ids = set(ids)

    def add(self, value: int) -> None:
        with self._lock:
            self._ids.add(value)

    def discard(self, value: int) -> None:
        with self._lock:
            self._ids.discard(value)

    def snapshot(self) -> FrozenSet[int]:
        with self._lock:
            return frozenset(self._ids)

    def __contains__(self, value: int) -> bool:
        with self._lock:
            return value in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)


class IdentifierCache:
    """
    Process-wide cache of currently valid unit and ingredient ids.

    One instance lives on ``app.state.identifier_cache`` and is handed to
    request handlers through ``api.dependencies.get_identifier_cache``. Tests
    build their own instances.

    The two id sets are independent: no operation needs both locks.
    """

    def __init__(self, unit_ids: Iterable[int] = (), ingredient_ids: Iterable[int] = ()):
        self._unit_ids = _IdSet(unit_ids)
        self._ingredient_ids = _IdSet(ingredient_ids)

    @classmethod
    def initialize(cls, db: Session) -> "IdentifierCache":
        """
        Build a cache from every id currently in the unit and ingredient tables.

        Any database error propagates: the service cannot validate recipes
        without the cache, so the caller aborts startup.
        """
        unit_ids, ingredient_ids = _fetch_all_ids(db)
        cache = cls(unit_ids, ingredient_ids)
        logger.info(
            "Identifier cache seeded with %d unit ids and %d ingredient ids",
            len(cache.unit_ids()),
            len(cache.ingredient_ids()),
        )
        return cache

    # Lookups

    def contains_unit(self, unit_id: int) -> bool:
        return unit_id in self._unit_ids

    def contains_ingredient(self, ingredient_id: int) -> bool:
        return ingredient_id in self._ingredient_ids

    def unit_ids(self) -> FrozenSet[int]:
        """Point-in-time copy of the unit ids"""
        return self._unit_ids.snapshot()

    def ingredient_ids(self) -> FrozenSet[int]:
        return self._ingredient_ids.snapshot()

    # Mutations, only ever called after the matching database commit

    def record_unit_created(self, unit_id: int) -> None:
        self._unit_ids.add(unit_id)
        logger.debug("Cached unit id %s", unit_id)

    def record_unit_deleted(self, unit_id: int) -> None:
        self._unit_ids.discard(unit_id)
        logger.debug("Evicted unit id %s", unit_id)

    def record_ingredient_created(self, ingredient_id: int) -> None:
        self._ingredient_ids.add(ingredient_id)
        logger.debug("Cached ingredient id %s", ingredient_id)

    def record_ingredient_deleted(self, ingredient_id: int) -> None:
        self._ingredient_ids.discard(ingredient_id)
        logger.debug("Evicted ingredient id %s", ingredient_id)

    def __repr__(self):
        return (
            f"<IdentifierCache(units={len(self._unit_ids)}, "
            f"ingredients={len(self._ingredient_ids)})>"
        )


def _fetch_all_ids(db: Session):
    unit_ids = set(UnitRepository(db).get_all_ids())
    ingredient_ids = set(IngredientRepository(db).get_all_ids())
    return unit_ids, ingredient_ids
