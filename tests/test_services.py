"""
Tests for the service layer with real database operations.

This test suite validates:
- UnitService / IngredientService: catalog CRUD and identifier cache sync
- RecipeService: validated, transactional create/update/delete and reads

Tests use real (SQLite) sessions to ensure:
- Transactions are committed or rolled back as a whole
- Constraint violations surface as the right domain errors
- The identifier cache only changes after a successful commit
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.exceptions import (
    BadRequestError,
    ConflictError,
    DuplicateIngredientIdError,
    InvalidIngredientIdError,
    InvalidUnitIdError,
    NotFoundError,
    StepNumbersOutOfOrderError,
)
from domain.models import Recipe, RecipeIngredient, Step
from domain.schemas.catalog_schemas import IngredientCreate, UnitCreate
from repositories.recipe_repository import RecipeRepository
from services.catalog_service import CatalogService, IngredientService, UnitService
from services.identifier_cache import IdentifierCache
from services.recipe_service import RecipeService
from test_fixtures import db_session, identifier_cache, make_recipe, seed_catalog


def count_rows(db: Session, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


# =============================================================================
# CATALOG SERVICE TESTS
# =============================================================================


def test_unit_create_records_id_in_cache(db_session: Session, identifier_cache):
    """
    Verifies:
    - create() returns the generated id
    - The id is added to the unit set only
    - The row can be read back
    """
    unit_id = UnitService.create(
        db_session, UnitCreate(singular_name="cup", plural_name="cups"), identifier_cache
    )

    assert identifier_cache.contains_unit(unit_id)
    assert not identifier_cache.contains_ingredient(unit_id)
    assert UnitService.get(db_session, unit_id).plural_name == "cups"


def test_duplicate_create_conflicts_and_leaves_cache(db_session: Session, identifier_cache):
    body = IngredientCreate(singular_name="apple", plural_name="apples")
    IngredientService.create(db_session, body, identifier_cache)

    with pytest.raises(ConflictError):
        IngredientService.create(db_session, body, identifier_cache)

    assert identifier_cache.ingredient_ids() == frozenset({1})


def test_get_missing_entry(db_session: Session):
    with pytest.raises(NotFoundError):
        UnitService.get(db_session, 1)
    with pytest.raises(NotFoundError):
        IngredientService.get(db_session, 1)


def test_update_catalog_entry(db_session: Session, identifier_cache):
    unit_id = UnitService.create(
        db_session, UnitCreate(singular_name="cup", plural_name="cups"), identifier_cache
    )

    UnitService.update(db_session, unit_id, UnitCreate(singular_name="mug", plural_name="mugs"))

    unit = UnitService.get(db_session, unit_id)
    assert (unit.singular_name, unit.plural_name) == ("mug", "mugs")
    with pytest.raises(NotFoundError):
        UnitService.update(db_session, 42, UnitCreate(singular_name="a", plural_name="b"))


def test_update_to_taken_names_conflicts(db_session: Session, identifier_cache):
    seed_catalog(db_session, identifier_cache)

    with pytest.raises(ConflictError):
        UnitService.update(db_session, 1, UnitCreate(singular_name="gram", plural_name="grams"))

    assert UnitService.get(db_session, 1).singular_name == "cup"


def test_delete_catalog_entry_evicts_from_cache(db_session: Session, identifier_cache):
    _, ingredient_ids = seed_catalog(db_session, identifier_cache)

    IngredientService.delete(db_session, ingredient_ids[0], identifier_cache)

    assert not identifier_cache.contains_ingredient(ingredient_ids[0])
    with pytest.raises(NotFoundError):
        IngredientService.get(db_session, ingredient_ids[0])
    with pytest.raises(NotFoundError):
        IngredientService.delete(db_session, ingredient_ids[0], identifier_cache)


def test_delete_entry_used_by_recipe_conflicts(db_session: Session, identifier_cache):
    """
    Verifies:
    - Deleting a unit or ingredient that a recipe uses raises ConflictError
    - Both stay in the cache and in the database
    """
    (cup, *_), (apple, *_) = seed_catalog(db_session, identifier_cache)
    RecipeService.create(db_session, make_recipe(ingredients=[(apple, cup, "1")]), identifier_cache)

    with pytest.raises(ConflictError):
        UnitService.delete(db_session, cup, identifier_cache)
    with pytest.raises(ConflictError):
        IngredientService.delete(db_session, apple, identifier_cache)

    assert identifier_cache.contains_unit(cup)
    assert identifier_cache.contains_ingredient(apple)
    assert UnitService.get(db_session, cup) is not None


def test_catalog_listing(db_session: Session, identifier_cache):
    seed_catalog(db_session, identifier_cache)

    page = IngredientService.list(db_session, limit=2)
    assert [i.ingredient_id for i in page.items] == [1, 2]
    assert page.next_start_from == 3

    last = IngredientService.list(db_session, limit=2, start_from=page.next_start_from)
    assert [i.ingredient_id for i in last.items] == [3]
    assert last.next_start_from is None

    assert [u.singular_name for u in UnitService.list_all(db_session)] == [
        "cup",
        "gram",
        "tablespoon",
    ]

    with pytest.raises(BadRequestError):
        IngredientService.list(db_session, limit=0)


def test_cache_agrees_with_database_after_mixed_operations(db_session: Session, identifier_cache):
    unit_ids, ingredient_ids = seed_catalog(db_session, identifier_cache)
    UnitService.delete(db_session, unit_ids[1], identifier_cache)
    IngredientService.create(
        db_session, IngredientCreate(singular_name="leek", plural_name="leeks"), identifier_cache
    )

    fresh = IdentifierCache.initialize(db_session)

    assert identifier_cache.unit_ids() == fresh.unit_ids()
    assert identifier_cache.ingredient_ids() == fresh.ingredient_ids()


def test_catalog_services_must_supply_cache_hooks():
    """
    Verifies:
    - CatalogService is abstract over both cache hooks
    - UnitService and IngredientService implement them
    - A subclass missing a hook cannot be instantiated
    """
    assert CatalogService.__abstractmethods__ == {"_on_created", "_on_deleted"}
    assert not UnitService.__abstractmethods__
    assert not IngredientService.__abstractmethods__

    class CreateOnlyService(CatalogService):
        @classmethod
        def _on_created(cls, cache, entity_id):
            cache.record_unit_created(entity_id)

    with pytest.raises(TypeError):
        CreateOnlyService()


# =============================================================================
# RECIPE SERVICE TESTS
# =============================================================================


@pytest.fixture
def catalog(db_session: Session, identifier_cache):
    return seed_catalog(db_session, identifier_cache)


def test_create_recipe_stores_everything(db_session: Session, identifier_cache, catalog):
    """
    Verifies:
    - Recipe, ingredient lines and steps are committed together
    - Steps given as [2, 1] are stored and read back as 1, 2
    - The detailed read embeds ingredient and unit records
    """
    (cup, gram, _), (apple, onion, _) = catalog
    body = make_recipe(
        ingredients=[(apple, cup, "3/4"), (onion, gram, "200")], step_numbers=[2, 1]
    )

    recipe_id = RecipeService.create(db_session, body, identifier_cache)
    recipe = RecipeService.get_recipe(db_session, recipe_id)

    assert recipe.recipe_id == recipe_id
    assert recipe.name == "Very Tasty Soup"
    assert [s.step_number for s in recipe.steps] == [1, 2]
    assert [s.instruction for s in recipe.steps] == ["Step 1", "Step 2"]
    assert [line.ingredient.singular_name for line in recipe.ingredients] == ["apple", "onion"]
    assert recipe.ingredients[0].unit.unit_id == cup
    assert recipe.ingredients[0].quantity == "3/4"


def test_create_rejects_invalid_recipe_before_writing(db_session: Session, identifier_cache, catalog):
    with pytest.raises(StepNumbersOutOfOrderError):
        RecipeService.create(db_session, make_recipe(step_numbers=[1, 3]), identifier_cache)
    with pytest.raises(InvalidUnitIdError):
        RecipeService.create(
            db_session, make_recipe(ingredients=[(1, 99, "1")]), identifier_cache
        )

    assert count_rows(db_session, Recipe) == 0


def test_duplicate_ingredient_rolls_back_whole_recipe(db_session: Session, identifier_cache, catalog):
    (cup, gram, _), (apple, _, _) = catalog
    body = make_recipe(ingredients=[(apple, cup, "1"), (apple, gram, "2")])

    with pytest.raises(DuplicateIngredientIdError):
        RecipeService.create(db_session, body, identifier_cache)

    assert count_rows(db_session, Recipe) == 0
    assert count_rows(db_session, RecipeIngredient) == 0
    assert count_rows(db_session, Step) == 0


def test_stale_cache_fails_atomically(db_session: Session, identifier_cache, catalog):
    """
    Verifies:
    - An ingredient id the cache believes in but the database lacks
      surfaces as InvalidIngredientIdError from the bulk insert
    - No recipe, line or step row is left behind
    """
    (cup, _, _), _ = catalog
    identifier_cache.record_ingredient_created(777)

    with pytest.raises(InvalidIngredientIdError):
        RecipeService.create(
            db_session, make_recipe(ingredients=[(777, cup, "1")]), identifier_cache
        )

    assert count_rows(db_session, Recipe) == 0
    assert count_rows(db_session, Step) == 0


def test_update_recipe_replaces_children(db_session: Session, identifier_cache, catalog):
    (cup, gram, spoon), (apple, onion, carrot) = catalog
    recipe_id = RecipeService.create(
        db_session,
        make_recipe(ingredients=[(apple, cup, "1"), (onion, gram, "2")], step_numbers=[1, 2]),
        identifier_cache,
    )

    RecipeService.update(
        db_session,
        recipe_id,
        make_recipe(name="Carrot Soup", ingredients=[(carrot, spoon, "4")], step_numbers=[3, 1, 2]),
        identifier_cache,
    )

    recipe = RecipeService.get_recipe(db_session, recipe_id)
    assert recipe.name == "Carrot Soup"
    assert [(line.ingredient.ingredient_id, line.quantity) for line in recipe.ingredients] == [
        (carrot, "4")
    ]
    assert [s.step_number for s in recipe.steps] == [1, 2, 3]


def test_update_with_unchanged_header_still_replaces_children(
    db_session: Session, identifier_cache, catalog
):
    (cup, _, _), (apple, onion, _) = catalog
    recipe_id = RecipeService.create(
        db_session, make_recipe(ingredients=[(apple, cup, "1")]), identifier_cache
    )

    RecipeService.update(
        db_session, recipe_id, make_recipe(ingredients=[(onion, cup, "5")]), identifier_cache
    )

    recipe = RecipeService.get_recipe(db_session, recipe_id)
    assert [line.ingredient.ingredient_id for line in recipe.ingredients] == [onion]


def test_update_missing_recipe(db_session: Session, identifier_cache, catalog):
    with pytest.raises(NotFoundError):
        RecipeService.update(db_session, -1, make_recipe(), identifier_cache)
    with pytest.raises(NotFoundError):
        RecipeService.update(db_session, 5, make_recipe(), identifier_cache)


def test_failed_update_keeps_old_recipe(db_session: Session, identifier_cache, catalog):
    (cup, gram, _), (apple, _, _) = catalog
    recipe_id = RecipeService.create(
        db_session, make_recipe(ingredients=[(apple, cup, "1")]), identifier_cache
    )

    with pytest.raises(DuplicateIngredientIdError):
        RecipeService.update(
            db_session,
            recipe_id,
            make_recipe(name="Broken", ingredients=[(apple, cup, "1"), (apple, gram, "1")]),
            identifier_cache,
        )

    recipe = RecipeService.get_recipe(db_session, recipe_id)
    assert recipe.name == "Very Tasty Soup"
    assert len(recipe.ingredients) == 1
    assert len(recipe.steps) == 2


def test_delete_recipe(db_session: Session, identifier_cache, catalog):
    (cup, _, _), (apple, _, _) = catalog
    recipe_id = RecipeService.create(
        db_session, make_recipe(ingredients=[(apple, cup, "1")]), identifier_cache
    )

    RecipeService.delete(db_session, recipe_id)

    with pytest.raises(NotFoundError):
        RecipeService.get_recipe(db_session, recipe_id)
    with pytest.raises(NotFoundError):
        RecipeService.delete(db_session, recipe_id)
    assert count_rows(db_session, RecipeIngredient) == 0
    assert count_rows(db_session, Step) == 0


def test_list_recipes_pages_through_everything(db_session: Session, identifier_cache, catalog):
    ids = [
        RecipeService.create(db_session, make_recipe(name=f"Recipe {n}"), identifier_cache)
        for n in range(5)
    ]

    first = RecipeService.list_recipes(db_session, limit=3)
    second = RecipeService.list_recipes(db_session, limit=3, start_from=first.next_start_from)

    assert [r.recipe_id for r in first.items] == ids[:3]
    assert first.next_start_from == ids[3]
    assert [r.recipe_id for r in second.items] == ids[3:]
    assert second.next_start_from is None
    assert all(len(r.steps) == 2 for r in first.items + second.items)


def test_list_recipes_skips_recipe_deleted_mid_page(
    db_session: Session, identifier_cache, catalog, monkeypatch
):
    """
    Verifies:
    - A recipe deleted after the id query is left out of the page
    - The remaining recipes are still returned in id order
    - The cursor still comes from the id query
    """
    ids = [
        RecipeService.create(db_session, make_recipe(name=f"Recipe {n}"), identifier_cache)
        for n in range(3)
    ]
    fetch_ids = RecipeRepository.get_page_ids

    def fetch_then_delete(self, start_from, max_rows):
        page_ids = fetch_ids(self, start_from, max_rows)
        RecipeService.delete(self.db, ids[1])
        return page_ids

    monkeypatch.setattr(RecipeRepository, "get_page_ids", fetch_then_delete)

    page = RecipeService.list_recipes(db_session, limit=5)

    assert [r.recipe_id for r in page.items] == [ids[0], ids[2]]
    assert page.next_start_from is None
