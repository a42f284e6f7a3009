"""Services package - Business logic layer"""

from services.identifier_cache import IdentifierCache
from services.pagination import MAX_PAGE_LIMIT, MIN_PAGE_LIMIT, Page, paginate
from services.catalog_service import CatalogService, IngredientService, UnitService
from services.recipe_service import RecipeService

__all__ = [
    "IdentifierCache",
    "Page",
    "paginate",
    "MIN_PAGE_LIMIT",
    "MAX_PAGE_LIMIT",
    "CatalogService",
    "UnitService",
    "IngredientService",
    "RecipeService",
]
