"""API routes package"""

from . import health, units, ingredients, recipes

__all__ = ["health", "units", "ingredients", "recipes"]
