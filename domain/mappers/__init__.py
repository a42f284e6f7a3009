"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.recipe_mapper import RecipeMapper

__all__ = ["RecipeMapper"]
