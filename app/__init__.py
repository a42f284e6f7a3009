"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    AppError,
    NotFoundError,
    ConflictError,
    BadRequestError,
    InternalServerError,
    RecipeParsingError,
    StepNumbersOutOfOrderError,
    RecipeIdNotPositiveError,
    InvalidUnitIdError,
    InvalidIngredientIdError,
    DuplicateIngredientIdError,
)

__all__ = [
    "settings",
    "AppError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "InternalServerError",
    "RecipeParsingError",
    "StepNumbersOutOfOrderError",
    "RecipeIdNotPositiveError",
    "InvalidUnitIdError",
    "InvalidIngredientIdError",
    "DuplicateIngredientIdError",
]
