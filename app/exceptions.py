from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for every error the service layer raises on purpose.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (offending ids, field info)
        code: machine-readable error code, stable across releases
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Something unexpected happened"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Raised when a requested resource was not found. http_status is 404."""

    http_status = 404
    default_message = "Resource was not found"
    default_code = "NOT_FOUND"


class ConflictError(AppError):
    """Raised when a resource conflict occurs (duplicate name pair, resource still in use).

    http_status is 409.
    """

    http_status = 409
    default_message = "Conflicting resources"
    default_code = "CONFLICT"


class BadRequestError(AppError):
    """Raised when request parameters are malformed (e.g. pagination limits). http_status is 400."""

    http_status = 400
    default_message = "The request was in incorrect format"
    default_code = "BAD_REQUEST"


class InternalServerError(AppError):
    """Raised for unclassified database or transport failures. http_status is 500."""

    http_status = 500


class RecipeParsingError(AppError):
    """Base class for a recipe that is structurally or referentially invalid.

    http_status is 422 for the whole family.
    """

    http_status = 422
    default_message = "There was an error parsing the recipe"
    default_code = "RECIPE_PARSING_ERROR"


class StepNumbersOutOfOrderError(RecipeParsingError):
    default_message = "Step numbers are out of order"
    default_code = "STEP_NUMBERS_OUT_OF_ORDER"


class RecipeIdNotPositiveError(RecipeParsingError):
    default_message = "Recipe ID must be positive"
    default_code = "RECIPE_ID_NOT_POSITIVE"


class InvalidUnitIdError(RecipeParsingError):
    default_message = "Invalid unit ID"
    default_code = "INVALID_UNIT_ID"


class InvalidIngredientIdError(RecipeParsingError):
    default_message = "Invalid ingredient ID"
    default_code = "INVALID_INGREDIENT_ID"


class DuplicateIngredientIdError(RecipeParsingError):
    default_message = "Duplicate ingredient ID"
    default_code = "DUPLICATE_INGREDIENT_ID"
