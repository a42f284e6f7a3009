"""
API dependencies for dependency injection
"""

from fastapi import Request

from services.identifier_cache import IdentifierCache


def get_identifier_cache(request: Request) -> IdentifierCache:
    """
    Identifier cache dependency for FastAPI routes.

    The cache is built once by the application lifespan and stored on
    ``app.state``; tests replace it by assigning their own instance there.

    Usage:
        @router.post("/example")
        def example(cache: IdentifierCache = Depends(get_identifier_cache)):
            ...
    """
    return request.app.state.identifier_cache
