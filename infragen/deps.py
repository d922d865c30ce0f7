"""
Dependencies module - reusable FastAPI dependencies for route handlers.

The generation service is built once from settings and handed to routes
through Depends(), so tests can swap it with app.dependency_overrides.
"""

from functools import lru_cache

from infragen.core.config import settings
from infragen.services.generation_service import GenerationService


@lru_cache
def get_generation_service() -> GenerationService:
    """
    Shared GenerationService built from application settings.

    The service only holds immutable configuration, so one instance is
    safe for concurrent requests.
    """
    return GenerationService.from_settings(settings)
