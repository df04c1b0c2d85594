"""Recipe catalog access with caching."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutrition_coach.domain.recipes import Recipe
from nutrition_coach.services.cache import Cache

_CATALOG_KEY = "recipes:catalog"

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Read-only source of catalog recipes."""

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe in catalog order."""


@dataclass
class RecipeCatalogService:
    """Serve the recipe catalog from cache, loading it on a miss."""

    repository: RecipeRepository
    cache: Cache
    ttl_seconds: int = 3600

    def list_recipes(self) -> list[Recipe]:
        """Return the catalog snapshot."""
        cached = self.cache.get(_CATALOG_KEY)
        if isinstance(cached, list):
            return cached
        recipes = self.repository.list_recipes()
        self.cache.set(_CATALOG_KEY, recipes, ttl_seconds=self.ttl_seconds)
        _logger.info("Recipe catalog loaded: %s recipes", len(recipes))
        return recipes

    def refresh(self) -> int:
        """Drop the cached catalog and reload it; return the recipe count."""
        self.cache.delete(_CATALOG_KEY)
        return len(self.list_recipes())
