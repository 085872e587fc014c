"""Read-only view of the Mealie recipe catalog.

Every call is a fresh remote read; nothing is cached between calls.
Remote errors propagate to the caller.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from adapters.mealie_client import MealieClient
from domain.schemas import RecipeSummary

logger = logging.getLogger("dinnerplan.catalog")


class RecipeCatalog:
    def __init__(self, mealie: MealieClient, fetch_limit: int = 100):
        self.mealie = mealie
        self.fetch_limit = fetch_limit

    def list_recipes(self, limit: Optional[int] = None) -> List[RecipeSummary]:
        items = self.mealie.get_recipes(limit or self.fetch_limit)
        recipes = [RecipeSummary.model_validate(item) for item in items if item.get("id") and item.get("name")]
        logger.debug("Catalog listing returned %d recipes", len(recipes))
        return recipes

    def get_recipe_detail(self, recipe_id: str) -> Dict[str, Any]:
        return self.mealie.get_recipe(recipe_id)

    @staticmethod
    def find_by_name(recipes: Iterable[RecipeSummary], name: str) -> Optional[RecipeSummary]:
        """Case-insensitive exact name match; first hit wins."""
        wanted = (name or "").lower()
        for recipe in recipes:
            if recipe.name.lower() == wanted:
                return recipe
        return None

    def resolve_recipe_ids(self, names: Iterable[str]) -> Dict[str, str]:
        """Map each resolvable name (lower-cased) to its recipe id using one listing."""
        recipes = self.list_recipes()
        resolved: Dict[str, str] = {}
        for name in names:
            recipe = self.find_by_name(recipes, name)
            if recipe is not None:
                resolved[name.lower()] = recipe.id
        return resolved
