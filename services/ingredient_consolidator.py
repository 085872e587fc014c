"""Shopping list consolidation from the recipes of a meal plan"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from domain.schemas import ConsolidationResult, MealAssignment, ShoppingListItem
from services.recipe_catalog import RecipeCatalog

logger = logging.getLogger("dinnerplan.consolidator")


class IngredientConsolidator:
    """
    Turns the meals of a plan into one deduplicated shopping list.

    Algorithm:
    1. List the catalog once (fresh snapshot for this call)
    2. Resolve each meal by case-insensitive exact recipe name
    3. Fetch the recipe detail for every resolved meal, repeats included
    4. Merge ingredients by case-insensitive display name, summing quantities;
       unit and recipe of the first occurrence are kept

    Meals that match no recipe are skipped and reported in
    `ConsolidationResult.skipped_meals`. Read-only against the catalog.
    """

    def __init__(self, catalog: RecipeCatalog):
        self.catalog = catalog

    def consolidate(self, meals: Iterable[MealAssignment]) -> ConsolidationResult:
        recipes = self.catalog.list_recipes()

        consolidated: Dict[str, ShoppingListItem] = {}
        skipped: List[str] = []
        recipe_ids: Dict[str, str] = {}

        for meal in meals:
            recipe = self.catalog.find_by_name(recipes, meal.recipe_name)
            if recipe is None:
                logger.info("No catalog recipe named %r, skipping", meal.recipe_name)
                skipped.append(meal.recipe_name)
                continue

            recipe_ids[meal.recipe_name.lower()] = recipe.id
            details = self.catalog.get_recipe_detail(recipe.id)

            for raw in details.get("recipeIngredient") or []:
                item = self.to_list_item(raw, meal.recipe_name)
                if item is None:
                    logger.debug("Ingredient without a usable name in %s: %s", meal.recipe_name, raw)
                    continue

                key = item.name.lower()
                if key in consolidated:
                    consolidated[key].quantity += item.quantity
                else:
                    consolidated[key] = item

        logger.info(
            "Consolidated %d ingredients from %d recipes (%d meals skipped)",
            len(consolidated),
            len(set(recipe_ids.values())),
            len(skipped),
        )
        return ConsolidationResult(
            items=list(consolidated.values()),
            skipped_meals=skipped,
            recipe_ids=recipe_ids,
        )

    @staticmethod
    def to_list_item(ingredient: Dict[str, Any], recipe_name: str) -> Optional[ShoppingListItem]:
        """
        Build a shopping list entry from one Mealie ingredient.

        Name falls back food name -> note -> original text; quantity
        defaults to 1 and unit to "".
        """
        name = _display_name(ingredient)
        if not name:
            return None

        unit = ingredient.get("unit")
        if isinstance(unit, dict):
            unit = unit.get("name")

        return ShoppingListItem(
            name=name,
            quantity=float(ingredient.get("quantity") or 1),
            unit=unit or "",
            recipe=recipe_name,
        )


def _display_name(ingredient: Dict[str, Any]) -> Optional[str]:
    food = ingredient.get("food")
    food_name = food.get("name") if isinstance(food, dict) else None
    for candidate in (food_name, ingredient.get("note"), ingredient.get("originalText")):
        if candidate and str(candidate).strip():
            return str(candidate).strip()
    return None
