"""Mealie REST client.

Covers the pieces of the Mealie API the planner touches: household and
user identity, recipe listing/detail, household meal plan entries and
household shopping lists.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from adapters.http_client import JsonApiClient, unwrap_items
from app.exceptions import HouseholdResolutionError

logger = logging.getLogger("dinnerplan.mealie")


class MealieClient(JsonApiClient):
    """Client for a single Mealie instance and its first household."""

    def __init__(self, base_url: str, token: Optional[str], request_timeout_seconds: float = 30.0, session: Optional[requests.Session] = None) -> None:
        super().__init__(base_url, token, request_timeout_seconds, session)
        self._household_id: Optional[str] = None
        self._user_id: Optional[str] = None

    # ---- Identity ----

    def get_household_id(self) -> str:
        """Resolve (once) the household the plan is written to.

        Raises:
            HouseholdResolutionError: lookup failed or returned no household
        """
        if self._household_id:
            return self._household_id

        try:
            payload = self._get("/api/groups/households")
        except requests.RequestException as exc:
            logger.error("Failed to get household ID: %s", exc)
            raise HouseholdResolutionError(
                "Could not determine household ID", details={"error": str(exc)}
            ) from exc

        # Paginated list, bare list, or a single household object
        household_id = None
        items = unwrap_items(payload)
        if items:
            household_id = items[0].get("id")
        elif isinstance(payload, dict):
            household_id = payload.get("id")

        if not household_id:
            logger.error("No household ID found in response: %s", payload)
            raise HouseholdResolutionError(
                "Could not determine household ID. Ensure the Mealie instance has at least one household."
            )

        logger.info("Found household ID: %s", household_id)
        self._household_id = str(household_id)
        return self._household_id

    def get_user_id(self) -> str:
        """Resolve (once) the user the meal plan entries are created as."""
        if self._user_id:
            return self._user_id

        try:
            payload = self._get("/api/users/self")
        except requests.RequestException as exc:
            logger.error("Failed to get user ID: %s", exc)
            raise HouseholdResolutionError(
                "Could not determine user ID", details={"error": str(exc)}
            ) from exc

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            raise HouseholdResolutionError("Could not determine user ID")

        logger.info("Found user ID: %s", user_id)
        self._user_id = str(user_id)
        return self._user_id

    # ---- Recipes ----

    def get_recipes(self, limit: int = 100) -> List[Dict[str, Any]]:
        return unwrap_items(self._get("/api/recipes", params={"perPage": limit}))

    def get_recipe(self, recipe_id: str) -> Dict[str, Any]:
        return self._get(f"/api/recipes/{recipe_id}")

    # ---- Meal plans ----

    def get_meal_plan_entries(self, start_date: date, end_date: date) -> List[Dict[str, Any]]:
        params = {"startDate": start_date.isoformat(), "endDate": end_date.isoformat()}
        entries = unwrap_items(self._get("/api/households/mealplans", params=params))
        logger.debug("Found %d meal plan entries between %s and %s", len(entries), start_date, end_date)
        return entries

    def create_meal_plan_entry(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/households/mealplans", entry)

    # ---- Shopping lists ----

    def get_shopping_lists(self) -> List[Dict[str, Any]]:
        return unwrap_items(
            self._get("/api/households/shopping/lists", params={"perPage": -1})
        )

    def create_shopping_list(self, name: str) -> Dict[str, Any]:
        shopping_list = self._post("/api/households/shopping/lists", {"name": name})
        logger.info("Created shopping list %s (ID: %s)", name, shopping_list.get("id"))
        return shopping_list

    def get_shopping_list(self, shopping_list_id: str) -> Dict[str, Any]:
        return self._get(f"/api/households/shopping/lists/{shopping_list_id}")

    def add_recipe_to_shopping_list(
        self,
        shopping_list_id: str,
        recipe_id: str,
        recipe_ingredients: Optional[List[Dict[str, Any]]] = None,
    ) -> Any:
        payload: Dict[str, Any] = {"recipeId": recipe_id, "recipeIncrementQuantity": 1}
        if recipe_ingredients:
            payload["recipeIngredients"] = recipe_ingredients
        return self._post(
            f"/api/households/shopping/lists/{shopping_list_id}/recipe", [payload]
        )
