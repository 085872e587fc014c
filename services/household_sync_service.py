"""One-way, gap-filling sync of an approved plan into the Mealie household"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Set, Tuple

import requests

from adapters.mealie_client import MealieClient
from domain.enums import MealieEntryType, Weekday
from domain.schemas import (
    HouseholdSyncReport,
    MealAssignment,
    MealPlan,
    MealPlanSyncResult,
    ShoppingListSyncResult,
)
from services.recipe_catalog import RecipeCatalog

logger = logging.getLogger("dinnerplan.sync")


class HouseholdSyncService:
    """
    Mirrors a local plan into Mealie's meal plan and shopping list resources.

    Only fills gaps: dates that already have a dinner entry and recipes
    already on the week's list are skipped, and nothing remote is edited or
    deleted. Re-running after a partial failure converges without
    duplicates. Reads that decide what to skip propagate their errors.
    """

    ENTRY_TYPE = MealieEntryType.DINNER

    def __init__(self, mealie: MealieClient, catalog: RecipeCatalog):
        self.mealie = mealie
        self.catalog = catalog

    # ---------- dates / names ----------

    @staticmethod
    def entry_range(meal_dates: List[date]) -> Tuple[date, date]:
        """Span covering every meal date; plans longer than a week reach past Sunday."""
        return min(meal_dates), max(meal_dates)

    @staticmethod
    def meal_date(plan: MealPlan, position: int, meal: MealAssignment) -> date:
        """week_start + weekday offset of the day name, or + position when unrecognised"""
        offset = Weekday.offset_of(meal.day)
        if offset is None:
            offset = position
        return plan.week_start + timedelta(days=offset)

    @staticmethod
    def shopping_list_name(week_start: date) -> str:
        return f"Weekly Shopping - {week_start.isoformat()}"

    # ---------- identity ----------

    def resolve_identity(self) -> Tuple[str, str]:
        """Household and user ids; HouseholdResolutionError aborts the sync."""
        return self.mealie.get_household_id(), self.mealie.get_user_id()

    def resolve_recipe_ids(self, plan: MealPlan) -> Dict[str, str]:
        return self.catalog.resolve_recipe_ids(m.recipe_name for m in plan.meals)

    # ---------- meal plan ----------

    def push_meal_plan(
            self,
            plan: MealPlan,
            recipe_ids: Optional[Dict[str, str]] = None,
    ) -> MealPlanSyncResult:
        household_id, user_id = self.resolve_identity()
        if recipe_ids is None:
            recipe_ids = self.resolve_recipe_ids(plan)

        result = MealPlanSyncResult()
        meal_dates = [self.meal_date(plan, position, meal) for position, meal in enumerate(plan.meals)]
        if not meal_dates:
            logger.info("Plan %s has no meals, meal plan sync skipped", plan.id)
            return result

        start, end = self.entry_range(meal_dates)
        existing_entries = self.mealie.get_meal_plan_entries(start, end)
        logger.info("Found %d existing meal plan entries %s..%s", len(existing_entries), start, end)

        by_date: Dict[str, Dict[str, Any]] = {
            entry.get("date"): entry
            for entry in existing_entries
            if entry.get("entryType") == self.ENTRY_TYPE.value
        }

        for meal, meal_day in zip(plan.meals, meal_dates):
            date_str = meal_day.isoformat()

            if date_str in by_date:
                logger.info(
                    "Dinner entry already exists for %s (recipe %s), skipping",
                    date_str,
                    by_date[date_str].get("recipeId"),
                )
                result.skipped.append(date_str)
                continue

            entry = self._entry_payload(date_str, meal, recipe_ids, household_id, user_id)
            try:
                created = self.mealie.create_meal_plan_entry(entry)
            except requests.RequestException as e:
                logger.error("Failed to create meal entry for %s: %s", date_str, e)
                result.failed.append(date_str)
                continue

            by_date[date_str] = created or entry
            result.created.append(date_str)

        logger.info(
            "Meal plan sync for %s: created=%d skipped=%d failed=%d",
            plan.id,
            result.created_count,
            result.skipped_count,
            len(result.failed),
        )
        return result

    def _entry_payload(
            self,
            date_str: str,
            meal: MealAssignment,
            recipe_ids: Dict[str, str],
            household_id: str,
            user_id: str,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "date": date_str,
            "entryType": self.ENTRY_TYPE.value,
            "title": "",
            "text": meal.reason,
            "householdId": household_id,
            "userId": user_id,
        }
        recipe_id = recipe_ids.get(meal.recipe_name.lower())
        if recipe_id:
            payload["recipeId"] = recipe_id
        else:
            # Free-text entry so the day is not left empty
            payload["title"] = meal.recipe_name
        return payload

    # ---------- shopping list ----------

    def push_shopping_list(
            self,
            plan: MealPlan,
            recipe_ids: Optional[Dict[str, str]] = None,
    ) -> Optional[ShoppingListSyncResult]:
        """
        Add the plan's recipes to the week's Mealie shopping list.

        Returns None when no meal resolved to a catalog recipe; in that case
        no list is looked up or created.
        """
        self.mealie.get_household_id()
        if recipe_ids is None:
            recipe_ids = self.resolve_recipe_ids(plan)

        unique_ids: List[str] = []
        for meal in plan.meals:
            recipe_id = recipe_ids.get(meal.recipe_name.lower())
            if recipe_id and recipe_id not in unique_ids:
                unique_ids.append(recipe_id)

        if not unique_ids:
            logger.info("Plan %s has no catalog recipes, shopping list sync skipped", plan.id)
            return None

        shopping_list, is_existing = self._get_or_create_week_list(plan.week_start)
        list_id = str(shopping_list["id"])

        present: Set[str] = set()
        if is_existing:
            present = self._recipes_on_list(list_id)
            logger.info("Found %d recipes already on shopping list %s", len(present), list_id)

        result = ShoppingListSyncResult(
            shopping_list_id=list_id,
            shopping_list_name=shopping_list.get("name"),
            is_existing=is_existing,
            total_recipes=len(unique_ids),
        )

        for recipe_id in unique_ids:
            if recipe_id in present:
                logger.debug("Recipe %s already on shopping list, skipping", recipe_id)
                result.recipes_skipped += 1
                continue

            try:
                details = self.catalog.get_recipe_detail(recipe_id)
                self.mealie.add_recipe_to_shopping_list(
                    list_id, recipe_id, details.get("recipeIngredient") or None
                )
            except requests.RequestException as e:
                logger.error("Failed to add recipe %s to shopping list %s: %s", recipe_id, list_id, e)
                result.failed_recipes.append(recipe_id)
                continue

            present.add(recipe_id)
            result.recipes_added += 1

        logger.info(
            "Shopping list sync for %s: list=%s existing=%s added=%d skipped=%d failed=%d",
            plan.id,
            list_id,
            is_existing,
            result.recipes_added,
            result.recipes_skipped,
            len(result.failed_recipes),
        )
        return result

    def _get_or_create_week_list(self, week_start: date) -> Tuple[Dict[str, Any], bool]:
        token = week_start.isoformat()
        for shopping_list in self.mealie.get_shopping_lists():
            if token in (shopping_list.get("name") or ""):
                logger.info("Reusing shopping list %s (ID: %s)", shopping_list.get("name"), shopping_list.get("id"))
                return shopping_list, True
        return self.mealie.create_shopping_list(self.shopping_list_name(week_start)), False

    def _recipes_on_list(self, shopping_list_id: str) -> Set[str]:
        shopping_list = self.mealie.get_shopping_list(shopping_list_id) or {}
        recipe_ids: Set[str] = set()
        for ref in shopping_list.get("recipeReferences") or []:
            if ref.get("recipeId"):
                recipe_ids.add(str(ref["recipeId"]))
        for item in shopping_list.get("listItems") or []:
            if item.get("recipeId"):
                recipe_ids.add(str(item["recipeId"]))
            for ref in item.get("recipeReferences") or []:
                if ref.get("recipeId"):
                    recipe_ids.add(str(ref["recipeId"]))
        return recipe_ids

    # ---------- main ----------

    def sync_plan(self, plan: MealPlan, recipe_ids: Optional[Dict[str, str]] = None) -> HouseholdSyncReport:
        if recipe_ids is None:
            recipe_ids = self.resolve_recipe_ids(plan)
        meal_plan_result = self.push_meal_plan(plan, recipe_ids)
        shopping_list_result = self.push_shopping_list(plan, recipe_ids)
        return HouseholdSyncReport(meal_plan=meal_plan_result, shopping_list=shopping_list_result)
