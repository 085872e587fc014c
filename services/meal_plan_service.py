from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from app.exceptions import ConfigurationError, InvalidStateError, NotFoundError
from domain.enums import PlanStatus
from domain.schemas import MealAssignment, MealPlan, Order, PlanModifications
from repositories import (
    FeedbackRepository,
    MealPlanRepository,
    OrderRepository,
    PreferencesRepository,
)
from services.household_sync_service import HouseholdSyncService
from services.ingredient_consolidator import IngredientConsolidator
from services.order_service import OrderService
from services.plan_drafting_service import PlanDraftingService
from services.recipe_catalog import RecipeCatalog


logger = logging.getLogger("dinnerplan.planner")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MealPlanService:
    """
    Meal plan lifecycle: pending -> approved -> ordered.

    - generate(): drafts a new pending plan for next week
    - approve(): consolidates the shopping list, commits locally, then
      mirrors the plan into Mealie (sync errors surface after the commit)
    - place_order(): fills a fresh Instacart cart and checks out

    Approving again is allowed while pending or approved and re-runs
    consolidation and the idempotent sync; ordered plans are final.
    """

    def __init__(
            self,
            plans: MealPlanRepository,
            orders: OrderRepository,
            preferences: PreferencesRepository,
            feedback: FeedbackRepository,
            catalog: RecipeCatalog,
            drafting: PlanDraftingService,
            consolidator: IngredientConsolidator,
            household_sync: HouseholdSyncService,
            order_service: OrderService,
            feedback_window: int = 5,
            clock: Callable[[], datetime] = _utcnow,
    ):
        self.plans = plans
        self.orders = orders
        self.preferences = preferences
        self.feedback = feedback
        self.catalog = catalog
        self.drafting = drafting
        self.consolidator = consolidator
        self.household_sync = household_sync
        self.order_service = order_service
        self.feedback_window = feedback_window
        self.clock = clock

    @staticmethod
    def next_monday(today: date) -> date:
        """The Monday after `today`; a Monday maps to the following week."""
        return today + timedelta(days=7 - today.weekday())

    def _require_plan(self, plan_id: str) -> MealPlan:
        plan = self.plans.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Meal plan {plan_id} not found", details={"plan_id": plan_id})
        return plan

    # ---------- lifecycle ----------

    def generate(self) -> MealPlan:
        preferences = self.preferences.get()
        if preferences is None:
            raise ConfigurationError("No preferences configured; save household preferences first")

        feedback = self.feedback.list_recent(self.feedback_window)
        recipes = self.catalog.list_recipes()
        logger.info("Generating weekly plan from %d recipes and %d feedback entries", len(recipes), len(feedback))

        draft = self.drafting.draft(preferences, recipes, feedback)

        now = self.clock()
        plan = MealPlan(
            id=str(uuid.uuid4()),
            week_start=self.next_monday(now.date()),
            meals=[MealAssignment.model_validate(m.model_dump()) for m in draft.meal_plan],
            notes=draft.notes,
            shopping_list=[],
            status=PlanStatus.PENDING,
            created_at=now,
        )
        plan = self.plans.put(plan)

        logger.info("Generated plan %s for week of %s with %d meals", plan.id, plan.week_start, len(plan.meals))
        return plan

    def approve(self, plan_id: str, modifications: Optional[PlanModifications] = None) -> MealPlan:
        plan = self._require_plan(plan_id)
        if plan.status == PlanStatus.ORDERED:
            raise InvalidStateError(
                f"Meal plan {plan_id} has already been ordered",
                details={"plan_id": plan_id, "status": plan.status.value},
            )

        if modifications is not None and modifications.meals is not None:
            logger.info("Replacing %d meals with %d edited meals on plan %s", len(plan.meals), len(modifications.meals), plan_id)
            plan.meals = list(modifications.meals)

        result = self.consolidator.consolidate(plan.meals)
        if result.skipped_meals:
            logger.warning("Plan %s: no catalog recipe for %s", plan_id, ", ".join(result.skipped_meals))

        plan.shopping_list = result.items
        plan.unresolved_meals = result.skipped_meals
        plan.status = PlanStatus.APPROVED
        plan.approved_at = self.clock()
        plan = self.plans.put(plan)

        # Committed before syncing: a failed sync is retried by approving again
        report = self.household_sync.sync_plan(plan, recipe_ids=result.recipe_ids)
        logger.info(
            "Approved plan %s: %d list items, meal entries created=%d skipped=%d",
            plan_id,
            len(plan.shopping_list),
            report.meal_plan.created_count,
            report.meal_plan.skipped_count,
        )
        return plan

    def place_order(self, plan_id: str, pickup_time: str) -> Order:
        plan = self._require_plan(plan_id)
        if plan.status != PlanStatus.APPROVED:
            raise InvalidStateError(
                "Plan must be approved first",
                details={"plan_id": plan_id, "status": plan.status.value},
            )

        checkout = self.order_service.checkout_list(plan.shopping_list, pickup_time)

        plan.status = PlanStatus.ORDERED
        order = self.orders.add_with_plan(
            Order(
                id=str(uuid.uuid4()),
                plan_id=plan_id,
                external_order_id=checkout.external_order_id,
                cart_id=checkout.cart_id,
                pickup_time=pickup_time,
                created_at=self.clock(),
                line_items=checkout.line_items,
                unmatched_items=checkout.unmatched_items,
            ),
            plan,
        )

        logger.info(
            "Placed order %s for plan %s (cart %s, %d items, %d unmatched)",
            order.external_order_id,
            plan_id,
            order.cart_id,
            len(order.line_items),
            len(order.unmatched_items),
        )
        return order

    # ---------- queries ----------

    def get_plan(self, plan_id: str) -> MealPlan:
        return self._require_plan(plan_id)

    def get_current_plan(self) -> Optional[MealPlan]:
        return self.plans.get_current()

    def list_plans(self) -> List[MealPlan]:
        return self.plans.list_all()

    def list_orders(self) -> List[Order]:
        return self.orders.list_all()

    def get_store_availability(self) -> Dict[str, Any]:
        return self.order_service.instacart.get_store_availability()
