"""Services package - Business logic layer"""

from services.recipe_catalog import RecipeCatalog
from services.ingredient_consolidator import IngredientConsolidator
from services.plan_drafting_service import PlanDraftingService
from services.household_sync_service import HouseholdSyncService
from services.order_service import OrderService, CheckoutResult
from services.household_service import HouseholdService
from services.meal_plan_service import MealPlanService

__all__ = [
    "RecipeCatalog",
    "IngredientConsolidator",
    "PlanDraftingService",
    "HouseholdSyncService",
    "OrderService",
    "CheckoutResult",
    "HouseholdService",
    "MealPlanService",
]
