"""
Domain schemas package - Pydantic models exchanged between services.
"""

from domain.schemas.household_schemas import (
    FamilyMember,
    Preferences,
    FeedbackCreate,
    Feedback,
)
from domain.schemas.plan_schemas import (
    MealAssignment,
    ShoppingListItem,
    MealPlan,
    PlanModifications,
    DraftMealAssignment,
    PlanDraft,
    ConsolidationResult,
    CartLineItem,
    Order,
)
from domain.schemas.sync_schemas import (
    RecipeSummary,
    MealPlanSyncResult,
    ShoppingListSyncResult,
    HouseholdSyncReport,
)

__all__ = [
    "FamilyMember",
    "Preferences",
    "FeedbackCreate",
    "Feedback",
    "MealAssignment",
    "ShoppingListItem",
    "MealPlan",
    "PlanModifications",
    "DraftMealAssignment",
    "PlanDraft",
    "ConsolidationResult",
    "CartLineItem",
    "Order",
    "RecipeSummary",
    "MealPlanSyncResult",
    "ShoppingListSyncResult",
    "HouseholdSyncReport",
]
