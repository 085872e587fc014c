from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.enums import PlanStatus


class MealAssignment(BaseModel):
    day: str
    recipe_name: str
    reason: str = ""


class ShoppingListItem(BaseModel):
    """Consolidated ingredient; `name` is the case-insensitive identity."""

    name: str
    quantity: float = 1
    unit: str = ""
    recipe: str = Field(default="", description="First recipe that contributed the item")


class MealPlan(BaseModel):
    id: str
    week_start: date
    meals: List[MealAssignment] = Field(default_factory=list)
    notes: Optional[str] = None
    shopping_list: List[ShoppingListItem] = Field(default_factory=list)
    unresolved_meals: List[str] = Field(
        default_factory=list,
        description="Recipe names from the last approval that matched no catalog recipe",
    )
    status: PlanStatus = PlanStatus.PENDING
    created_at: datetime
    approved_at: Optional[datetime] = None


class PlanModifications(BaseModel):
    """Edits supplied with an approval"""

    meals: Optional[List[MealAssignment]] = None


class DraftMealAssignment(MealAssignment):
    reason: str


class PlanDraft(BaseModel):
    """Structured planning model output: {meal_plan: [...], notes}"""

    meal_plan: List[DraftMealAssignment]
    notes: Optional[str]


class ConsolidationResult(BaseModel):
    items: List[ShoppingListItem] = Field(default_factory=list)
    skipped_meals: List[str] = Field(
        default_factory=list, description="Meals whose recipe name matched nothing"
    )
    recipe_ids: Dict[str, str] = Field(
        default_factory=dict, description="Resolved recipe name -> Mealie recipe id"
    )


class CartLineItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class Order(BaseModel):
    id: str
    plan_id: str
    external_order_id: Optional[str] = None
    cart_id: str
    pickup_time: str
    created_at: datetime
    line_items: List[CartLineItem] = Field(default_factory=list)
    unmatched_items: List[str] = Field(
        default_factory=list, description="Shopping list items with no product match"
    )
