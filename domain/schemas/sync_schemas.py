"""Schemas describing the outcome of pushing a plan into Mealie"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeSummary(BaseModel):
    """Mealie recipe listing entry"""

    id: str
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class MealPlanSyncResult(BaseModel):
    """Meal plan entries written to Mealie, keyed by ISO date"""

    created: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(
        default_factory=list, description="Dates that already had a dinner entry"
    )
    failed: List[str] = Field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class ShoppingListSyncResult(BaseModel):
    shopping_list_id: str
    shopping_list_name: Optional[str] = None
    is_existing: bool = False
    recipes_added: int = 0
    recipes_skipped: int = 0
    failed_recipes: List[str] = Field(default_factory=list)
    total_recipes: int = 0


class HouseholdSyncReport(BaseModel):
    meal_plan: MealPlanSyncResult
    shopping_list: Optional[ShoppingListSyncResult] = None
