"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.household_repository import (
    PreferencesRepository,
    FeedbackRepository,
)
from repositories.meal_plan_repository import MealPlanRepository
from repositories.order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "PreferencesRepository",
    "FeedbackRepository",
    "MealPlanRepository",
    "OrderRepository",
]
