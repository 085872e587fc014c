"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
)
from domain.models.household import PreferencesRecord, FeedbackRecord
from domain.models.meal_plan import MealPlanRecord, OrderRecord

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    # Household models
    "PreferencesRecord",
    "FeedbackRecord",
    # Meal plan models
    "MealPlanRecord",
    "OrderRecord",
]
