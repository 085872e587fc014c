"""
Domain enums for the dinner planner.
Contains all enumeration types used across the domain models.
"""

import enum


class PlanStatus(str, enum.Enum):
    """Meal plan lifecycle: pending -> approved -> ordered (terminal)"""

    PENDING = "pending"
    APPROVED = "approved"
    ORDERED = "ordered"

    @property
    def is_current(self) -> bool:
        """Plans in these states compete for the "current plan" slot"""
        return self in (PlanStatus.PENDING, PlanStatus.APPROVED)


class Weekday(str, enum.Enum):
    """Day names as the planning model writes them, in week order"""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def offset_of(cls, day_name: str):
        """Days from Monday for a day name, or None if it is not a weekday."""
        try:
            day = cls(day_name.strip().lower())
        except (AttributeError, ValueError):
            return None
        return list(cls).index(day)


class MealieEntryType(str, enum.Enum):
    """Mealie meal plan entry slots"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SIDE = "side"
