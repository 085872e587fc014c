"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.plan_mapper import PlanMapper, OrderMapper
from domain.mappers.household_mapper import HouseholdMapper

__all__ = ["PlanMapper", "OrderMapper", "HouseholdMapper"]
