"""
Meal plan domain mappers.
Handles transformation between ORM records and DTOs for plans and orders.
"""

from typing import Optional

from domain.models import MealPlanRecord, OrderRecord
from domain.schemas import MealPlan, Order


class PlanMapper:
    """Mapper for meal plan transformations."""

    @staticmethod
    def to_schema(record: MealPlanRecord) -> MealPlan:
        """
        Convert ORM MealPlanRecord to MealPlan DTO.

        Args:
            record: MealPlanRecord ORM instance

        Returns:
            MealPlan DTO with meals and shopping list parsed
        """
        return MealPlan(
            id=record.plan_id,
            week_start=record.week_start,
            meals=record.meals or [],
            notes=record.notes,
            shopping_list=record.shopping_list or [],
            unresolved_meals=record.unresolved_meals or [],
            status=record.status,
            created_at=record.created_at,
            approved_at=record.approved_at,
        )

    @staticmethod
    def to_record(plan: MealPlan, record: Optional[MealPlanRecord] = None) -> MealPlanRecord:
        """
        Copy a MealPlan DTO onto an ORM record, creating one if needed.

        Nested lists are stored as plain JSON.
        """
        record = record if record is not None else MealPlanRecord(plan_id=plan.id)
        data = plan.model_dump(mode="json")
        record.week_start = plan.week_start
        record.meals = data["meals"]
        record.notes = plan.notes
        record.shopping_list = data["shopping_list"]
        record.unresolved_meals = data["unresolved_meals"]
        record.status = plan.status
        record.created_at = plan.created_at
        record.approved_at = plan.approved_at
        return record


class OrderMapper:
    """Mapper for grocery order transformations."""

    @staticmethod
    def to_schema(record: OrderRecord) -> Order:
        return Order(
            id=record.order_id,
            plan_id=record.plan_id,
            external_order_id=record.external_order_id,
            cart_id=record.cart_id,
            pickup_time=record.pickup_time,
            created_at=record.created_at,
            line_items=record.line_items or [],
            unmatched_items=record.unmatched_items or [],
        )

    @staticmethod
    def to_record(order: Order) -> OrderRecord:
        data = order.model_dump(mode="json")
        return OrderRecord(
            order_id=order.id,
            plan_id=order.plan_id,
            external_order_id=order.external_order_id,
            cart_id=order.cart_id,
            pickup_time=order.pickup_time,
            line_items=data["line_items"],
            unmatched_items=data["unmatched_items"],
            created_at=order.created_at,
        )
