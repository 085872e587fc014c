"""
Meal plan and grocery order models.
"""

from sqlalchemy import Column, Text, Date, DateTime, Enum, JSON, ForeignKey

from domain.enums import PlanStatus
from domain.models.database import Base


class MealPlanRecord(Base):
    """Weekly dinner plan and its consolidated shopping list"""

    __tablename__ = "meal_plan"

    plan_id = Column(Text, primary_key=True)
    week_start = Column(Date, nullable=False)
    meals = Column(JSON, nullable=False, default=list)  # [{day, recipe_name, reason}]
    notes = Column(Text, nullable=True)
    shopping_list = Column(JSON, nullable=False, default=list)
    unresolved_meals = Column(JSON, nullable=False, default=list)
    status = Column(
        Enum(
            PlanStatus,
            name="planstatus",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=PlanStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)


class OrderRecord(Base):
    """Grocery pickup order placed for an approved plan"""

    __tablename__ = "grocery_order"

    order_id = Column(Text, primary_key=True)
    plan_id = Column(
        Text, ForeignKey("meal_plan.plan_id", ondelete="CASCADE"), nullable=False
    )
    external_order_id = Column(Text, nullable=True)
    cart_id = Column(Text, nullable=False)
    pickup_time = Column(Text, nullable=False)
    line_items = Column(JSON, nullable=False, default=list)
    unmatched_items = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
