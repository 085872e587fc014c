"""
Order Repository - Data access layer for grocery orders
"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers import OrderMapper, PlanMapper
from domain.models import MealPlanRecord, OrderRecord
from domain.schemas import MealPlan, Order


class OrderRepository(BaseRepository[OrderRecord]):
    """Repository for grocery order data access"""

    def __init__(self, db: Session):
        super().__init__(db, OrderRecord)

    def get_by_id(self, order_id: str) -> Optional[Order]:
        record = self._get_record(order_id)
        return OrderMapper.to_schema(record) if record else None

    def list_all(self) -> List[Order]:
        """Order history, oldest first"""
        records = self.db.query(OrderRecord).order_by(OrderRecord.created_at).all()
        return [OrderMapper.to_schema(r) for r in records]

    def list_by_plan(self, plan_id: str) -> List[Order]:
        records = (
            self.db.query(OrderRecord)
            .filter(OrderRecord.plan_id == plan_id)
            .order_by(OrderRecord.created_at)
            .all()
        )
        return [OrderMapper.to_schema(r) for r in records]

    def add_with_plan(self, order: Order, plan: MealPlan) -> Order:
        """
        Store a placed order together with its plan's new status.

        Both rows go in one commit, so a recorded order always belongs to a
        plan marked ordered.
        """
        record = OrderMapper.to_record(order)
        try:
            self.db.add(PlanMapper.to_record(plan, self.db.get(MealPlanRecord, plan.id)))
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return OrderMapper.to_schema(record)
