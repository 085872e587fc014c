"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import PlanStatus
from domain.mappers import PlanMapper
from domain.models import MealPlanRecord
from domain.schemas import MealPlan


class MealPlanRepository(BaseRepository[MealPlanRecord]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlanRecord)

    def get_by_id(self, plan_id: str) -> Optional[MealPlan]:
        """Get meal plan by ID"""
        record = self._get_record(plan_id)
        return PlanMapper.to_schema(record) if record else None

    def list_all(self) -> List[MealPlan]:
        """All plans, newest first"""
        records = (
            self.db.query(MealPlanRecord)
            .order_by(MealPlanRecord.created_at.desc())
            .all()
        )
        return [PlanMapper.to_schema(r) for r in records]

    def get_current(self) -> Optional[MealPlan]:
        """
        The most recently created plan that is still pending or approved.

        Older pending/approved plans stay in history; nothing enforces a
        single current plan.
        """
        record = (
            self.db.query(MealPlanRecord)
            .filter(
                MealPlanRecord.status.in_([s for s in PlanStatus if s.is_current])
            )
            .order_by(MealPlanRecord.created_at.desc())
            .first()
        )
        return PlanMapper.to_schema(record) if record else None

    def put(self, plan: MealPlan) -> MealPlan:
        """Insert or overwrite a plan"""
        record = PlanMapper.to_record(plan, self._get_record(plan.id))
        return PlanMapper.to_schema(self._save(record))
