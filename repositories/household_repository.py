"""
Household Repositories - Data access for preferences and feedback
"""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers import HouseholdMapper
from domain.models import FeedbackRecord, PreferencesRecord
from domain.schemas import Feedback, Preferences


class PreferencesRepository(BaseRepository[PreferencesRecord]):
    """Repository for the singleton preferences document"""

    def __init__(self, db: Session):
        super().__init__(db, PreferencesRecord)

    def get(self) -> Optional[Preferences]:
        record = self._get_record(PreferencesRecord.SINGLETON_ID)
        return HouseholdMapper.preferences_to_schema(record) if record else None

    def put(self, preferences: Preferences) -> Preferences:
        """Replace the stored preferences wholesale"""
        record = self._get_record(PreferencesRecord.SINGLETON_ID)
        if record is None:
            record = PreferencesRecord(preferences_id=PreferencesRecord.SINGLETON_ID)
        record.data = preferences.model_dump(mode="json")
        record.updated_at = datetime.now(timezone.utc)
        return HouseholdMapper.preferences_to_schema(self._save(record))


class FeedbackRepository(BaseRepository[FeedbackRecord]):
    """Repository for append-only feedback"""

    def __init__(self, db: Session):
        super().__init__(db, FeedbackRecord)

    def add(self, feedback: Feedback) -> Feedback:
        return HouseholdMapper.feedback_to_schema(
            self._save(HouseholdMapper.feedback_to_record(feedback))
        )

    def list_all(self) -> List[Feedback]:
        """All feedback, oldest first"""
        records = self.db.query(FeedbackRecord).order_by(FeedbackRecord.created_at).all()
        return [HouseholdMapper.feedback_to_schema(r) for r in records]

    def list_recent(self, limit: int = 5) -> List[Feedback]:
        """The `limit` most recent entries, returned oldest first"""
        if limit <= 0:
            return []
        records = (
            self.db.query(FeedbackRecord)
            .order_by(FeedbackRecord.created_at.desc())
            .limit(limit)
            .all()
        )
        return [HouseholdMapper.feedback_to_schema(r) for r in reversed(records)]
