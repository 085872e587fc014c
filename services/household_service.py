"""Household preferences and feedback"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from domain.schemas import Feedback, FeedbackCreate, Preferences
from repositories import FeedbackRepository, PreferencesRepository

logger = logging.getLogger("dinnerplan.household")


class HouseholdService:
    """Business logic for the planning inputs the household maintains."""

    def __init__(self, preferences: PreferencesRepository, feedback: FeedbackRepository):
        self.preferences = preferences
        self.feedback = feedback

    def get_preferences(self) -> Optional[Preferences]:
        return self.preferences.get()

    def save_preferences(self, preferences: Preferences) -> Preferences:
        """Overwrite the stored preferences; no history is kept."""
        saved = self.preferences.put(preferences)
        logger.info("Saved preferences for %d family members", len(saved.family_members))
        return saved

    def submit_feedback(self, feedback_data: FeedbackCreate) -> Feedback:
        feedback = Feedback(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            **feedback_data.model_dump(),
        )
        saved = self.feedback.add(feedback)
        logger.info(
            "Feedback recorded: liked=%d disliked=%d plan=%s",
            len(saved.liked_meals),
            len(saved.disliked_meals),
            saved.plan_id,
        )
        return saved

    def list_feedback(self) -> List[Feedback]:
        return self.feedback.list_all()
