"""
Household domain mappers.
Handles transformation between ORM records and DTOs for preferences and feedback.
"""

from domain.models import FeedbackRecord, PreferencesRecord
from domain.schemas import Feedback, Preferences


class HouseholdMapper:
    """Mapper for preferences and feedback transformations."""

    @staticmethod
    def preferences_to_schema(record: PreferencesRecord) -> Preferences:
        return Preferences.model_validate(record.data)

    @staticmethod
    def feedback_to_schema(record: FeedbackRecord) -> Feedback:
        return Feedback(
            id=record.feedback_id,
            liked_meals=record.liked_meals or [],
            disliked_meals=record.disliked_meals or [],
            suggestions=record.suggestions or "",
            plan_id=record.plan_id,
            created_at=record.created_at,
        )

    @staticmethod
    def feedback_to_record(feedback: Feedback) -> FeedbackRecord:
        return FeedbackRecord(
            feedback_id=feedback.id,
            liked_meals=list(feedback.liked_meals),
            disliked_meals=list(feedback.disliked_meals),
            suggestions=feedback.suggestions,
            plan_id=feedback.plan_id,
            created_at=feedback.created_at,
        )
