"""
Household preferences and feedback models.
"""

from sqlalchemy import Column, Integer, Text, JSON, DateTime

from domain.models.database import Base


class PreferencesRecord(Base):
    """Singleton preferences document, replaced wholesale on save"""

    __tablename__ = "household_preferences"

    SINGLETON_ID = 1

    preferences_id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class FeedbackRecord(Base):
    """Append-only household feedback on past plans"""

    __tablename__ = "feedback"

    feedback_id = Column(Text, primary_key=True)
    liked_meals = Column(JSON, nullable=False, default=list)
    disliked_meals = Column(JSON, nullable=False, default=list)
    suggestions = Column(Text, nullable=False, default="")
    plan_id = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
