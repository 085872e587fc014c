"""Schemas for household preferences and meal feedback"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class FamilyMember(BaseModel):
    """One person the plan has to feed"""

    name: str = Field(..., min_length=1)
    allergies: List[str] = Field(default_factory=list)
    dislikes: List[str] = Field(default_factory=list)
    preferences: List[str] = Field(
        default_factory=list, description="Foods this member likes"
    )


class Preferences(BaseModel):
    """Household planning preferences. Singleton, replaced wholesale on save."""

    family_members: List[FamilyMember] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)
    cooking_time_max: int = Field(default=60, ge=1, description="Minutes")
    budget_per_week: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class FeedbackCreate(BaseModel):
    """Feedback as submitted by the household"""

    liked_meals: List[str] = Field(default_factory=list)
    disliked_meals: List[str] = Field(default_factory=list)
    suggestions: str = ""
    plan_id: Optional[str] = None


class Feedback(FeedbackCreate):
    """Stored feedback entry (append-only)"""

    id: str
    created_at: datetime
