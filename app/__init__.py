"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    PlannerError,
    ConfigurationError,
    PlanningOracleError,
    HouseholdResolutionError,
    NotFoundError,
    InvalidStateError,
)

__all__ = [
    "settings",
    "PlannerError",
    "ConfigurationError",
    "PlanningOracleError",
    "HouseholdResolutionError",
    "NotFoundError",
    "InvalidStateError",
]
