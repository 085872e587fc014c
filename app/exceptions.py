from typing import Any, Mapping, Optional


class PlannerError(Exception):
    """Base class for errors raised by the meal plan lifecycle.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (plan id, status, raw payload)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Meal planner error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PlannerError):
    """Raised when the household has not configured preferences yet.

    http_status is 412: the user must save preferences before generating.
    """

    http_status = 412
    default_message = "No preferences configured"


class PlanningOracleError(PlannerError):
    """Raised when the planning model returns malformed output.

    Fatal to the generate call; nothing is retried automatically.
    """

    http_status = 502
    default_message = "Planning oracle returned an invalid response"


class HouseholdResolutionError(PlannerError):
    """Raised when the Mealie household or acting user cannot be determined.

    Aborts the whole household sync.
    """

    http_status = 502
    default_message = "Could not determine Mealie household"


class NotFoundError(PlannerError):
    """Raised when a requested plan was not found. http_status is 404."""

    http_status = 404
    default_message = "Not found"


class InvalidStateError(PlannerError):
    """Raised when an operation is attempted on a plan in the wrong lifecycle state.

    http_status is 409.
    """

    http_status = 409
    default_message = "Invalid plan state"
