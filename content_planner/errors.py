"""
Domain exceptions raised by the service layer.

These carry no HTTP knowledge; ``responses.py`` maps them onto API errors.
"""
from typing import Any, Dict, List, Optional


class PlannerError(Exception):
    """Base class for content planner domain errors."""


class ContentValidationError(PlannerError):
    """Input failed the content item field contract."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        self.fields = sorted({e["field"] for e in errors})
        super().__init__(f"Invalid fields: {', '.join(self.fields)}")

    @classmethod
    def from_pydantic(cls, exc) -> "ContentValidationError":
        """Build from a ``pydantic.ValidationError``."""
        errors = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            errors.append({"field": field, "message": err.get("msg", "Invalid value")})
        return cls(errors)


class PolicyDenied(PlannerError):
    """An entitlement check failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class PaymentProviderError(PlannerError):
    """The payment provider rejected a call or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
