"""Error taxonomy shared by the planner pipeline and the HTTP layer."""
from __future__ import annotations

from typing import Optional


class PlannerError(Exception):
    """Base class for failures raised while processing a tour plan."""


class UpstreamError(PlannerError):
    """A network or provider failure while calling an AI model or Supabase."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class MalformedResponseError(PlannerError):
    """The upstream call succeeded but its content could not be parsed."""

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class ValidationError(PlannerError):
    """The submitted request is missing or has invalid plan fields."""
