"""Pydantic data models for the tour plan backend.

Key model categories:
- PlanSubmission: trip parameters sent by a client
- TripPlan: the enriched record written to the row store
- BudgetEstimate: a min/max budget range, per predictor and for the ensemble
- SuggestionPrompt: structured output of the prompt-authoring model call
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.core.types import Money, NonEmptyStr, PeopleCount, PlanId


class BudgetEstimate(BaseModel):
    """A budget range in the configured local currency.

    ``min_budget <= max_budget`` is expected but deliberately not validated:
    individual models sometimes invert the range and the ensemble has to
    tolerate that.
    """

    min_budget: Money = Field(description="Lower end of the estimated budget")
    max_budget: Money = Field(description="Upper end of the estimated budget")

    model_config = ConfigDict(frozen=True)


class SuggestionPrompt(BaseModel):
    """Prompt authored by the first step of the suggestion chain."""

    prompt: str = Field(description="Prompt used to write the travel suggestion")


class PlanSubmission(BaseModel):
    """Trip parameters submitted by a client."""

    destination: NonEmptyStr = Field(description="Where the trip goes")
    purpose: NonEmptyStr = Field(description="Why the trip is taken")
    people_count: PeopleCount = Field(description="Number of travellers")
    start_date: date = Field(description="First day of the trip")
    end_date: date = Field(description="Last day of the trip")

    @model_validator(mode="after")
    def _check_dates(self) -> "PlanSubmission":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TripPlan(PlanSubmission):
    """A submission enriched by the pipeline, ready to be persisted."""

    image_url: Optional[str] = Field(default=None, description="Public URL of the attached image")
    ai_suggestion: str = Field(description="Natural-language travel suggestion")
    ai_min_budget: Money = Field(description="Ensemble minimum budget")
    ai_max_budget: Money = Field(description="Ensemble maximum budget")

    def to_row(self) -> Dict[str, Any]:
        """Return the row-store representation; dates become ISO strings."""

        return self.model_dump(mode="json", exclude_none=True)


class DeletePlanRequest(BaseModel):
    """JSON body of ``DELETE /plans``."""

    plan_id: Optional[PlanId] = Field(default=None, alias="planId")

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "BudgetEstimate",
    "DeletePlanRequest",
    "PlanSubmission",
    "SuggestionPrompt",
    "TripPlan",
]
