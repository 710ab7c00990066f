from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.core.config import ApiSettings
from src.core.ensemble import BudgetEnsemble
from src.core.predictor import create_budget_predictors
from src.core.schemas import PlanSubmission, TripPlan
from src.core.types import PlanId
from src.services import (
    ImageStore,
    PlanStore,
    SupabaseConnector,
    TextGenerationClient,
    create_supabase_connector,
    create_text_generation_client,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImageUpload:
    """An image attached to a plan submission."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


def make_storage_filename(original_name: str, *, now_ms: Optional[int] = None) -> str:
    """Prefix the original file name with epoch milliseconds to avoid clashes."""

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}_{original_name}"


class PlanService:
    """Container for the plan pipeline and its dependencies.

    The pipeline for a new plan is:
    1. Upload the attached image, if any, and record its public URL
    2. Generate a travel suggestion from the trip parameters
    3. Estimate a budget range from the suggestion with the model ensemble
    4. Persist the enriched plan row

    A failure at any stage aborts the request. An image uploaded before a
    later failure is not removed.

    Attributes:
        text_client: Two-step suggestion chain
        ensemble: Budget ensemble over the configured predictors
        images: Object storage for plan images
        plans: Row store for plan records
    """

    def __init__(
        self,
        *,
        text_client: TextGenerationClient,
        ensemble: BudgetEnsemble,
        images: ImageStore,
        plans: PlanStore,
        connector: Optional[SupabaseConnector] = None,
    ) -> None:
        self.text_client = text_client
        self.ensemble = ensemble
        self.images = images
        self.plans = plans
        self.connector = connector

    @classmethod
    def from_settings(cls, settings: ApiSettings) -> "PlanService":
        """Build every collaborator from the process-wide settings."""

        connector = create_supabase_connector(settings)
        return cls(
            text_client=create_text_generation_client(settings),
            ensemble=BudgetEnsemble(create_budget_predictors(settings)),
            images=ImageStore(connector, settings.image_bucket),
            plans=PlanStore(connector, settings.plans_table),
            connector=connector,
        )

    def __repr__(self) -> str:
        return (
            f"PlanService(\n"
            f"  budget_sources={self.ensemble.sources},\n"
            f"  image_bucket='{self.images.bucket}',\n"
            f"  plans_table='{self.plans.table}'\n"
            f")"
        )

    async def close(self) -> None:
        if self.connector is not None:
            await self.connector.aclose()

    async def create_plan(self, submission: PlanSubmission, image: Optional[ImageUpload] = None) -> TripPlan:
        """Enrich a submission with AI content and persist it."""

        image_url: Optional[str] = None
        if image is not None:
            filename = make_storage_filename(image.filename)
            logger.info(f"Uploading plan image as {filename}")
            image_url = await self.images.upload(filename, image.content, image.content_type)

        suggestion = await self.text_client.suggest(submission)
        budget = await self.ensemble.estimate(suggestion)

        plan = TripPlan(
            **submission.model_dump(),
            image_url=image_url,
            ai_suggestion=suggestion,
            ai_min_budget=budget.min_budget,
            ai_max_budget=budget.max_budget,
        )
        await self.plans.insert(plan.to_row())
        logger.info(
            f"Stored plan for {plan.destination}: budget {plan.ai_min_budget} - {plan.ai_max_budget}"
        )
        return plan

    async def list_plans(self) -> List[Dict[str, Any]]:
        return await self.plans.select_all()

    async def delete_plan(self, plan_id: PlanId) -> None:
        logger.info(f"Deleting plan {plan_id}")
        await self.plans.delete_by_id(plan_id)
