"""Single-source budget prediction."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import Runnable
from langchain_groq import ChatGroq

from src.core.config import ApiSettings
from src.core.errors import PlannerError, UpstreamError
from src.core.post_processing import coerce_number, extract_json_object, message_text
from src.core.prompts import budget_estimate_instruction
from src.core.schemas import BudgetEstimate

logger = logging.getLogger(__name__)


class BudgetPredictor:
    """Ask one upstream model for a ``BudgetEstimate``.

    The model is expected to be bound to JSON-object structured output. Each
    call is a single attempt: transport failures surface as ``UpstreamError``
    and unusable payloads as ``MalformedResponseError``.
    """

    def __init__(
        self,
        source_id: str,
        llm: Runnable,
        *,
        currency: str = "KRW",
        timeout_s: Optional[float] = None,
    ) -> None:
        self.source_id = source_id
        self.llm = llm
        self.currency = currency
        self.timeout_s = timeout_s

    def __repr__(self) -> str:
        return f"BudgetPredictor(source_id='{self.source_id}')"

    def _messages(self, suggestion_text: str) -> List[Any]:
        return [
            SystemMessage(content=budget_estimate_instruction.format(currency=self.currency)),
            HumanMessage(content=suggestion_text),
        ]

    async def _invoke(self, suggestion_text: str) -> Any:
        call = self.llm.ainvoke(self._messages(suggestion_text))
        try:
            if self.timeout_s is None:
                return await call
            return await asyncio.wait_for(call, timeout=self.timeout_s)
        except asyncio.TimeoutError as exc:
            raise UpstreamError(
                f"Budget model {self.source_id} timed out after {self.timeout_s}s",
                source=self.source_id,
            ) from exc
        except PlannerError:
            raise
        except Exception as exc:
            raise UpstreamError(
                f"Budget model {self.source_id} failed: {exc}",
                source=self.source_id,
            ) from exc

    async def predict(self, suggestion_text: str) -> BudgetEstimate:
        """Return the min/max budget this source estimates for the suggestion."""

        response = await self._invoke(suggestion_text)
        raw = message_text(response)
        logger.debug(f"{self.source_id} raw budget response: {raw}")

        payload = extract_json_object(raw, source=self.source_id)
        return BudgetEstimate(
            min_budget=coerce_number(payload.get("min_budget"), field="min_budget", source=self.source_id),
            max_budget=coerce_number(payload.get("max_budget"), field="max_budget", source=self.source_id),
        )


def create_budget_predictors(settings: ApiSettings) -> List[BudgetPredictor]:
    """Instantiate one Groq-backed predictor per configured budget model."""

    api_key = settings.ensure("groq_api_key")
    predictors: List[BudgetPredictor] = []
    for model in settings.budget_models:
        llm = ChatGroq(model=model, api_key=api_key, max_retries=0).bind(
            response_format={"type": "json_object"}
        )
        predictors.append(
            BudgetPredictor(
                model,
                llm,
                currency=settings.budget_currency,
                timeout_s=settings.predictor_timeout_s,
            )
        )
    return predictors
