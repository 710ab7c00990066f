"""Multi-model budget ensemble.

Every predictor is treated as a bound estimator rather than a point
estimator: the ensemble reports the lowest minimum and the highest maximum
seen across all sources, so disagreement between models widens the range.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Protocol, Sequence

from src.core.schemas import BudgetEstimate

logger = logging.getLogger(__name__)


class Predictor(Protocol):
    source_id: str

    async def predict(self, suggestion_text: str) -> BudgetEstimate: ...


def reduce_estimates(estimates: Sequence[BudgetEstimate]) -> BudgetEstimate:
    """Fold estimates into one range: min of minimums, max of maximums."""

    if not estimates:
        raise ValueError("Cannot reduce an empty set of budget estimates")
    return BudgetEstimate(
        min_budget=min(estimate.min_budget for estimate in estimates),
        max_budget=max(estimate.max_budget for estimate in estimates),
    )


class BudgetEnsemble:
    """Fan out to every predictor concurrently and reduce their ranges.

    The ensemble is all-or-nothing: it waits for every call to settle and, if
    any of them failed, raises the failure of the first failing source in
    configuration order. An inverted final range is returned as-is.
    """

    def __init__(self, predictors: Sequence[Predictor]) -> None:
        if not predictors:
            raise ValueError("BudgetEnsemble requires at least one predictor")
        self.predictors: List[Predictor] = list(predictors)

    @property
    def sources(self) -> List[str]:
        return [predictor.source_id for predictor in self.predictors]

    async def estimate(self, suggestion_text: str) -> BudgetEstimate:
        logger.info(f"Requesting budget estimates from {len(self.predictors)} sources: {self.sources}")

        results = await asyncio.gather(
            *(predictor.predict(suggestion_text) for predictor in self.predictors),
            return_exceptions=True,
        )

        estimates: List[BudgetEstimate] = []
        failures: List[BaseException] = []
        for predictor, result in zip(self.predictors, results):
            if isinstance(result, BaseException):
                logger.error(f"Budget source {predictor.source_id} failed: {result}")
                failures.append(result)
            else:
                logger.info(f"Budget source {predictor.source_id}: {result.min_budget} - {result.max_budget}")
                estimates.append(result)

        if failures:
            raise failures[0]

        combined = reduce_estimates(estimates)
        if combined.min_budget > combined.max_budget:
            logger.warning(
                f"Ensemble produced an inverted budget range: {combined.min_budget} > {combined.max_budget}"
            )
        return combined
