"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_BUDGET_MODELS: Tuple[str, ...] = (
    "moonshotai/kimi-k2-instruct-0905",
    "openai/gpt-oss-120b",
    "meta-llama/llama-4-maverick-17b-128e-instruct",
)


def _split_csv(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials and knobs."""

    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    google_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    suggestion_prompt_model: str = "gemini-2.5-flash"
    suggestion_model: str = "gemini-2.5-flash-lite"
    budget_models: Tuple[str, ...] = DEFAULT_BUDGET_MODELS
    budget_currency: str = "KRW"
    predictor_timeout_s: Optional[float] = None
    image_bucket: str = "tour-images"
    plans_table: str = "tour_plan"
    cors_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables."""

        return cls(
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_key=os.getenv("SUPABASE_KEY"),
            google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
            groq_api_key=os.getenv("GROQ_API_KEY"),
            suggestion_prompt_model=os.getenv("SUGGESTION_PROMPT_MODEL", "gemini-2.5-flash"),
            suggestion_model=os.getenv("SUGGESTION_MODEL", "gemini-2.5-flash-lite"),
            budget_models=_split_csv(os.getenv("BUDGET_MODELS")) or DEFAULT_BUDGET_MODELS,
            budget_currency=os.getenv("BUDGET_CURRENCY", "KRW"),
            predictor_timeout_s=_optional_float(os.getenv("PREDICTOR_TIMEOUT_S")),
            image_bucket=os.getenv("IMAGE_BUCKET", "tour-images"),
            plans_table=os.getenv("PLANS_TABLE", "tour_plan"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS")) or ("*",),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value
