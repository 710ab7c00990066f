"""External service integrations for the tour plan backend.

- Text generation: Gemini two-step suggestion chain
- Storage: Supabase object storage and row store

Example Usage:
    >>> from src.core.config import ApiSettings
    >>> from src.services import create_supabase_connector, PlanStore
    >>>
    >>> settings = ApiSettings.from_env()
    >>> plans = PlanStore(create_supabase_connector(settings), settings.plans_table)
"""

# Suggestion generation
from src.services.text_generation import (
    MAX_SUGGESTION_CHARS,
    TextGenerationClient,
    create_text_generation_client,
)

# Supabase storage
from src.services.storage import (
    ImageStore,
    PlanStore,
    SupabaseConnector,
    create_supabase_connector,
)

__all__ = [
    # Text generation
    "MAX_SUGGESTION_CHARS",
    "TextGenerationClient",
    "create_text_generation_client",
    # Storage
    "ImageStore",
    "PlanStore",
    "SupabaseConnector",
    "create_supabase_connector",
]
