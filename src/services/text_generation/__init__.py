"""Gemini-backed travel suggestion generation.

Public API:
    - TextGenerationClient: two-step prompt-authoring / writing chain
    - create_text_generation_client: factory building the client from settings
"""
from src.services.text_generation.client import (
    MAX_SUGGESTION_CHARS,
    TextGenerationClient,
    create_text_generation_client,
)

__all__ = [
    "MAX_SUGGESTION_CHARS",
    "TextGenerationClient",
    "create_text_generation_client",
]
