import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from src.core.config import ApiSettings
from src.core.errors import MalformedResponseError, PlannerError, UpstreamError
from src.core.post_processing import message_text
from src.core.prompts import (
    suggestion_instruction,
    suggestion_prompt_instruction,
    suggestion_trip_details,
)
from src.core.schemas import PlanSubmission, SuggestionPrompt

logger = logging.getLogger(__name__)

MAX_SUGGESTION_CHARS = 300


class TextGenerationClient:
    """Two-step suggestion chain: author a prompt, then answer it.

    The first model writes a planning prompt from the trip parameters using
    structured output; the second model answers that prompt in plain text.
    """

    def __init__(
        self,
        prompt_llm: BaseChatModel,
        writer_llm: BaseChatModel,
        *,
        max_chars: int = MAX_SUGGESTION_CHARS,
    ) -> None:
        self.prompt_llm = prompt_llm.with_structured_output(SuggestionPrompt)
        self.writer_llm = writer_llm
        self.max_chars = max_chars

    async def _author_prompt(self, plan: PlanSubmission) -> str:
        details = suggestion_trip_details.format(
            destination=plan.destination,
            purpose=plan.purpose,
            people_count=plan.people_count,
            start_date=plan.start_date.isoformat(),
            end_date=plan.end_date.isoformat(),
        )
        messages = [
            SystemMessage(content=suggestion_prompt_instruction.format()),
            HumanMessage(content=details),
        ]
        result = await self._call(self.prompt_llm, messages, step="prompt authoring")
        if result is None or not result.prompt.strip():
            raise MalformedResponseError("Prompt authoring returned an empty prompt")
        logger.debug(f"Authored suggestion prompt: {result.prompt}")
        return result.prompt.strip()

    async def _write_suggestion(self, prompt: str) -> str:
        messages = [
            SystemMessage(content=suggestion_instruction.format(max_chars=self.max_chars)),
            HumanMessage(content=prompt),
        ]
        response = await self._call(self.writer_llm, messages, step="suggestion writing")
        text = message_text(response).strip()
        if not text:
            raise MalformedResponseError("Suggestion model returned empty text")
        if len(text) > self.max_chars:
            logger.warning(f"Suggestion exceeded {self.max_chars} characters ({len(text)}); truncating")
            text = text[: self.max_chars]
        return text

    @staticmethod
    async def _call(runnable: Any, messages: list, *, step: str) -> Any:
        try:
            return await runnable.ainvoke(messages)
        except PlannerError:
            raise
        except Exception as exc:
            raise UpstreamError(f"Text generation failed during {step}: {exc}") from exc

    async def suggest(self, plan: PlanSubmission) -> str:
        """Return a plain-text travel suggestion for the plan."""

        prompt = await self._author_prompt(plan)
        suggestion = await self._write_suggestion(prompt)
        logger.info(f"Generated suggestion for {plan.destination} ({len(suggestion)} chars)")
        return suggestion


def create_text_generation_client(settings: ApiSettings) -> TextGenerationClient:
    """Factory used by the service context to build the Gemini-backed chain."""

    api_key = settings.ensure("google_api_key")
    return TextGenerationClient(
        prompt_llm=ChatGoogleGenerativeAI(model=settings.suggestion_prompt_model, google_api_key=api_key),
        writer_llm=ChatGoogleGenerativeAI(model=settings.suggestion_model, google_api_key=api_key),
    )
