import json
import logging
import math
import re
from typing import Any, Dict, List, Optional

from langchain_core.messages import BaseMessage

from src.core.errors import MalformedResponseError

logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def message_text(message: Any) -> str:
    """Flatten a chat model reply into plain text."""

    content = message.content if isinstance(message, BaseMessage) else message
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                text_chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                text_chunks.append(chunk)
        return "".join(text_chunks)
    return str(content)


def extract_json_object(raw: str, *, source: Optional[str] = None) -> Dict[str, Any]:
    """Parse ``raw`` as a JSON object, tolerating a surrounding code fence."""

    text = raw.strip()
    match = _CODE_BLOCK_PATTERN.search(text)
    if match:
        text = match.group(1)

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Response from {source or 'model'} is not valid JSON", source=source) from exc

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response from {source or 'model'} is not a JSON object", source=source)
    return data


def coerce_number(value: Any, *, field: str, source: Optional[str] = None) -> float:
    """Convert a model-provided budget value to a finite float."""

    number: Optional[float] = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip() and "_" not in value:
        try:
            number = float(value.strip())
        except ValueError:
            number = None

    if number is None or not math.isfinite(number):
        logger.debug("Unusable %s from %s: %r", field, source, value)
        raise MalformedResponseError(f"{field} from {source or 'model'} is not a number: {value!r}", source=source)
    return number
