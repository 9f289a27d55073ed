"""Extract a JSON object from free-form model output."""

import json
import logging
from typing import Any

from prompt_refinery.errors import ResponseParseError

logger = logging.getLogger(__name__)

_FENCE = "```"


def clean_json_response(response: str) -> str:
    """
    Reduce a model response to the text of a single JSON object.

    Strips a leading ```json (or bare ```) fence and a trailing fence. If the
    remaining text does not start with "{", returns the span from the first
    "{" to the last "}". The span is not brace-depth aware, so a stray "}"
    in prose after the payload is included.

    Args:
        response: Raw model response

    Returns:
        Text for a JSON decoder; unchanged (trimmed) text when no object is found
    """
    text = response.strip()
    if text.startswith(_FENCE + "json"):
        text = text[len(_FENCE + "json") :]
    elif text.startswith(_FENCE):
        text = text[len(_FENCE) :]
    if text.endswith(_FENCE):
        text = text[: -len(_FENCE)]
    text = text.strip()

    if text.startswith("{"):
        return text

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]

    return text


def parse_json_object(response: str) -> dict[str, Any]:
    """
    Sanitize a response and decode it as a JSON object.

    Raises:
        ResponseParseError: If the sanitized text is not a JSON object
    """
    cleaned = clean_json_response(response)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable response: {response[:200]}...")
        raise ResponseParseError(f"response is not valid JSON: {e}", raw_response=response) from e

    if not isinstance(data, dict):
        raise ResponseParseError(
            f"expected a JSON object, got {type(data).__name__}", raw_response=response
        )
    return data
