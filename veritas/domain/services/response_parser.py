"""Turning raw model text into a validated fact-check result."""

import json
import logging

from pydantic import ValidationError

from ..errors import MalformedResponseError, ParseError
from ..models.fact_check_result import FactCheckResult

logger = logging.getLogger(__name__)


def extract_json_block(raw_text: str) -> str:
    """Cut the span from the first '{' to the last '}' out of the response text.

    Models sometimes wrap the JSON in commentary or code fences despite
    being told not to; everything outside the outermost braces is dropped.

    Args:
        raw_text: Raw model text

    Returns:
        The delimited substring, braces included

    Raises:
        MalformedResponseError: If either brace is missing
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.error(f"❌ Raw response (non-JSON): {raw_text!r}")
        raise MalformedResponseError()
    return raw_text[start:end + 1]


def parse_result(raw_text: str) -> FactCheckResult:
    """Parse raw model text into a FactCheckResult.

    The raw text is logged on failure and never placed in the raised error.

    Raises:
        MalformedResponseError: If the text holds no JSON object delimiters
        ParseError: If the JSON is invalid or does not match the result schema
    """
    block = extract_json_block(raw_text)

    try:
        payload = json.loads(block)
    except json.JSONDecodeError as e:
        logger.error(f"❌ JSON parse error ({e}). Raw text: {raw_text!r}")
        raise ParseError() from e

    try:
        return FactCheckResult.model_validate(payload)
    except ValidationError as e:
        logger.error(
            f"❌ Response does not match the result schema: {e.error_count()} error(s)\n{e}\n"
            f"Raw text: {raw_text!r}"
        )
        raise ParseError(
            "The verification result was incomplete or used unknown labels. Please try again."
        ) from e
