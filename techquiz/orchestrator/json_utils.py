"""
JSON extraction utilities for LLM responses.

PROBLEM
-------
Models asked for "ONLY a JSON array" still wrap it in prose or fences:
    "Sure! Here are your questions: [{...}, {...}] Good luck!"

json.loads() on the whole text fails.

SOLUTION
--------
Take the span from the first '[' to the last ']' and parse only that.
If the text holds no array, take the first '{' .. last '}' span and treat
the single object as a one-element list.

The parsed elements are NOT validated here; field checks belong to the
caller that knows the record shape.
"""
import json
from typing import Any, List, Optional, Tuple

from techquiz.llm_router.errors import ParseError


class JSONExtractionError(ParseError):
    """Raised when no JSON array or object can be extracted."""
    pass


def _span(text: str, opener: str, closer: str) -> Optional[Tuple[int, int]]:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end == -1 or end < start:
        return None
    return start, end + 1


def find_json_span(text: str) -> Tuple[str, bool, Optional[str]]:
    """
    Locate the JSON payload in model output.

    Returns:
        Tuple of (json_string, is_array, stripped_text):
        - json_string: the candidate span
        - is_array: True for a '[...]' span, False for a '{...}' fallback
        - stripped_text: prose found around the span (None if none)

    Raises:
        JSONExtractionError: If neither span exists

    Examples:
        >>> find_json_span('Here: [1, 2] done')
        ('[1, 2]', True, 'Here: done')

        >>> find_json_span('{"a": 1}')
        ('{"a": 1}', False, None)
    """
    if not isinstance(text, str):
        raise JSONExtractionError("Input text is empty or not a string")

    s = text.strip()
    span = _span(s, "[", "]")
    is_array = True
    if span is None:
        span = _span(s, "{", "}")
        is_array = False
    if span is None:
        raise JSONExtractionError("Invalid response format: No JSON array or object found")

    start, end = span
    before = s[:start].strip()
    after = s[end:].strip()
    stripped = (before + " " + after).strip() if (before or after) else None
    return s[start:end], is_array, stripped


def extract_json_array(raw: str) -> List[Any]:
    """
    Recover a JSON array from verbose model output.

    Args:
        raw: Raw LLM response

    Returns:
        Parsed list (a lone object is wrapped in a one-element list)

    Raises:
        JSONExtractionError: If no span exists or the span is not valid JSON

    Examples:
        >>> extract_json_array('prefix text [ {"a":1} ] suffix')
        [{'a': 1}]
        >>> extract_json_array('{"a":1}')
        [{'a': 1}]
    """
    json_str, is_array, _ = find_json_span(raw)

    if is_array:
        try:
            return json.loads(json_str)
        except json.JSONDecodeError as e:
            raise JSONExtractionError(
                f"Failed to parse JSON array from response: {e.msg} (line {e.lineno}, column {e.colno})"
            ) from e

    try:
        return [json.loads(json_str)]
    except json.JSONDecodeError as e:
        raise JSONExtractionError(
            f"Failed to parse JSON object from response: {e.msg} (line {e.lineno}, column {e.colno})"
        ) from e
