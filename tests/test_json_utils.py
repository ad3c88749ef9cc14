"""Tests for JSON payload recovery from model text."""
import json

import pytest

from techquiz.llm_router import ParseError
from techquiz.orchestrator.json_utils import (
    JSONExtractionError,
    extract_json_array,
    find_json_span,
)


def test_array_wrapped_in_prose():
    assert extract_json_array('prefix text [ {"a":1} ] suffix') == [{"a": 1}]


def test_single_object_is_wrapped():
    assert extract_json_array('{"a":1}') == [{"a": 1}]


def test_no_json_raises_parse_error():
    with pytest.raises(ParseError):
        extract_json_array("no json here")


def test_extraction_error_is_a_parse_error():
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_array("")
    assert excinfo.value.kind.value == "parse"
    assert excinfo.value.retryable is False


def test_markdown_fence_is_ignored():
    raw = 'Here you go:\n```json\n[{"question": "What is DNS?"}]\n```\nGood luck!'
    assert extract_json_array(raw) == [{"question": "What is DNS?"}]


def test_object_fallback_wrapped_in_prose():
    raw = 'The question is {"question": "Q", "options": {"A": "1"}} as requested.'
    assert extract_json_array(raw) == [{"question": "Q", "options": {"A": "1"}}]


def test_invalid_array_span_does_not_fall_back_to_object():
    # Brackets exist, so the array span is authoritative even though it is broken
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_array('[{"a": 1}, oops] {"b": 2}')
    assert "JSON array" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


def test_unclosed_array_uses_object_span():
    assert extract_json_array('[{"a": 1},') == [{"a": 1}]


def test_reversed_brackets_fall_back_to_object():
    assert extract_json_array('] {"a": 2} [') == [{"a": 2}]


def test_broken_object_raises():
    with pytest.raises(JSONExtractionError) as excinfo:
        extract_json_array('{"a": }')
    assert "JSON object" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


def test_elements_are_not_schema_checked():
    assert extract_json_array("[1, \"two\", null]") == [1, "two", None]


def test_non_string_input_raises():
    with pytest.raises(JSONExtractionError):
        extract_json_array(None)


@pytest.mark.parametrize("payload", [
    [],
    [{"question": "Q1", "options": {"A": "a", "B": "b", "C": "c", "D": "d"}, "correct_answer": "A"}],
    [{"nested": [1, [2, {"deep": "]"}]]}, {"unicode": "naïve ✓"}],
    [1, 2.5, True, None, "text with [brackets] and {braces}"],
])
@pytest.mark.parametrize("before, after", [
    ("", ""),
    ("Sure! Here are the questions:\n", "\nLet me know if you need more."),
    ("Result -> ", " <- end"),
])
def test_embedded_array_matches_json_loads_on_span(payload, before, after):
    span = json.dumps(payload, ensure_ascii=False)
    raw = f"{before}{span}{after}"

    assert extract_json_array(raw) == json.loads(span)


def test_find_json_span_reports_stripped_prose():
    span, is_array, stripped = find_json_span("Here: [1, 2] done")
    assert span == "[1, 2]"
    assert is_array is True
    assert stripped == "Here: done"


def test_find_json_span_without_prose():
    assert find_json_span('{"a": 1}') == ('{"a": 1}', False, None)
