"""Unit tests for input validation and output sanitisation."""

from __future__ import annotations

import json

import pytest

from block_workflows.errors import ValidationError
from block_workflows.text import sanitize_output, validate_input

EMPTY = "Please enter some text to transform."


@pytest.mark.parametrize("value", ["", "   ", "\n\t ", None, 42, ["text"]])
def test_validate_rejects_missing_text(value: object) -> None:
    result = validate_input(value)

    assert result.valid is False
    assert result.text is None
    assert result.error == EMPTY


def test_validate_trims_text() -> None:
    result = validate_input("  hello world \n")

    assert result.valid is True
    assert result.text == "hello world"
    assert result.error is None


def test_validate_length_boundary() -> None:
    at_limit = validate_input("a" * 10_000)
    over_limit = validate_input("a" * 10_001)

    assert at_limit.valid is True
    assert over_limit.valid is False
    assert over_limit.error == "Input text exceeds maximum length (10,000 characters)."


def test_validate_length_is_measured_after_trimming() -> None:
    assert validate_input("  " + "a" * 20 + "  ", max_length=20).valid is True


def test_unwrap_raises_validation_error_with_message() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_input("x" * 11, max_length=10).unwrap()

    assert str(excinfo.value) == "Input text exceeds maximum length (10 characters)."


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"result":"hello"}', "hello"),
        ('{"text": "a", "result": "b"}', "a"),
        ('{"content": "from content"}', "from content"),
        ('{"output": "from output"}', "from output"),
        ('["one", "two"]', "one\ntwo"),
        ("not json", "not json"),
        ("  padded  ", "padded"),
        ("{broken json}", "{broken json}"),
        ("```json\nplain words\n```", "plain words"),
        ("```\nplain words\n```", "plain words"),
        ("```python\nprint('hi')\n```", "print('hi')"),
    ],
)
def test_sanitize_examples(raw: str, expected: str) -> None:
    assert sanitize_output(raw) == expected


def test_sanitize_pretty_prints_objects_without_text_fields() -> None:
    raw = '{"name": "Laptop", "price": 999}'

    assert sanitize_output(raw) == json.dumps({"name": "Laptop", "price": 999}, indent=2)


def test_sanitize_skips_empty_preferred_fields() -> None:
    assert sanitize_output('{"text": "", "content": "fallback"}') == "fallback"


def test_sanitize_unwraps_fenced_json() -> None:
    assert sanitize_output('```json\n{"result": "hello"}\n```') == "hello"


def test_sanitize_keeps_text_after_closing_fence() -> None:
    raw = "```\nprint(1)\n```Note: done"

    assert sanitize_output(raw) == "print(1)\nNote: done"


def test_sanitize_keeps_first_word_after_inline_closing_fence() -> None:
    assert sanitize_output("```python\nx = 1\n```Done now") == "x = 1\nDone now"


@pytest.mark.parametrize("value", [None, 3, b"bytes"])
def test_sanitize_non_string_is_empty(value: object) -> None:
    assert sanitize_output(value) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "plain text",
        '{"result":"hello"}',
        '{"text": "{\\"text\\": \\"nested\\"}"}',
        '{"a": {"b": [1, 2]}}',
        '{"a": "```"}',
        '[["x", "y"], "z"]',
        "```json\n[1, 2]\n```",
        "| a | b |\n|---|---|\n| 1 | 2 |",
    ],
)
def test_sanitize_is_idempotent(raw: str) -> None:
    once = sanitize_output(raw)

    assert sanitize_output(once) == once
