"""Normalise raw model responses into plain readable text.

Models are asked for plain text but sometimes wrap the answer in a JSON
envelope or a fenced code block. Unwrapping is repeated until the text stops
changing, so a fenced JSON envelope is fully unwrapped and sanitising
already-sanitised text is a no-op.
"""

from __future__ import annotations

import json
import re
from typing import Any

_PREFERRED_FIELDS = ("text", "content", "output", "result")

# A language tag only counts when it ends its line, or is `json`.
_CODE_FENCE = re.compile(r"```(?:json\b|[\w+-]+[ \t]*(?=\n|$))?\s*")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _unwrap_json(text: str) -> str:
    looks_like_json = (text.startswith("{") and text.endswith("}")) or (
        text.startswith("[") and text.endswith("]")
    )
    if not looks_like_json:
        return text

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text

    if isinstance(parsed, dict):
        for field in _PREFERRED_FIELDS:
            if parsed.get(field):
                return _as_text(parsed[field])
    elif isinstance(parsed, list):
        return "\n".join(_as_text(item) for item in parsed)

    return json.dumps(parsed, indent=2, ensure_ascii=False)


def _sanitize_once(text: str) -> str:
    unwrapped = _unwrap_json(text.strip())
    return _CODE_FENCE.sub("", unwrapped).strip()


def sanitize_output(text: object) -> str:
    if not isinstance(text, str):
        return ""

    current = text
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned
