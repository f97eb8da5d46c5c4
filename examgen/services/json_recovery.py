# examgen/services/json_recovery.py
from __future__ import annotations

import json
from typing import Any

from examgen.core.exceptions import MalformedOutputError


def _outer_json_block(s: str) -> str:
    """
    Slice from the first '{' to the last '}' (inclusive).
    Raises ValueError when the pair is missing or inverted.
    """
    start = s.find("{")
    end = s.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("No JSON object found in model response.")
    return s[start : end + 1]


def recover_json(text: str | None) -> Any:
    """
    Model output -> JSON value.

    The whole text is tried first; when the model wrapped the object in prose
    or code fences, the outermost {...} block is parsed instead.
    Raises MalformedOutputError (with a bounded raw excerpt) otherwise.
    """
    s = text or ""
    try:
        return json.loads(s)
    except (ValueError, RecursionError):
        pass

    try:
        return json.loads(_outer_json_block(s))
    except (ValueError, RecursionError) as e:
        raise MalformedOutputError(raw_text=s) from e
