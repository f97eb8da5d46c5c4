# examgen/services/input_normalizer.py
from __future__ import annotations

import math
from typing import Any, Mapping

from examgen.core.constants import Defaults, ErrorMessages, ExamFields
from examgen.core.exceptions import ValidationError
from examgen.schemas.exam import GenerationRequest, normalize_difficulty


def to_number(value: Any, fallback: float) -> float:
    """Finite number from int/float/numeric string, else `fallback`."""
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        n = value
    elif isinstance(value, str):
        try:
            n = float(value.strip())
        except ValueError:
            return fallback
    else:
        return fallback
    return n if math.isfinite(n) else fallback


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(n, hi))


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_request(
    body: Any,
    *,
    min_quantity: int = Defaults.QUANTITY_MIN,
    max_quantity: int = Defaults.QUANTITY_MAX,
    default_quantity: int = Defaults.QUANTITY,
) -> GenerationRequest:
    """
    Untyped request body -> GenerationRequest.

    Only the topic can fail (ValidationError); every other field falls back
    to its default.
    """
    data: Mapping[str, Any] = body if isinstance(body, Mapping) else {}

    topic = _trimmed(data.get(ExamFields.TOPIC))
    if not topic:
        raise ValidationError(ErrorMessages.TOPIC_REQUIRED, details={"field": ExamFields.TOPIC})

    quantity = int(clamp(to_number(data.get(ExamFields.QUANTITY), default_quantity), min_quantity, max_quantity))

    board = _trimmed(data.get(ExamFields.BOARD)) or Defaults.BOARD

    level = data.get(ExamFields.LEVEL)
    if level is None:
        level = data.get(ExamFields.LEVEL_ALT)
    difficulty = normalize_difficulty(level) or Defaults.DIFFICULTY

    return GenerationRequest(
        topic=topic,
        quantity=quantity,
        exam_board_style=board,
        difficulty_level=difficulty,
    )
