# examgen/services/sanitizer.py
"""
Untrusted model JSON -> ExamDraft.

Every field is coerced with an explicit default (see GeneratedQuestion's
before-validators), so a malformed answer degrades to empty strings and
answer key "A" instead of failing the whole request. Only a missing or
non-list `questoes` yields an empty draft; the caller decides what that means.
"""
from __future__ import annotations

import logging
from typing import Any, List

from examgen.core.constants import ExamFields
from examgen.schemas.exam import ExamDraft, GeneratedQuestion, to_text
from examgen.services.validators import validate_with_model

logger = logging.getLogger("service.sanitizer")

# Fields read from each question object (wire names)
_QUESTION_KEYS = (
    "enunciado",
    "alternativaA",
    "alternativaB",
    "alternativaC",
    "alternativaD",
    "gabarito",
    "explicacao",
    "dificuldade",
)


def sanitize_question(raw: Any) -> GeneratedQuestion:
    obj = raw if isinstance(raw, dict) else {}
    data = {k: obj[k] for k in _QUESTION_KEYS if k in obj}

    question, errors = validate_with_model(GeneratedQuestion, data)
    if question is None:
        logger.warning("question_sanitize_fallback", extra={"errors": errors})
        return GeneratedQuestion()
    return question


def sanitize_exam(value: Any) -> ExamDraft:
    if not isinstance(value, dict) or ExamFields.QUESTIONS not in value:
        return ExamDraft()

    items = value[ExamFields.QUESTIONS]
    if not isinstance(items, list):
        return ExamDraft()

    title = value.get(ExamFields.TITLE)
    topic = value.get(ExamFields.TOPIC)

    questions: List[GeneratedQuestion] = [sanitize_question(q) for q in items]
    return ExamDraft(
        title=to_text(title) if title is not None else None,
        topic=to_text(topic) if topic is not None else None,
        questions=questions,
    )
