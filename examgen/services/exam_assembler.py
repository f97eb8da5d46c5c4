# examgen/services/exam_assembler.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from examgen.core.constants import Defaults
from examgen.core.exceptions import EmptyResultError
from examgen.schemas.exam import ExamDraft, GeneratedExam, GenerationRequest


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble_exam(
    draft: ExamDraft,
    req: GenerationRequest,
    created_at: str,
    *,
    raw_text: Optional[str] = None,
) -> GeneratedExam:
    """
    Apply the request defaults to a sanitized draft.

    Questions are truncated to the requested quantity (never padded), get the
    request difficulty when the model left it out and share one createdAt.
    An empty draft raises EmptyResultError.
    """
    if not draft.questions:
        raise EmptyResultError(raw_text=raw_text)

    title = (draft.title or "").strip() or Defaults.TITLE_TEMPLATE.format(topic=req.topic)
    topic = (draft.topic or "").strip() or req.topic

    questions = [
        q.model_copy(update={
            "difficulty_level": q.difficulty_level or req.difficulty_level,
            "created_at": created_at,
        })
        for q in draft.questions[: req.quantity]
    ]

    return GeneratedExam(title=title, topic=topic, questions=questions)
