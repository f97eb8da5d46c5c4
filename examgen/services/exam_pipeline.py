# examgen/services/exam_pipeline.py
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from examgen.core.settings import settings
from examgen.prompts.exam_prompt import build_exam_prompt
from examgen.schemas.exam import GeneratedExam, GenerationRequest
from examgen.services.exam_assembler import assemble_exam, iso_timestamp
from examgen.services.input_normalizer import normalize_request
from examgen.services.json_recovery import recover_json
from examgen.services.llm_client import ModelInvoker
from examgen.services.sanitizer import sanitize_exam

logger = logging.getLogger("service.exam_pipeline")


def parse_request(body: Any) -> GenerationRequest:
    """Request normalization with the configured quantity bounds."""
    return normalize_request(
        body,
        min_quantity=settings.QUANTITY_MIN,
        max_quantity=settings.QUANTITY_MAX,
        default_quantity=settings.QUANTITY_DEFAULT,
    )


class ExamPipeline:
    """
    prompt -> model -> JSON recovery -> sanitize -> assemble

    All state is local to one call; a single instance can serve concurrent
    requests.
    """

    def __init__(self, invoker: ModelInvoker, *, clock: Optional[Callable[[], str]] = None):
        self.invoker = invoker
        self.clock = clock or iso_timestamp

    async def generate(self, req: GenerationRequest, *, trace_id: Optional[str] = None) -> GeneratedExam:
        start = time.perf_counter()
        logger.info(
            "exam_generate_start",
            extra={
                "trace_id": trace_id,
                "topic": req.topic,
                "quantity": req.quantity,
                "board": req.exam_board_style,
                "difficulty": req.difficulty_level,
            },
        )

        prompt = build_exam_prompt(req)
        text = await self.invoker.generate(prompt, trace_id=trace_id)
        logger.info(
            "exam_model_ok",
            extra={
                "trace_id": trace_id,
                "chars": len(text),
                "model_ms": int((time.perf_counter() - start) * 1000),
            },
        )

        raw = recover_json(text)
        draft = sanitize_exam(raw)
        exam = assemble_exam(draft, req, self.clock(), raw_text=text)

        logger.info(
            "exam_generate_done",
            extra={
                "trace_id": trace_id,
                "returned": len(draft.questions),
                "questions": len(exam.questions),
                "elapsed_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return exam
