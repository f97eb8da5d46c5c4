# examgen/routes/exams.py
from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from examgen.schemas.exam import ErrorResponse, GeneratedExam, GenerationRequest, GenerationRequestBody
from examgen.services.exam_pipeline import ExamPipeline, parse_request
from examgen.services.llm_client import ModelInvoker, get_model_invoker

router = APIRouter(prefix="/api")

# /gerar-prova and /gerar-questoes are kept as aliases for older clients
EXAM_PATHS = ("/gerar-prova", "/gerar-questoes")

_OPENAPI_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": GenerationRequestBody.model_json_schema()}},
    }
}
_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


async def _read_body(request: Request) -> Any:
    """Lenient JSON body: missing or invalid JSON becomes {}."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return {}


async def get_generation_request(request: Request) -> GenerationRequest:
    # Declared before the invoker dependency: a bad topic is a 400 even when
    # the credential is missing, and no model call happens.
    return parse_request(await _read_body(request))


async def _generate(request: Request, req: GenerationRequest, invoker: ModelInvoker) -> JSONResponse:
    trace_id = getattr(request.state, "trace_id", None)
    exam: GeneratedExam = await ExamPipeline(invoker).generate(req, trace_id=trace_id)
    return JSONResponse(status_code=200, content=exam.to_wire())


@router.post(
    "/gerar-prova",
    response_model=None,
    responses=_ERROR_RESPONSES,
    openapi_extra=_OPENAPI_BODY,
)
async def generate_exam(
    request: Request,
    req: GenerationRequest = Depends(get_generation_request),
    invoker: ModelInvoker = Depends(get_model_invoker),
):
    return await _generate(request, req, invoker)


@router.post(
    "/gerar-questoes",
    response_model=None,
    responses=_ERROR_RESPONSES,
    openapi_extra=_OPENAPI_BODY,
)
async def generate_questions(
    request: Request,
    req: GenerationRequest = Depends(get_generation_request),
    invoker: ModelInvoker = Depends(get_model_invoker),
):
    return await _generate(request, req, invoker)


def _preflight() -> Response:
    return Response(status_code=200)


for _path in EXAM_PATHS:
    router.add_api_route(_path, _preflight, methods=["OPTIONS"], include_in_schema=False)
