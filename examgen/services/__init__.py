"""
Service layer
The exam generation pipeline, one module per stage
"""
from examgen.services.input_normalizer import normalize_request
from examgen.services.json_recovery import recover_json
from examgen.services.sanitizer import sanitize_exam, sanitize_question
from examgen.services.exam_assembler import assemble_exam, iso_timestamp
from examgen.services.llm_client import ModelInvoker, get_model_invoker
from examgen.services.exam_pipeline import ExamPipeline, parse_request

__all__ = [
    # Input
    "normalize_request",
    "parse_request",

    # Model
    "ModelInvoker",
    "get_model_invoker",

    # Output
    "recover_json",
    "sanitize_exam",
    "sanitize_question",
    "assemble_exam",
    "iso_timestamp",

    # Pipeline
    "ExamPipeline",
]
