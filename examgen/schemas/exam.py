# examgen/schemas/exam.py
from __future__ import annotations

import json
import math
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from examgen.core.constants import AnswerKeys, Defaults, DifficultyLevels

AnswerKey = Literal["A", "B", "C", "D"]


# =========================
# Coercion helpers
# =========================

def to_text(value: Any) -> str:
    """
    Total str conversion for values coming out of json.loads.
    None -> "", bools/numbers as JSON spells them, containers as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def normalize_answer_key(value: Any) -> str:
    s = to_text(value if value is not None else AnswerKeys.DEFAULT).strip().upper()
    return s if s in AnswerKeys.ALL else AnswerKeys.DEFAULT


def normalize_difficulty(value: Any) -> Optional[str]:
    """Canonical difficulty or None when unrecognized (accents optional)."""
    if value is None:
        return None
    return DifficultyLevels.ALIASES.get(to_text(value).strip().lower())


# =========================
# Generated exam
# =========================

class GeneratedQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    statement: str = Field(default="", alias="enunciado")
    option_a: str = Field(default="", alias="alternativaA")
    option_b: str = Field(default="", alias="alternativaB")
    option_c: str = Field(default="", alias="alternativaC")
    option_d: str = Field(default="", alias="alternativaD")
    correct_option: AnswerKey = Field(default=AnswerKeys.DEFAULT, alias="gabarito")
    explanation: Optional[str] = Field(default=None, alias="explicacao")
    difficulty_level: Optional[str] = Field(default=None, alias="dificuldade")
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @field_validator("statement", "option_a", "option_b", "option_c", "option_d", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return to_text(v)

    @field_validator("explanation", mode="before")
    @classmethod
    def _coerce_optional_text(cls, v):
        return None if v is None else to_text(v)

    @field_validator("correct_option", mode="before")
    @classmethod
    def _coerce_answer(cls, v):
        return normalize_answer_key(v)

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v):
        return normalize_difficulty(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, v):
        return None if v is None else to_text(v)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ExamDraft(BaseModel):
    """Sanitized model output before the request defaults are applied."""
    title: Optional[str] = None
    topic: Optional[str] = None
    questions: List[GeneratedQuestion] = Field(default_factory=list)


class GeneratedExam(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(alias="titulo")
    topic: str = Field(alias="tema")
    questions: List[GeneratedQuestion] = Field(default_factory=list, alias="questoes")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# =========================
# Request / errors
# =========================

class GenerationRequest(BaseModel):
    """Normalized caller input."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    topic: str = Field(alias="tema", min_length=1)
    quantity: int = Field(default=Defaults.QUANTITY, alias="quantidade")
    exam_board_style: str = Field(default=Defaults.BOARD, alias="banca")
    difficulty_level: str = Field(default=Defaults.DIFFICULTY, alias="nivel")

    @property
    def is_mixed_board(self) -> bool:
        return self.exam_board_style.strip().lower() in ("mista", "misto", "mixed")


class GenerationRequestBody(BaseModel):
    """Request body as documented in OpenAPI; parsing itself is lenient."""
    tema: str
    quantidade: Optional[int] = Defaults.QUANTITY
    banca: Optional[str] = Defaults.BOARD
    nivel: Optional[str] = Defaults.DIFFICULTY


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    raw: Optional[str] = None
