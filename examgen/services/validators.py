# examgen/services/validators.py
from __future__ import annotations

from typing import Any, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


def validate_with_model(model_cls: Type[M], data: Any) -> Tuple[Optional[M], Optional[list]]:
    """(instance, None) on success, (None, errors) on failure. Never raises ValidationError."""
    try:
        return model_cls.model_validate(data), None
    except ValidationError as e:
        return None, e.errors(include_url=False)
