"""
Custom exception classes
Exception hierarchy used by the pipeline and rendered by the error handlers
"""
from typing import Any, Dict, Optional
from fastapi import status

from examgen.core.constants import Defaults, ErrorCodes, ErrorMessages


class AppException(Exception):
    """
    Base application exception
    Every pipeline failure derives from it and renders as {error, detail?, raw?}
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Optional[str] = None,
        raw: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.raw = raw
        self.details = details or {}
        super().__init__(detail or message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception into the response body"""
        result: Dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        if self.raw is not None:
            result["raw"] = self.raw
        return result


def raw_excerpt(text: Optional[str], limit: int = Defaults.RAW_EXCERPT_CHARS) -> Optional[str]:
    """Bounded prefix of the model output for diagnostics."""
    if text is None:
        return None
    return text[:limit]


# ===========================================
# Input
# ===========================================

class ValidationError(AppException):
    """Invalid or missing caller input"""

    def __init__(
        self,
        message: str = ErrorMessages.TOPIC_REQUIRED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            code=ErrorCodes.VALIDATION_FAILED,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


# ===========================================
# Deployment
# ===========================================

class ConfigurationError(AppException):
    """Required credential missing"""

    def __init__(self, setting: str):
        super().__init__(
            code=ErrorCodes.CONFIGURATION_ERROR,
            message=ErrorMessages.API_KEY_MISSING.format(name=setting),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"setting": setting}
        )


# ===========================================
# External model
# ===========================================

class ModelUnavailableError(AppException):
    """Every configured model identifier failed at the transport layer"""

    def __init__(
        self,
        provider: str,
        models: list[str],
        original_error: Optional[BaseException] = None
    ):
        last = _error_text(original_error)
        details: Dict[str, Any] = {"provider": provider, "models": list(models)}
        if original_error is not None:
            details["original_error"] = last

        super().__init__(
            code=ErrorCodes.MODEL_UNAVAILABLE,
            message=ErrorMessages.GENERATION_FAILED,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ErrorMessages.NO_MODEL_AVAILABLE.format(error=last),
            details=details
        )


class MalformedOutputError(AppException):
    """Model output could not be recovered as JSON"""

    def __init__(self, raw_text: Optional[str] = None):
        super().__init__(
            code=ErrorCodes.MALFORMED_OUTPUT,
            message=ErrorMessages.INVALID_MODEL_RESPONSE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ErrorMessages.NOT_JSON,
            raw=raw_excerpt(raw_text)
        )


class EmptyResultError(AppException):
    """Model output was JSON but produced zero usable questions"""

    def __init__(self, raw_text: Optional[str] = None):
        super().__init__(
            code=ErrorCodes.EMPTY_RESULT,
            message=ErrorMessages.INVALID_FORMAT,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=ErrorMessages.NO_QUESTIONS,
            raw=raw_excerpt(raw_text)
        )


def _error_text(err: Optional[BaseException]) -> str:
    if err is None:
        return "erro"
    text = str(err).strip()
    return text or type(err).__name__
