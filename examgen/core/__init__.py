"""
Core module
Settings, constants and exceptions
"""
from examgen.core.settings import settings, get_settings
from examgen.core.constants import (
    ErrorCodes,
    ErrorMessages,
    ExamFields,
    DifficultyLevels,
    AnswerKeys,
    Defaults,
    HTTPHeaders,
    Timeouts
)
from examgen.core.exceptions import (
    AppException,
    ValidationError,
    ConfigurationError,
    ModelUnavailableError,
    MalformedOutputError,
    EmptyResultError
)

__all__ = [
    # Settings
    "settings",
    "get_settings",

    # Constants
    "ErrorCodes",
    "ErrorMessages",
    "ExamFields",
    "DifficultyLevels",
    "AnswerKeys",
    "Defaults",
    "HTTPHeaders",
    "Timeouts",

    # Exceptions
    "AppException",
    "ValidationError",
    "ConfigurationError",
    "ModelUnavailableError",
    "MalformedOutputError",
    "EmptyResultError",
]
