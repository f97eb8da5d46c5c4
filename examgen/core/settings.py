"""
Environment configuration
Resolved once at import; the rest of the code reads the module-level `settings`
"""
import os
from typing import Optional, List
from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

from examgen.core.constants import Defaults, Timeouts


class BaseConfig(BaseSettings):
    """
    Base configuration
    Settings shared by every environment
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Application
    # ===========================================
    SERVICE_NAME: str = Field(default="examgen-api")
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")
    DEBUG: bool = Field(default=False)

    # ===========================================
    # LLM API
    # ===========================================
    LLM_PROVIDER: str = Field(default="gemini")  # gemini, openai
    LLM_TIMEOUT_S: float = Field(default=Timeouts.LLM_API)
    LLM_TEMPERATURE: float = Field(default=0.7)
    LLM_MAX_TOKENS: int = Field(default=8192)

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL_NAMES: str = Field(default="gemini-2.5-flash,gemini-1.5-flash,gemini-1.5-pro")

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL_NAMES: str = Field(default="gpt-4o-mini,gpt-4o")

    # ===========================================
    # Exam parameters
    # ===========================================
    QUANTITY_DEFAULT: int = Field(default=Defaults.QUANTITY)
    QUANTITY_MIN: int = Field(default=Defaults.QUANTITY_MIN)
    QUANTITY_MAX: int = Field(default=Defaults.QUANTITY_MAX)

    # ===========================================
    # CORS
    # ===========================================
    CORS_ORIGIN: str = Field(default="*")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @field_validator("LLM_PROVIDER")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        valid_types = ["gemini", "openai"]
        v_lower = v.lower()
        if v_lower not in valid_types:
            raise ValueError(f"LLM_PROVIDER must be one of {valid_types}")
        return v_lower

    @cached_property
    def cors_origins_list(self) -> List[str]:
        """CORS origins as a list"""
        if not self.CORS_ORIGIN:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    @property
    def llm_api_key(self) -> Optional[str]:
        """Credential of the selected provider"""
        if self.LLM_PROVIDER == "openai":
            return self.OPENAI_API_KEY
        return self.GEMINI_API_KEY

    @property
    def llm_api_key_name(self) -> str:
        return "OPENAI_API_KEY" if self.LLM_PROVIDER == "openai" else "GEMINI_API_KEY"

    @property
    def llm_model_list(self) -> List[str]:
        """Ordered fallback chain of model identifiers"""
        raw = self.OPENAI_MODEL_NAMES if self.LLM_PROVIDER == "openai" else self.GEMINI_MODEL_NAMES
        return [name.strip() for name in (raw or "").split(",") if name.strip()]


class DevelopmentConfig(BaseConfig):
    """Development"""
    ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="DEBUG")


class StagingConfig(BaseConfig):
    """Staging"""
    ENV: str = Field(default="staging")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")


class ProductionConfig(BaseConfig):
    """Production"""
    ENV: str = Field(default="production")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="WARNING")


class TestConfig(BaseConfig):
    """Tests"""
    ENV: str = Field(default="test")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="DEBUG")
    LLM_TIMEOUT_S: float = Field(default=5)


def get_settings() -> BaseConfig:
    """
    Return the configuration object for the current environment

    The class is picked from the ENV environment variable
    """
    env = os.getenv("ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "dev": DevelopmentConfig,
        "local": DevelopmentConfig,
        "staging": StagingConfig,
        "stage": StagingConfig,
        "production": ProductionConfig,
        "prod": ProductionConfig,
        "test": TestConfig,
        "testing": TestConfig,
    }

    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()


settings = get_settings()


# ===========================================
# Validation
# ===========================================

def validate_required_settings() -> List[str]:
    """
    Check that the required settings are present

    Returns:
        names of the missing settings
    """
    missing = []

    if not settings.llm_api_key:
        missing.append(settings.llm_api_key_name)
    if not settings.llm_model_list:
        missing.append("OPENAI_MODEL_NAMES" if settings.LLM_PROVIDER == "openai" else "GEMINI_MODEL_NAMES")

    return missing
