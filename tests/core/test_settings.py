"""
Settings tests
"""
import pytest

from examgen.core.settings import BaseConfig
from examgen.core.settings import TestConfig as EnvTestConfig


class TestSettings:

    def test_model_list_parsing(self):
        cfg = EnvTestConfig(GEMINI_MODEL_NAMES=" a, b ,,c ", GEMINI_API_KEY="k")
        assert cfg.llm_model_list == ["a", "b", "c"]
        assert cfg.llm_api_key == "k"
        assert cfg.llm_api_key_name == "GEMINI_API_KEY"

    def test_openai_provider(self):
        cfg = EnvTestConfig(LLM_PROVIDER="OpenAI", OPENAI_API_KEY="sk", OPENAI_MODEL_NAMES="gpt-x")
        assert cfg.LLM_PROVIDER == "openai"
        assert cfg.llm_api_key == "sk"
        assert cfg.llm_model_list == ["gpt-x"]

    def test_invalid_provider(self):
        with pytest.raises(ValueError):
            BaseConfig(LLM_PROVIDER="azure")

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            BaseConfig(LOG_LEVEL="chatty")

    def test_defaults(self):
        cfg = BaseConfig(CORS_ORIGIN="http://a.test, http://b.test")
        assert (cfg.QUANTITY_MIN, cfg.QUANTITY_MAX, cfg.QUANTITY_DEFAULT) == (10, 30, 10)
        assert cfg.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_validate_required_settings(self, monkeypatch):
        from examgen.core.settings import settings, validate_required_settings

        monkeypatch.setattr(settings, "LLM_PROVIDER", "gemini")
        monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
        monkeypatch.setattr(settings, "GEMINI_MODEL_NAMES", "")
        assert validate_required_settings() == ["GEMINI_API_KEY", "GEMINI_MODEL_NAMES"]

        monkeypatch.setattr(settings, "GEMINI_API_KEY", "k")
        monkeypatch.setattr(settings, "GEMINI_MODEL_NAMES", "g-1")
        assert validate_required_settings() == []
