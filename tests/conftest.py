"""
Shared test configuration and fixtures
"""
import os
import sys
import pytest
from typing import Any, Dict, Generator, List
from unittest.mock import Mock

# project root on sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# settings are resolved at import time, so the environment is set before any app import
os.environ["ENV"] = "test"
os.environ.setdefault("LLM_PROVIDER", "gemini")

from fastapi.testclient import TestClient


# ===========================================
# FastAPI client
# ===========================================

@pytest.fixture(scope="module")
def app():
    """FastAPI application"""
    from examgen.main import app as fastapi_app
    return fastapi_app


@pytest.fixture(scope="module")
def client(app) -> Generator:
    """Test client"""
    with TestClient(app) as test_client:
        yield test_client


# ===========================================
# Model output
# ===========================================

def make_question(i: int, **overrides) -> Dict[str, Any]:
    q = {
        "enunciado": f"Questão {i}",
        "alternativaA": f"A{i}",
        "alternativaB": f"B{i}",
        "alternativaC": f"C{i}",
        "alternativaD": f"D{i}",
        "gabarito": "B",
        "explicacao": f"Explicação {i}",
        "dificuldade": "médio",
    }
    q.update(overrides)
    return q


def make_exam(n: int, *, title: str = "Simulado - Direito Administrativo",
              topic: str = "Direito Administrativo") -> Dict[str, Any]:
    return {
        "titulo": title,
        "tema": topic,
        "questoes": [make_question(i) for i in range(1, n + 1)],
    }


# ===========================================
# Model invoker
# ===========================================

@pytest.fixture
def invoker_factory():
    """
    ModelInvoker wired to a fake provider call.
    `outputs` is the text returned, or an exception raised, per call in order.
    """
    from examgen.services.llm_client import ModelInvoker

    def _make(outputs: List[Any], model_names=("model-a", "model-b", "model-c"), timeout_s: float = 2):
        fake = Mock(side_effect=list(outputs))
        invoker = ModelInvoker(
            api_key="test-key",
            model_names=list(model_names),
            timeout_s=timeout_s,
            generate_fn=fake,
        )
        return invoker, fake

    return _make


@pytest.fixture
def override_invoker(app, invoker_factory):
    """Install a fake invoker as the route dependency"""
    from examgen.services.llm_client import get_model_invoker

    def _install(outputs: List[Any], **kwargs):
        invoker, fake = invoker_factory(outputs, **kwargs)
        app.dependency_overrides[get_model_invoker] = lambda: invoker
        return fake

    yield _install
    app.dependency_overrides.clear()


# ===========================================
# Utilities
# ===========================================

@pytest.fixture
def capture_logs():
    """Capture log records"""
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

        def get_messages(self):
            return [r.getMessage() for r in self.records]

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)
    logger = logging.getLogger()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous)


# ===========================================
# Async tests
# ===========================================

@pytest.fixture
def anyio_backend():
    """anyio backend"""
    return "asyncio"
