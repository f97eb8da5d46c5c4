# examgen/core/llm_config.py
import logging
import threading
from typing import Callable, Dict, Optional

import google.generativeai as genai
from openai import OpenAI

log = logging.getLogger("core.llm")

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 8192

# Unified signature of the provider calls:
# generate_text(api_key, model_name, prompt, *, temperature=None, max_tokens=None, timeout_s=None) -> str
# Blocking; callers run it in a worker thread and bound it with their own timeout.
GenerateFn = Callable[..., str]

_lock = threading.Lock()
_gemini_key: Optional[str] = None
_openai_clients: Dict[str, OpenAI] = {}


def _norm(s: str | None) -> str:
    return (s or "").strip()


# ===========================================
# Gemini (google-generativeai)
# ===========================================

def _configure_gemini(api_key: str) -> None:
    global _gemini_key
    with _lock:
        if _gemini_key != api_key:
            genai.configure(api_key=api_key)
            _gemini_key = api_key


def _gemini_response_text(response) -> str:
    # response.text raises when the candidate carries no text part (safety block etc.)
    try:
        text = response.text
    except (ValueError, AttributeError):
        text = None
    if text:
        return text.strip()
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        parts = getattr(candidates[0].content, "parts", None) or []
        if parts and getattr(parts[0], "text", None):
            return parts[0].text.strip()
    return ""


def gemini_generate_text(
    api_key: str,
    model_name: str,
    prompt: str,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    timeout_s: float | None = None,
) -> str:
    _configure_gemini(_norm(api_key))
    model = genai.GenerativeModel(_norm(model_name))

    kwargs = {}
    if timeout_s is not None:
        kwargs["request_options"] = {"timeout": timeout_s}

    response = model.generate_content(
        prompt,
        generation_config={
            "temperature": temperature if temperature is not None else DEFAULT_TEMPERATURE,
            "max_output_tokens": max_tokens if max_tokens is not None else DEFAULT_MAX_TOKENS,
        },
        **kwargs,
    )
    text = _gemini_response_text(response)
    if not text:
        feedback = getattr(response, "prompt_feedback", None)
        log.warning("gemini_empty_response", extra={"model": model_name, "feedback": str(feedback)})
        raise ValueError(f"Gemini ({model_name}) returned no text")
    return text


# ===========================================
# OpenAI (openai v1)
# ===========================================

def _openai_client(api_key: str) -> OpenAI:
    with _lock:
        client = _openai_clients.get(api_key)
        if client is None:
            client = OpenAI(api_key=api_key)
            _openai_clients[api_key] = client
        return client


def openai_generate_text(
    api_key: str,
    model_name: str,
    prompt: str,
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
    timeout_s: float | None = None,
) -> str:
    client = _openai_client(_norm(api_key))
    c = client.with_options(timeout=timeout_s) if timeout_s is not None else client

    resp = c.chat.completions.create(
        model=_norm(model_name),
        messages=[{"role": "user", "content": prompt}],
        temperature=temperature if temperature is not None else DEFAULT_TEMPERATURE,
        max_tokens=max_tokens if max_tokens is not None else DEFAULT_MAX_TOKENS,
    )
    content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
    if not content:
        log.warning("openai_empty_response", extra={"model": model_name})
        raise ValueError(f"OpenAI ({model_name}) returned no text")
    return content


PROVIDERS: Dict[str, GenerateFn] = {
    "gemini": gemini_generate_text,
    "openai": openai_generate_text,
}


def get_generate_fn(provider: str) -> GenerateFn:
    try:
        return PROVIDERS[provider.lower()]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {provider}") from None
