# examgen/services/llm_client.py
from __future__ import annotations

import asyncio
import functools
import logging
import time
from typing import Optional, Sequence

from examgen.core.exceptions import ConfigurationError, ModelUnavailableError
from examgen.core.llm_config import GenerateFn, get_generate_fn
from examgen.core.settings import settings

log = logging.getLogger("service.llm_client")


class ModelInvoker:
    """
    Sends one prompt to the model, walking an ordered fallback chain of model
    identifiers.

    - Only transport/service failures (exception, timeout, empty answer) move
      on to the next identifier; each identifier is tried once.
    - The first text returned wins, JSON or not.
    - The SDK calls are blocking, so each attempt runs in the default executor
      under asyncio.wait_for(timeout_s).
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model_names: Sequence[str],
        provider: str = "gemini",
        api_key_name: str = "GEMINI_API_KEY",
        timeout_s: float = 45,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        generate_fn: Optional[GenerateFn] = None,
    ):
        if not api_key:
            raise ConfigurationError(api_key_name)
        if not model_names:
            raise ConfigurationError(f"{provider.upper()}_MODEL_NAMES")

        self.api_key = api_key
        self.model_names = list(model_names)
        self.provider = provider
        self.timeout_s = timeout_s
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._generate = generate_fn or get_generate_fn(provider)

    async def _attempt(self, model_name: str, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        call = functools.partial(
            self._generate,
            self.api_key,
            model_name,
            prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout_s=self.timeout_s,
        )
        try:
            return await asyncio.wait_for(loop.run_in_executor(None, call), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            raise TimeoutError(f"{model_name} timed out after {self.timeout_s:g}s") from None

    async def generate(self, prompt: str, *, trace_id: Optional[str] = None) -> str:
        last_err: Optional[BaseException] = None

        for i, name in enumerate(self.model_names, start=1):
            start = time.perf_counter()
            try:
                text = await self._attempt(name, prompt)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                last_err = e
                log.warning(
                    "llm_attempt_failed",
                    extra={
                        "trace_id": trace_id,
                        "provider": self.provider,
                        "model": name,
                        "attempt": f"{i}/{len(self.model_names)}",
                        "error": str(e) or type(e).__name__,
                    },
                )
                continue

            if not (text or "").strip():
                last_err = ValueError(f"{name} returned an empty response")
                log.warning(
                    "llm_attempt_empty",
                    extra={"trace_id": trace_id, "provider": self.provider, "model": name},
                )
                continue

            log.info(
                "llm_attempt_ok",
                extra={
                    "trace_id": trace_id,
                    "provider": self.provider,
                    "model": name,
                    "chars": len(text),
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return text

        raise ModelUnavailableError(self.provider, self.model_names, last_err)


def get_model_invoker() -> ModelInvoker:
    """
    FastAPI dependency: invoker configured from the process settings.
    Raises ConfigurationError when the provider credential is missing.
    """
    return ModelInvoker(
        api_key=settings.llm_api_key,
        model_names=settings.llm_model_list,
        provider=settings.LLM_PROVIDER,
        api_key_name=settings.llm_api_key_name,
        timeout_s=settings.LLM_TIMEOUT_S,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
    )
