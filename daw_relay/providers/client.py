from __future__ import annotations

"""Model-invocation clients used by the relay routes.

All providers sit behind the same narrow contract: ``await client.invoke(prompt)``
returns the raw reply text or raises an ``InvocationError``. The client is
built once at startup and handed to the app explicitly, so tests can swap in
a fake.
"""

import asyncio
import logging
from typing import Any, Optional

from ..config import Settings
from ..errors import AuthError, ConfigurationError, InvocationError, InvocationTimeout, RelayError


log = logging.getLogger("relay.providers")

_AUTH_HINTS = (
    "api key",
    "api_key",
    "apikey",
    "credential",
    "unauthenticated",
    "unauthorized",
    "authentication",
    "permission denied",
    "invalid x-api-key",
)


def _status_of(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def is_auth_failure(exc: BaseException) -> bool:
    """True when ``exc`` looks like the provider rejecting our credential.

    The signal is a 4xx status whose message mentions the key/credential.
    Anything else is treated as a generic invocation failure.
    """
    status = _status_of(exc)
    if status is None or not 400 <= status < 500:
        return False
    text = str(exc).lower()
    return any(hint in text for hint in _AUTH_HINTS)


class ModelClient:
    """Base class: subclasses implement ``_generate``."""

    provider = "base"

    def __init__(self, model: str, timeout_seconds: Optional[float] = None) -> None:
        self.model = model
        self.timeout_seconds = timeout_seconds

    async def _generate(self, prompt: str) -> str:
        raise NotImplementedError

    async def invoke(self, prompt: str) -> str:
        try:
            if self.timeout_seconds:
                text = await asyncio.wait_for(self._generate(prompt), timeout=self.timeout_seconds)
            else:
                text = await self._generate(prompt)
        except asyncio.TimeoutError as e:
            raise InvocationTimeout(detail=f"{self.provider} call exceeded {self.timeout_seconds}s") from e
        except RelayError:
            raise
        except Exception as e:
            if is_auth_failure(e):
                raise AuthError(detail=f"{self.provider}: {e}") from e
            raise InvocationError(detail=f"{self.provider}: {type(e).__name__}: {e}") from e
        return (text or "").strip()


class GeminiClient(ModelClient):
    provider = "gemini"

    def __init__(self, api_key: str, model: str, timeout_seconds: Optional[float] = None) -> None:
        super().__init__(model, timeout_seconds)
        try:
            import google.generativeai as genai  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ConfigurationError(f"Gemini SDK not available: {e}")
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model)

    async def _generate(self, prompt: str) -> str:
        r = await self._model.generate_content_async(prompt)

        # candidates -> content.parts[].text; `.text` raises when a candidate
        # carries no parts (e.g. safety block), so only use it as a fallback
        text_parts = []
        for cand in getattr(r, "candidates", None) or []:
            content = getattr(cand, "content", None)
            for part in getattr(content, "parts", None) or []:
                t = getattr(part, "text", None)
                if t:
                    text_parts.append(t)
        if text_parts:
            return "\n".join(text_parts)
        try:
            return getattr(r, "text", None) or ""
        except ValueError:
            return ""


class OpenAIClient(ModelClient):
    provider = "openai"

    def __init__(self, api_key: str, model: str, timeout_seconds: Optional[float] = None) -> None:
        super().__init__(model, timeout_seconds)
        try:
            from openai import AsyncOpenAI  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ConfigurationError(f"OpenAI SDK not available: {e}")
        self._client = AsyncOpenAI(api_key=api_key)

    async def _generate(self, prompt: str) -> str:
        resp = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.0,
        )
        return resp.choices[0].message.content or ""


class AnthropicClient(ModelClient):
    provider = "anthropic"

    def __init__(self, api_key: str, model: str, timeout_seconds: Optional[float] = None) -> None:
        super().__init__(model, timeout_seconds)
        try:
            import anthropic  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ConfigurationError(f"Anthropic SDK not available: {e}")
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    async def _generate(self, prompt: str) -> str:
        resp = await self._client.messages.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=1024,
            temperature=0.0,
        )
        blocks: list[Any] = getattr(resp, "content", []) or []
        out = []
        for b in blocks:
            t = getattr(b, "text", None)
            if t:
                out.append(t)
        return "\n".join(out)


_CLIENTS = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
    "anthropic": AnthropicClient,
}


def build_client(settings: Settings) -> ModelClient:
    cls = _CLIENTS.get(settings.provider)
    if cls is None:
        raise ConfigurationError(f"Unknown provider: {settings.provider}")
    client = cls(settings.api_key, settings.model, settings.timeout_seconds)
    log.info("model client ready: provider=%s model=%s", settings.provider, settings.model)
    return client
