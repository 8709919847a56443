from __future__ import annotations

"""Runtime configuration for the relay.

Values come from the process environment. A ``.env`` file in the project root
(or the current directory) is read first without overriding variables that are
already set, so deployment platforms keep precedence over local files.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv  # type: ignore

from .errors import ConfigurationError


PROVIDERS = ("gemini", "openai", "anthropic")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# provider -> env vars checked in order for the credential
_KEY_VARS: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
}

_MODEL_VARS: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_MODEL", "GOOGLE_MODEL"),
    "openai": ("OPENAI_MODEL",),
    "anthropic": ("ANTHROPIC_MODEL",),
}

DEFAULT_MODELS: Dict[str, str] = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}


@dataclass(frozen=True)
class Settings:
    api_key: str
    provider: str = "gemini"
    model: str = DEFAULT_MODELS["gemini"]
    timeout_seconds: Optional[float] = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: Tuple[str, ...] = ("*",)
    client_keys: Tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"

    def describe(self) -> Dict[str, object]:
        """Loggable view of the settings (credential excluded)."""
        return {
            "provider": self.provider,
            "model": self.model,
            "timeout_seconds": self.timeout_seconds,
            "host": self.host,
            "port": self.port,
            "cors_origins": list(self.cors_origins),
            "client_key_allow_list": bool(self.client_keys),
        }


def load_env_file() -> None:
    here = Path(__file__).resolve()
    env_file = here.parents[1] / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=env_file, override=False)
    else:
        load_dotenv(override=False)


def _first(env: Mapping[str, str], names: Tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def _env_list(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw or not raw.strip():
        return ()
    return tuple(x.strip() for x in raw.split(",") if x.strip())


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return 30.0
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"AI_TIMEOUT_SECONDS inválido: {raw!r}")
    if value < 0:
        raise ConfigurationError(f"AI_TIMEOUT_SECONDS não pode ser negativo: {raw!r}")
    return value or None


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return 3000
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT inválida: {raw!r}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT fora do intervalo: {port}")
    return port


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL inválido: {raw!r}")
    return level


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from ``env`` (defaults to ``os.environ`` plus ``.env``).

    Raises ``ConfigurationError`` when the credential for the selected
    provider is missing; the server must not start in that case.
    """
    if env is None:
        load_env_file()
        env = os.environ

    provider = (env.get("AI_PROVIDER") or "gemini").strip().lower()
    if provider not in PROVIDERS:
        raise ConfigurationError(f"AI_PROVIDER desconhecido: {provider!r} (use {', '.join(PROVIDERS)})")

    api_key = _first(env, _KEY_VARS[provider])
    if not api_key:
        names = " ou ".join(_KEY_VARS[provider])
        raise ConfigurationError(f"Variável de ambiente {names} não definida.")

    origins = _env_list(env.get("CORS_ORIGINS")) or ("*",)

    return Settings(
        api_key=api_key,
        provider=provider,
        model=_first(env, _MODEL_VARS[provider]) or DEFAULT_MODELS[provider],
        timeout_seconds=_parse_timeout(env.get("AI_TIMEOUT_SECONDS")),
        host=(env.get("HOST") or "0.0.0.0").strip(),
        port=_parse_port(env.get("PORT")),
        cors_origins=origins,
        client_keys=_env_list(env.get("RELAY_CLIENT_KEYS")),
        log_level=_parse_log_level(env.get("LOG_LEVEL")),
    )
