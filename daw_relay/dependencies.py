from typing import Optional

from fastapi import Depends, Header, Request

from .config import Settings
from .errors import ClientNotAllowed, ConfigurationError
from .providers.client import ModelClient


CLIENT_KEY_HEADER = "X-Relay-Key"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_model_client(request: Request) -> ModelClient:
    client = getattr(request.app.state, "model_client", None)
    if client is None:
        raise ConfigurationError("Serviço de IA não inicializado.")
    return client


def require_allowed_client(
    settings: Settings = Depends(get_settings),
    relay_key: Optional[str] = Header(default=None, alias=CLIENT_KEY_HEADER),
) -> None:
    """Optional allow-list: only enforced when RELAY_CLIENT_KEYS is configured."""
    if not settings.client_keys:
        return
    if not relay_key or relay_key not in settings.client_keys:
        raise ClientNotAllowed()
