from __future__ import annotations

"""Error taxonomy shared by the relay routes.

Every failure that can reach a caller is a ``RelayError``. The ``kind`` is a
stable, machine-readable string; ``message`` is the human-readable text shown
to the DAW user (Portuguese, like the rest of the frontend).
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    kind: str = "relay_error"
    status_code: int = 500
    default_message: str = "Erro interno do servidor."

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None) -> None:
        self.message = message or self.default_message
        # internal detail for logs, never sent to the caller
        self.detail = detail
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind}


class ValidationError(RelayError):
    kind = "validation_error"
    status_code = 400
    default_message = "Requisição inválida."


class ConfigurationError(RelayError):
    kind = "configuration_error"
    status_code = 500
    default_message = "Configuração do servidor inválida."


class ClientNotAllowed(RelayError):
    kind = "client_not_allowed"
    status_code = 403
    default_message = "Cliente não autorizado."


class InvocationError(RelayError):
    kind = "invocation_failed"
    status_code = 500
    default_message = "Erro ao se comunicar com a API de IA. Verifique sua chave API e logs."


class AuthError(InvocationError):
    kind = "auth_failed"
    status_code = 401
    default_message = "A chave da API de IA foi rejeitada pelo provedor."


class InvocationTimeout(InvocationError):
    kind = "invocation_timeout"
    default_message = "A API de IA não respondeu a tempo. Por favor, tente novamente."


class ExtractionError(RelayError):
    kind = "no_json_found"
    status_code = 500
    default_message = "Não foi possível encontrar um JSON válido na resposta da IA."


class ParseError(RelayError):
    kind = "invalid_json"
    status_code = 500
    default_message = "Erro ao processar a resposta da IA. Formato inesperado."
