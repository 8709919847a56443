from __future__ import annotations
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings, load_settings
from .errors import ConfigurationError, RelayError, ValidationError
from .providers.client import ModelClient, build_client
from .relay.router import router as relay_router

log = logging.getLogger("relay.app")

LIVENESS_TEXT = "Infinit DAW AI Backend is running!"


async def _relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON or wrong field types: same shape as our own 400s
    log.info("invalid request on %s: %s", request.url.path, exc.errors())
    err = ValidationError("Corpo da requisição inválido.")
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def create_app(settings: Optional[Settings] = None, client: Optional[ModelClient] = None) -> FastAPI:
    """Build the relay app.

    ``settings`` default to the environment (raising ``ConfigurationError``
    when the model credential is missing). ``client`` defaults to the provider
    client for those settings; tests pass a fake here.
    """
    if settings is None:
        settings = load_settings()
    if client is None:
        client = build_client(settings)

    app = FastAPI(
        title="DAW AI Relay",
        description="Relays DAW prompts to a generative model and returns bounded effect settings",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.model_client = client

    # "*" for development, explicit origins per deployment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RelayError, _relay_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(relay_router)

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        return LIVENESS_TEXT

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    log.info("relay app created: %s", settings.describe())
    return app


def run() -> None:
    """Console entry point: load config, refuse to start without a credential."""
    import uvicorn  # type: ignore

    # level is applied once LOG_LEVEL has been validated
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings()
        app = create_app(settings)
    except ConfigurationError as e:
        log.critical("Falha ao inicializar o cliente de IA: %s", e.message)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    log.info("AI Backend listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
