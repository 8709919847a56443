from __future__ import annotations
from fastapi import APIRouter, Depends

from ..dependencies import get_model_client, require_allowed_client
from ..providers.client import ModelClient
from .parameters import COMPRESSOR_TABLE, EQ_TABLE, ParameterTable
from .pipeline import analyze_sentiment, suggest_parameters
from .schemas import (
    CompressorSettingsOut,
    EqSettingsOut,
    ErrorOut,
    SentimentIn,
    SentimentOut,
    SuggestionIn,
)


_ERRORS = {
    400: {"model": ErrorOut},
    401: {"model": ErrorOut},
    403: {"model": ErrorOut},
    500: {"model": ErrorOut},
}

router = APIRouter(
    tags=["relay"],
    dependencies=[Depends(require_allowed_client)],
    responses=_ERRORS,
)


@router.post("/api/analyze-sentiment", response_model=SentimentOut)
async def sentiment(body: SentimentIn, client: ModelClient = Depends(get_model_client)):
    result = await analyze_sentiment(client, body.text)
    return result.to_payload()


def _suggestion_endpoint(table: ParameterTable):
    async def endpoint(body: SuggestionIn, client: ModelClient = Depends(get_model_client)):
        settings = await suggest_parameters(client, table, body.prompt)
        return {table.response_key: settings}

    endpoint.__name__ = f"apply_ai_{table.name}"
    return endpoint


# one handler per parameter table; the table alone decides prompt, bounds and envelope
router.add_api_route(
    "/apply-ai-eq",
    _suggestion_endpoint(EQ_TABLE),
    methods=["POST"],
    response_model=EqSettingsOut,
)
router.add_api_route(
    "/apply-ai-compressor",
    _suggestion_endpoint(COMPRESSOR_TABLE),
    methods=["POST"],
    response_model=CompressorSettingsOut,
)
