from __future__ import annotations

"""Per-request flow shared by every relay route.

validate -> build prompt -> invoke model -> extract JSON -> parse -> normalize.
There are no retries: the first failure is logged once and raised as a
``RelayError`` for the exception handler to map.
"""

import logging
import uuid
from typing import Any, Dict

from ..errors import RelayError
from ..providers.client import ModelClient
from .extraction import SentimentResult, extract_json_candidate, normalize, parse_candidate, shape_sentiment
from .parameters import ParameterTable
from .prompts import build_parameter_prompt, build_sentiment_prompt


log = logging.getLogger("relay.pipeline")


def _run_id() -> str:
    return uuid.uuid4().hex[:12]


async def _reply_to_object(client: ModelClient, prompt: str, run_id: str, label: str) -> Dict[str, Any]:
    try:
        raw = await client.invoke(prompt)
    except RelayError as e:
        log.error("[%s] %s: invocation failed (%s): %s", run_id, label, e.kind, e.detail or e.message)
        raise
    log.debug("[%s] %s: raw reply: %r", run_id, label, raw)

    try:
        parsed = parse_candidate(extract_json_candidate(raw))
    except RelayError as e:
        log.warning("[%s] %s: %s: %s; reply=%r", run_id, label, e.kind, e.detail, raw[:500])
        raise
    return parsed


async def suggest_parameters(client: ModelClient, table: ParameterTable, description: str) -> Dict[str, float]:
    run_id = _run_id()
    prompt = build_parameter_prompt(description, table)
    log.info("[%s] %s: prompt built (%d chars)", run_id, table.name, len(prompt))

    parsed = await _reply_to_object(client, prompt, run_id, table.name)

    settings = normalize(parsed, table)
    dropped = sorted(k for k in parsed if k not in settings)
    missing = [k for k in table.identifiers if k not in parsed]
    if dropped or missing:
        log.info("[%s] %s: dropped=%s defaulted=%s", run_id, table.name, dropped, missing)
    return settings


async def analyze_sentiment(client: ModelClient, text: str) -> SentimentResult:
    run_id = _run_id()
    prompt = build_sentiment_prompt(text)
    log.info("[%s] sentiment: prompt built (%d chars)", run_id, len(prompt))

    parsed = await _reply_to_object(client, prompt, run_id, "sentiment")
    return shape_sentiment(parsed)
