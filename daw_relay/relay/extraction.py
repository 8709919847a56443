from __future__ import annotations

"""Turn a free-text model reply into a bounded parameter set.

The extractor is a heuristic: it takes everything from the first ``{`` to the
last ``}``. It assumes the model emits a single JSON object and no other
braces in the surrounding prose. When the prose does contain braces the
candidate normally fails to parse and the request reports ``ParseError``; it
never crashes. Markdown fences around the object are dropped as a side effect.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..errors import ExtractionError, ParseError
from .parameters import (
    SENTIMENT_DESCRIPTION_FALLBACK,
    SENTIMENT_SCORE,
    ParameterSpec,
    ParameterTable,
    format_number,
)


def extract_json_candidate(reply: str) -> str:
    text = reply or ""
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or first >= last:
        raise ExtractionError(detail=f"no brace span in reply ({len(text)} chars)")
    return text[first : last + 1]


def parse_candidate(candidate: str) -> Dict[str, Any]:
    try:
        doc = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        # deeply nested replies exhaust the decoder stack
        raise ParseError(detail=f"json: {type(e).__name__}: {e}"[:300]) from e
    if not isinstance(doc, dict):
        raise ParseError(detail="top-level JSON must be an object")
    return doc


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(value, maximum))


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def normalize_value(value: Any, spec: ParameterSpec) -> float:
    if not _is_number(value):
        return float(spec.default)
    # ints are clamped before the float conversion so huge literals cannot overflow
    return float(clamp(value, spec.minimum, spec.maximum))


def normalize(parsed: Mapping[str, Any], table: ParameterTable) -> Dict[str, float]:
    """Exactly one entry per table identifier, each inside its bounds.

    Missing or non-numeric values fall back to the parameter default; keys the
    table does not know are dropped.
    """
    return {spec.identifier: normalize_value(parsed.get(spec.identifier), spec) for spec in table.specs}


@dataclass(frozen=True)
class SentimentResult:
    score: float
    magnitude: float
    description: str

    @property
    def message(self) -> str:
        return f"Sentimento: {self.description}, Pontuação: {format_number(self.score)}"

    def to_payload(self) -> Dict[str, Any]:
        return {"score": self.score, "magnitude": self.magnitude, "message": self.message}


def shape_sentiment(parsed: Mapping[str, Any]) -> SentimentResult:
    score = normalize_value(parsed.get(SENTIMENT_SCORE.identifier), SENTIMENT_SCORE)
    description = parsed.get("description")
    if not isinstance(description, str) or not description.strip():
        description = SENTIMENT_DESCRIPTION_FALLBACK
    return SentimentResult(score=score, magnitude=abs(score), description=description.strip())
