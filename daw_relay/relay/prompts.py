from __future__ import annotations

"""Prompt builders.

The prompts are plain instructions asking the model for a bare JSON object.
They are deterministic for a given description and table.
"""

import json

from ..errors import ValidationError
from .parameters import ParameterSpec, ParameterTable, format_number


def _require_text(text: object, message: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(message)
    return text.strip()


def _bounds_line(spec: ParameterSpec) -> str:
    # EQ bands are keyed by frequency
    label = f"{spec.identifier} Hz" if spec.identifier.isdigit() else spec.identifier
    lo, hi = format_number(spec.minimum), format_number(spec.maximum)
    if spec.unit == ":1":
        return f"- {label}: entre {lo}:1 e {hi}:1"
    unit = f" {spec.unit}" if spec.unit else ""
    return f"- {label}: entre {lo}{unit} e {hi}{unit}"


def build_parameter_prompt(description: str, table: ParameterTable) -> str:
    description = _require_text(description, "Prompt é obrigatório.")

    keys = ", ".join(f'"{k}"' for k in table.identifiers)
    bounds = "\n".join(_bounds_line(s) for s in table.specs)
    example = json.dumps(table.example_dict(), indent=4)

    return (
        f"Eu tenho {table.device} com os seguintes parâmetros e limites:\n"
        f"{bounds}\n"
        f"Com base na seguinte descrição de áudio: \"{description}\", "
        f"forneça as configurações para cada um desses parâmetros.\n"
        f"Responda apenas com um objeto JSON, sem texto adicional, cujas chaves são exatamente: {keys}.\n"
        f"Exemplo:\n"
        f"{example}\n"
        f"Certifique-se de que os valores sejam numéricos (float ou int) e estejam dentro dos limites indicados."
    )


def build_sentiment_prompt(text: str) -> str:
    text = _require_text(text, "O texto é obrigatório para análise de sentimento.")
    return (
        "Analise o sentimento do seguinte texto e me dê uma pontuação de -1.0 (negativo) a 1.0 (positivo), "
        "e uma breve descrição do sentimento. "
        "Responda apenas com um JSON no formato: "
        "{\"score\": <valor_numerico>, \"description\": \"<texto_descritivo>\"}.\n"
        "Exemplo: {\"score\": 0.6, \"description\": \"positivo e entusiasmado\"}\n\n"
        f"Texto: \"{text}\""
    )
