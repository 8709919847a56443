from __future__ import annotations
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ParameterSpec:
    """One tunable value the model may suggest.

    ``default`` is what the caller gets when the model leaves the value out
    or returns something that is not a number. It must lie inside the bounds.
    """

    identifier: str
    minimum: float
    maximum: float
    default: float = 0.0
    unit: str = ""

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"{self.identifier}: minimum {self.minimum} > maximum {self.maximum}")
        if not self.minimum <= self.default <= self.maximum:
            raise ValueError(f"{self.identifier}: default {self.default} outside [{self.minimum}, {self.maximum}]")


@dataclass(frozen=True)
class ParameterTable:
    name: str
    response_key: str
    device: str
    specs: Tuple[ParameterSpec, ...]
    example: Tuple[Tuple[str, float], ...]

    def __post_init__(self) -> None:
        ids = [s.identifier for s in self.specs]
        if len(ids) != len(set(ids)):
            raise ValueError(f"{self.name}: duplicate parameter identifiers")
        if [k for k, _ in self.example] != ids:
            raise ValueError(f"{self.name}: example keys must match the parameter identifiers")

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return tuple(s.identifier for s in self.specs)

    def example_dict(self) -> Dict[str, Any]:
        return dict(self.example)


EQ_FREQUENCIES: Tuple[int, ...] = (32, 64, 125, 250, 500, 1000, 2000, 4000, 8000, 16000)
EQ_GAIN_LIMIT_DB = 18.0

EQ_TABLE = ParameterTable(
    name="eq",
    response_key="eqSettings",
    device="um equalizador gráfico de 10 bandas",
    specs=tuple(
        ParameterSpec(str(freq), -EQ_GAIN_LIMIT_DB, EQ_GAIN_LIMIT_DB, 0.0, "dB")
        for freq in EQ_FREQUENCIES
    ),
    example=(
        ("32", 5.0),
        ("64", -2.5),
        ("125", 0.0),
        ("250", 3.0),
        ("500", -1.0),
        ("1000", 2.0),
        ("2000", 0.0),
        ("4000", -3.0),
        ("8000", 1.5),
        ("16000", 4.0),
    ),
)

# Ranges and defaults match the Web Audio DynamicsCompressorNode the
# frontend drives.
COMPRESSOR_TABLE = ParameterTable(
    name="compressor",
    response_key="compressorSettings",
    device="um compressor dinâmico",
    specs=(
        ParameterSpec("threshold", -100.0, 0.0, -24.0, "dB"),
        ParameterSpec("ratio", 1.0, 20.0, 12.0, ":1"),
        ParameterSpec("knee", 0.0, 40.0, 30.0, "dB"),
        ParameterSpec("attack", 0.0, 1.0, 0.003, "s"),
        ParameterSpec("release", 0.01, 1.0, 0.25, "s"),
    ),
    example=(
        ("threshold", -18.0),
        ("ratio", 4.0),
        ("knee", 6.0),
        ("attack", 0.01),
        ("release", 0.2),
    ),
)

SENTIMENT_SCORE = ParameterSpec("score", -1.0, 1.0, 0.0)
SENTIMENT_DESCRIPTION_FALLBACK = "indefinido"


def format_number(value: float) -> str:
    """Render a number the way a JSON/JS client prints it.

    ``18.0`` -> ``18``, ``1e-05`` -> ``0.00001``; exponent notation only below
    1e-6 or from 1e21 up, as in JavaScript.
    """
    if isinstance(value, int) or not math.isfinite(value):
        return str(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        mantissa, _, exponent = repr(value).partition("e")
        sign = "+" if int(exponent) > 0 else "-"
        return f"{mantissa}e{sign}{abs(int(exponent))}"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
