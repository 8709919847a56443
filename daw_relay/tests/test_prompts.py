from __future__ import annotations
import json

import pytest

from daw_relay.errors import ValidationError
from daw_relay.relay.parameters import COMPRESSOR_TABLE, EQ_TABLE
from daw_relay.relay.prompts import build_parameter_prompt, build_sentiment_prompt


def test_parameter_prompt_is_deterministic() -> None:
    a = build_parameter_prompt("bateria mais brilhante", EQ_TABLE)
    b = build_parameter_prompt("bateria mais brilhante", EQ_TABLE)
    assert a == b


def test_eq_prompt_lists_bands_bounds_and_example() -> None:
    prompt = build_parameter_prompt("  voz mais quente  ", EQ_TABLE)
    assert '"voz mais quente"' in prompt
    for freq in EQ_TABLE.identifiers:
        assert f"- {freq} Hz: entre -18 dB e 18 dB" in prompt
    assert "apenas com um objeto JSON" in prompt
    start = prompt.index("Exemplo:\n") + len("Exemplo:\n")
    end = prompt.index("}", start) + 1
    assert json.loads(prompt[start:end]) == EQ_TABLE.example_dict()


def test_compressor_prompt_units() -> None:
    prompt = build_parameter_prompt("compressão suave para vocal", COMPRESSOR_TABLE)
    assert "- threshold: entre -100 dB e 0 dB" in prompt
    assert "- ratio: entre 1:1 e 20:1" in prompt
    assert "- attack: entre 0 s e 1 s" in prompt
    assert "- release: entre 0.01 s e 1 s" in prompt
    for key in COMPRESSOR_TABLE.identifiers:
        assert f'"{key}"' in prompt


@pytest.mark.parametrize("description", ["", "   ", None])
def test_empty_description_is_rejected(description) -> None:
    with pytest.raises(ValidationError) as exc:
        build_parameter_prompt(description, EQ_TABLE)
    assert exc.value.status_code == 400


def test_sentiment_prompt() -> None:
    prompt = build_sentiment_prompt("I love this.")
    assert 'Texto: "I love this."' in prompt
    assert '"score"' in prompt and '"description"' in prompt
    with pytest.raises(ValidationError):
        build_sentiment_prompt("")
