from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, Optional


# Request fields are optional on purpose: a missing value must surface as our
# own 400 with a readable message, not as a generic 422.
class SentimentIn(BaseModel):
    text: Optional[str] = None


class SuggestionIn(BaseModel):
    prompt: Optional[str] = Field(default=None, description="Free-text description of the desired sound")


class SentimentOut(BaseModel):
    score: float = Field(ge=-1, le=1)
    magnitude: float = Field(ge=0, le=1)
    message: str


class EqSettingsOut(BaseModel):
    eqSettings: Dict[str, float]


class CompressorSettings(BaseModel):
    threshold: float = Field(ge=-100, le=0)
    ratio: float = Field(ge=1, le=20)
    knee: float = Field(ge=0, le=40)
    attack: float = Field(ge=0, le=1)
    release: float = Field(ge=0.01, le=1)


class CompressorSettingsOut(BaseModel):
    compressorSettings: CompressorSettings


class ErrorOut(BaseModel):
    error: str
    kind: str
