"""Analysis request/result schema shared by every provider."""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Score = Union[int, float]


class Locale(str, Enum):
    ZH = "zh"
    EN = "en"

    @classmethod
    def from_language(cls, language: str) -> "Locale":
        return cls.ZH if "chinese" in (language or "").lower() else cls.EN


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"
    NEUTRAL = "Neutral"

    @classmethod
    def classify(cls, text: str) -> "Direction":
        """Map free-form direction text (either locale) onto Long/Short/Neutral."""
        d = (text or "").lower()
        if any(k in d for k in ("long", "看多")):
            return cls.LONG
        if any(k in d for k in ("short", "看空")):
            return cls.SHORT
        return cls.NEUTRAL


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequest(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    ticker: str = ""
    price: str = ""
    analysis_type: Literal["options", "underlying"] = "options"
    rsi: str = ""
    macd: str = ""
    iv_rank: str = ""
    support: str = ""
    resistance: str = ""
    account_balance: str = ""
    language: str = "English"
    api_key: str = ""
    provider: str = "openai"
    model: str | None = None

    @property
    def locale(self) -> Locale:
        return Locale.from_language(self.language)


# Model output is not contractually typed: the coercions below turn nulls and
# near-miss types into the field's shape instead of rejecting the object.

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _to_score(v: object) -> Score:
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, str):
        m = _NUMBER_RE.search(v)
        if m:
            n = float(m.group())
            return int(n) if n.is_integer() else n
    return 0


def _to_text(v: object) -> str:
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, list):
        return "; ".join(_to_text(x) for x in v if x is not None)
    if isinstance(v, dict):
        return json.dumps(v, ensure_ascii=False)
    return str(v)


def _to_text_list(v: object) -> list[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [_to_text(x) for x in v if x is not None]
    text = _to_text(v)
    return [text] if text else []


class Verdict(_CamelModel):
    direction: Direction = Direction.NEUTRAL
    strategy_type: str = ""
    contract: str = ""
    expiration: str = ""
    strikes: str = ""
    entry_reason: str = ""

    @field_validator("direction", mode="before")
    @classmethod
    def coerce_direction(cls, v: object) -> object:
        if isinstance(v, Direction) or v in ("Long", "Short", "Neutral"):
            return v
        return Direction.classify(_to_text(v))

    @field_validator(
        "strategy_type", "contract", "expiration", "strikes", "entry_reason", mode="before"
    )
    @classmethod
    def coerce_text(cls, v: object) -> str:
        return _to_text(v)


class TradeManagement(_CamelModel):
    entry: str = ""
    target: str = ""
    stop: str = ""

    @field_validator("entry", "target", "stop", mode="before")
    @classmethod
    def coerce_text(cls, v: object) -> str:
        return _to_text(v)


class AnalysisResult(_CamelModel):
    macro_score: Score = 0
    macro_comment: str = ""
    tech_score: Score = 0
    tech_comment: str = ""
    main_conflict: str = ""
    bull_case: list[str] = Field(default_factory=list)
    bear_case: list[str] = Field(default_factory=list)
    verdict: Verdict = Field(default_factory=Verdict)
    trade_management: TradeManagement = Field(default_factory=TradeManagement)
    raw_response: str = ""
    # "json" when the model obeyed the schema, "narrative" for regex recovery
    parse_tier: Literal["json", "narrative"] = "json"

    @field_validator("macro_score", "tech_score", mode="before")
    @classmethod
    def coerce_score(cls, v: object) -> Score:
        return _to_score(v)

    @field_validator("macro_comment", "tech_comment", "main_conflict", mode="before")
    @classmethod
    def coerce_text(cls, v: object) -> str:
        return _to_text(v)

    @field_validator("bull_case", "bear_case", mode="before")
    @classmethod
    def coerce_text_list(cls, v: object) -> list[str]:
        return _to_text_list(v)

    @field_validator("verdict", mode="before")
    @classmethod
    def coerce_verdict(cls, v: object) -> object:
        if isinstance(v, (dict, Verdict)):
            return v
        # a bare "verdict": "Long" still carries the direction
        return {"direction": v} if isinstance(v, str) else {}

    @field_validator("trade_management", mode="before")
    @classmethod
    def coerce_trade_management(cls, v: object) -> object:
        return v if isinstance(v, (dict, TradeManagement)) else {}
