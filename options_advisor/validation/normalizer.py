"""Turn raw LLM text into an AnalysisResult.

Models are asked for strict JSON but do not always comply, so parsing is
two-tier: strict JSON first, then a labelled-line regex fallback that
recovers what it can from prose. The raw text is always kept.
"""

from __future__ import annotations

import json
import logging
import re

from options_advisor.models.analysis import (
    AnalysisResult,
    Direction,
    Locale,
    TradeManagement,
    Verdict,
)

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json)?[ \t]*\n?(.*?)\n?\s*```\s*$", re.DOTALL)

# field -> (english pattern, chinese pattern); scores capture the leading
# integer, every other pattern captures the rest of the labelled line
_NARRATIVE_PATTERNS: dict[str, tuple[str, str]] = {
    "macro_score": (r"Macro\s*Score[:：]\s*(\d+)", r"宏观评分[:：]\s*(\d+)"),
    "tech_score": (r"Technical\s*Score[:：]\s*(\d+)", r"技术评分[:：]\s*(\d+)"),
    "direction": (r"Direction[:：]\s*([^\n]+)", r"方向[:：]\s*([^\n]+)"),
    "strategy_type": (r"Strategy\s*Type[:：]\s*([^\n]+)", r"策略类型[:：]\s*([^\n]+)"),
    "contract": (r"Contract[:：]\s*([^\n]+)", r"合约类型[:：]\s*([^\n]+)"),
    "expiration": (r"Expiration[:：]\s*([^\n]+)", r"到期日[:：]\s*([^\n]+)"),
    "strikes": (r"Strikes[:：]\s*([^\n]+)", r"行权价[:：]\s*([^\n]+)"),
    "entry": (r"Entry[:：]\s*([^\n]+)", r"入场价\s*\(Entry\)[:：]\s*([^\n]+)"),
    "target": (r"Target[:：]\s*([^\n]+)", r"止盈\s*\(Target\)[:：]\s*([^\n]+)"),
    "stop": (r"Stop[:：]\s*([^\n]+)", r"止损\s*\(Stop\)[:：]\s*([^\n]+)"),
}


def strip_code_fence(text: str) -> str:
    m = _FENCE_RE.match(text)
    return (m.group(1) if m else text).strip()


def normalize(raw_text: str, locale: Locale | bool) -> AnalysisResult:
    """Parse raw model output. Never raises; falls back to narrative extraction."""
    if isinstance(locale, bool):
        locale = Locale.ZH if locale else Locale.EN
    raw_text = raw_text or ""

    try:
        data = json.loads(strip_code_fence(raw_text))
    except json.JSONDecodeError as e:
        log.warning(f"Strict JSON parse failed ({e.msg}), using narrative fallback")
        return parse_narrative(raw_text, locale)

    if not isinstance(data, dict):
        log.warning(f"Model returned a JSON {type(data).__name__}, using narrative fallback")
        return parse_narrative(raw_text, locale)

    for key in ("rawResponse", "raw_response", "parseTier", "parse_tier"):
        data.pop(key, None)
    # field validators coerce nulls and near-miss types, so a decoded object always fits
    result = AnalysisResult.model_validate(data)

    return result.model_copy(update={"raw_response": raw_text, "parse_tier": "json"})


def parse_narrative(text: str, locale: Locale) -> AnalysisResult:
    """Recover the labelled, line-oriented fields from free-form text."""
    idx = 1 if locale is Locale.ZH else 0
    flags = 0 if locale is Locale.ZH else re.IGNORECASE

    def pick(field: str) -> str:
        m = re.search(_NARRATIVE_PATTERNS[field][idx], text, flags)
        return m.group(1).strip() if m else ""

    def pick_int(field: str) -> int:
        v = pick(field)
        return int(v) if v else 0

    return AnalysisResult(
        macro_score=pick_int("macro_score"),
        tech_score=pick_int("tech_score"),
        verdict=Verdict(
            direction=Direction.classify(pick("direction")),
            strategy_type=pick("strategy_type"),
            contract=pick("contract"),
            expiration=pick("expiration"),
            strikes=pick("strikes"),
        ),
        trade_management=TradeManagement(
            entry=pick("entry"),
            target=pick("target"),
            stop=pick("stop"),
        ),
        raw_response=text,
        parse_tier="narrative",
    )
