"""Prompt construction shared by every provider."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Sequence

from options_advisor import config
from options_advisor.models.analysis import AnalysisRequest, Locale

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

# Market data is spliced in right before this token when the template has it.
STAGE_TWO_MARKERS: dict[Locale, str] = {
    Locale.ZH: "**阶段二",
    Locale.EN: "**Stage Two",
}

_LABELS: dict[Locale, dict[str, str]] = {
    Locale.ZH: {
        "heading": "## 当前市场数据",
        "source_heading": "### 数据来源",
        "disclaimer_heading": "### 免责声明",
        "table_header": "| 字段 | 值 |\n|---|---|",
        "analysis_type": "分析类型",
        "options": "期权 (Options)",
        "underlying": "标的股 (Underlying)",
        "ticker": "股票代码",
        "price": "当前股价",
        "indicators": "技术指标 (RSI / MACD)",
        "iv_rank": "IV 排名",
        "levels": "关键点位 (支撑/阻力)",
        "balance": "账户资金总数",
        "timestamp": "数据更新时间",
        "source_text": "本数据由用户在前端表单录入，未经过第三方数据源校验。",
        "disclaimer_text": (
            "以上信息仅用于策略生成的参考，不构成任何投资建议。"
            "模型输出可能存在偏差，请结合自身风险承受能力独立判断与执行。"
        ),
    },
    Locale.EN: {
        "heading": "## Current Market Data",
        "source_heading": "### Data Source",
        "disclaimer_heading": "### Disclaimer",
        "table_header": "| Field | Value |\n|---|---|",
        "analysis_type": "Analysis Type",
        "options": "Options",
        "underlying": "Underlying Stock",
        "ticker": "Ticker",
        "price": "Current Price",
        "indicators": "Indicators (RSI / MACD)",
        "iv_rank": "IV Rank",
        "levels": "Key Levels (Support/Resistance)",
        "balance": "Account Balance",
        "timestamp": "Data Timestamp",
        "source_text": (
            "Data provided by user via frontend form; "
            "not validated against third-party sources."
        ),
        "disclaimer_text": (
            "Information is for strategy reference only and does not constitute "
            "investment advice. Model outputs may be biased; exercise independent "
            "judgment and risk control."
        ),
    },
}

SYSTEM_PROMPT = """You are a senior options trader. Return ONLY valid JSON matching this structure. IMPORTANT: All string values (comments, cases, reasons, etc.) MUST be in the requested language (e.g. Chinese if requested).
{
  "macroScore": number (1-10),
  "macroComment": "string",
  "techScore": number (1-10),
  "techComment": "string",
  "mainConflict": "string",
  "bullCase": ["string", "string", "string"],
  "bearCase": ["string", "string", "string"],
  "verdict": {
    "direction": "Long" | "Short" | "Neutral",
    "strategyType": "string",
    "contract": "string",
    "expiration": "string",
    "strikes": "string",
    "entryReason": "string"
  },
  "tradeManagement": {
    "entry": "string",
    "target": "string",
    "stop": "string"
  }
}"""


def load_template(locale: Locale, path: str | Path | None = None) -> str:
    """Read the instruction template; PROMPT_TEMPLATE_PATH overrides the packaged one."""
    path = path or config.PROMPT_TEMPLATE_PATH or PROMPTS_DIR / f"prompt.{locale.value}.md"
    return Path(path).read_text(encoding="utf-8")


def stage_two_markers(locale: Locale) -> list[str]:
    """Markers to splice before, most preferred first.

    A PROMPT_TEMPLATE_PATH template is shared by both locales and carries only
    one marker, so with an override either locale's marker is accepted.
    """
    markers = [STAGE_TWO_MARKERS[locale]]
    if config.PROMPT_TEMPLATE_PATH:
        markers += [m for loc, m in STAGE_TWO_MARKERS.items() if loc is not locale]
    return markers


def iso_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def labels(locale: Locale) -> dict[str, str]:
    return _LABELS[locale]


def analysis_type_field(request: AnalysisRequest, locale: Locale) -> tuple[str, str]:
    lb = _LABELS[locale]
    return lb["analysis_type"], lb[request.analysis_type]


def market_data_fields(
    request: AnalysisRequest, locale: Locale, now: datetime | None = None
) -> list[tuple[str, str]]:
    """Ordered (label, value) rows; the timestamp row is always last."""
    lb = _LABELS[locale]
    r = request
    return [
        (lb["ticker"], r.ticker or "-"),
        (lb["price"], r.price or "-"),
        (lb["indicators"], f"{r.rsi or '-'} / {r.macd or '-'}"),
        (lb["iv_rank"], r.iv_rank or "-"),
        (lb["levels"], f"{r.support or '-'} / {r.resistance or '-'}"),
        (lb["balance"], f"${r.account_balance or config.ACCOUNT_BALANCE}"),
        (lb["timestamp"], iso_timestamp(now)),
    ]


def market_data_section(fields: Iterable[tuple[str, str]], locale: Locale) -> str:
    lb = _LABELS[locale]
    rows = "\n".join(f"| {k} | {v} |" for k, v in fields)
    return (
        f"\n{lb['heading']}\n\n{lb['table_header']}\n{rows}\n\n"
        f"{lb['source_heading']}\n\n{lb['source_text']}\n\n"
        f"{lb['disclaimer_heading']}\n\n{lb['disclaimer_text']}\n"
    )


def build_prompt(
    request: AnalysisRequest,
    template: str,
    extra_fields: Sequence[tuple[str, str]] = (),
    now: datetime | None = None,
) -> str:
    """Splice the market-data section into the template.

    extra_fields are rows an adapter wants ahead of the standard ones.
    """
    locale = request.locale
    fields = [*extra_fields, *market_data_fields(request, locale, now)]
    section = market_data_section(fields, locale)

    for marker in stage_two_markers(locale):
        idx = template.find(marker)
        if idx != -1:
            return f"{template[:idx]}\n{section}\n{template[idx:]}"
    return f"{template}\n{section}"
