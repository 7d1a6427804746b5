"""Tests for the request/result schema."""

import pytest
from pydantic import ValidationError

from options_advisor.models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    Direction,
    Locale,
    Verdict,
)


@pytest.mark.parametrize(
    "language,expected",
    [
        ("Chinese", Locale.ZH),
        ("chinese (simplified)", Locale.ZH),
        ("Traditional CHINESE", Locale.ZH),
        ("English", Locale.EN),
        ("Japanese", Locale.EN),
        ("", Locale.EN),
    ],
)
def test_locale_from_language(language, expected):
    assert Locale.from_language(language) is expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Long", Direction.LONG),
        ("LONG calls", Direction.LONG),
        ("看多", Direction.LONG),
        ("Short", Direction.SHORT),
        ("偏向看空", Direction.SHORT),
        ("sideways", Direction.NEUTRAL),
        ("", Direction.NEUTRAL),
    ],
)
def test_direction_classify(text, expected):
    assert Direction.classify(text) is expected


def test_request_is_immutable(request_en):
    with pytest.raises(ValidationError):
        request_en.ticker = "MSFT"


def test_request_accepts_camel_case_keys():
    req = AnalysisRequest.model_validate(
        {"ticker": "NVDA", "ivRank": "40", "analysisType": "underlying", "apiKey": "k"}
    )
    assert req.iv_rank == "40"
    assert req.analysis_type == "underlying"
    assert req.api_key == "k"
    assert req.model is None


def test_request_rejects_unknown_analysis_type():
    with pytest.raises(ValidationError):
        AnalysisRequest(analysis_type="futures")


def test_result_defaults_are_empty():
    r = AnalysisResult()
    assert r.macro_score == 0
    assert r.bull_case == []
    assert r.verdict.direction is Direction.NEUTRAL
    assert r.trade_management.entry == ""
    assert r.raw_response == ""


def test_verdict_coerces_non_canonical_direction():
    assert Verdict(direction="bullish long").direction is Direction.LONG
    assert Verdict(direction="Short").direction is Direction.SHORT


def test_result_dumps_camel_case():
    dumped = AnalysisResult(macro_score=5).model_dump(by_alias=True)
    assert dumped["macroScore"] == 5
    assert "tradeManagement" in dumped
    assert "rawResponse" in dumped


def test_result_tolerates_nulls_and_near_miss_types():
    r = AnalysisResult.model_validate(
        {
            "macroScore": "7.5",
            "techScore": None,
            "bullCase": "single point",
            "bearCase": None,
            "verdict": {"direction": None, "contract": 3},
            "tradeManagement": "see notes",
        }
    )
    assert r.macro_score == 7.5
    assert r.tech_score == 0
    assert r.bull_case == ["single point"]
    assert r.bear_case == []
    assert r.verdict.direction is Direction.NEUTRAL
    assert r.verdict.contract == "3"
    assert r.trade_management.entry == ""
