"""Concise terminal output for analysis results."""

from __future__ import annotations

import json

from options_advisor.models.analysis import AnalysisResult, Direction


def print_result(ticker: str, result: AnalysisResult) -> None:
    v = result.verdict
    tm = result.trade_management
    arrow = {Direction.LONG: "▲", Direction.SHORT: "▼"}.get(v.direction, "■")

    print(f"\n{'='*70}")
    print(f"  {ticker.upper()}  |  {arrow} {v.direction.value.upper()}  "
          f"macro={result.macro_score}/10  tech={result.tech_score}/10")
    print(f"{'='*70}")

    if result.macro_comment:
        print(f"\n  Macro: {result.macro_comment}")
    if result.tech_comment:
        print(f"  Tech:  {result.tech_comment}")
    if result.main_conflict:
        print(f"  Conflict: {result.main_conflict}")

    if result.bull_case:
        print("\n  Bull case:")
        for b in result.bull_case:
            print(f"    + {b}")
    if result.bear_case:
        print("  Bear case:")
        for b in result.bear_case:
            print(f"    - {b}")

    print(f"\n  Strategy: {v.strategy_type or '-'}")
    print(f"    Contract: {v.contract or '-'}  exp={v.expiration or '-'}  "
          f"strikes={v.strikes or '-'}")
    if v.entry_reason:
        print(f"    Why: {v.entry_reason}")
    print(f"    Entry: {tm.entry or '-'}")
    print(f"    Target: {tm.target or '-'}")
    print(f"    Stop: {tm.stop or '-'}")

    if result.parse_tier == "narrative":
        print(f"\n{'─'*70}")
        print("  ⚠ Model did not return JSON; fields were recovered from text.")
        print("  Raw response:")
        print(result.raw_response[:2000])
        print(f"{'─'*70}")
    print()


def print_result_json(result: AnalysisResult) -> None:
    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
