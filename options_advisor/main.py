"""Options Advisor — CLI entry point.

Commands:
    analyze TICKER            Ask the configured LLM for a trade recommendation
    analyze TICKER --dry-run  Print the prompt without calling the LLM
    test-connection           Check the stored API key against the provider
    models                    List models available to the stored API key
"""

from __future__ import annotations

import argparse
import logging
import sys

from options_advisor import config
from options_advisor.display import print_result, print_result_json
from options_advisor.errors import AdvisorError
from options_advisor.llm.factory import available_providers, get_llm_client
from options_advisor.models.analysis import AnalysisRequest

log = logging.getLogger("main")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_request(args: argparse.Namespace) -> AnalysisRequest:
    """Merge CLI arguments with the stored settings."""
    provider = args.provider or config.LLM_PROVIDER
    return AnalysisRequest(
        ticker=args.ticker,
        price=args.price,
        analysis_type=args.type,
        rsi=args.rsi,
        macd=args.macd,
        iv_rank=args.iv_rank,
        support=args.support,
        resistance=args.resistance,
        account_balance=args.balance or config.ACCOUNT_BALANCE,
        language=args.language or config.LANGUAGE,
        api_key=config.api_key_for(provider),
        provider=provider,
        model=args.model or config.LLM_MODEL or None,
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    request = build_request(args)
    llm = get_llm_client(request.provider)

    if args.dry_run:
        print("\n--- DRY RUN: prompt (no LLM call) ---\n")
        print(llm.build_prompt(request))
        return 0

    if not request.api_key:
        log.warning(f"No API key configured for {request.provider}")

    result = llm.analyze(request)
    if args.json:
        print_result_json(result)
    else:
        print_result(request.ticker, result)
    return 0


def cmd_test_connection(args: argparse.Namespace) -> int:
    provider = args.provider or config.LLM_PROVIDER
    ok = get_llm_client(provider).test_connection(config.api_key_for(provider))
    print(f"{provider}: {'OK' if ok else 'FAILED'}")
    return 0 if ok else 1


def cmd_models(args: argparse.Namespace) -> int:
    provider = args.provider or config.LLM_PROVIDER
    for m in get_llm_client(provider).fetch_models(config.api_key_for(provider)):
        print(m)
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Options Advisor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze_p = sub.add_parser("analyze", help="Run LLM trade analysis")
    analyze_p.add_argument("ticker")
    analyze_p.add_argument("--price", default="")
    analyze_p.add_argument("--type", choices=["options", "underlying"], default="options")
    analyze_p.add_argument("--rsi", default="")
    analyze_p.add_argument("--macd", default="")
    analyze_p.add_argument("--iv-rank", default="")
    analyze_p.add_argument("--support", default="")
    analyze_p.add_argument("--resistance", default="")
    analyze_p.add_argument("--balance", default="", help="Account balance in USD")
    analyze_p.add_argument("--language", default="", help="e.g. English, Chinese")
    analyze_p.add_argument("--provider", choices=available_providers())
    analyze_p.add_argument("--model", default="")
    analyze_p.add_argument("--json", action="store_true", help="Print the result as JSON")
    analyze_p.add_argument(
        "--dry-run", action="store_true",
        help="Print the prompt without calling the LLM"
    )

    test_p = sub.add_parser("test-connection", help="Check the stored API key")
    test_p.add_argument("--provider", choices=available_providers())

    models_p = sub.add_parser("models", help="List available models")
    models_p.add_argument("--provider", choices=available_providers())

    return parser


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    args = make_parser().parse_args(argv)

    commands = {
        "analyze": cmd_analyze,
        "test-connection": cmd_test_connection,
        "models": cmd_models,
    }
    try:
        return commands[args.command](args)
    except AdvisorError as e:
        log.error(str(e))
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
