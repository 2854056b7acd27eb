"""
TradeHealth CLI - indicators and health checks for daily quotations.

Usage:
    python cli.py indicators FILE [--format FORMAT] [--currency CURRENCY]
    python cli.py check FILE --start DATE [--profile PROFILE] [--format FORMAT] [--by-date]
    python cli.py rank FILE [FILE ...] [--format FORMAT]

FILE is a CSV file with the columns date, open, high, low, close and volume.
The file name without extension is used as the symbol.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from adapters import CsvQuotationSource
from config import ConfigError, TradeHealthConfig, load_config
from domain import Currency, HealthCheckError, HealthCheckProfile, QuotationHistory
from domain.healthcheck import check_instrument, check_instrument_with_profile
from domain.indicators import calculate_history
from orchestration.scan import scan_instruments
from ports import QuotationSourceError
from presentation.json_api import (
    to_date_based_protocol,
    to_indicator_response,
    to_json,
    to_protocol_response,
)
from presentation.text import format_indicators, format_protocol

logger = logging.getLogger(__name__)


def _load_history(path: str, currency: str) -> QuotationHistory:
    print(f"  - Loading {path}", file=sys.stderr)
    return CsvQuotationSource(path, currency).load()


def _symbol(path: str) -> str:
    return Path(path).stem.upper()


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_indicators(args: argparse.Namespace, config: TradeHealthConfig) -> int:
    """Show the indicators of the most recent quotation."""
    history = _load_history(args.file, args.currency)
    calculate_history(history, config.indicators)

    indicator_set = history.indicator_at(0)
    if indicator_set is None:
        print(
            f"Error: {len(history)} quotations, at least {config.indicators.minimum_history_days} required",
            file=sys.stderr,
        )
        return 1

    day = history.most_recent.date
    if args.format == "json":
        _print_json(to_json(to_indicator_response(indicator_set, day, _symbol(args.file))))
    else:
        print(format_indicators(indicator_set, day, title=_symbol(args.file)))
    return 0


def cmd_check(args: argparse.Namespace, config: TradeHealthConfig) -> int:
    """Run a health check."""
    history = _load_history(args.file, args.currency)
    calculate_history(history, config.indicators)

    print("  - Running health check", file=sys.stderr)
    if args.profile:
        protocol = check_instrument_with_profile(history, args.start, args.profile, config.health_check)
    else:
        protocol = check_instrument(history, args.start, config.health_check)

    symbol = _symbol(args.file)
    if args.format == "json":
        if args.by_date:
            response = to_date_based_protocol(protocol, symbol, args.profile)
        else:
            response = to_protocol_response(protocol, symbol, args.profile)
        _print_json(to_json(response))
    else:
        title = f"{symbol} since {args.start.isoformat()}"
        if args.profile:
            title += f" ({args.profile})"
        print(format_protocol(protocol, title=title))
    return 0


def cmd_rank(args: argparse.Namespace, config: TradeHealthConfig) -> int:
    """Rank instruments by relative strength."""
    histories = {}
    for path in args.files:
        try:
            histories[_symbol(path)] = _load_history(path, args.currency)
        except QuotationSourceError as e:
            print(f"  ! Skipping {path}: {e}", file=sys.stderr)

    print("  - Calculating indicators", file=sys.stderr)
    status = scan_instruments(histories, config)
    ranked = sorted(status.ranked.items(), key=lambda item: item[1].rs_number, reverse=True)

    if args.format == "json":
        _print_json({
            "instruments": [
                to_json(to_indicator_response(indicator_set, histories[symbol].most_recent.date, symbol))
                for symbol, indicator_set in ranked
            ],
            "warnings": status.warnings,
            "errors": status.errors,
        })
    else:
        print("| Symbol | RS | RS 52w high | RS up/down volume | RS percent sum |")
        print("|--------|----|-------------|-------------------|----------------|")
        for symbol, s in ranked:
            print(
                f"| {symbol} | {s.rs_number} | {s.rs_number_distance_52w_high} "
                f"| {s.rs_number_up_down_volume_ratio} | {s.rs_percent_sum} |"
            )
    return 0 if ranked else 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tradehealth",
        description="Technical indicators and health checks for daily quotations",
    )
    parser.add_argument("--config", help="Path to a TOML config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    currencies = [c.value for c in Currency]

    # Indicators command
    indicators_parser = subparsers.add_parser("indicators", help="Show indicators of the most recent day")
    indicators_parser.add_argument("file", help="CSV file with daily quotations")
    indicators_parser.add_argument("-f", "--format", choices=["text", "json"], default="text", help="Output format")
    indicators_parser.add_argument("--currency", choices=currencies, default="USD", help="Quotation currency")
    indicators_parser.set_defaults(func=cmd_indicators)

    # Check command
    check_parser = subparsers.add_parser("check", help="Run a health check")
    check_parser.add_argument("file", help="CSV file with daily quotations")
    check_parser.add_argument(
        "-s", "--start",
        type=date.fromisoformat,
        required=True,
        help="First day to check (YYYY-MM-DD)",
    )
    check_parser.add_argument(
        "-p", "--profile",
        choices=[p.value for p in HealthCheckProfile],
        help="Run a single profile instead of the core profiles",
    )
    check_parser.add_argument("-f", "--format", choices=["text", "json"], default="text", help="Output format")
    check_parser.add_argument("--by-date", action="store_true", help="Group JSON output by day")
    check_parser.add_argument("--currency", choices=currencies, default="USD", help="Quotation currency")
    check_parser.set_defaults(func=cmd_check)

    # Rank command
    rank_parser = subparsers.add_parser("rank", help="Rank instruments by relative strength")
    rank_parser.add_argument("files", nargs="+", help="CSV files, one per instrument")
    rank_parser.add_argument("-f", "--format", choices=["text", "json"], default="text", help="Output format")
    rank_parser.add_argument("--currency", choices=currencies, default="USD", help="Quotation currency")
    rank_parser.set_defaults(func=cmd_rank)

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return args.func(args, config)
    except (QuotationSourceError, HealthCheckError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
