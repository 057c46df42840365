"""Command-line interface for the holder map pipeline."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import AppConfig, load_config
from .errors import FetchError
from .formatting import format_holder_report, format_provider_table
from .interfaces import ProviderDirectory
from .logging_setup import configure_logging
from .models import DataSource, HolderMapSnapshot
from .providers import (
    ProviderDirectoryClient,
    available_networks,
    filter_by_network,
    visible_providers,
)
from .services import HolderMapService


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="holder-map",
        description="Top-holder bubble map and provider directory",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("holders", help="Fetch and print the top holders once")

    watch_parser = sub.add_parser("watch", help="Periodically refresh the top holders")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Refresh interval in minutes (overrides config)",
    )

    providers_parser = sub.add_parser("providers", help="List compute providers")
    providers_parser.add_argument(
        "--network",
        default="All",
        help="Only show providers on this network (default: All)",
    )
    providers_parser.add_argument(
        "--all",
        action="store_true",
        dest="show_all",
        help="Show every provider instead of the first page",
    )

    return parser


async def _show_providers(config: AppConfig, network: str, show_all: bool) -> int:
    client: ProviderDirectory = ProviderDirectoryClient(
        config.providers, timeout=config.ledger.request_timeout
    )
    try:
        providers = await client.fetch_providers()
    except FetchError as e:
        print(f"❌ Failed to fetch providers: {e}")
        return 1

    if network not in available_networks(providers):
        print(f"Unknown network '{network}'. Choose from: {', '.join(available_networks(providers))}")
        return 1

    filtered = filter_by_network(providers, network)
    shown = visible_providers(filtered, config.providers.initial_visible, show_all)
    print(format_provider_table(shown, hidden=len(filtered) - len(shown)))
    return 0


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit status."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    symbol = config.ledger.symbol

    def _print(snapshot: HolderMapSnapshot) -> None:
        print(format_holder_report(snapshot, symbol))

    if args.command == "holders":
        snapshot = await HolderMapService(config).refresh()
        _print(snapshot)
        return 1 if snapshot.session.data_source is DataSource.ERROR else 0
    if args.command == "watch":
        await HolderMapService(config).run_continuous(args.interval, on_update=_print)
        return 0
    if args.command == "providers":
        return await _show_providers(config, args.network, args.show_all)

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
