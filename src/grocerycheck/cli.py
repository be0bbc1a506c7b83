from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from grocerycheck import __version__
from grocerycheck.runner import SearchResult, StoreRecord, build_service


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _print_stores(console: Console, stores: list[StoreRecord]) -> None:
    for store in stores:
        marker = "in range" if store.in_range else "out of range"
        console.print(
            f"[bold]{store.chain}[/bold] {store.address} "
            f"({store.location.latitude:.5f}, {store.location.longitude:.5f}) {marker}"
        )


def _print_items(console: Console, result: SearchResult) -> None:
    table = Table("Chain", "Item", "Price", "Quantity", "Unit", "Distance")
    for item in result.items:
        table.add_row(
            item.chain,
            item.name,
            f"{item.price:.2f}" if item.price is not None else "-",
            f"{item.quantity:g}" if item.quantity is not None else "-",
            item.unit_of_measure,
            f"{item.distance:.1f}" if item.distance >= 0 else "-",
        )
    console.print(table)
    for error in result.errors:
        console.print(f"[yellow]{error}[/yellow]")


def main() -> None:
    parser = argparse.ArgumentParser(prog="grocerycheck")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    store = sub.add_parser("store")
    store.add_argument("--config", required=True)

    search = sub.add_parser("search")
    search.add_argument("--config", required=True)
    search.add_argument("term")

    args = parser.parse_args()
    configure_logging(args.verbose)

    console = Console()
    service = build_service(config_path=args.config)

    if args.command == "store":
        _print_stores(console, service.initialize())
        for error in service.init_errors:
            console.print(f"[yellow]{error}[/yellow]")
        return

    if args.command == "search":
        _print_items(console, service.search(args.term))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
