"""Entry point for the team health check service and terminal client."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone

import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from teamhealth.client.board import HealthCheckBoard
from teamhealth.client.client import HealthCheckClient
from teamhealth.config import settings
from teamhealth.records.models import FEELINGS
from teamhealth.records.validation import parse_instant, to_instant_string

console = Console()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)


def run_server() -> None:
    """Start the FastAPI server."""
    console.print(Panel("Starting Team Health Check server", style="bold green"))
    uvicorn.run(
        "teamhealth.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )


def _local_time(instant: str) -> str:
    parsed = parse_instant(instant)
    if parsed is None:
        return instant
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M")


def render_board(board: HealthCheckBoard) -> None:
    if board.error:
        console.print(f"[bold red]{board.error}[/bold red]")

    table = Table(title="Recent Health Checks")
    table.add_column("Name", style="bold")
    table.add_column("Feeling")
    table.add_column("Date", style="dim")
    for check in board.records:
        table.add_row(check.name, check.feeling, _local_time(check.date))
    console.print(table)


def _board() -> HealthCheckBoard:
    board = HealthCheckBoard(client=HealthCheckClient(settings.api_base_url))
    with console.status("[bold green]Loading..."):
        board.load()
    return board


def run_list() -> int:
    board = _board()
    render_board(board)
    return 1 if board.error else 0


def run_add(name: str, feeling: str, date: str | None) -> int:
    board = _board()
    when = date if date is not None else to_instant_string(datetime.now(timezone.utc))

    with console.status("[bold green]Submitting..."):
        record = board.submit(name, feeling, when)

    for err in board.field_errors:
        console.print(f"[red]{err.field}: {err.message}[/red]")
    render_board(board)
    return 0 if record else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Team Health Check")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Start the API server")
    sub.add_parser("list", help="Show recent health checks")

    add_parser = sub.add_parser("add", help="Submit a health check")
    add_parser.add_argument("--name", required=True)
    add_parser.add_argument(
        "--feeling", required=True, help=f"e.g. {', '.join(FEELINGS)}"
    )
    add_parser.add_argument("--date", help="ISO-8601 date/time (default: now)")

    args = parser.parse_args()

    if args.command == "serve":
        run_server()
    elif args.command == "list":
        sys.exit(run_list())
    elif args.command == "add":
        sys.exit(run_add(args.name, args.feeling, args.date))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
