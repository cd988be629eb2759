"""
Command line interface for the padel billing application.

Read-only views over the saved session: the daily close, the day's matches,
payments and free slots.
"""

import argparse
import os
import sys
from datetime import date
from typing import Any

from tabulate import tabulate

from padelpro.config.logging import setup_logging
from padelpro.config.logging_config import load_logging_config
from padelpro.config.settings import ConfigurationManager
from padelpro.exceptions import PadelProError
from padelpro.services import reporting
from padelpro.services.scheduling import available_time_slots
from padelpro.services.storage import SnapshotStore
from padelpro.session import PadelProSession
from padelpro.utils.logging_utils import get_logger


def _money(value: float | None) -> str:
    return "-" if value is None else f"€{value:.2f}"

def _print_table(rows: list[list[Any]], headers: list[str], title: str) -> None:
    print(f"\n{title}")
    print("=" * 80)
    if rows:
        print(tabulate(rows, headers=headers, tablefmt="psql"))
    else:
        print("Nothing to show")

def cmd_summary(session: PadelProSession, args: argparse.Namespace) -> int:
    """Print the end-of-day summary."""
    summary = reporting.daily_summary(session.ledger.matches, session.log.all(), args.date)
    rows = [
        ["Matches", summary["total_matches"]],
        ["Players", summary["total_players"]],
        ["Revenue collected", _money(summary["total_revenue"])],
        ["Field charges", _money(summary["total_field"])],
        ["Bar charges", _money(summary["total_bar"])],
        ["Paid players", summary["paid_players"]],
        ["Pending players", summary["pending_players"]],
        ["Pending amount", _money(summary["pending_amount"])],
    ]
    rows.extend(
        [f"Payments by {method}", count]
        for method, count in summary["payment_methods"].items()
    )
    _print_table(rows, ["Metric", "Value"], f"Daily summary {summary['date']}")
    return 0

def cmd_matches(session: PadelProSession, args: argparse.Namespace) -> int:
    """Print the players on the day's matches."""
    frame = reporting.player_frame(session.ledger.matches, args.date)
    rows = [
        [
            row.court_id,
            f"{row.time}-{row.end_time}",
            row.responsible,
            row.player,
            "yes" if row.is_owner else "no",
            _money(row.total_field),
            _money(row.total_bar),
            _money(row.total_general),
            "paid" if row.is_paid else "pending",
            row.payment_method or "-",
        ]
        for row in frame.itertuples(index=False)
    ]
    headers = ["Court", "Time", "Responsible", "Player", "Owner", "Field", "Bar", "Total", "Status", "Method"]
    _print_table(rows, headers, f"Matches {args.date}")
    return 0

def cmd_payments(session: PadelProSession, args: argparse.Namespace) -> int:
    """Print the day's payments."""
    frame = reporting.transaction_frame(session.log.all(), args.date)
    rows = [
        [
            row.timestamp.strftime("%H:%M"),
            row.player,
            _money(row.amount),
            row.method,
            _money(row.cash_received) if row.method == "cash" else "-",
            _money(row.change) if row.method == "cash" else "-",
        ]
        for row in frame.itertuples(index=False)
    ]
    _print_table(rows, ["Time", "Player", "Amount", "Method", "Received", "Change"], f"Payments {args.date}")
    return 0

def cmd_slots(session: PadelProSession, args: argparse.Namespace) -> int:
    """Print the start-time grid for a court."""
    session.pricing.get_court(args.court)
    slots = available_time_slots(
        session.ledger.matches, args.court, args.date, session.pricing.default_duration
    )
    rows = [[slot.label, "booked" if slot.blocked else "free"] for slot in slots]
    _print_table(rows, ["Slot", "Status"], f"Court {args.court} on {args.date}")
    return 0

COMMANDS = {
    'summary': cmd_summary,
    'matches': cmd_matches,
    'payments': cmd_payments,
    'slots': cmd_slots,
}

def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value!r}, expected YYYY-MM-DD") from None

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='padelpro',
        description='Padel facility billing: daily close, matches, payments and free slots'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    parser.add_argument('--log-file', help='Write logs to this file')
    parser.add_argument('--config-dir', help='Directory holding config.yaml and pricing.yaml')
    parser.add_argument('--db', help='Snapshot database path (overrides configuration)')

    subparsers = parser.add_subparsers(dest='command')
    today = date.today().isoformat()

    for name, help_text in (
        ('summary', 'Show the end-of-day summary'),
        ('matches', "List the day's matches and players"),
        ('payments', "List the day's payments"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('--date', type=_iso_date, default=today, help='Day to report (default: today)')

    slots = subparsers.add_parser('slots', help='Show free and booked slots for a court')
    slots.add_argument('court', type=int, help='Court id')
    slots.add_argument('--date', type=_iso_date, default=today, help='Day to check (default: today)')

    return parser

def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config_manager = ConfigurationManager()
        config = config_manager.load_config(args.config_dir)

        logging_path = os.path.join(config.config_dir, "logging.yaml")
        logging_config = load_logging_config(logging_path)
        if not os.path.exists(logging_path):
            logging_config.default_level = config.log_level
        setup_logging(logging_config, verbose=args.verbose, log_file=args.log_file or config.log_file)

        store = SnapshotStore(args.db or config.db_path)
        session = PadelProSession(config_manager.pricing_table, store)
        return COMMANDS[args.command](session, args)
    except PadelProError as e:
        get_logger(__name__).error(str(e))
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
