"""
Daily and financial summaries over the ledger and the transaction log.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

import pandas as pd

from padelpro.models.match import Match
from padelpro.models.payment import PaymentMethod, PaymentTransaction
from padelpro.utils.time_utils import to_day

PLAYER_COLUMNS = [
    "match_id",
    "court_id",
    "time",
    "end_time",
    "responsible",
    "player_id",
    "player",
    "is_owner",
    "total_field",
    "total_bar",
    "total_general",
    "is_paid",
    "payment_method",
    "pending_amount",
]

TRANSACTION_COLUMNS = ["id", "timestamp", "player", "amount", "method", "cash_received", "change", "match_id"]


def player_frame(matches: Iterable[Match], day: date | datetime | str) -> pd.DataFrame:
    """One row per named player on the given day's matches."""
    day = to_day(day)
    rows = [
        {
            "match_id": match.id,
            "court_id": match.court_id,
            "time": match.time,
            "end_time": match.end_time,
            "responsible": match.responsible,
            "player_id": player.id,
            "player": player.name,
            "is_owner": player.is_owner,
            "total_field": player.total_field,
            "total_bar": player.total_bar,
            "total_general": player.total_general,
            "is_paid": player.is_paid,
            "payment_method": player.payment_method.value if player.payment_method else None,
            "pending_amount": player.outstanding,
        }
        for match in matches
        if to_day(match.date) == day
        for player in match.named_players
    ]
    return pd.DataFrame(rows, columns=PLAYER_COLUMNS)


def transaction_frame(transactions: Iterable[PaymentTransaction], day: date | datetime | str | None = None) -> pd.DataFrame:
    """Transactions as a frame, optionally limited to one calendar day."""
    selected = list(transactions)
    if day is not None:
        day = to_day(day)
        selected = [t for t in selected if t.timestamp.date() == day]
    rows = [
        {
            "id": t.id,
            "timestamp": t.timestamp,
            "player": t.player_name,
            "amount": t.amount,
            "method": t.method.value,
            "cash_received": t.cash_received,
            "change": t.change,
            "match_id": t.match_id,
        }
        for t in selected
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def daily_summary(
    matches: Iterable[Match],
    transactions: Iterable[PaymentTransaction],
    day: date | datetime | str
) -> dict[str, Any]:
    """Figures for the end-of-day close.

    Revenue comes from the transactions recorded that day; field, bar and
    pending totals come from the players on that day's matches.
    """
    matches = [match for match in matches if to_day(match.date) == to_day(day)]
    players = player_frame(matches, day)
    payments = transaction_frame(transactions, day)

    paid_players = int(players["is_paid"].sum()) if not players.empty else 0
    unpaid = players[~players["is_paid"].astype(bool)] if not players.empty else players
    method_counts = payments["method"].value_counts() if not payments.empty else pd.Series(dtype=int)

    return {
        "date": to_day(day).isoformat(),
        "total_matches": len(matches),
        "total_players": len(players),
        "total_revenue": round(float(payments["amount"].sum()), 2) if not payments.empty else 0.0,
        "total_field": round(float(players["total_field"].sum()), 2) if not players.empty else 0.0,
        "total_bar": round(float(players["total_bar"].sum()), 2) if not players.empty else 0.0,
        "paid_players": paid_players,
        "pending_players": len(players) - paid_players,
        "pending_amount": round(float(unpaid["pending_amount"].sum()), 2) if not unpaid.empty else 0.0,
        "payment_methods": {
            method.value: int(method_counts.get(method.value, 0)) for method in PaymentMethod
        },
    }


def financial_summary(transactions: Iterable[PaymentTransaction], day: date | datetime | str) -> pd.DataFrame:
    """Collected revenue per payment method for one day."""
    payments = transaction_frame(transactions, day)
    summary = (
        payments.groupby("method")["amount"]
        .agg(["count", "sum"])
        .reindex([method.value for method in PaymentMethod], fill_value=0)
        .rename(columns={"count": "transactions", "sum": "amount"})
    )
    summary["transactions"] = summary["transactions"].astype(int)
    summary["amount"] = summary["amount"].astype(float).round(2)
    summary.index.name = "method"
    return summary


def next_match(matches: Iterable[Match], now: datetime | None = None) -> Match | None:
    """Earliest active match today that has not started yet."""
    now = now or datetime.now()
    upcoming = [
        match
        for match in matches
        if not match.is_completed
        and to_day(match.date) == now.date()
        and datetime.fromisoformat(f"{match.date}T{match.time}") > now
    ]
    return min(upcoming, key=lambda match: match.time, default=None)
