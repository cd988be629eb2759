"""Identifier helpers."""

import uuid


def generate_id() -> str:
    """Return a short opaque identifier for matches, players and transactions."""
    return uuid.uuid4().hex[:12]
