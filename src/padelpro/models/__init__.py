"""
Models package for the padel billing application.
Contains data models for courts, players, matches and payments.
"""

from .catalog import BarProduct, Court, CourtCategory, PricingTable, ShareOption
from .match import Match
from .payment import FULL_MATCH_PLAYER_ID, PaymentMethod, PaymentTransaction
from .player import BarItem, FieldConsumption, Player

__all__ = [
    'FULL_MATCH_PLAYER_ID',
    'BarItem',
    'BarProduct',
    'Court',
    'CourtCategory',
    'FieldConsumption',
    'Match',
    'PaymentMethod',
    'PaymentTransaction',
    'Player',
    'PricingTable',
    'ShareOption',
]
