"""
dealerbrain Core - Pure Python hand evaluation and equity estimation.

This module contains the card model, the evaluator and the equity
estimators without any network dependencies.
"""

from dealerbrain.core.card import Card, Deck, DeckExhaustedError, Rank, Suit, parse_cards
from dealerbrain.core.hand import HandCategory, HandScore, evaluate, compare_hands, describe_hand
from dealerbrain.core.equity import EquityEstimator, MonteCarloResult, RangeTag, preflop_equity
from dealerbrain.core.rules import ActionType, Street, pot_odds

__all__ = [
    "Card",
    "Deck",
    "DeckExhaustedError",
    "Rank",
    "Suit",
    "parse_cards",
    "HandCategory",
    "HandScore",
    "evaluate",
    "compare_hands",
    "describe_hand",
    "EquityEstimator",
    "MonteCarloResult",
    "RangeTag",
    "preflop_equity",
    "ActionType",
    "Street",
    "pot_odds",
]
