"""
dealerbrain - Heads-up Texas Hold'em dealer AI

The decision core of the casino's poker table:
- Best-5-of-7 hand evaluation with exact tie-breaking
- Monte Carlo equity estimation against an inferred opponent range
- Smoothed opponent aggression tracking
- A multi-threshold fold/check/call/raise policy
- FastAPI server exposing the core to the table front-end

Usage:
    from dealerbrain import Card, Deck, evaluate, DecisionEngine, EngineConfig
"""

__version__ = "0.1.0"

# core must load before config: config reads its defaults from core.rules
from dealerbrain.core.card import Card, Deck, DeckExhaustedError
from dealerbrain.core.hand import HandCategory, HandScore, evaluate
from dealerbrain.core.equity import EquityEstimator, preflop_equity
from dealerbrain.config import EngineConfig
from dealerbrain.agents.decision import DecisionEngine

__all__ = [
    "EngineConfig",
    "Card",
    "Deck",
    "DeckExhaustedError",
    "HandCategory",
    "HandScore",
    "evaluate",
    "EquityEstimator",
    "preflop_equity",
    "DecisionEngine",
    "__version__",
]
