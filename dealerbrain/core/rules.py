"""
Heads-up Texas Hold'em rules and default tuning constants.

The constants below are the defaults of ``dealerbrain.config.EngineConfig``.
They mirror the casino's shipped settings:

1. Blinds scale with the average stack (see ``calculate_big_blind``).
2. The dealer's opening raises never drop below ``DEFAULT_MIN_RAISE``.
3. Interactive decisions use a small Monte Carlo sample; batch odds tables
   use a much larger one.
"""

from enum import Enum, auto
from typing import Sequence


class Street(Enum):
    """Betting rounds of a hand, driven by the external table state machine."""
    PREFLOP = auto()   # After hole cards dealt, before flop
    FLOP = auto()      # After 3 community cards
    TURN = auto()      # After 4th community card
    RIVER = auto()     # After 5th community card


class ActionType(Enum):
    """Actions the decision engine can return."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"


# Blinds
DEFAULT_SMALL_BLIND = 100
DEFAULT_BIG_BLIND = 200

# Cards per hand
HOLE_CARDS = 2
TOTAL_COMMUNITY_CARDS = 5
HAND_SIZE = 5  # Best 5-card hand
MAX_EVALUATED_CARDS = HOLE_CARDS + TOTAL_COMMUNITY_CARDS

# Dealer AI
DEFAULT_MIN_RAISE = 200
DEFAULT_MONTE_CARLO_SAMPLES = 50
MAX_MONTE_CARLO_SAMPLES = 5000
PREFLOP_TABLE_SAMPLES = 2000
EARLY_EXIT_SAMPLES = 50
EARLY_EXIT_HIGH = 0.90
EARLY_EXIT_LOW = 0.10

DEFAULT_DEVIATION_CHANCE = 0.10
DEFAULT_OPEN_RAISE_CHANCE = 0.30
DEFAULT_LOOSE_CALL_CHANCE = 0.10
DEFAULT_BLUFF_CATCH_CHANCE = 0.30

# Opponent model
AGGRESSION_HISTORY_SIZE = 10
AGGRESSION_DECAY = 0.8
AGGRESSION_SMOOTHING = 0.7
AGGRESSION_INITIAL = 0.5
RAISE_WEIGHT = 1.0
PASSIVE_WEIGHT = 0.3
STYLE_MIN_OBSERVATIONS = 6
STYLE_PASSIVE_BELOW = 0.4
STYLE_AGGRESSIVE_ABOVE = 0.6


_STREETS_BY_BOARD_SIZE = {
    0: Street.PREFLOP,
    3: Street.FLOP,
    4: Street.TURN,
    5: Street.RIVER,
}


def street_for_board(community_cards: Sequence) -> Street:
    """
    Map the number of visible community cards to a street.

    Raises:
        ValueError: If the board size is not 0, 3, 4 or 5.
    """
    try:
        return _STREETS_BY_BOARD_SIZE[len(community_cards)]
    except KeyError:
        raise ValueError(
            f"Invalid board size {len(community_cards)}, expected 0, 3, 4 or 5"
        ) from None


def pot_odds(amount_to_call: int, pot_size: int) -> float:
    """
    Breakeven equity for a call: call / (pot + call).

    Returns 0.0 when there is nothing to call.
    """
    if amount_to_call <= 0:
        return 0.0
    return amount_to_call / (pot_size + amount_to_call)


def clamp_bet(amount: float, stack: int) -> int:
    """Clamp a bet size into [0, stack]."""
    return max(0, min(int(amount), max(stack, 0)))


def calculate_big_blind(average_stack: int) -> int:
    """
    Size the big blind proportionally to the average stack.

    - Small games (<= 5000): stack / 80, at least 10, floored to 10
    - Medium games (<= 20000): stack / 120, at least 50, floored to 10
    - Large games: stack / 200, at least 100, floored to 50
    """
    if average_stack <= 5000:
        big_blind = max(10, average_stack // 80)
        return (big_blind // 10) * 10
    if average_stack <= 20000:
        big_blind = max(50, average_stack // 120)
        return (big_blind // 10) * 10
    big_blind = max(100, average_stack // 200)
    return (big_blind // 50) * 50
