"""
Dealer Decision Engine.

Turns equity, pot odds and the opponent's aggression into one of
FOLD / CHECK / CALL / RAISE plus a bet size.

Pre-flop decisions use the closed-form starting-hand heuristic. Post-flop
decisions run the Monte Carlo estimator against the modeled range and
compare the result with three aggression-dependent thresholds:

    call  = pot_odds * (1 - 0.15 * aggression)
    raise = pot_odds + 0.2 + 0.1 * aggression
    bluff = 0.25 - 0.1 * aggression

so the dealer bluffs more against passive players and calls down more
against aggressive ones. A small share of post-flop decisions take a
randomized deviation (hero call, bluff raise, slow play, overbet) to stay
hard to read.
"""

from __future__ import annotations
import logging
import random
from enum import Enum
from typing import Optional

from dealerbrain.agents.base import BaseAgent, DecisionContext, DecisionResult
from dealerbrain.agents.opponent import (
    PERSONALITY_DESCRIPTIONS,
    OpponentModel,
    Personality,
    PlayerStyle,
)
from dealerbrain.config import DEFAULT_CONFIG, EngineConfig
from dealerbrain.core.card import ensure_distinct
from dealerbrain.core.equity import EquityEstimator, preflop_equity
from dealerbrain.core.rules import HOLE_CARDS, ActionType, clamp_bet, street_for_board


logger = logging.getLogger(__name__)


# Pre-flop equity bands
PREFLOP_RAISE_ABOVE = 0.55
PREFLOP_CALL_FROM = 0.35
PREFLOP_FOLD_BELOW = 0.25
PREFLOP_OPEN_RAISE_FROM = 0.5
PREFLOP_RAISE_MULTIPLIER = 2.5
OPEN_RAISE_STACK_DIVISOR = 20

# Post-flop thresholds
CALL_AGGRESSION_DISCOUNT = 0.15
RAISE_MARGIN = 0.2
RAISE_AGGRESSION_MARGIN = 0.1
BLUFF_BASE = 0.25
BLUFF_AGGRESSION_DISCOUNT = 0.1

# Value-raise sizing: (equity floor, pot fraction, jitter)
RAISE_SIZING = (
    (0.65, 0.60, 0.10),
    (0.45, 0.45, 0.05),
    (0.00, 0.35, 0.05),
)

# Deviation gates
HERO_CALL_ODDS_FACTOR = 0.8
BLUFF_RAISE_BELOW = 0.4
BLUFF_RAISE_CHANCE = 0.3
BLUFF_RAISE_POT_FRACTION = 0.5
SLOW_PLAY_ABOVE = 0.7
OVERBET_ABOVE = 0.75
OVERBET_POT_FRACTION = 1.5


class Deviation(Enum):
    """Randomized departures from the standard post-flop policy."""
    HERO_CALL = "hero-call"
    BLUFF_RAISE = "bluff-raise"
    SLOW_PLAY = "slow-play"
    OVERBET = "overbet"


class DecisionEngine(BaseAgent):
    """
    Heuristic heads-up dealer.

    One engine per opponent seat. It owns the opponent model (which lives for
    the whole session) and a single random stream shared with its equity
    estimator, so a seeded engine replays identically.

    Usage:
        engine = DecisionEngine(config, rng=random.Random(42))
        engine.track_action(is_raise=True, is_fold=False)
        result = engine.decide(hole, board, amount_to_call=200, pot_size=600,
                               own_stack=5000, opponent_stack=4200)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name or "Dealer")
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else random.Random()
        self.model = OpponentModel(self.config)
        self.estimator = EquityEstimator(self.config, self.rng)

    # ============= Opponent tracking =============

    def track_action(self, is_raise: bool, is_fold: bool = False) -> None:
        self.model.track_action(is_raise, is_fold)

    def current_aggression(self) -> float:
        return self.model.current_aggression()

    @property
    def player_style(self) -> PlayerStyle:
        return self.model.style

    @property
    def personality(self) -> Personality:
        return self.model.personality

    @property
    def personality_description(self) -> str:
        return PERSONALITY_DESCRIPTIONS[self.personality]

    def reset(self) -> None:
        """Start a fresh session: forget the opponent."""
        self.model.reset()
        logger.info(f"{self.name}: opponent model reset")

    # ============= Decisions =============

    def decide_context(self, context: DecisionContext) -> DecisionResult:
        """
        Pick an action for the current street.

        Raises:
            ValueError: On malformed cards or negative chip amounts.
        """
        _validate(context)

        if context.is_preflop:
            equity = preflop_equity(context.hole_cards)
            result = self.choose_preflop_action(equity, context)
        else:
            range_tag = self.model.estimate_range()
            equity = self.estimator.estimate(
                context.hole_cards, context.community_cards, range_tag
            )
            result = self.choose_postflop_action(equity, context)

        result = self._finalize(result, context)
        logger.debug(
            f"{self.name} {context.street.name}: equity={equity:.3f} "
            f"pot_odds={context.pot_odds:.3f} -> {result.action.value} {result.amount} "
            f"({result.reason})"
        )
        return result

    def choose_preflop_action(self, equity: float, context: DecisionContext) -> DecisionResult:
        """Pre-flop policy for a given heuristic equity."""
        to_call = context.amount_to_call
        odds = context.pot_odds

        if to_call <= 0:
            if equity >= PREFLOP_OPEN_RAISE_FROM and self.rng.random() < self.config.open_raise_chance:
                size = max(self.config.min_raise, context.own_stack // OPEN_RAISE_STACK_DIVISOR)
                return DecisionResult(ActionType.RAISE, size, equity, odds, "open-raise")
            return DecisionResult(ActionType.CHECK, 0, equity, odds, "check")

        if equity > PREFLOP_RAISE_ABOVE:
            size = max(round(to_call * PREFLOP_RAISE_MULTIPLIER), self.config.min_raise)
            return DecisionResult(ActionType.RAISE, size, equity, odds, "value-raise")
        if equity >= PREFLOP_CALL_FROM:
            return DecisionResult(ActionType.CALL, 0, equity, odds, "call")
        if equity < PREFLOP_FOLD_BELOW:
            if self.rng.random() < self.config.loose_call_chance:
                return DecisionResult(ActionType.CALL, 0, equity, odds, "loose-call")
            return DecisionResult(ActionType.FOLD, 0, equity, odds, "fold")
        return DecisionResult(ActionType.CALL, 0, equity, odds, "marginal-call")

    def choose_postflop_action(
        self,
        equity: float,
        context: DecisionContext,
        aggression: Optional[float] = None,
    ) -> DecisionResult:
        """Post-flop policy for a given equity (aggression defaults to the meter)."""
        if aggression is None:
            aggression = self.current_aggression()
        odds = context.pot_odds

        call_threshold = odds * (1 - CALL_AGGRESSION_DISCOUNT * aggression)
        raise_threshold = odds + RAISE_MARGIN + RAISE_AGGRESSION_MARGIN * aggression
        bluff_threshold = BLUFF_BASE - BLUFF_AGGRESSION_DISCOUNT * aggression

        if self.rng.random() < self.config.deviation_chance:
            return self._deviate(equity, odds, context)

        if equity < call_threshold:
            if equity > bluff_threshold and self.rng.random() < self.config.bluff_catch_chance:
                return DecisionResult(ActionType.CALL, 0, equity, odds, "bluff-catch")
            return DecisionResult(ActionType.FOLD, 0, equity, odds, "fold")

        if equity >= raise_threshold:
            size = self._value_raise_size(equity, context.pot_size)
            return DecisionResult(ActionType.RAISE, size, equity, odds, "value-raise")

        return DecisionResult(ActionType.CALL, 0, equity, odds, "call")

    def _value_raise_size(self, equity: float, pot_size: int) -> int:
        for floor, fraction, jitter in RAISE_SIZING:
            if equity >= floor:
                return round(pot_size * (fraction + self.rng.uniform(-jitter, jitter)))
        return 0

    def _deviate(self, equity: float, odds: float, context: DecisionContext) -> DecisionResult:
        """Apply one randomly chosen deviation, falling back to call/fold if its gate fails."""
        deviation = self.rng.choice(list(Deviation))
        pot = context.pot_size

        if deviation == Deviation.HERO_CALL:
            if equity > odds * HERO_CALL_ODDS_FACTOR:
                return DecisionResult(ActionType.CALL, 0, equity, odds, deviation.value)
        elif deviation == Deviation.BLUFF_RAISE:
            if equity < BLUFF_RAISE_BELOW and self.rng.random() < BLUFF_RAISE_CHANCE:
                size = round(pot * BLUFF_RAISE_POT_FRACTION)
                return DecisionResult(ActionType.RAISE, size, equity, odds, deviation.value)
        elif deviation == Deviation.SLOW_PLAY:
            if equity > SLOW_PLAY_ABOVE:
                return DecisionResult(ActionType.CALL, 0, equity, odds, deviation.value)
        elif deviation == Deviation.OVERBET:
            if equity > OVERBET_ABOVE:
                size = round(pot * OVERBET_POT_FRACTION)
                return DecisionResult(ActionType.RAISE, size, equity, odds, deviation.value)

        if equity > odds:
            return DecisionResult(ActionType.CALL, 0, equity, odds, f"{deviation.value}-fallback")
        return DecisionResult(ActionType.FOLD, 0, equity, odds, f"{deviation.value}-fallback")

    def _finalize(self, result: DecisionResult, context: DecisionContext) -> DecisionResult:
        """
        Make the result legal for the context.

        Raise sizes are clamped to [0, own stack]; a raise that clamps to
        nothing, or faces an all-in opponent, becomes a call. Calling or
        folding with nothing to call is a check. A dealer with no chips left
        is already all-in and never folds.
        """
        to_call = context.amount_to_call
        action, amount = result.action, result.amount

        if action == ActionType.RAISE:
            amount = clamp_bet(amount, context.own_stack)
            if amount <= 0 or context.opponent_stack <= 0:
                action, amount = ActionType.CALL, 0

        if context.own_stack <= 0 and action == ActionType.FOLD:
            action = ActionType.CALL
            result.reason = f"{result.reason}; all-in, cannot fold"

        if action in (ActionType.CALL, ActionType.FOLD) and to_call <= 0:
            action = ActionType.CHECK

        result.action = action
        result.amount = amount if action == ActionType.RAISE else 0
        return result


def _validate(context: DecisionContext) -> None:
    if len(context.hole_cards) != HOLE_CARDS:
        raise ValueError(f"Need exactly {HOLE_CARDS} hole cards, got {len(context.hole_cards)}")
    ensure_distinct(list(context.hole_cards) + list(context.community_cards))
    if context.amount_to_call < 0 or context.pot_size < 0:
        raise ValueError("amount_to_call and pot_size must be non-negative")
    street_for_board(context.community_cards)
