"""
Opponent model for the human seat.

Tracks the human's recent actions in a fixed circular buffer and smooths
them into an aggression meter in [0, 1]. The meter drives the decision
thresholds and, once enough actions are seen, a coarse play-style label
that maps onto a range tag for the equity estimator.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dealerbrain.config import DEFAULT_CONFIG, EngineConfig
from dealerbrain.core.equity import RangeTag
from dealerbrain.core.rules import AGGRESSION_INITIAL, PASSIVE_WEIGHT, RAISE_WEIGHT


logger = logging.getLogger(__name__)


class PlayerStyle(Enum):
    """Play style inferred from the aggression meter."""
    UNKNOWN = "unknown"
    PASSIVE = "passive"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class Personality(Enum):
    """How the dealer adapts to the detected style."""
    TIGHT = "tight"
    AGGRESSIVE = "aggressive"
    CALCULATED = "calculated"


STYLE_RANGES = {
    PlayerStyle.UNKNOWN: RangeTag.RANDOM,
    PlayerStyle.PASSIVE: RangeTag.TIGHT,
    PlayerStyle.BALANCED: RangeTag.STANDARD,
    PlayerStyle.AGGRESSIVE: RangeTag.WIDE,
}

# Exploit passive players, trap aggressive ones
STYLE_PERSONALITIES = {
    PlayerStyle.UNKNOWN: Personality.CALCULATED,
    PlayerStyle.PASSIVE: Personality.AGGRESSIVE,
    PlayerStyle.BALANCED: Personality.CALCULATED,
    PlayerStyle.AGGRESSIVE: Personality.TIGHT,
}

PERSONALITY_DESCRIPTIONS = {
    Personality.TIGHT: "The dealer is playing conservatively, waiting for premium hands.",
    Personality.AGGRESSIVE: "The dealer is playing aggressively, applying pressure with frequent raises.",
    Personality.CALCULATED: "The dealer is playing a balanced, calculated strategy.",
}


@dataclass
class AggressionState:
    """
    Recent-action history and the smoothed aggression meter.

    Attributes:
        history: Fixed-size ring of action weights (newest at index - 1)
        index: Next write position in the ring
        meter: Smoothed aggression, always within [0, 1]
        observations: Total actions tracked this session
    """
    size: int = 10
    history: List[float] = field(default_factory=list)
    index: int = 0
    meter: float = AGGRESSION_INITIAL
    observations: int = 0
    raises: int = 0
    calls: int = 0
    folds: int = 0

    def __post_init__(self):
        if not self.history:
            self.history = [AGGRESSION_INITIAL] * self.size

    def push(self, weight: float) -> None:
        """Overwrite the oldest slot with a new action weight."""
        self.history[self.index] = weight
        self.index = (self.index + 1) % self.size

    def decayed_average(self, decay: float) -> float:
        """Weighted mean of the ring, newest weight 1.0, times ``decay`` per step back."""
        total = 0.0
        total_weight = 0.0
        weight = 1.0
        for step in range(1, self.size + 1):
            total += weight * self.history[(self.index - step) % self.size]
            total_weight += weight
            weight *= decay
        return total / total_weight


class OpponentModel:
    """
    Aggression tracker for one human opponent.

    Usage:
        model = OpponentModel(config)
        model.track_action(is_raise=True, is_fold=False)
        model.current_aggression()   # 0.0 passive .. 1.0 aggressive
        model.estimate_range()       # RangeTag for the equity estimator
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.state = AggressionState(size=self.config.history_size)

    def reset(self) -> None:
        """Forget everything (new table/session)."""
        self.state = AggressionState(size=self.config.history_size)

    def track_action(self, is_raise: bool, is_fold: bool = False) -> None:
        """
        Record one observed human action.

        Raises and bets weigh 1.0; calls, checks and folds weigh 0.3.
        """
        state = self.state
        state.observations += 1
        if is_raise:
            state.raises += 1
        elif is_fold:
            state.folds += 1
        else:
            state.calls += 1

        state.push(RAISE_WEIGHT if is_raise else PASSIVE_WEIGHT)
        recent = state.decayed_average(self.config.history_decay)
        smoothing = self.config.smoothing
        state.meter = min(1.0, max(0.0, smoothing * state.meter + (1.0 - smoothing) * recent))

        logger.debug(
            f"Tracked {'raise' if is_raise else 'fold' if is_fold else 'call'}: "
            f"aggression={state.meter:.3f} style={self.style.value}"
        )

    def current_aggression(self) -> float:
        return self.state.meter

    @property
    def style(self) -> PlayerStyle:
        """Derived from the meter once enough actions were observed."""
        if self.state.observations < self.config.style_min_observations:
            return PlayerStyle.UNKNOWN
        if self.state.meter < self.config.style_passive_below:
            return PlayerStyle.PASSIVE
        if self.state.meter > self.config.style_aggressive_above:
            return PlayerStyle.AGGRESSIVE
        return PlayerStyle.BALANCED

    def estimate_range(self, style: Optional[PlayerStyle] = None) -> RangeTag:
        """Range tag for a style (defaults to the current one)."""
        return STYLE_RANGES[style if style is not None else self.style]

    @property
    def personality(self) -> Personality:
        return STYLE_PERSONALITIES[self.style]

    def snapshot(self) -> Dict[str, Any]:
        """Summary for logging and the HTTP API."""
        state = self.state
        return {
            "aggression": state.meter,
            "style": self.style.value,
            "range": self.estimate_range().value,
            "personality": self.personality.value,
            "observations": state.observations,
            "raises": state.raises,
            "calls": state.calls,
            "folds": state.folds,
        }
