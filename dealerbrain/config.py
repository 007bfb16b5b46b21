"""
Engine configuration.

One immutable ``EngineConfig`` is built per table and handed to the
Decision Engine and Equity Estimator. Settings files written for the casino
use camelCase keys (``minRaiseValue``, ``monteCarloSamples``...); both the
alias and the field name are accepted.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dealerbrain.core import rules


class EngineConfig(BaseModel):
    """Tuning constants for one dealer AI instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Blinds are carried for the table and reported over the API; the
    # decision policy sizes its bets from min_raise and the pot
    small_blind: int = Field(default=rules.DEFAULT_SMALL_BLIND, gt=0, alias="smallBlind")
    big_blind: int = Field(default=rules.DEFAULT_BIG_BLIND, gt=0, alias="bigBlind")
    min_raise: int = Field(default=rules.DEFAULT_MIN_RAISE, ge=0, alias="minRaiseValue")

    monte_carlo_samples: int = Field(
        default=rules.DEFAULT_MONTE_CARLO_SAMPLES,
        gt=0,
        le=rules.MAX_MONTE_CARLO_SAMPLES,
        alias="monteCarloSamples",
    )
    preflop_table_samples: int = Field(
        default=rules.PREFLOP_TABLE_SAMPLES, gt=0, alias="preflopTableSamples"
    )
    constrain_opponent_range: bool = Field(default=False, alias="constrainOpponentRange")

    deviation_chance: float = Field(
        default=rules.DEFAULT_DEVIATION_CHANCE, ge=0.0, le=1.0, alias="deviationChance"
    )
    open_raise_chance: float = Field(
        default=rules.DEFAULT_OPEN_RAISE_CHANCE, ge=0.0, le=1.0, alias="openRaiseChance"
    )
    loose_call_chance: float = Field(
        default=rules.DEFAULT_LOOSE_CALL_CHANCE, ge=0.0, le=1.0, alias="looseCallChance"
    )
    bluff_catch_chance: float = Field(
        default=rules.DEFAULT_BLUFF_CATCH_CHANCE, ge=0.0, le=1.0, alias="bluffCatchChance"
    )

    history_size: int = Field(default=rules.AGGRESSION_HISTORY_SIZE, gt=0, alias="historySize")
    history_decay: float = Field(default=rules.AGGRESSION_DECAY, gt=0.0, le=1.0, alias="historyDecay")
    smoothing: float = Field(default=rules.AGGRESSION_SMOOTHING, ge=0.0, le=1.0, alias="smoothing")
    style_min_observations: int = Field(
        default=rules.STYLE_MIN_OBSERVATIONS, ge=1, alias="styleMinObservations"
    )
    style_passive_below: float = Field(
        default=rules.STYLE_PASSIVE_BELOW, ge=0.0, le=1.0, alias="stylePassiveBelow"
    )
    style_aggressive_above: float = Field(
        default=rules.STYLE_AGGRESSIVE_ABOVE, ge=0.0, le=1.0, alias="styleAggressiveAbove"
    )

    @model_validator(mode="after")
    def _check_ordering(self) -> "EngineConfig":
        if self.small_blind > self.big_blind:
            raise ValueError("small_blind must not exceed big_blind")
        if self.style_passive_below > self.style_aggressive_above:
            raise ValueError("style_passive_below must not exceed style_aggressive_above")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> EngineConfig:
        """
        Build a config from a settings dict.

        The casino settings file keeps blinds in a top-level ``"poker"`` block
        and AI tuning in a sibling ``"pokerAI"`` block; both are merged, with
        ``"pokerAI"`` winning on a clash. A flat dict is used as is.
        """
        if "poker" in data or "pokerAI" in data:
            data = {**data.get("poker", {}), **data.get("pokerAI", {})}
        return cls.model_validate(data)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> EngineConfig:
        """Load a config from a JSON settings file."""
        with open(path, "r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))

    @classmethod
    def for_stacks(cls, player_stack: int, opponent_stack: int, **overrides: Any) -> EngineConfig:
        """Config with blinds sized from the average of both stacks."""
        big_blind = rules.calculate_big_blind((player_stack + opponent_stack) // 2)
        return cls(small_blind=big_blind // 2, big_blind=big_blind, **overrides)

    def with_overrides(self, **overrides: Any) -> EngineConfig:
        """Return a copy with some fields replaced (validated)."""
        data = self.model_dump()
        data.update(overrides)
        return type(self).model_validate(data)


DEFAULT_CONFIG = EngineConfig()
