"""
Tests for the opponent aggression model.
"""

import pytest
from dealerbrain.agents.opponent import (
    AggressionState, OpponentModel, Personality, PlayerStyle,
)
from dealerbrain.config import EngineConfig
from dealerbrain.core.equity import RangeTag


def track(model, pattern):
    """Feed a pattern like 'RCF' (raise, call, fold)."""
    for action in pattern:
        model.track_action(is_raise=action == "R", is_fold=action == "F")


class TestAggressionState:

    def test_initial_history(self):
        state = AggressionState(size=10)
        assert state.history == [0.5] * 10
        assert state.decayed_average(0.8) == pytest.approx(0.5)

    def test_ring_buffer_wraps(self):
        state = AggressionState(size=10)
        for _ in range(12):
            state.push(1.0)
        assert len(state.history) == 10
        assert state.index == 2

    def test_newest_weighs_most(self):
        state = AggressionState(size=3)
        state.history = [0.0, 0.0, 0.0]
        state.push(1.0)
        # newest 1.0 at weight 1, the others at 0.5 and 0.25
        assert state.decayed_average(0.5) == pytest.approx(1.0 / 1.75)


class TestOpponentModel:
    """Tests for style detection and range mapping."""

    def test_fresh_model(self):
        model = OpponentModel()
        assert model.current_aggression() == 0.5
        assert model.style == PlayerStyle.UNKNOWN
        assert model.estimate_range() == RangeTag.RANDOM
        assert model.personality == Personality.CALCULATED

    def test_unknown_until_enough_observations(self):
        model = OpponentModel()
        track(model, "RRRRR")
        assert model.style == PlayerStyle.UNKNOWN
        track(model, "R")
        assert model.style == PlayerStyle.AGGRESSIVE

    def test_raises_push_meter_up(self):
        model = OpponentModel()
        model.track_action(is_raise=True)
        assert model.current_aggression() > 0.5

    def test_calls_push_meter_down(self):
        model = OpponentModel()
        model.track_action(is_raise=False)
        assert model.current_aggression() < 0.5

    def test_fold_weighs_like_call(self):
        calls, folds = OpponentModel(), OpponentModel()
        track(calls, "CCC")
        track(folds, "FFF")
        assert calls.current_aggression() == pytest.approx(folds.current_aggression())
        assert folds.state.folds == 3
        assert calls.state.calls == 3

    def test_passive_player(self):
        model = OpponentModel()
        track(model, "C" * 10)
        assert model.style == PlayerStyle.PASSIVE
        assert model.estimate_range() == RangeTag.TIGHT
        assert model.personality == Personality.AGGRESSIVE

    def test_aggressive_player(self):
        model = OpponentModel()
        track(model, "R" * 10)
        assert model.style == PlayerStyle.AGGRESSIVE
        assert model.estimate_range() == RangeTag.WIDE
        assert model.personality == Personality.TIGHT

    def test_balanced_player(self):
        model = OpponentModel()
        track(model, "RCCRCC")
        assert 0.4 <= model.current_aggression() <= 0.6
        assert model.style == PlayerStyle.BALANCED
        assert model.estimate_range() == RangeTag.STANDARD
        assert model.personality == Personality.CALCULATED

    @pytest.mark.parametrize("pattern", ["R", "C", "F"])
    def test_meter_stays_bounded(self, pattern):
        model = OpponentModel()
        track(model, pattern * 1000)
        assert 0.0 <= model.current_aggression() <= 1.0

    def test_long_raise_streak_saturates(self):
        model = OpponentModel()
        track(model, "R" * 1000)
        assert model.current_aggression() == pytest.approx(1.0)

    def test_estimate_range_for_explicit_style(self):
        model = OpponentModel()
        assert model.estimate_range(PlayerStyle.PASSIVE) == RangeTag.TIGHT

    def test_custom_style_thresholds(self):
        config = EngineConfig(style_min_observations=1, style_passive_below=0.49)
        model = OpponentModel(config)
        model.track_action(is_raise=False)
        assert model.style == PlayerStyle.PASSIVE

    def test_reset(self):
        model = OpponentModel()
        track(model, "R" * 8)
        model.reset()
        assert model.current_aggression() == 0.5
        assert model.state.observations == 0
        assert model.style == PlayerStyle.UNKNOWN

    def test_snapshot(self):
        model = OpponentModel()
        track(model, "RCF")
        snapshot = model.snapshot()
        assert snapshot["observations"] == 3
        assert (snapshot["raises"], snapshot["calls"], snapshot["folds"]) == (1, 1, 1)
        assert snapshot["style"] == "unknown"
        assert snapshot["range"] == "random"
