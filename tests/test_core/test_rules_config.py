"""
Tests for rule helpers and the engine configuration.
"""

import json

import pytest
from pydantic import ValidationError

from dealerbrain.config import DEFAULT_CONFIG, EngineConfig
from dealerbrain.core.card import parse_cards
from dealerbrain.core.rules import (
    Street, calculate_big_blind, clamp_bet, pot_odds, street_for_board,
)


class TestRules:

    def test_pot_odds(self):
        assert pot_odds(30, 70) == pytest.approx(0.30)
        assert pot_odds(100, 100) == pytest.approx(0.5)

    def test_pot_odds_nothing_to_call(self):
        assert pot_odds(0, 500) == 0.0

    def test_clamp_bet(self):
        assert clamp_bet(500, 300) == 300
        assert clamp_bet(-20, 300) == 0
        assert clamp_bet(150.7, 300) == 150
        assert clamp_bet(100, 0) == 0

    @pytest.mark.parametrize("board, street", [
        ("", Street.PREFLOP),
        ("As Kd 7c", Street.FLOP),
        ("As Kd 7c 2h", Street.TURN),
        ("As Kd 7c 2h 9s", Street.RIVER),
    ])
    def test_street_for_board(self, board, street):
        assert street_for_board(parse_cards(board)) == street

    def test_bad_board_size(self):
        with pytest.raises(ValueError):
            street_for_board(parse_cards("As Kd"))

    @pytest.mark.parametrize("average_stack, big_blind", [
        (400, 10),
        (1000, 10),
        (4000, 50),
        (10000, 80),
        (20000, 160),
        (40000, 200),
        (100000, 500),
    ])
    def test_calculate_big_blind(self, average_stack, big_blind):
        assert calculate_big_blind(average_stack) == big_blind


class TestEngineConfig:
    """Tests for the immutable engine configuration."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.small_blind == 100
        assert config.big_blind == 200
        assert config.min_raise == 200
        assert config.monte_carlo_samples == 50
        assert config.preflop_table_samples == 2000
        assert config.constrain_opponent_range is False
        assert config.deviation_chance == 0.1
        assert config == DEFAULT_CONFIG

    def test_camel_case_aliases(self):
        config = EngineConfig.model_validate({"minRaiseValue": 400, "monteCarloSamples": 200})
        assert config.min_raise == 400
        assert config.monte_carlo_samples == 200

    def test_field_names_accepted(self):
        assert EngineConfig(min_raise=300).min_raise == 300

    def test_from_dict_merges_settings_blocks(self):
        """Blinds come from "poker", AI tuning from the sibling "pokerAI" block."""
        config = EngineConfig.from_dict({
            "poker": {"smallBlind": 50, "bigBlind": 100, "raiseAmounts": [100, 500]},
            "pokerAI": {"minRaiseValue": 500, "deviationChance": 0.0},
            "gacha": {"pullCost": 160},
        })
        assert config.small_blind == 50
        assert config.big_blind == 100
        assert config.min_raise == 500
        assert config.deviation_chance == 0.0

    def test_from_dict_ai_block_only(self):
        config = EngineConfig.from_dict({"pokerAI": {"monteCarloSamples": 120}})
        assert config.monte_carlo_samples == 120
        assert config.big_blind == 200

    def test_from_dict_flat(self):
        assert EngineConfig.from_dict({"minRaiseValue": 300}).min_raise == 300

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "poker": {"smallBlind": 100, "bigBlind": 200},
            "pokerAI": {"monteCarloSamples": 300, "minRaiseValue": 400},
        }))
        config = EngineConfig.from_json_file(path)
        assert config.monte_carlo_samples == 300
        assert config.min_raise == 400

    def test_frozen(self):
        config = EngineConfig()
        with pytest.raises(ValidationError):
            config.min_raise = 1

    def test_with_overrides(self):
        config = EngineConfig().with_overrides(deviation_chance=0.0)
        assert config.deviation_chance == 0.0
        assert DEFAULT_CONFIG.deviation_chance == 0.1

    def test_for_stacks(self):
        config = EngineConfig.for_stacks(10000, 10000)
        assert config.big_blind == 80
        assert config.small_blind == 40

    def test_for_stacks_keeps_other_settings(self):
        config = EngineConfig.for_stacks(10000, 10000, min_raise=500)
        assert config.min_raise == 500
        assert config.big_blind == 80

    @pytest.mark.parametrize("data", [
        {"monte_carlo_samples": 0},
        {"monte_carlo_samples": 10000},
        {"deviation_chance": 1.5},
        {"small_blind": 300, "big_blind": 200},
        {"style_passive_below": 0.7, "style_aggressive_above": 0.6},
    ])
    def test_rejects_bad_values(self, data):
        with pytest.raises(ValidationError):
            EngineConfig(**data)
