"""
Pytest configuration and shared fixtures for dealerbrain tests.
"""

import random

import pytest
from dealerbrain.agents.base import DecisionContext
from dealerbrain.agents.decision import DecisionEngine
from dealerbrain.config import EngineConfig
from dealerbrain.core.card import Card, Deck, Rank, Suit, parse_cards


class FixedRandom(random.Random):
    """A Random whose ``random()`` always returns the same value."""

    def __init__(self, value: float, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def deck():
    """Create a fresh shuffled deck with a seeded random source."""
    return Deck(shuffle=True, rng=random.Random(2024))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def config():
    """Default engine settings."""
    return EngineConfig()


@pytest.fixture
def engine(config):
    """A seeded decision engine with default settings."""
    return DecisionEngine(config, rng=random.Random(42))


@pytest.fixture
def fixed_random():
    """Factory for pinned random sources: ``fixed_random(0.0)``."""
    return FixedRandom


@pytest.fixture
def steady_engine():
    """
    An engine that never takes a random branch.

    ``random()`` is pinned at 0.99, above every chance gate.
    """
    return DecisionEngine(EngineConfig(), rng=FixedRandom(0.99))


@pytest.fixture
def flop_context():
    """Flop decision facing a 30 chip bet into a 70 chip pot (pot odds 0.30)."""
    return DecisionContext(
        hole_cards=parse_cards("7c 2d"),
        community_cards=parse_cards("As Kh 9s"),
        amount_to_call=30,
        pot_size=70,
        own_stack=1000,
        opponent_stack=1000,
    )


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
