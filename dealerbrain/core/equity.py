"""
Equity estimation.

Two estimators are provided:

- ``preflop_equity``: a closed-form lookup on starting-hand shape, used
  before any community card is out so no sampling is needed.
- ``EquityEstimator``: a Monte Carlo sampler that completes the board and
  deals the opponent a random hand, scoring 1 for a win and 0.5 for a split.

The opponent's range tag is advisory by default. Hands are sampled
uniformly from the unseen cards whatever the tag says; range-constrained
sampling is an opt-in (``EngineConfig.constrain_opponent_range``).
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from dealerbrain.config import DEFAULT_CONFIG, EngineConfig
from dealerbrain.core.card import Card, Deck, RANK_CHARS, Rank, ensure_distinct, full_deck
from dealerbrain.core.hand import evaluate
from dealerbrain.core.rules import (
    EARLY_EXIT_HIGH,
    EARLY_EXIT_LOW,
    EARLY_EXIT_SAMPLES,
    HOLE_CARDS,
    TOTAL_COMMUNITY_CARDS,
)


logger = logging.getLogger(__name__)


class RangeTag(str, Enum):
    """Coarse description of the hands an opponent is likely to hold."""
    TIGHT = "tight_range"
    STANDARD = "standard_range"
    WIDE = "wide_range"
    RANDOM = "random"


@dataclass(frozen=True)
class MonteCarloResult:
    """Outcome counts of a Monte Carlo equity run."""
    wins: int
    ties: int
    losses: int
    samples: int

    @property
    def win_probability(self) -> float:
        return self.wins / self.samples if self.samples else 0.0

    @property
    def tie_probability(self) -> float:
        return self.ties / self.samples if self.samples else 0.0

    @property
    def loss_probability(self) -> float:
        return self.losses / self.samples if self.samples else 0.0

    @property
    def equity(self) -> float:
        """Wins plus half the splits, per sample."""
        if not self.samples:
            return 0.0
        return (self.wins + 0.5 * self.ties) / self.samples

    def to_dict(self) -> dict:
        return {
            "wins": self.wins,
            "ties": self.ties,
            "losses": self.losses,
            "samples": self.samples,
            "win_probability": self.win_probability,
            "tie_probability": self.tie_probability,
            "loss_probability": self.loss_probability,
            "equity": self.equity,
        }


# ============= Pre-flop heuristic =============

def preflop_equity(hole_cards: Sequence[Card]) -> float:
    """
    Estimate pre-flop equity from the shape of two hole cards.

    Pocket pairs: J+ 0.80, 8-T 0.70, lower 0.55. Suited connectors 0.65.
    Other suited: Ace 0.60, face card 0.55, else 0.45. Offsuit connectors
    0.50, any face card 0.50, everything else 0.35.
    """
    if len(hole_cards) != HOLE_CARDS:
        raise ValueError(f"Need exactly {HOLE_CARDS} hole cards, got {len(hole_cards)}")

    c1, c2 = hole_cards
    high = max(c1.rank, c2.rank)
    low = min(c1.rank, c2.rank)
    suited = c1.suit == c2.suit
    connected = high - low == 1

    if high == low:
        if high >= Rank.JACK:
            return 0.80
        if high >= Rank.EIGHT:
            return 0.70
        return 0.55
    if suited and connected:
        return 0.65
    if suited:
        if high == Rank.ACE:
            return 0.60
        if high >= Rank.JACK:
            return 0.55
        return 0.45
    if connected:
        return 0.50
    if high >= Rank.JACK:
        return 0.50
    return 0.35


def hand_key(hole_cards: Sequence[Card]) -> str:
    """Canonical starting-hand class, e.g. 'AA', 'AKs', '72o'."""
    c1, c2 = sorted(hole_cards, key=lambda c: c.rank, reverse=True)
    key = RANK_CHARS[c1.rank] + RANK_CHARS[c2.rank]
    if c1.rank == c2.rank:
        return key
    return key + ("s" if c1.suit == c2.suit else "o")


# Heuristic equity floors for the opponent-hand tiers
PREMIUM_FLOOR = 0.70
STRONG_FLOOR = 0.55
PLAYABLE_FLOOR = 0.40

# Probability of drawing from premium / strong / playable / weak per range
RANGE_TIER_MIX: Dict[RangeTag, Tuple[float, float, float, float]] = {
    RangeTag.TIGHT: (0.70, 0.25, 0.05, 0.00),
    RangeTag.STANDARD: (0.35, 0.35, 0.25, 0.05),
    RangeTag.WIDE: (0.20, 0.30, 0.30, 0.20),
}


@lru_cache(maxsize=1)
def starting_hand_tiers() -> Tuple[Tuple[Tuple[Card, Card], ...], ...]:
    """All 1326 two-card hands bucketed into premium/strong/playable/weak."""
    tiers: List[List[Tuple[Card, Card]]] = [[], [], [], []]
    for hand in combinations(full_deck(), HOLE_CARDS):
        equity = preflop_equity(hand)
        if equity >= PREMIUM_FLOOR:
            tiers[0].append(hand)
        elif equity >= STRONG_FLOOR:
            tiers[1].append(hand)
        elif equity >= PLAYABLE_FLOOR:
            tiers[2].append(hand)
        else:
            tiers[3].append(hand)
    return tuple(tuple(t) for t in tiers)


# ============= Monte Carlo =============

class EquityEstimator:
    """
    Monte Carlo win-probability estimator.

    Usage:
        estimator = EquityEstimator(config, rng=random.Random(1))
        equity = estimator.estimate(hole, board, RangeTag.WIDE)

    Each sample is independent and only reads the already-known cards, so
    the loop runs sequentially on the estimator's own RNG for determinism.
    """

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else random.Random()

    def estimate(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card] = (),
        range_tag: RangeTag = RangeTag.RANDOM,
        samples: Optional[int] = None,
    ) -> float:
        """Estimated equity in [0, 1]."""
        return self.simulate(hole_cards, community_cards, range_tag, samples).equity

    def simulate(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card] = (),
        range_tag: RangeTag = RangeTag.RANDOM,
        samples: Optional[int] = None,
    ) -> MonteCarloResult:
        """
        Run the sampler and return the raw win/tie/loss counts.

        Raises:
            ValueError: On a bad hole/board size or duplicate cards.
        """
        hole = list(hole_cards)
        board = list(community_cards)
        if len(hole) != HOLE_CARDS:
            raise ValueError(f"Need exactly {HOLE_CARDS} hole cards, got {len(hole)}")
        if len(board) > TOTAL_COMMUNITY_CARDS:
            raise ValueError(f"At most {TOTAL_COMMUNITY_CARDS} community cards, got {len(board)}")
        known = ensure_distinct(hole + board)

        total = samples if samples is not None else self.config.monte_carlo_samples
        if total <= 0:
            raise ValueError(f"Sample count must be positive, got {total}")

        range_tag = RangeTag(range_tag)
        if not self.config.constrain_opponent_range:
            logger.debug(f"Range {range_tag.value} is advisory, sampling opponents uniformly")

        wins = ties = losses = 0
        for i in range(total):
            deck = Deck(shuffle=True, rng=self.rng, exclude=known)
            opponent = self._deal_opponent(deck, range_tag)
            full_board = board + deck.deal(TOTAL_COMMUNITY_CARDS - len(board))

            outcome = evaluate(hole, full_board).compare(evaluate(opponent, full_board))
            if outcome > 0:
                wins += 1
            elif outcome == 0:
                ties += 1
            else:
                losses += 1

            done = i + 1
            if total > EARLY_EXIT_SAMPLES and done == EARLY_EXIT_SAMPLES:
                running = (wins + 0.5 * ties) / done
                if running > EARLY_EXIT_HIGH or running < EARLY_EXIT_LOW:
                    logger.debug(f"Equity {running:.2f} is extreme, stopping after {done} samples")
                    return MonteCarloResult(wins, ties, losses, done)

        return MonteCarloResult(wins, ties, losses, total)

    def _deal_opponent(self, deck: Deck, range_tag: RangeTag) -> List[Card]:
        """Deal the opponent's two cards, honoring the range only when enabled."""
        if not self.config.constrain_opponent_range or range_tag == RangeTag.RANDOM:
            return deck.deal(HOLE_CARDS)

        roll = self.rng.random()
        cumulative = 0.0
        tier_index = len(RANGE_TIER_MIX[range_tag]) - 1
        for index, share in enumerate(RANGE_TIER_MIX[range_tag]):
            cumulative += share
            if roll < cumulative:
                tier_index = index
                break

        pool = list(starting_hand_tiers()[tier_index])
        self.rng.shuffle(pool)
        for candidate in pool:
            if candidate[0] in deck and candidate[1] in deck:
                deck.remove(candidate)
                return list(candidate)

        logger.debug(f"No {range_tag.value} hand left in deck, dealing at random")
        return deck.deal(HOLE_CARDS)


def build_preflop_table(
    samples: Optional[int] = None,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Dict[str, float]:
    """
    Pre-compute Monte Carlo equity for all 169 starting-hand classes.

    Intended for non-interactive odds tables, so it defaults to
    ``config.preflop_table_samples`` (2000) samples per class.
    """
    config = config or DEFAULT_CONFIG
    estimator = EquityEstimator(config, rng)
    total = samples if samples is not None else config.preflop_table_samples

    table: Dict[str, float] = {}
    for hand in combinations(full_deck(), HOLE_CARDS):
        key = hand_key(hand)
        if key not in table:
            table[key] = estimator.estimate(hand, (), RangeTag.RANDOM, samples=total)

    logger.info(f"Built pre-flop table: {len(table)} hands x {total} samples")
    return table
