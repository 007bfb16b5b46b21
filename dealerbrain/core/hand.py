"""
Hand Evaluation for Texas Hold'em.

This module evaluates 2 hole cards plus up to 5 community cards and returns
a ``HandScore``: the best 5-card category plus an ordered tie-break vector.
Scores compare by category first and then tie-breakers lexicographically,
so equal scores mean a split pot.

Hand Rankings (best to worst):
1. Straight Flush: 5 consecutive cards of same suit
2. Four of a Kind: 4 cards of same rank
3. Full House: 3 of a kind + pair
4. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
6. Three of a Kind: 3 cards of same rank
7. Two Pair: 2 different pairs
8. One Pair: 2 cards of same rank
9. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Dict, List, Optional, Sequence, Tuple

from dealerbrain.core.card import Card, Rank, ensure_distinct
from dealerbrain.core.rules import HAND_SIZE, MAX_EVALUATED_CARDS


class HandCategory(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9


CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

# Base strength (0-100) per category, used for display meters
CATEGORY_STRENGTH = {
    HandCategory.HIGH_CARD: 10.0,
    HandCategory.PAIR: 35.0,
    HandCategory.TWO_PAIR: 55.0,
    HandCategory.THREE_OF_A_KIND: 70.0,
    HandCategory.STRAIGHT: 85.0,
    HandCategory.FLUSH: 90.0,
    HandCategory.FULL_HOUSE: 95.0,
    HandCategory.FOUR_OF_A_KIND: 99.0,
    HandCategory.STRAIGHT_FLUSH: 100.0,
}

ACE_LOW = 1


@total_ordering
@dataclass(frozen=True)
class HandScore:
    """
    An evaluated hand.

    Attributes:
        category: The best 5-card category
        tie_breakers: Rank values, most significant first
    """
    category: HandCategory
    tie_breakers: Tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "category", HandCategory(self.category))
        object.__setattr__(self, "tie_breakers", tuple(int(r) for r in self.tie_breakers))

    def _key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.category), tuple(self.tie_breakers)

    def __lt__(self, other: HandScore) -> bool:
        if not isinstance(other, HandScore):
            return NotImplemented
        return self._key() < other._key()

    def compare(self, other: HandScore) -> int:
        """Return -1 if this hand loses, 0 on a split, 1 if it wins."""
        mine, theirs = self._key(), other._key()
        return (mine > theirs) - (mine < theirs)

    @property
    def name(self) -> str:
        return CATEGORY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "category": self.category.name,
            "tie_breakers": list(self.tie_breakers),
            "name": self.name,
            "description": describe_hand(self),
            "strength": hand_strength_percentage(self),
        }


def evaluate(hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> HandScore:
    """
    Evaluate the best hand available from hole + community cards.

    Fewer than 5 cards is valid (e.g. a pre-flop check) and returns HIGH_CARD
    with whatever ranks exist.

    Raises:
        ValueError: If no cards, more than 7 cards, or duplicates are given.
    """
    cards = ensure_distinct(list(hole_cards) + list(community_cards))
    if not cards:
        raise ValueError("Cannot evaluate a hand with no cards")
    if len(cards) > MAX_EVALUATED_CARDS:
        raise ValueError(f"Need at most {MAX_EVALUATED_CARDS} cards, got {len(cards)}")

    cards.sort(key=lambda c: c.rank, reverse=True)
    if len(cards) < HAND_SIZE:
        return HandScore(HandCategory.HIGH_CARD, tuple(int(c.rank) for c in cards))
    return _analyze(cards)


def evaluate_cards(cards: Sequence[Card]) -> HandScore:
    """Evaluate a flat list of cards (no hole/board split)."""
    return evaluate(cards, ())


def _analyze(cards: List[Card]) -> HandScore:
    """Score 5-7 cards already sorted by rank descending."""
    ranks = [int(c.rank) for c in cards]

    flush_ranks = _flush_ranks(cards)
    if flush_ranks is not None:
        high = _straight_high(flush_ranks)
        if high is not None:
            return HandScore(HandCategory.STRAIGHT_FLUSH, (high,))

    counts = Counter(ranks)
    quads = [r for r in sorted(counts, reverse=True) if counts[r] == 4]
    trips = [r for r in sorted(counts, reverse=True) if counts[r] == 3]
    pairs = [r for r in sorted(counts, reverse=True) if counts[r] == 2]

    if quads:
        quad = quads[0]
        return HandScore(HandCategory.FOUR_OF_A_KIND, (quad, _kickers(ranks, {quad}, 1)[0]))

    if trips:
        # A second triple can serve as the pair of a full house
        pair_candidates = sorted(trips[1:2] + pairs[:1], reverse=True)
        if pair_candidates:
            return HandScore(HandCategory.FULL_HOUSE, (trips[0], pair_candidates[0]))

    if flush_ranks is not None:
        return HandScore(HandCategory.FLUSH, tuple(flush_ranks[:HAND_SIZE]))

    high = _straight_high(ranks)
    if high is not None:
        return HandScore(HandCategory.STRAIGHT, (high,))

    if trips:
        trip = trips[0]
        return HandScore(HandCategory.THREE_OF_A_KIND, (trip, *_kickers(ranks, {trip}, 2)))

    if len(pairs) >= 2:
        high_pair, low_pair = pairs[0], pairs[1]
        kicker = _kickers(ranks, {high_pair, low_pair}, 1)
        return HandScore(HandCategory.TWO_PAIR, (high_pair, low_pair, *kicker))

    if pairs:
        pair = pairs[0]
        return HandScore(HandCategory.PAIR, (pair, *_kickers(ranks, {pair}, 3)))

    return HandScore(HandCategory.HIGH_CARD, tuple(ranks[:HAND_SIZE]))


def _flush_ranks(cards: List[Card]) -> Optional[List[int]]:
    """Ranks (descending) of the suit holding 5+ cards, if any."""
    by_suit: Dict[int, List[int]] = defaultdict(list)
    for card in cards:
        by_suit[card.suit].append(int(card.rank))
    for suited in by_suit.values():
        if len(suited) >= HAND_SIZE:
            return sorted(suited, reverse=True)
    return None


def _straight_high(ranks: Sequence[int]) -> Optional[int]:
    """
    High card of the best straight among ranks, or None.

    The Ace is also counted as 1 so A-2-3-4-5 (the wheel) is found, 5-high.
    """
    distinct = sorted(set(ranks), reverse=True)
    if Rank.ACE in distinct:
        distinct.append(ACE_LOW)

    run = 0
    for i in range(len(distinct) - 1):
        if distinct[i] - distinct[i + 1] == 1:
            run += 1
            if run >= HAND_SIZE - 1:
                return distinct[i - 3]
        else:
            run = 0
    return None


def _kickers(ranks: List[int], exclude: set, n: int) -> List[int]:
    """Highest n ranks not in exclude (ranks are sorted descending)."""
    return [r for r in ranks if r not in exclude][:n]


def compare_hands(
    first: Tuple[Sequence[Card], Sequence[Card]],
    second: Tuple[Sequence[Card], Sequence[Card]],
) -> int:
    """
    Compare two (hole, community) pairs.

    Returns:
        1 if first wins, -1 if second wins, 0 if tie
    """
    return evaluate(*first).compare(evaluate(*second))


def hand_strength_percentage(score: HandScore) -> float:
    """Rough 0-100 strength meter: category base plus a top-card bonus."""
    strength = CATEGORY_STRENGTH[score.category]
    if score.tie_breakers:
        strength += (score.tie_breakers[0] / Rank.ACE) * 5.0
    return min(100.0, strength)


def has_flush_draw(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> bool:
    """True if four or more cards share a suit."""
    counts = Counter(c.suit for c in list(hole_cards) + list(community_cards))
    return any(n >= 4 for n in counts.values())


def has_straight_draw(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> bool:
    """True if four or more distinct ranks are consecutive (Ace plays low too)."""
    ranks = {int(c.rank) for c in list(hole_cards) + list(community_cards)}
    if Rank.ACE in ranks:
        ranks.add(ACE_LOW)

    ordered = sorted(ranks)
    longest = current = 1 if ordered else 0
    for low, high in zip(ordered, ordered[1:]):
        current = current + 1 if high - low == 1 else 1
        longest = max(longest, current)
    return longest >= 4


def describe_hand(score: HandScore) -> str:
    """Get a human-readable description of an evaluated hand."""
    tb = score.tie_breakers
    if not tb:
        return "No cards"

    category = score.category
    if category == HandCategory.STRAIGHT_FLUSH:
        if tb[0] == Rank.ACE:
            return "Royal Flush"
        return f"Straight Flush, {_rank_name(tb[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(tb[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(tb[0])} full of {_plural(tb[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(tb[0])} high"
    elif category == HandCategory.STRAIGHT:
        if tb[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(tb[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(tb[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(tb[0])} and {_plural(tb[1])}"
    elif category == HandCategory.PAIR:
        return f"Pair of {_plural(tb[0])}"
    return f"High Card, {_rank_name(tb[0])}"


_RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}


def _rank_name(rank: int) -> str:
    return _RANK_NAMES[Rank(rank)]


def _plural(rank: int) -> str:
    name = _rank_name(rank)
    return name + "es" if name == "Six" else name + "s"
