"""
Card and Deck classes for the dealer's decision core.

Ranks carry their poker value directly (2..14, Ace high) so the hand
evaluator can work with plain integers. Every Deck owns its random source,
which keeps shuffles reproducible when a seeded ``random.Random`` is passed in.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits with integer values for fast comparison."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


class DeckExhaustedError(ValueError):
    """Raised when a card is drawn from an empty deck."""


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), "10h" or "A♠"
    - Integer (0-51): Card.from_int(51) = Ace of Spades

    The integer encoding is: (rank - 2) * 4 + suit
    """

    __slots__ = ("_rank", "_suit", "_int")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))
        object.__setattr__(self, "_int", (int(self._rank) - 2) * 4 + int(self._suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "As", "Kh", "Td", "10d", "2c" and the symbol forms "A♠", "10♥".
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        if s[:2] == "10":
            rank_part, suit_part = "T", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part!r}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int < DECK_SIZE:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(Rank(card_int // 4 + 2), Suit(card_int % 4))

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return self._int

    def __int__(self) -> int:
        return self._int

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._int == other._int
        return NotImplemented

    def __hash__(self) -> int:
        return self._int

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self._rank < other._rank

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "code": self.short_str,
            "color": self.color,
        }


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


class Deck:
    """
    A standard 52-card deck owned by a single hand.

    Usage:
        deck = Deck(rng=random.Random(7))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)

    Cards passed as ``exclude`` (already known hole/board cards) are left
    out, so the deck can never produce them.
    """

    def __init__(
        self,
        shuffle: bool = True,
        rng: Optional[random.Random] = None,
        exclude: Iterable[Card] = (),
    ):
        self._rng = rng if rng is not None else random.Random()
        self._excluded = frozenset(exclude)
        self.reset()
        if shuffle:
            self.shuffle()

    def reset(self) -> None:
        """Reset the deck to the full card set (minus exclusions) in order."""
        self._cards: List[Card] = [c for c in full_deck() if c not in self._excluded]
        self._dealt: List[Card] = []

    def shuffle(self) -> None:
        """Shuffle the remaining cards in the deck."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """
        Remove and return the top card.

        Raises:
            DeckExhaustedError: If the deck is empty.
        """
        if not self._cards:
            raise DeckExhaustedError("Cannot draw from an empty deck")
        card = self._cards.pop()
        self._dealt.append(card)
        return card

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckExhaustedError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhaustedError(
                f"Cannot deal {n} cards, only {len(self._cards)} remain"
            )
        return [self.draw() for _ in range(n)]

    def remove(self, cards: Iterable[Card]) -> None:
        """Take specific cards out of the deck (used for targeted deals)."""
        taken = list(dict.fromkeys(cards))
        missing = [c for c in taken if c not in self._cards]
        if missing:
            raise ValueError(f"Cards not in deck: {missing}")
        self._cards = [c for c in self._cards if c not in taken]
        self._dealt.extend(taken)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    @property
    def cards(self) -> List[Card]:
        """Remaining cards, top of the deck last."""
        return self._cards.copy()

    @property
    def remaining(self) -> int:
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str or "," in cards_str:
        return [Card.from_string(s) for s in cards_str.replace(",", " ").split()]

    result = []
    i = 0
    while i < len(cards_str):
        if i + 1 < len(cards_str) and (
            cards_str[i + 1] in SYMBOL_TO_SUIT
            or cards_str[i + 1].lower() in CHAR_TO_SUIT
        ):
            result.append(Card.from_string(cards_str[i:i + 2]))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result


def ensure_distinct(cards: Iterable[Card]) -> List[Card]:
    """Return the cards as a list, raising if any card appears twice."""
    cards = list(cards)
    if len(set(cards)) != len(cards):
        raise ValueError(f"Duplicate cards: {' '.join(c.short_str for c in cards)}")
    return cards
