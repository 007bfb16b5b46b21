"""
Tests for Card and Deck classes.
"""

import random

import pytest
from dealerbrain.core.card import (
    Card, Deck, DeckExhaustedError, Rank, Suit, ensure_distinct, full_deck, parse_cards,
)


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_rank_values(self):
        """Ranks carry their poker value, Ace high."""
        assert int(Rank.TWO) == 2
        assert int(Rank.TEN) == 10
        assert int(Rank.ACE) == 14

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        card3 = Card.from_string("Td")
        assert card3.rank == Rank.TEN
        assert card3.suit == Suit.DIAMONDS

    def test_card_from_string_ten_digits(self):
        """'10h' is accepted as well as 'Th'."""
        assert Card.from_string("10h") == Card.from_string("Th")

    @pytest.mark.parametrize("text", ["", "A", "1s", "Ax", "Zz"])
    def test_card_from_string_invalid(self, text):
        """Malformed strings raise ValueError."""
        with pytest.raises(ValueError):
            Card.from_string(text)

    def test_card_from_int(self):
        """Test creating cards from integer."""
        card1 = Card.from_int(0)
        assert card1.rank == Rank.TWO
        assert card1.suit == Suit.CLUBS

        card2 = Card.from_int(51)
        assert card2.rank == Rank.ACE
        assert card2.suit == Suit.SPADES

    def test_card_from_int_out_of_range(self):
        with pytest.raises(ValueError):
            Card.from_int(52)

    def test_card_to_int(self):
        """Test converting card to integer."""
        assert Card(Rank.ACE, Suit.SPADES).to_int() == 51
        assert Card(Rank.TWO, Suit.CLUBS).to_int() == 0

    def test_card_equality(self):
        """Test card equality."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.KING, Suit.SPADES)

        assert card1 == card2
        assert card1 != card3

    def test_card_is_immutable(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_comparison(self):
        """Test card comparison (by rank)."""
        ace = Card(Rank.ACE, Suit.SPADES)
        king = Card(Rank.KING, Suit.HEARTS)
        two = Card(Rank.TWO, Suit.CLUBS)

        assert two < king < ace

    def test_card_str(self):
        """Test card string representation."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"
        assert card.short_str == "As"

    def test_card_color(self):
        """Test card color."""
        assert Card(Rank.ACE, Suit.SPADES).color == "black"
        assert Card(Rank.KING, Suit.HEARTS).color == "red"

    def test_card_to_dict(self):
        data = Card(Rank.TEN, Suit.HEARTS).to_dict()
        assert data["rank"] == "T"
        assert data["code"] == "Th"
        assert data["color"] == "red"

    def test_card_hash(self):
        """Test card hashing (for use in sets/dicts)."""
        card_set = {Card(Rank.ACE, Suit.SPADES)}
        assert Card(Rank.ACE, Suit.SPADES) in card_set


class TestDeck:
    """Tests for Deck class."""

    def test_deck_has_52_cards(self, unshuffled_deck):
        """Test that a new deck has 52 cards."""
        assert len(unshuffled_deck) == 52
        assert unshuffled_deck.remaining == 52

    def test_shuffle_is_permutation(self, deck):
        """A shuffled deck holds every card exactly once."""
        assert sorted(c.to_int() for c in deck.cards) == list(range(52))

    def test_nine_draws(self, deck):
        """Dealing a heads-up hand (2 + 2 + 5) leaves 43 distinct cards."""
        drawn = [deck.draw() for _ in range(9)]
        assert len(set(drawn)) == 9
        assert deck.remaining == 43
        assert not any(card in deck for card in drawn)

    def test_deck_deal(self, deck):
        """Test dealing cards."""
        cards = deck.deal(5)
        assert len(cards) == 5
        assert deck.remaining == 47

    def test_draw_from_empty_deck(self, deck):
        """Drawing from an exhausted deck raises."""
        deck.deal(52)
        with pytest.raises(DeckExhaustedError):
            deck.draw()

    def test_deck_deal_too_many(self, deck):
        """Test dealing too many cards raises error."""
        with pytest.raises(ValueError):
            deck.deal(53)

    def test_deck_reset(self, deck):
        """Test resetting the deck."""
        deck.deal(10)
        assert deck.remaining == 42

        deck.reset()
        assert deck.remaining == 52
        assert deck.dealt_cards == []

    def test_deck_fixture_is_reproducible(self, deck):
        assert deck.cards == Deck(rng=random.Random(2024)).cards

    def test_seeded_shuffle_is_reproducible(self):
        first = Deck(rng=random.Random(7)).cards
        second = Deck(rng=random.Random(7)).cards
        assert first == second

    def test_deck_shuffle_changes_order(self, unshuffled_deck):
        """Test that shuffling changes card order."""
        before = unshuffled_deck.cards
        unshuffled_deck.shuffle()
        # ~1 in 52! chance of a false failure
        assert unshuffled_deck.cards != before

    def test_exclude_known_cards(self):
        """Excluded cards never come out of the deck."""
        known = parse_cards("As Kh Qd")
        deck = Deck(rng=random.Random(3), exclude=known)
        assert deck.remaining == 49
        assert not any(card in deck.deal(49) for card in known)

    def test_remove_specific_cards(self, unshuffled_deck):
        hand = parse_cards("As Ah")
        unshuffled_deck.remove(hand)
        assert unshuffled_deck.remaining == 50
        assert unshuffled_deck.dealt_cards == hand

        with pytest.raises(ValueError):
            unshuffled_deck.remove(hand)

    def test_deck_dealt_cards_tracked(self, deck):
        """Test that dealt cards are tracked."""
        dealt = deck.deal(3)
        assert deck.dealt_cards == dealt


class TestParseCards:
    """Tests for parse_cards function."""

    def test_parse_space_separated(self):
        """Test parsing space-separated cards."""
        cards = parse_cards("As Kh Qd")
        assert [c.rank for c in cards] == [Rank.ACE, Rank.KING, Rank.QUEEN]

    def test_parse_comma_separated(self):
        assert len(parse_cards("As,Kh, Qd")) == 3

    def test_parse_no_separator(self):
        """Test parsing cards without separator."""
        assert len(parse_cards("AsKhQd")) == 3

    def test_parse_with_symbols(self):
        """Test parsing cards with suit symbols."""
        assert len(parse_cards("A♠ K♥ Q♦")) == 3

    def test_parse_empty(self):
        assert parse_cards("  ") == []


class TestHelpers:

    def test_full_deck_is_unique(self):
        assert len(set(full_deck())) == 52

    def test_ensure_distinct(self):
        cards = parse_cards("As Kh")
        assert ensure_distinct(cards) == cards
        with pytest.raises(ValueError):
            ensure_distinct(parse_cards("As As"))
