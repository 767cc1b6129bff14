"""Tests for card and deck models."""

import pytest
from pydantic import ValidationError

from solitaire_engine.models.card import Card, Suit, make_card
from solitaire_engine.models.deck import create_deck, deck_from_cards, shuffle


class TestCard:
    """Tests for Card class."""

    def test_create_card(self):
        """Test creating a card and its derived fields."""
        card = Card(suit=Suit.HEART, rank=10)
        assert card.suit == Suit.HEART
        assert card.rank == 10
        assert card.value == "10"
        assert card.id == "10♥"

    def test_ace_and_king_values(self):
        """Test face values at both ends of the rank range."""
        assert make_card(1, "♠").value == "A"
        assert make_card(13, "♣").value == "K"

    def test_make_card_from_face_value(self):
        """Test building a card from a face value string."""
        assert make_card("Q", Suit.DIAMOND) == Card(suit=Suit.DIAMOND, rank=12)

    def test_rank_out_of_range(self):
        """Test that ranks outside 1-13 are rejected."""
        with pytest.raises(ValidationError):
            Card(suit=Suit.SPADE, rank=0)
        with pytest.raises(ValidationError):
            Card(suit=Suit.SPADE, rank=14)

    def test_card_is_immutable(self):
        """Test that cards cannot be edited after creation."""
        card = make_card(5, "♥")
        with pytest.raises(ValidationError):
            card.rank = 6

    def test_card_equality(self):
        """Test card equality (frozen model)."""
        assert make_card(1, "♠") == make_card(1, "♠")
        assert make_card(1, "♠") != make_card(1, "♥")

    def test_card_hashable(self):
        """Test that cards can be used in sets."""
        assert len({make_card(1, "♠"), make_card(1, "♠")}) == 1

    def test_dump_includes_derived_fields(self):
        """Test that JSON dumps carry value and id."""
        data = make_card(11, "♦").model_dump(mode="json")
        assert data == {"suit": "♦", "rank": 11, "value": "J", "id": "J♦"}

    def test_load_from_dump(self):
        """Test that a dump round-trips (derived fields are ignored on input)."""
        card = make_card(7, "♣")
        assert Card.model_validate(card.model_dump(mode="json")) == card

    def test_color(self):
        """Test the red flag."""
        assert make_card(3, "♥").is_red
        assert make_card(3, "♦").is_red
        assert not make_card(3, "♠").is_red
        assert not make_card(3, "♣").is_red


class TestCreateDeck:
    """Tests for create_deck function."""

    def test_deck_size(self):
        """Test that a deck has 52 unique cards."""
        deck = create_deck()
        assert len(deck) == 52
        assert len({c.id for c in deck}) == 52

    def test_suit_major_order(self):
        """Test that the deck runs A-K per suit in ♠ ♥ ♦ ♣ order."""
        deck = create_deck()
        assert deck[0].id == "A♠"
        assert deck[12].id == "K♠"
        assert deck[13].id == "A♥"
        assert deck[51].id == "K♣"

    def test_deterministic(self):
        """Test that two decks are identical."""
        assert create_deck() == create_deck()


class TestShuffle:
    """Tests for seeded shuffling."""

    def test_same_seed_same_order(self):
        """Test that a seed fixes the permutation."""
        deck = create_deck()
        assert shuffle(deck, 12345) == shuffle(deck, 12345)

    def test_different_seeds_differ(self):
        """Test that different seeds give different permutations."""
        deck = create_deck()
        orders = {tuple(c.id for c in shuffle(deck, seed)) for seed in range(20)}
        assert len(orders) == 20

    def test_does_not_mutate_input(self):
        """Test that the argument is left untouched."""
        deck = create_deck()
        original = list(deck)
        shuffle(deck, 7)
        assert deck == original

    def test_same_cards(self):
        """Test that shuffling is a permutation."""
        deck = create_deck()
        shuffled = shuffle(deck, 99)
        assert shuffled != deck
        assert sorted(c.id for c in shuffled) == sorted(c.id for c in deck)

    def test_negative_and_zero_seeds(self):
        """Test that any integer seed is accepted."""
        assert len(shuffle(create_deck(), 0)) == 52
        assert len(shuffle(create_deck(), -42)) == 52


class TestDeckFromCards:
    """Tests for explicit deal orders."""

    def test_accepts_full_deck(self):
        """Test that a complete deck is copied through."""
        cards = list(reversed(create_deck()))
        result = deck_from_cards(cards)
        assert result == cards
        assert result is not cards

    def test_wrong_size(self):
        """Test that short decks are rejected."""
        with pytest.raises(ValueError, match="expected 52 cards"):
            deck_from_cards(create_deck()[:51])

    def test_duplicates(self):
        """Test that duplicated cards are rejected."""
        cards = create_deck()
        cards[1] = cards[0]
        with pytest.raises(ValueError, match="duplicate"):
            deck_from_cards(cards)
