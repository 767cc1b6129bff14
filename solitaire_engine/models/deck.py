"""Deck creation and seeded shuffling."""

from collections.abc import Sequence

from solitaire_engine.utils.rng import create_rng

from .card import KING, SUITS, Card

DECK_SIZE = 52


def create_deck() -> list[Card]:
    """Create a standard 52-card deck.

    Cards are ordered suit-major (♠, ♥, ♦, ♣) and rank-minor (A through K).
    """
    return [Card(suit=suit, rank=rank) for suit in SUITS for rank in range(1, KING + 1)]


def shuffle(deck: Sequence[Card], seed: int) -> list[Card]:
    """Shuffle a deck with Fisher-Yates driven by the seeded stream.

    The argument is never modified.

    Args:
        deck: Cards to shuffle.
        seed: Seed for the random stream.

    Returns:
        New list holding the same cards in a seed-determined order.
    """
    shuffled = list(deck)
    rng = create_rng(seed)

    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def deck_from_seed(seed: int) -> list[Card]:
    """Fresh deck shuffled with ``seed``."""
    return shuffle(create_deck(), seed)


def deck_from_cards(cards: Sequence[Card]) -> list[Card]:
    """Validate an explicit card order for dealing.

    Args:
        cards: Exactly 52 distinct cards, in deal order.

    Returns:
        Copy of the cards.

    Raises:
        ValueError: If the arrangement is not a complete deck.
    """
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Invalid card arrangement: expected {DECK_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != DECK_SIZE:
        raise ValueError("Invalid card arrangement: duplicate cards")
    return list(cards)
