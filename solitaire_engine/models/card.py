"""Card model."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class Suit(str, Enum):
    """Card suit.

    Declaration order is the canonical suit order used for deck ordering
    and foundation assignment.
    """

    SPADE = "♠"
    HEART = "♥"
    DIAMOND = "♦"
    CLUB = "♣"


SUITS: tuple[Suit, ...] = tuple(Suit)

RED_SUITS = frozenset({Suit.HEART, Suit.DIAMOND})

# Index 0 is rank 1 (Ace)
VALUES: tuple[str, ...] = (
    "A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K",
)

ACE = 1
KING = 13


class Card(BaseModel, frozen=True):
    """Single playing card.

    Only ``suit`` and ``rank`` are stored; ``value`` and ``id`` are derived
    and appear in dumps so snapshots stay readable.
    """

    suit: Suit
    rank: int = Field(ge=ACE, le=KING)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def value(self) -> str:
        """Face value (A, 2..10, J, Q, K)."""
        return VALUES[self.rank - 1]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        """Identifier unique within one deck, e.g. ``"10♥"``."""
        return f"{self.value}{self.suit.value}"

    @property
    def is_red(self) -> bool:
        return self.suit in RED_SUITS

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return str(self)


def make_card(rank: int | str, suit: Suit | str) -> Card:
    """Build a card from a rank (number or face value) and a suit.

    Args:
        rank: Rank 1-13 or a face value such as ``"Q"``.
        suit: Suit member or its symbol.

    Returns:
        Card instance.
    """
    if isinstance(rank, str):
        rank = VALUES.index(rank.upper()) + 1
    return Card(suit=Suit(suit), rank=rank)
