"""Game models."""

from .card import ACE, KING, SUITS, Card, Suit, make_card
from .deck import create_deck, deck_from_cards, shuffle
from .game_state import (
    GAME_STATE_ADAPTER,
    FreeCellState,
    GamePhase,
    GameState,
    KlondikeState,
    TableauColumn,
    Variant,
    is_won,
)
from .moves import Move, parse_move, parse_notation

__all__ = [
    "ACE",
    "KING",
    "SUITS",
    "Card",
    "Suit",
    "make_card",
    "create_deck",
    "deck_from_cards",
    "shuffle",
    "GAME_STATE_ADAPTER",
    "FreeCellState",
    "GamePhase",
    "GameState",
    "KlondikeState",
    "TableauColumn",
    "Variant",
    "is_won",
    "Move",
    "parse_move",
    "parse_notation",
]
