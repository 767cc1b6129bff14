"""Formatters for game log output."""

from collections.abc import Iterable
from typing import Any

from solitaire_engine.models.card import VALUES, Card, Suit
from solitaire_engine.models.game_state import FreeCellState, KlondikeState

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADE: "S",
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
}


def format_card(card: Card | None) -> str:
    """Format a single card to string.

    Args:
        card: Card to format, or None for an empty slot.

    Returns:
        Formatted string (e.g., "AS" for Ace of spades, "10H", "" for None).
    """
    if card is None:
        return ""
    return f"{card.value}{SUIT_CODES[card.suit]}"


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated string, bottom card first.

    Returns:
        Comma-separated card codes (e.g., "KS,QH,JC"). Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_state(state: FreeCellState | KlondikeState) -> dict[str, Any]:
    """Compact, human-readable summary of a snapshot for log lines."""
    summary: dict[str, Any] = {
        "variant": state.variant,
        "moves": state.moves,
        "foundations": [format_cards(f) for f in state.foundations],
    }
    if isinstance(state, KlondikeState):
        summary["tableau"] = [
            {"cards": format_cards(col.cards), "face_up": col.face_up_count}
            for col in state.tableau
        ]
        summary["stock"] = len(state.stock)
        summary["waste"] = format_cards(state.waste)
    else:
        summary["tableau"] = [format_cards(col) for col in state.tableau]
        summary["free_cells"] = [format_card(c) for c in state.free_cells]
    return summary


def parse_card(code: str) -> Card:
    """Parse a card code produced by :func:`format_card` (e.g. "10H", "qs").

    Raises:
        ValueError: If the code is not a valid card.
    """
    code = code.strip().upper()
    suits = {v: k for k, v in SUIT_CODES.items()}
    if len(code) < 2 or code[-1] not in suits:
        raise ValueError(f"Invalid card code: {code!r}")
    value = code[:-1]
    if value not in VALUES:
        raise ValueError(f"Invalid card code: {code!r}")
    return Card(suit=suits[code[-1]], rank=VALUES.index(value) + 1)


def parse_cards(text: str) -> list[Card]:
    """Parse a comma-separated list of card codes (inverse of :func:`format_cards`)."""
    return [parse_card(code) for code in text.split(",") if code.strip()]
