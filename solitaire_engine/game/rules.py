"""Shared solitaire stacking rules.

Pure predicates over cards. Empty-pile policy is decided by the options
passed in, never by the variant, so one rule set serves every game.
Functions prefixed ``check_`` return the reason a placement fails (or
None); the boolean predicates are thin wrappers over them.
"""

from collections.abc import Callable, Sequence
from enum import Enum

from solitaire_engine.models.card import ACE, Card, Suit


class RejectionReason(str, Enum):
    """Why a move was rejected."""

    SOURCE_EMPTY = "source_empty"
    DESTINATION_OCCUPIED = "destination_occupied"
    RANK_MISMATCH = "rank_mismatch"
    COLOR_MISMATCH = "color_mismatch"
    SUIT_MISMATCH = "suit_mismatch"
    INVALID_SEQUENCE = "invalid_sequence"
    SEQUENCE_TOO_LARGE = "sequence_too_large"
    FACE_DOWN = "face_down"
    INVALID_LOCATION = "invalid_location"
    INVALID_COUNT = "invalid_count"
    SAME_LOCATION = "same_location"
    STOCK_EMPTY = "stock_empty"
    STOCK_NOT_EMPTY = "stock_not_empty"
    UNSUPPORTED_MOVE = "unsupported_move"
    GAME_OVER = "game_over"


def is_red(card: Card) -> bool:
    """Check if a card is red (hearts or diamonds)."""
    return card.suit in (Suit.HEART, Suit.DIAMOND)


def is_black(card: Card) -> bool:
    """Check if a card is black (spades or clubs)."""
    return card.suit in (Suit.SPADE, Suit.CLUB)


def alternating_colors(a: Card, b: Card) -> bool:
    """Check if one card is red and the other black."""
    return is_red(a) != is_red(b)


def same_suit(a: Card, b: Card) -> bool:
    return a.suit == b.suit


def check_stack_descending(
    card: Card,
    target: Card | None,
    require_alternating_colors: bool = True,
    allow_empty_target: bool = True,
) -> RejectionReason | None:
    """Diagnose placing ``card`` on ``target`` in descending order.

    Args:
        card: Card being placed.
        target: Exposed card of the destination, or None for an empty pile.
        require_alternating_colors: Colors must differ.
        allow_empty_target: Whether an empty pile accepts the card.

    Returns:
        None if legal, otherwise the failing rule.
    """
    if target is None:
        return None if allow_empty_target else RejectionReason.RANK_MISMATCH
    if card.rank != target.rank - 1:
        return RejectionReason.RANK_MISMATCH
    if require_alternating_colors and not alternating_colors(card, target):
        return RejectionReason.COLOR_MISMATCH
    return None


def can_stack_descending(
    card: Card,
    target: Card | None,
    require_alternating_colors: bool = True,
    allow_empty_target: bool = True,
) -> bool:
    """Check the tableau stacking rule.

    An empty target returns ``allow_empty_target``; otherwise ``card`` must
    be exactly one rank below ``target`` and, if required, of the other
    color. Red 7 on black 8 is legal; a King on an empty pile is legal only
    when ``allow_empty_target`` is set.
    """
    return (
        check_stack_descending(card, target, require_alternating_colors, allow_empty_target)
        is None
    )


def check_stack_on_foundation(
    card: Card,
    foundation: Sequence[Card],
    require_same_suit: bool = True,
) -> RejectionReason | None:
    """Diagnose placing ``card`` on a foundation pile.

    An empty foundation accepts only an Ace. Otherwise the card must be one
    rank above the top card and, if required, of the same suit.
    """
    if not foundation:
        return None if card.rank == ACE else RejectionReason.RANK_MISMATCH

    top = foundation[-1]
    if require_same_suit and not same_suit(card, top):
        return RejectionReason.SUIT_MISMATCH
    if card.rank != top.rank + 1:
        return RejectionReason.RANK_MISMATCH
    return None


def can_stack_on_foundation(
    card: Card,
    foundation: Sequence[Card],
    require_same_suit: bool = True,
) -> bool:
    """Check the foundation building rule (Ace up to King)."""
    return check_stack_on_foundation(card, foundation, require_same_suit) is None


def is_valid_sequence(
    cards: Sequence[Card],
    validator: Callable[[Card, Card], bool],
) -> bool:
    """Check every adjacent pair of a run against a stacking rule.

    Args:
        cards: Run ordered from the bottom card toward the exposed top.
        validator: ``validator(card, target)`` for each card and the card
            beneath it.

    Returns:
        True if the run is empty, a single card, or every pair passes.
    """
    if len(cards) <= 1:
        return True
    return all(validator(cards[i + 1], cards[i]) for i in range(len(cards) - 1))


def _tableau_pair(card: Card, target: Card) -> bool:
    return can_stack_descending(card, target, allow_empty_target=False)


def is_valid_tableau_sequence(cards: Sequence[Card]) -> bool:
    """Descending ranks with alternating colors (FreeCell and Klondike)."""
    return is_valid_sequence(cards, _tableau_pair)
