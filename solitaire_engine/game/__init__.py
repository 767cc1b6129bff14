"""Game logic."""

from .autoplay import (
    auto_move_to_foundations,
    find_safe_auto_move,
    lowest_playable_cards,
    valid_moves,
    valid_moves_from,
)
from .engine import MoveRejection, MoveResult, apply_move, init, init_from_cards, is_won
from .movement import max_movable
from .rules import RejectionReason
from .session import GameSession
from .validator import FreeCellValidator, KlondikeValidator, ValidationResult

__all__ = [
    "auto_move_to_foundations",
    "find_safe_auto_move",
    "lowest_playable_cards",
    "valid_moves",
    "valid_moves_from",
    "MoveRejection",
    "MoveResult",
    "apply_move",
    "init",
    "init_from_cards",
    "is_won",
    "max_movable",
    "RejectionReason",
    "GameSession",
    "FreeCellValidator",
    "KlondikeValidator",
    "ValidationResult",
]
