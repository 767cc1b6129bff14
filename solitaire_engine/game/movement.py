"""Multi-card (supermove) capacity for games with free cells."""

from collections.abc import Sequence

from solitaire_engine.models.card import Card

from .rules import RejectionReason, is_valid_tableau_sequence


def max_movable(free_cells: int, empty_columns: int) -> int:
    """Maximum run length movable in one supermove.

    ``(free_cells + 1) * 2 ** empty_columns``

    Args:
        free_cells: Number of empty free cells.
        empty_columns: Number of empty tableau columns usable as scratch
            space (the destination column never counts).

    Returns:
        Largest number of cards that can move together.
    """
    return (free_cells + 1) * 2**empty_columns


def count_scratch_columns(tableau: Sequence[Sequence[Card]], target: int) -> int:
    """Empty columns other than the move's destination."""
    return sum(1 for i, column in enumerate(tableau) if not column and i != target)


def check_supermove(
    cards: Sequence[Card],
    free_cells: int,
    empty_columns: int,
) -> RejectionReason | None:
    """Diagnose a multi-card tableau move.

    An invalid run and an over-capacity run are reported separately.

    Returns:
        None if the run may move, ``INVALID_SEQUENCE`` if it is not a
        descending alternating run, ``SEQUENCE_TOO_LARGE`` if it exceeds
        :func:`max_movable`.
    """
    if not is_valid_tableau_sequence(cards):
        return RejectionReason.INVALID_SEQUENCE
    if len(cards) > max_movable(free_cells, empty_columns):
        return RejectionReason.SEQUENCE_TOO_LARGE
    return None
