"""Move discovery: legal-move enumeration, safe auto-moves and hints."""

import logging
from collections.abc import Iterator, Sequence

from solitaire_engine.models.card import KING, SUITS, Card, make_card
from solitaire_engine.models.game_state import FreeCellState, KlondikeState
from solitaire_engine.models.moves import (
    DrawStock,
    FoundationToFreeCell,
    FoundationToTableau,
    FreeCellToFoundation,
    FreeCellToFreeCell,
    FreeCellToTableau,
    Move,
    RecycleWaste,
    TableauToFoundation,
    TableauToFreeCell,
    TableauToTableau,
    WasteToFoundation,
    WasteToTableau,
    move_source,
)

from .engine import AnyState, apply_move
from .rules import can_stack_on_foundation, is_valid_tableau_sequence

logger = logging.getLogger(__name__)

# FreeCell auto-moves only cards at most this far above the lowest foundation
SAFE_RANK_MARGIN = 2


def _movable_run_length(cards: Sequence[Card]) -> int:
    """Length of the longest valid tableau sequence at the top of a pile."""
    length = 1 if cards else 0
    while length < len(cards) and is_valid_tableau_sequence(cards[-(length + 1):]):
        length += 1
    return length


def _freecell_candidates(state: FreeCellState) -> Iterator[Move]:
    columns = range(len(state.tableau))
    cells = range(len(state.free_cells))
    foundations = range(len(state.foundations))

    for src in columns:
        run = _movable_run_length(state.tableau[src])
        for dst in columns:
            if dst != src:
                for count in range(1, run + 1):
                    yield TableauToTableau(source=src, target=dst, count=count)
        for cell in cells:
            yield TableauToFreeCell(column=src, cell=cell)
        for f in foundations:
            yield TableauToFoundation(column=src, foundation=f)

    for cell in cells:
        for col in columns:
            yield FreeCellToTableau(cell=cell, column=col)
        for f in foundations:
            yield FreeCellToFoundation(cell=cell, foundation=f)
        for other in cells:
            if other != cell:
                yield FreeCellToFreeCell(source=cell, target=other)

    for f in foundations:
        for col in columns:
            yield FoundationToTableau(foundation=f, column=col)
        for cell in cells:
            yield FoundationToFreeCell(foundation=f, cell=cell)


def _klondike_candidates(state: KlondikeState) -> Iterator[Move]:
    columns = range(len(state.tableau))
    foundations = range(len(state.foundations))

    yield DrawStock()
    yield RecycleWaste()

    for col in columns:
        yield WasteToTableau(column=col)
    for f in foundations:
        yield WasteToFoundation(foundation=f)

    for src in columns:
        for dst in columns:
            if dst != src:
                for count in range(1, state.tableau[src].face_up_count + 1):
                    yield TableauToTableau(source=src, target=dst, count=count)
        for f in foundations:
            yield TableauToFoundation(column=src, foundation=f)

    for f in foundations:
        for col in columns:
            yield FoundationToTableau(foundation=f, column=col)


def valid_moves(state: AnyState) -> list[Move]:
    """Every move :func:`apply_move` would accept from ``state``."""
    if isinstance(state, KlondikeState):
        candidates = _klondike_candidates(state)
    else:
        candidates = _freecell_candidates(state)
    return [move for move in candidates if apply_move(state, move).accepted]


def valid_moves_from(state: AnyState, zone: str, index: int | None = None) -> list[Move]:
    """Legal moves taking cards from one zone, for tap-to-move style input.

    Args:
        state: Current snapshot.
        zone: ``"tableau"``, ``"free_cell"``, ``"foundation"``, ``"waste"`` or
            ``"stock"``.
        index: Pile index within the zone (ignored for waste and stock).

    Returns:
        List of accepted moves from that source.
    """
    found = []
    for move in valid_moves(state):
        move_zone, move_index = move_source(move)
        if move_zone == zone and (move_index is None or index is None or move_index == index):
            found.append(move)
    return found


def foundation_for(card: Card, foundations: Sequence[Sequence[Card]]) -> int | None:
    """Index of the foundation that accepts ``card`` (a started pile of its
    suit first, then any empty pile), or None."""
    for i, pile in enumerate(foundations):
        if pile and can_stack_on_foundation(card, pile):
            return i
    for i, pile in enumerate(foundations):
        if not pile and can_stack_on_foundation(card, pile):
            return i
    return None


def find_safe_auto_move(state: AnyState) -> Move | None:
    """Find a card that can go to a foundation without hurting play.

    FreeCell: the card's rank must be at most two above the lowest
    foundation, so cards still needed for building stay on the board. Free
    cells are checked before columns. Klondike: any card playable to a
    foundation, waste first.

    Returns:
        The move, or None if nothing qualifies.
    """
    if state.is_won:
        return None

    if isinstance(state, KlondikeState):
        if state.waste:
            target = foundation_for(state.waste[-1], state.foundations)
            if target is not None:
                return WasteToFoundation(foundation=target)
        for col, column in enumerate(state.tableau):
            if column.top is not None and column.face_up_count > 0:
                target = foundation_for(column.top, state.foundations)
                if target is not None:
                    return TableauToFoundation(column=col, foundation=target)
        return None

    min_rank = min(len(pile) for pile in state.foundations)

    for cell, card in enumerate(state.free_cells):
        if card is not None and card.rank <= min_rank + SAFE_RANK_MARGIN:
            target = foundation_for(card, state.foundations)
            if target is not None:
                return FreeCellToFoundation(cell=cell, foundation=target)

    for col, column in enumerate(state.tableau):
        if column and column[-1].rank <= min_rank + SAFE_RANK_MARGIN:
            target = foundation_for(column[-1], state.foundations)
            if target is not None:
                return TableauToFoundation(column=col, foundation=target)

    return None


def auto_move_to_foundations(state: AnyState) -> tuple[AnyState, list[Move]]:
    """Apply safe auto-moves until none remain.

    Each applied move counts as a move.

    Returns:
        Tuple of (final state, moves applied in order).
    """
    applied: list[Move] = []
    move = find_safe_auto_move(state)
    while move is not None:
        result = apply_move(state, move)
        if not result.accepted:
            break
        state = result.state
        applied.append(move)
        move = find_safe_auto_move(state)

    if applied:
        logger.debug(f"Auto-moved {len(applied)} cards to foundations")
    return state, applied


def lowest_playable_cards(state: AnyState) -> list[str]:
    """Ids of the next card each foundation needs (hint highlighting).

    Suits already complete are skipped.
    """
    next_rank = {suit: 1 for suit in SUITS}
    for pile in state.foundations:
        if pile:
            next_rank[pile[-1].suit] = pile[-1].rank + 1

    return [
        make_card(rank, suit).id
        for suit, rank in next_rank.items()
        if rank <= KING
    ]
