"""Game state machine: deterministic deals and pure move transitions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from solitaire_engine.models.card import Card
from solitaire_engine.models.deck import deck_from_cards, deck_from_seed
from solitaire_engine.models.game_state import (
    FREECELL_CELLS,
    FREECELL_COLUMNS,
    KLONDIKE_COLUMNS,
    FreeCellState,
    KlondikeState,
    TableauColumn,
    Variant,
)
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
)

from .rules import RejectionReason
from .validator import FreeCellValidator, KlondikeValidator

logger = logging.getLogger(__name__)

AnyState = FreeCellState | KlondikeState

_freecell_validator = FreeCellValidator()
_klondike_validator = KlondikeValidator()


@dataclass(frozen=True)
class MoveRejection:
    """Why a move was refused. The caller keeps its previous state."""

    reason: RejectionReason
    message: str = ""

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}" if self.message else self.reason.value


@dataclass(frozen=True)
class MoveResult:
    """Outcome of :func:`apply_move`.

    ``state`` is the new snapshot when accepted and the unchanged input
    snapshot when rejected.
    """

    state: AnyState
    rejection: MoveRejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def deal_freecell(deck: Sequence[Card], seed: int = 0, free_cells: int = FREECELL_CELLS) -> FreeCellState:
    """Deal a FreeCell layout.

    Eight columns: the first four get 7 cards, the last four get 6, all
    face-up, dealt column by column in deck order.
    """
    tableau: list[tuple[Card, ...]] = []
    index = 0
    for col in range(FREECELL_COLUMNS):
        size = 7 if col < 4 else 6
        tableau.append(tuple(deck[index:index + size]))
        index += size

    return FreeCellState(
        tableau=tuple(tableau),
        free_cells=(None,) * free_cells,
        seed=seed,
    )


def deal_klondike(deck: Sequence[Card], seed: int = 0, draw_count: int = 1) -> KlondikeState:
    """Deal a Klondike layout.

    Column ``i`` gets ``i + 1`` cards with only its top card face-up (28
    cards); the remaining 24 form the stock, whose last card is the top.
    """
    columns: list[TableauColumn] = []
    index = 0
    for col in range(KLONDIKE_COLUMNS):
        size = col + 1
        columns.append(TableauColumn(cards=tuple(deck[index:index + size]), face_up_count=1))
        index += size

    return KlondikeState(
        tableau=tuple(columns),
        stock=tuple(deck[index:]),
        seed=seed,
        draw_count=draw_count,
    )


def init(
    seed: int,
    variant: Variant | str = Variant.FREECELL,
    free_cells: int = FREECELL_CELLS,
    draw_count: int = 1,
) -> AnyState:
    """Deal a new game. Pure function of its arguments.

    Args:
        seed: Shuffle seed; the same seed always yields the same deal.
        variant: Game variant.
        free_cells: Number of free cells (FreeCell only).
        draw_count: Cards per stock draw, 1 or 3 (Klondike only).

    Returns:
        Initial snapshot with zero moves.
    """
    deck = deck_from_seed(seed)
    if Variant(variant) == Variant.KLONDIKE:
        return deal_klondike(deck, seed, draw_count)
    return deal_freecell(deck, seed, free_cells)


def init_from_cards(
    cards: Sequence[Card],
    variant: Variant | str = Variant.FREECELL,
    free_cells: int = FREECELL_CELLS,
    draw_count: int = 1,
) -> AnyState:
    """Deal a game from an explicit 52-card order (seed recorded as 0).

    Raises:
        ValueError: If ``cards`` is not a complete deck.
    """
    deck = deck_from_cards(cards)
    if Variant(variant) == Variant.KLONDIKE:
        return deal_klondike(deck, 0, draw_count)
    return deal_freecell(deck, 0, free_cells)


def is_won(state: AnyState) -> bool:
    """Check if the game has been won."""
    return state.is_won


def apply_move(state: AnyState, move: Move) -> MoveResult:
    """Apply a move to a snapshot.

    Never raises for an illegal move; the rejection names the failing rule.
    A won game rejects every move.

    Args:
        state: Current snapshot (left untouched).
        move: Requested move.

    Returns:
        MoveResult holding the next snapshot (move counter + 1) or the
        rejection.
    """
    if state.is_won:
        return MoveResult(state, MoveRejection(RejectionReason.GAME_OVER, "The game is already won"))

    if isinstance(state, KlondikeState):
        validation = _klondike_validator.validate(state, move)
    else:
        validation = _freecell_validator.validate(state, move)

    if not validation.is_valid:
        assert validation.reason is not None
        logger.debug(f"Rejected {move.kind}: {validation.error_message}")
        return MoveResult(state, MoveRejection(validation.reason, validation.error_message))

    if isinstance(state, KlondikeState):
        new_state: AnyState = _execute_klondike(state, move)
    else:
        new_state = _execute_freecell(state, move)

    logger.debug(f"Applied {move.kind} (move {new_state.moves})")
    if new_state.is_won:
        logger.info(f"Game won in {new_state.moves} moves (seed {new_state.seed})")
    return MoveResult(new_state)


def _execute_freecell(state: FreeCellState, move: Move) -> FreeCellState:
    """Relocate cards for an already validated FreeCell move."""
    tableau = [list(column) for column in state.tableau]
    cells = list(state.free_cells)
    foundations = [list(pile) for pile in state.foundations]

    if isinstance(move, TableauToTableau):
        run = tableau[move.source][-move.count:]
        del tableau[move.source][-move.count:]
        tableau[move.target].extend(run)
    elif isinstance(move, TableauToFreeCell):
        cells[move.cell] = tableau[move.column].pop()
    elif isinstance(move, FreeCellToFreeCell):
        cells[move.target], cells[move.source] = cells[move.source], None
    elif isinstance(move, FreeCellToTableau):
        card = cells[move.cell]
        assert card is not None
        tableau[move.column].append(card)
        cells[move.cell] = None
    elif isinstance(move, TableauToFoundation):
        foundations[move.foundation].append(tableau[move.column].pop())
    elif isinstance(move, FreeCellToFoundation):
        card = cells[move.cell]
        assert card is not None
        foundations[move.foundation].append(card)
        cells[move.cell] = None
    elif isinstance(move, FoundationToTableau):
        tableau[move.column].append(foundations[move.foundation].pop())
    elif isinstance(move, FoundationToFreeCell):
        cells[move.cell] = foundations[move.foundation].pop()

    return state.model_copy(
        update={
            "tableau": tuple(tuple(column) for column in tableau),
            "free_cells": tuple(cells),
            "foundations": tuple(tuple(pile) for pile in foundations),
            "moves": state.moves + 1,
        }
    )


def _take(column: TableauColumn, count: int) -> tuple[TableauColumn, tuple[Card, ...]]:
    """Remove the top ``count`` cards, flipping a newly exposed card."""
    remaining = column.cards[:-count]
    face_up = max(0, column.face_up_count - count)
    if remaining and face_up == 0:
        face_up = 1
    return TableauColumn(cards=remaining, face_up_count=face_up), column.cards[-count:]


def _put(column: TableauColumn, cards: Sequence[Card]) -> TableauColumn:
    return TableauColumn(
        cards=column.cards + tuple(cards),
        face_up_count=column.face_up_count + len(cards),
    )


def _execute_klondike(state: KlondikeState, move: Move) -> KlondikeState:
    """Relocate cards for an already validated Klondike move."""
    tableau = list(state.tableau)
    foundations = [list(pile) for pile in state.foundations]
    stock = state.stock
    waste = state.waste

    if isinstance(move, DrawStock):
        count = min(state.draw_count, len(stock))
        # Drawn cards keep their stock order; the stock's top lands on top
        waste = waste + stock[-count:]
        stock = stock[:-count]
    elif isinstance(move, RecycleWaste):
        # The waste is turned over: its bottom card becomes the new stock top
        stock = tuple(reversed(waste))
        waste = ()
    elif isinstance(move, TableauToTableau):
        tableau[move.source], run = _take(tableau[move.source], move.count)
        tableau[move.target] = _put(tableau[move.target], run)
    elif isinstance(move, WasteToTableau):
        tableau[move.column] = _put(tableau[move.column], waste[-1:])
        waste = waste[:-1]
    elif isinstance(move, TableauToFoundation):
        tableau[move.column], run = _take(tableau[move.column], 1)
        foundations[move.foundation].extend(run)
    elif isinstance(move, WasteToFoundation):
        foundations[move.foundation].append(waste[-1])
        waste = waste[:-1]
    elif isinstance(move, FoundationToTableau):
        card = foundations[move.foundation].pop()
        tableau[move.column] = _put(tableau[move.column], (card,))

    return state.model_copy(
        update={
            "tableau": tuple(tableau),
            "stock": stock,
            "waste": waste,
            "foundations": tuple(tuple(pile) for pile in foundations),
            "moves": state.moves + 1,
        }
    )
