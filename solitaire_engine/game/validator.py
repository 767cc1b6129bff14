"""Move validation for both variants."""

from collections.abc import Sequence
from dataclasses import dataclass

from solitaire_engine.models.card import KING, Card
from solitaire_engine.models.game_state import FreeCellState, KlondikeState, TableauColumn
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

from .movement import check_supermove, count_scratch_columns
from .rules import (
    RejectionReason,
    check_stack_descending,
    check_stack_on_foundation,
    is_valid_tableau_sequence,
)

FREECELL_ONLY = (
    TableauToFreeCell,
    FreeCellToFreeCell,
    FreeCellToTableau,
    FreeCellToFoundation,
    FoundationToFreeCell,
)
KLONDIKE_ONLY = (WasteToTableau, WasteToFoundation, DrawStock, RecycleWaste)


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    reason: RejectionReason | None = None
    error_message: str = ""


VALID = ValidationResult(is_valid=True)


def _reject(reason: RejectionReason, message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, reason=reason, error_message=message)


def _top(pile: Sequence[Card]) -> Card | None:
    return pile[-1] if pile else None


def _in_range(index: int, size: int) -> bool:
    return 0 <= index < size


def _placement(reason: RejectionReason | None, card: Card, target: Card | None) -> ValidationResult:
    """Turn a rule diagnosis into a result with a readable message."""
    if reason is None:
        return VALID
    onto = target.id if target is not None else "an empty pile"
    if reason == RejectionReason.COLOR_MISMATCH:
        return _reject(reason, f"{card} must be the opposite color of {onto}")
    if reason == RejectionReason.SUIT_MISMATCH:
        return _reject(reason, f"{card} does not follow suit on {onto}")
    return _reject(reason, f"{card} cannot be placed on {onto}")


class FreeCellValidator:
    """Validates moves against a FreeCell snapshot."""

    def validate(self, state: FreeCellState, move: Move) -> ValidationResult:
        """Validate a move.

        Args:
            state: Current snapshot.
            move: Requested move.

        Returns:
            ValidationResult
        """
        if isinstance(move, KLONDIKE_ONLY):
            return _reject(RejectionReason.UNSUPPORTED_MOVE, f"FreeCell has no {move.kind} move")

        if isinstance(move, TableauToTableau):
            return self._validate_tableau_move(state, move)

        columns = len(state.tableau)
        cells = len(state.free_cells)
        foundations = len(state.foundations)

        if isinstance(move, TableauToFreeCell):
            if not (_in_range(move.column, columns) and _in_range(move.cell, cells)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such column or free cell")
            if not state.tableau[move.column]:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Column {move.column} is empty")
            return self._check_cell_empty(state, move.cell)

        if isinstance(move, FreeCellToFreeCell):
            if not (_in_range(move.source, cells) and _in_range(move.target, cells)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such free cell")
            if move.source == move.target:
                return _reject(RejectionReason.SAME_LOCATION, "Source and destination are the same cell")
            if state.free_cells[move.source] is None:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Free cell {move.source} is empty")
            return self._check_cell_empty(state, move.target)

        if isinstance(move, FreeCellToTableau):
            if not (_in_range(move.cell, cells) and _in_range(move.column, columns)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such free cell or column")
            card = state.free_cells[move.cell]
            if card is None:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Free cell {move.cell} is empty")
            target = _top(state.tableau[move.column])
            return _placement(check_stack_descending(card, target), card, target)

        if isinstance(move, TableauToFoundation | FreeCellToFoundation):
            if not _in_range(move.foundation, foundations):
                return _reject(RejectionReason.INVALID_LOCATION, "No such foundation")
            if isinstance(move, TableauToFoundation):
                if not _in_range(move.column, columns):
                    return _reject(RejectionReason.INVALID_LOCATION, "No such column")
                card = _top(state.tableau[move.column])
            else:
                if not _in_range(move.cell, cells):
                    return _reject(RejectionReason.INVALID_LOCATION, "No such free cell")
                card = state.free_cells[move.cell]
            if card is None:
                return _reject(RejectionReason.SOURCE_EMPTY, "Nothing to move")
            pile = state.foundations[move.foundation]
            return _placement(check_stack_on_foundation(card, pile), card, _top(pile))

        if isinstance(move, FoundationToTableau):
            if not (_in_range(move.foundation, foundations) and _in_range(move.column, columns)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such foundation or column")
            card = _top(state.foundations[move.foundation])
            if card is None:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Foundation {move.foundation} is empty")
            target = _top(state.tableau[move.column])
            return _placement(check_stack_descending(card, target), card, target)

        if isinstance(move, FoundationToFreeCell):
            if not (_in_range(move.foundation, foundations) and _in_range(move.cell, cells)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such foundation or free cell")
            if not state.foundations[move.foundation]:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Foundation {move.foundation} is empty")
            return self._check_cell_empty(state, move.cell)

        return _reject(RejectionReason.UNSUPPORTED_MOVE, f"Unknown move: {move!r}")

    def _check_cell_empty(self, state: FreeCellState, cell: int) -> ValidationResult:
        occupant = state.free_cells[cell]
        if occupant is not None:
            return _reject(
                RejectionReason.DESTINATION_OCCUPIED,
                f"Free cell {cell} already holds {occupant}",
            )
        return VALID

    def _validate_tableau_move(self, state: FreeCellState, move: TableauToTableau) -> ValidationResult:
        """Validate a single-card or supermove between columns.

        The run must be a valid sequence and fit the capacity given by the
        empty free cells and the empty columns other than the destination.
        """
        columns = len(state.tableau)
        if not (_in_range(move.source, columns) and _in_range(move.target, columns)):
            return _reject(RejectionReason.INVALID_LOCATION, "No such column")
        if move.source == move.target:
            return _reject(RejectionReason.SAME_LOCATION, "Source and destination are the same column")

        source = state.tableau[move.source]
        if not source:
            return _reject(RejectionReason.SOURCE_EMPTY, f"Column {move.source} is empty")
        if move.count > len(source):
            return _reject(
                RejectionReason.INVALID_COUNT,
                f"Column {move.source} holds only {len(source)} cards",
            )

        run = source[-move.count:]
        reason = check_supermove(
            run,
            state.empty_free_cells,
            count_scratch_columns(state.tableau, move.target),
        )
        if reason == RejectionReason.INVALID_SEQUENCE:
            return _reject(reason, "Selected cards are not a descending alternating sequence")
        if reason == RejectionReason.SEQUENCE_TOO_LARGE:
            return _reject(reason, f"Not enough free cells or empty columns to move {move.count} cards")

        target = _top(state.tableau[move.target])
        return _placement(check_stack_descending(run[0], target), run[0], target)


class KlondikeValidator:
    """Validates moves against a Klondike snapshot."""

    def validate(self, state: KlondikeState, move: Move) -> ValidationResult:
        """Validate a move.

        Args:
            state: Current snapshot.
            move: Requested move.

        Returns:
            ValidationResult
        """
        if isinstance(move, FREECELL_ONLY):
            return _reject(RejectionReason.UNSUPPORTED_MOVE, f"Klondike has no {move.kind} move")

        columns = len(state.tableau)
        foundations = len(state.foundations)

        if isinstance(move, DrawStock):
            if not state.stock:
                return _reject(RejectionReason.STOCK_EMPTY, "Stock is empty")
            return VALID

        if isinstance(move, RecycleWaste):
            if state.stock:
                return _reject(RejectionReason.STOCK_NOT_EMPTY, "Stock still has cards")
            if not state.waste:
                return _reject(RejectionReason.SOURCE_EMPTY, "Waste is empty")
            return VALID

        if isinstance(move, TableauToTableau):
            if not (_in_range(move.source, columns) and _in_range(move.target, columns)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such column")
            if move.source == move.target:
                return _reject(RejectionReason.SAME_LOCATION, "Source and destination are the same column")
            result, run = self._face_up_run(state.tableau[move.source], move.source, move.count)
            if not result.is_valid:
                return result
            if not is_valid_tableau_sequence(run):
                return _reject(
                    RejectionReason.INVALID_SEQUENCE,
                    "Selected cards are not a descending alternating sequence",
                )
            return self._check_tableau_target(state.tableau[move.target], run[0])

        if isinstance(move, WasteToTableau):
            if not _in_range(move.column, columns):
                return _reject(RejectionReason.INVALID_LOCATION, "No such column")
            card = _top(state.waste)
            if card is None:
                return _reject(RejectionReason.SOURCE_EMPTY, "Waste is empty")
            return self._check_tableau_target(state.tableau[move.column], card)

        if isinstance(move, FoundationToTableau):
            if not (_in_range(move.foundation, foundations) and _in_range(move.column, columns)):
                return _reject(RejectionReason.INVALID_LOCATION, "No such foundation or column")
            card = _top(state.foundations[move.foundation])
            if card is None:
                return _reject(RejectionReason.SOURCE_EMPTY, f"Foundation {move.foundation} is empty")
            return self._check_tableau_target(state.tableau[move.column], card)

        if isinstance(move, TableauToFoundation | WasteToFoundation):
            if not _in_range(move.foundation, foundations):
                return _reject(RejectionReason.INVALID_LOCATION, "No such foundation")
            if isinstance(move, TableauToFoundation):
                if not _in_range(move.column, columns):
                    return _reject(RejectionReason.INVALID_LOCATION, "No such column")
                result, run = self._face_up_run(state.tableau[move.column], move.column, 1)
                if not result.is_valid:
                    return result
                card = run[0]
            else:
                card = _top(state.waste)
                if card is None:
                    return _reject(RejectionReason.SOURCE_EMPTY, "Waste is empty")
            pile = state.foundations[move.foundation]
            return _placement(check_stack_on_foundation(card, pile), card, _top(pile))

        return _reject(RejectionReason.UNSUPPORTED_MOVE, f"Unknown move: {move!r}")

    def _face_up_run(
        self,
        column: TableauColumn,
        index: int,
        count: int,
    ) -> tuple[ValidationResult, Sequence[Card]]:
        """Take the top ``count`` cards of a column if all are face-up."""
        if not column.cards:
            return _reject(RejectionReason.SOURCE_EMPTY, f"Column {index} is empty"), ()
        if count > len(column.cards):
            return (
                _reject(
                    RejectionReason.INVALID_COUNT,
                    f"Column {index} holds only {len(column.cards)} cards",
                ),
                (),
            )
        if count > column.face_up_count:
            return _reject(RejectionReason.FACE_DOWN, "Face-down cards cannot be moved"), ()
        return VALID, column.cards[-count:]

    def _check_tableau_target(self, column: TableauColumn, card: Card) -> ValidationResult:
        """Only a King may fill an empty column."""
        if column.cards and column.face_up_count == 0:
            return _reject(RejectionReason.FACE_DOWN, "Cannot build on a face-down card")
        target = column.top
        if target is None:
            reason = check_stack_descending(card, None, allow_empty_target=card.rank == KING)
            if reason is not None:
                return _reject(reason, f"Only a King can fill an empty column, not {card}")
            return VALID
        reason = check_stack_descending(card, target, allow_empty_target=False)
        return _placement(reason, card, target)
