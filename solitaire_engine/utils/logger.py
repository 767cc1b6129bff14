"""Logging utilities and board display."""

import logging
import sys
from itertools import zip_longest
from typing import TYPE_CHECKING

from solitaire_engine.models.card import Card
from solitaire_engine.models.game_state import FreeCellState, KlondikeState

if TYPE_CHECKING:
    from solitaire_engine.game.engine import MoveRejection

CELL_WIDTH = 5


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def _slot(card: Card | None, face_up: bool = True) -> str:
    if card is None:
        return "[  ]".ljust(CELL_WIDTH)
    if not face_up:
        return "##".ljust(CELL_WIDTH)
    return card.id.ljust(CELL_WIDTH)


class BoardDisplay:
    """Display game boards to stdout."""

    def __init__(self, show_board: bool = True):
        """Initialize display.

        Args:
            show_board: Whether to print the full board on each update
        """
        self.show_board = show_board

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def render(self, state: FreeCellState | KlondikeState) -> str:
        """Render a snapshot as text, top row first then tableau rows."""
        lines = [str(state)]
        foundations = "".join(_slot(f[-1] if f else None) for f in state.foundations)

        if isinstance(state, KlondikeState):
            stock = _slot(state.stock[-1] if state.stock else None, face_up=False)
            waste = _slot(state.waste[-1] if state.waste else None)
            lines.append(f"{stock}{waste}  {foundations}")
            columns = [
                [(card, col.is_face_up(i)) for i, card in enumerate(col.cards)]
                for col in state.tableau
            ]
        else:
            cells = "".join(_slot(c) for c in state.free_cells)
            lines.append(f"{cells}  {foundations}")
            columns = [[(card, True) for card in col] for col in state.tableau]

        lines.append("")
        for row in zip_longest(*columns, fillvalue=None):
            cells_text = [
                _slot(entry[0], entry[1]) if entry is not None else " " * CELL_WIDTH
                for entry in row
            ]
            lines.append("".join(cells_text).rstrip())
        return "\n".join(lines)

    def print_board(self, state: FreeCellState | KlondikeState) -> None:
        if not self.show_board:
            return
        print(self.render(state))

    def print_move(self, notation: str, rejection: "MoveRejection | None" = None) -> None:
        """Print a move outcome."""
        if rejection is None:
            print(f"  -> {notation}")
        else:
            print(f"  -> {notation} rejected ({rejection})")

    def print_result(self, state: FreeCellState | KlondikeState) -> None:
        """Print the final outcome."""
        self.print_separator()
        if state.is_won:
            print(f"WON in {state.moves} moves (seed {state.seed})")
        else:
            print(f"{state.phase.value.upper()} after {state.moves} moves (seed {state.seed})")
        self.print_separator()
