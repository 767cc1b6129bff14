"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from solitaire_engine.config import GameLogConfig
from solitaire_engine.models.game_state import FreeCellState, KlondikeState
from solitaire_engine.models.moves import Move, format_notation

from .formatters import format_state

AnyState = FreeCellState | KlondikeState


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    The deal plus the ordered move events are enough to replay a game,
    since dealing is a pure function of the seed.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, variant: str) -> None:
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "variant": variant,
        })

    def log_deal(self, state: AnyState) -> None:
        """Log a new deal.

        Args:
            state: Initial snapshot.
        """
        self._write({
            "type": "deal",
            "seed": state.seed,
            "state": format_state(state),
        })

    def log_move(self, move: Move, state: AnyState) -> None:
        """Log an accepted move.

        Args:
            move: The move applied.
            state: Snapshot after the move.
        """
        self._write({
            "type": "move",
            "move": format_notation(move),
            "detail": move.model_dump(),
            "moves": state.moves,
        })

    def log_rejected(self, move: Move, reason: str, message: str) -> None:
        """Log a rejected move.

        Args:
            move: The move requested.
            reason: Rejection reason code.
            message: Human readable explanation.
        """
        self._write({
            "type": "rejected",
            "move": format_notation(move),
            "reason": reason,
            "message": message,
        })

    def log_undo(self, state: AnyState) -> None:
        self._write({"type": "undo", "moves": state.moves})

    def log_redo(self, state: AnyState) -> None:
        self._write({"type": "redo", "moves": state.moves})

    def log_win(self, state: AnyState) -> None:
        self._write({
            "type": "win",
            "seed": state.seed,
            "moves": state.moves,
        })

    def log_session_end(self, state: AnyState) -> None:
        """Log session end with the final snapshot."""
        self._write({
            "type": "session_end",
            "won": state.is_won,
            "moves": state.moves,
            "state": format_state(state),
        })
