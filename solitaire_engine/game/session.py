"""Game session: the single driver that owns the active state and its history."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable

from solitaire_engine.config import Config
from solitaire_engine.logging import GameLogger
from solitaire_engine.models.game_state import GAME_STATE_ADAPTER
from solitaire_engine.models.moves import Move
from solitaire_engine.utils.history import HistoryManager, HistoryPayloadError

from .autoplay import auto_move_to_foundations
from .engine import AnyState, MoveResult, apply_move, init

logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


class GameSession:
    """One game at a time, mutated from one control flow.

    Accepted moves are pushed onto the history; undo and redo restore
    earlier snapshots without re-validating them.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize session.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self.config = config or Config()
        self.game_logger = game_logger
        self.history: HistoryManager[AnyState] = HistoryManager(self.config.history.max_size)

        self._on_win: Callable[[AnyState], None] | None = None

    def set_callbacks(self, on_win: Callable[[AnyState], None] | None = None) -> None:
        """Set event callbacks.

        Args:
            on_win: Called with the winning snapshot.
        """
        self._on_win = on_win

    @property
    def state(self) -> AnyState:
        """Active snapshot.

        Raises:
            EmptyHistoryError: If no game has been started.
        """
        return self.history.get_current_state()

    def new_game(self, seed: int | None = None) -> AnyState:
        """Deal a new game and reset the history.

        Args:
            seed: Deal seed (falls back to config, then a random seed).

        Returns:
            The initial snapshot.
        """
        game = self.config.game
        if seed is None:
            seed = game.seed if game.seed is not None else random.randint(0, MAX_SEED)

        state = init(seed, game.variant, free_cells=game.free_cells, draw_count=game.draw_count)
        self.history.clear()
        self.history.push(state)
        logger.info(f"New {game.variant.value} game, seed {seed}")

        if self.game_logger:
            self.game_logger.log_deal(state)
        return state

    def start(self, state: AnyState) -> None:
        """Resume play from an existing snapshot (history is reset)."""
        self.history.clear()
        self.history.push(state)

    def play(self, move: Move) -> MoveResult:
        """Apply a move to the active state.

        Rejected moves leave the state and history untouched.
        """
        result = apply_move(self.state, move)
        if result.rejection is not None:
            if self.game_logger:
                self.game_logger.log_rejected(move, result.rejection.reason.value, result.rejection.message)
            return result

        self.history.push(result.state)
        if self.game_logger:
            self.game_logger.log_move(move, result.state)
        self._check_win(result.state)
        return result

    def auto_complete(self) -> list[Move]:
        """Play every safe foundation move, each pushed as its own history entry.

        Returns:
            Moves applied.
        """
        _, moves = auto_move_to_foundations(self.state)
        for move in moves:
            self.play(move)
        return moves

    def undo(self) -> AnyState | None:
        """Restore the previous snapshot, or return None if there is none."""
        state = self.history.undo()
        if state is not None and self.game_logger:
            self.game_logger.log_undo(state)
        return state

    def redo(self) -> AnyState | None:
        """Re-apply the next snapshot, or return None if there is none."""
        state = self.history.redo()
        if state is not None and self.game_logger:
            self.game_logger.log_redo(state)
        return state

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole history for persistence."""
        return self.history.serialize()

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any] | str,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ) -> GameSession:
        """Restore a session saved with :meth:`to_dict`.

        Raises:
            HistoryPayloadError: If the payload is malformed or empty.
        """
        session = cls(config, game_logger)
        history: HistoryManager[Any] = HistoryManager.deserialize(
            data,
            max_size=session.config.history.max_size,
            state_type=GAME_STATE_ADAPTER,
        )
        if history.size() == 0:
            raise HistoryPayloadError("Saved session holds no states")
        session.history = history
        return session

    def _check_win(self, state: AnyState) -> None:
        if not state.is_won:
            return
        if self.game_logger:
            self.game_logger.log_win(state)
        if self._on_win:
            self._on_win(state)
