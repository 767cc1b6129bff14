"""Bounded undo/redo history over immutable state snapshots."""

import json
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

TState = TypeVar("TState")

DEFAULT_MAX_SIZE = 100


class HistoryError(Exception):
    """Misuse of a history manager (a caller bug, not a user action)."""


class EmptyHistoryError(HistoryError):
    """The history holds no states."""


class HistoryIndexError(HistoryError, IndexError):
    """A history index is out of range."""


class HistoryPayloadError(HistoryError, ValueError):
    """A serialized history payload is malformed."""


class HistoryManager(Generic[TState]):
    """Undo/redo stack of state snapshots with a cursor.

    Pushing after an undo discards the redo states, like browser history.
    When the list outgrows ``max_size`` the oldest states are evicted and
    the cursor shifts so it still addresses the same state. Snapshots are
    stored as given; callers must treat them as immutable.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        """Initialize an empty history.

        Args:
            max_size: Maximum number of states kept (at least 1).
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._states: list[TState] = []
        self._current_index = -1

    @property
    def current_index(self) -> int:
        """Cursor position (-1 when empty)."""
        return self._current_index

    def push(self, state: TState) -> None:
        """Append a state after the cursor, dropping any redo states.

        Args:
            state: The new current state.
        """
        del self._states[self._current_index + 1:]
        self._states.append(state)
        self._current_index += 1

        if len(self._states) > self.max_size:
            del self._states[0]
            self._current_index -= 1

    def undo(self) -> TState | None:
        """Step back one state.

        Returns:
            The state now under the cursor, or None if already at the oldest.
        """
        if not self.can_undo():
            return None
        self._current_index -= 1
        return self._states[self._current_index]

    def redo(self) -> TState | None:
        """Step forward one state.

        Returns:
            The state now under the cursor, or None if already at the newest.
        """
        if not self.can_redo():
            return None
        self._current_index += 1
        return self._states[self._current_index]

    def can_undo(self) -> bool:
        return self._current_index > 0

    def can_redo(self) -> bool:
        return self._current_index < len(self._states) - 1

    def get_current_state(self) -> TState:
        """Get the state under the cursor.

        Raises:
            EmptyHistoryError: If nothing has been pushed.
        """
        if self._current_index < 0:
            raise EmptyHistoryError("History is empty")
        return self._states[self._current_index]

    def get_history(self) -> tuple[TState, ...]:
        """All stored states, oldest first (read-only view for debugging)."""
        return tuple(self._states)

    def jump_to_index(self, index: int) -> TState:
        """Move the cursor directly to ``index`` (time-travel debugging).

        Raises:
            HistoryIndexError: If ``index`` is out of range.
        """
        if index < 0 or index >= len(self._states):
            raise HistoryIndexError(f"Invalid history index: {index}")
        self._current_index = index
        return self._states[index]

    def clear(self) -> None:
        """Remove all states."""
        self._states = []
        self._current_index = -1

    def size(self) -> int:
        return len(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def serialize(self) -> dict[str, Any]:
        """Flatten to ``{"states": [...], "current_index": n}``.

        States are converted to plain JSON data (pydantic models are dumped
        in JSON mode). ``max_size`` is runtime configuration and is not
        included.
        """
        return {
            "states": [to_jsonable_python(s) for s in self._states],
            "current_index": self._current_index,
        }

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.serialize(), ensure_ascii=False)

    @classmethod
    def deserialize(
        cls,
        data: Mapping[str, Any] | str,
        max_size: int = DEFAULT_MAX_SIZE,
        state_type: Any = None,
    ) -> "HistoryManager[Any]":
        """Rebuild a history from :meth:`serialize` output.

        Args:
            data: Payload dict or its JSON string.
            max_size: Size limit for the new manager. If the payload holds
                more states, the oldest are dropped and the cursor shifted
                (clamped to the oldest kept state).
            state_type: Type (or TypeAdapter) used to validate and revive
                each state. Raw data is kept when omitted.

        Returns:
            New HistoryManager.

        Raises:
            HistoryPayloadError: If the payload is malformed.
        """
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                raise HistoryPayloadError(f"History payload is not valid JSON: {e}") from e

        if not isinstance(data, Mapping):
            raise HistoryPayloadError("History payload must be an object")
        if "states" not in data or "current_index" not in data:
            raise HistoryPayloadError("History payload needs 'states' and 'current_index'")

        states = data["states"]
        index = data["current_index"]
        if not isinstance(states, list):
            raise HistoryPayloadError("'states' must be a list")
        if not isinstance(index, int) or isinstance(index, bool):
            raise HistoryPayloadError("'current_index' must be an integer")

        if states:
            if not 0 <= index < len(states):
                raise HistoryPayloadError(
                    f"'current_index' {index} out of range for {len(states)} states"
                )
        elif index != -1:
            raise HistoryPayloadError("'current_index' must be -1 for an empty history")

        if state_type is not None:
            adapter = state_type if isinstance(state_type, TypeAdapter) else TypeAdapter(state_type)
            try:
                states = [adapter.validate_python(s) for s in states]
            except ValidationError as e:
                raise HistoryPayloadError(f"Invalid state in history payload: {e}") from e

        manager: HistoryManager[Any] = cls(max_size=max_size)
        overflow = max(0, len(states) - max_size)
        manager._states = list(states[overflow:])
        manager._current_index = max(0, index - overflow) if manager._states else -1
        return manager
