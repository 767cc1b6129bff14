"""Game state models.

States are frozen snapshots. Every zone is a tuple whose last element is
the exposed (top) card. Transitions build new snapshots; old ones stay
valid for history.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from .card import KING, Card

Pile = tuple[Card, ...]

NUM_FOUNDATIONS = 4
FREECELL_COLUMNS = 8
FREECELL_CELLS = 4
KLONDIKE_COLUMNS = 7


class GamePhase(str, Enum):
    """Lifecycle of a single deal."""

    DEALT = "dealt"  # Zero moves
    IN_PROGRESS = "in_progress"
    WON = "won"  # Absorbing


class Variant(str, Enum):
    """Supported game variants."""

    FREECELL = "freecell"
    KLONDIKE = "klondike"


def _empty_foundations() -> tuple[Pile, ...]:
    return tuple(() for _ in range(NUM_FOUNDATIONS))


class _BaseState(BaseModel, frozen=True):
    """Fields and derived flags shared by all variants."""

    foundations: tuple[Pile, ...] = Field(default_factory=_empty_foundations)
    seed: int = 0
    moves: int = Field(default=0, ge=0)

    @property
    def is_won(self) -> bool:
        """True iff every foundation holds a complete suit."""
        return all(len(f) == KING for f in self.foundations)

    @property
    def phase(self) -> GamePhase:
        if self.is_won:
            return GamePhase.WON
        if self.moves == 0:
            return GamePhase.DEALT
        return GamePhase.IN_PROGRESS

    def all_cards(self) -> list[Card]:
        """Every card in every zone (used for conservation checks)."""
        raise NotImplementedError


class FreeCellState(_BaseState):
    """FreeCell snapshot."""

    variant: Literal["freecell"] = "freecell"
    tableau: tuple[Pile, ...]
    free_cells: tuple[Card | None, ...] = (None,) * FREECELL_CELLS

    @property
    def empty_free_cells(self) -> int:
        return sum(1 for c in self.free_cells if c is None)

    def all_cards(self) -> list[Card]:
        cards = [c for column in self.tableau for c in column]
        cards.extend(c for c in self.free_cells if c is not None)
        cards.extend(c for f in self.foundations for c in f)
        return cards

    def __str__(self) -> str:
        return (
            f"FreeCell seed={self.seed} moves={self.moves} "
            f"free={self.empty_free_cells}/{len(self.free_cells)} [{self.phase.value}]"
        )


class TableauColumn(BaseModel, frozen=True):
    """Klondike column: only the last ``face_up_count`` cards are face-up."""

    cards: Pile = ()
    face_up_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_face_up(self) -> "TableauColumn":
        if self.face_up_count > len(self.cards):
            raise ValueError("face_up_count exceeds column size")
        return self

    @property
    def face_down_count(self) -> int:
        return len(self.cards) - self.face_up_count

    @property
    def face_up_cards(self) -> Pile:
        return self.cards[self.face_down_count:]

    @property
    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def is_face_up(self, index: int) -> bool:
        """Check if the card at ``index`` (from the bottom) is face-up."""
        return index >= self.face_down_count


class KlondikeState(_BaseState):
    """Klondike snapshot."""

    variant: Literal["klondike"] = "klondike"
    tableau: tuple[TableauColumn, ...]
    stock: Pile = ()  # Face-down, top is last
    waste: Pile = ()  # Face-up, top is last
    draw_count: Literal[1, 3] = 1

    def all_cards(self) -> list[Card]:
        cards = [c for column in self.tableau for c in column.cards]
        cards.extend(self.stock)
        cards.extend(self.waste)
        cards.extend(c for f in self.foundations for c in f)
        return cards

    def __str__(self) -> str:
        return (
            f"Klondike seed={self.seed} moves={self.moves} draw={self.draw_count} "
            f"stock={len(self.stock)} waste={len(self.waste)} [{self.phase.value}]"
        )


GameState = Annotated[Union[FreeCellState, KlondikeState], Field(discriminator="variant")]

GAME_STATE_ADAPTER: TypeAdapter[FreeCellState | KlondikeState] = TypeAdapter(GameState)


def is_won(state: FreeCellState | KlondikeState) -> bool:
    """Check if the game has been won."""
    return state.is_won
