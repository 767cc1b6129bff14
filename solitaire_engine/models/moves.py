"""Move descriptors.

Each move kind is its own frozen model carrying only the fields it needs;
``Move`` is the union discriminated on ``kind``.
"""

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

Index = Annotated[int, Field(ge=0)]


class TableauToTableau(BaseModel, frozen=True):
    """Move the top ``count`` cards of one column onto another."""

    kind: Literal["tableau_to_tableau"] = "tableau_to_tableau"
    source: Index
    target: Index
    count: int = Field(default=1, ge=1)


class TableauToFreeCell(BaseModel, frozen=True):
    kind: Literal["tableau_to_free_cell"] = "tableau_to_free_cell"
    column: Index
    cell: Index


class FreeCellToFreeCell(BaseModel, frozen=True):
    kind: Literal["free_cell_to_free_cell"] = "free_cell_to_free_cell"
    source: Index
    target: Index


class FreeCellToTableau(BaseModel, frozen=True):
    kind: Literal["free_cell_to_tableau"] = "free_cell_to_tableau"
    cell: Index
    column: Index


class TableauToFoundation(BaseModel, frozen=True):
    kind: Literal["tableau_to_foundation"] = "tableau_to_foundation"
    column: Index
    foundation: Index


class FreeCellToFoundation(BaseModel, frozen=True):
    kind: Literal["free_cell_to_foundation"] = "free_cell_to_foundation"
    cell: Index
    foundation: Index


class FoundationToTableau(BaseModel, frozen=True):
    kind: Literal["foundation_to_tableau"] = "foundation_to_tableau"
    foundation: Index
    column: Index


class FoundationToFreeCell(BaseModel, frozen=True):
    kind: Literal["foundation_to_free_cell"] = "foundation_to_free_cell"
    foundation: Index
    cell: Index


class WasteToTableau(BaseModel, frozen=True):
    kind: Literal["waste_to_tableau"] = "waste_to_tableau"
    column: Index


class WasteToFoundation(BaseModel, frozen=True):
    kind: Literal["waste_to_foundation"] = "waste_to_foundation"
    foundation: Index


class DrawStock(BaseModel, frozen=True):
    """Turn the next ``draw_count`` stock cards onto the waste."""

    kind: Literal["draw_stock"] = "draw_stock"


class RecycleWaste(BaseModel, frozen=True):
    """Turn the waste over to form a new stock."""

    kind: Literal["recycle_waste"] = "recycle_waste"


Move = Annotated[
    Union[
        TableauToTableau,
        TableauToFreeCell,
        FreeCellToFreeCell,
        FreeCellToTableau,
        TableauToFoundation,
        FreeCellToFoundation,
        FoundationToTableau,
        FoundationToFreeCell,
        WasteToTableau,
        WasteToFoundation,
        DrawStock,
        RecycleWaste,
    ],
    Field(discriminator="kind"),
]

MOVE_ADAPTER: TypeAdapter[Any] = TypeAdapter(Move)


def parse_move(data: dict[str, Any]) -> Move:
    """Validate a move payload (e.g. decoded JSON).

    Raises:
        pydantic.ValidationError: If the payload is not a known move.
    """
    return MOVE_ADAPTER.validate_python(data)


# Compact notation: t=tableau, c=free cell, f=foundation, w=waste
_NOTATION = re.compile(r"^([tcfw])(\d*)-([tcf])(\d+)(?:x(\d+))?$")


def parse_notation(text: str) -> Move:
    """Parse the compact move notation.

    Examples: ``t0-t3``, ``t0-t3x2`` (move two cards), ``t1-c0``, ``c0-f2``,
    ``w-t4``, ``f0-t1``, ``draw``, ``recycle``.

    Raises:
        ValueError: If the text is not valid notation.
    """
    token = text.strip().lower()
    if token == "draw":
        return DrawStock()
    if token == "recycle":
        return RecycleWaste()

    match = _NOTATION.match(token)
    if not match:
        raise ValueError(f"Unrecognized move notation: {text!r}")

    src, src_index, dst, dst_index, count = match.groups()
    if (src == "w") != (src_index == ""):
        raise ValueError(f"Unrecognized move notation: {text!r}")
    if count is not None and (src, dst) != ("t", "t"):
        raise ValueError(f"Card count only applies to tableau moves: {text!r}")

    a = int(src_index) if src_index else 0
    b = int(dst_index)
    route = (src, dst)

    if route == ("t", "t"):
        return TableauToTableau(source=a, target=b, count=int(count) if count else 1)
    if route == ("t", "c"):
        return TableauToFreeCell(column=a, cell=b)
    if route == ("c", "c"):
        return FreeCellToFreeCell(source=a, target=b)
    if route == ("c", "t"):
        return FreeCellToTableau(cell=a, column=b)
    if route == ("t", "f"):
        return TableauToFoundation(column=a, foundation=b)
    if route == ("c", "f"):
        return FreeCellToFoundation(cell=a, foundation=b)
    if route == ("f", "t"):
        return FoundationToTableau(foundation=a, column=b)
    if route == ("f", "c"):
        return FoundationToFreeCell(foundation=a, cell=b)
    if route == ("w", "t"):
        return WasteToTableau(column=b)
    if route == ("w", "f"):
        return WasteToFoundation(foundation=b)

    raise ValueError(f"Unsupported move route: {text!r}")


def format_notation(move: Move) -> str:
    """Inverse of :func:`parse_notation`."""
    if isinstance(move, DrawStock):
        return "draw"
    if isinstance(move, RecycleWaste):
        return "recycle"
    if isinstance(move, TableauToTableau):
        suffix = f"x{move.count}" if move.count > 1 else ""
        return f"t{move.source}-t{move.target}{suffix}"
    if isinstance(move, TableauToFreeCell):
        return f"t{move.column}-c{move.cell}"
    if isinstance(move, FreeCellToFreeCell):
        return f"c{move.source}-c{move.target}"
    if isinstance(move, FreeCellToTableau):
        return f"c{move.cell}-t{move.column}"
    if isinstance(move, TableauToFoundation):
        return f"t{move.column}-f{move.foundation}"
    if isinstance(move, FreeCellToFoundation):
        return f"c{move.cell}-f{move.foundation}"
    if isinstance(move, FoundationToTableau):
        return f"f{move.foundation}-t{move.column}"
    if isinstance(move, FoundationToFreeCell):
        return f"f{move.foundation}-c{move.cell}"
    if isinstance(move, WasteToTableau):
        return f"w-t{move.column}"
    if isinstance(move, WasteToFoundation):
        return f"w-f{move.foundation}"
    raise TypeError(f"Unknown move type: {type(move).__name__}")


def move_source(move: Move) -> tuple[str, int | None]:
    """Zone and index a move takes cards from (``("stock", None)`` for draws)."""
    if isinstance(move, TableauToTableau):
        return "tableau", move.source
    if isinstance(move, FreeCellToFreeCell):
        return "free_cell", move.source
    if isinstance(move, TableauToFreeCell | TableauToFoundation):
        return "tableau", move.column
    if isinstance(move, FreeCellToTableau | FreeCellToFoundation):
        return "free_cell", move.cell
    if isinstance(move, FoundationToTableau | FoundationToFreeCell):
        return "foundation", move.foundation
    if isinstance(move, WasteToTableau | WasteToFoundation):
        return "waste", None
    if isinstance(move, DrawStock):
        return "stock", None
    return "waste", None
