"""
Text rendering for minefield snapshots.

Draws one character per cell with the same priority as the tile map of
the graphical game: flags first, then hidden cells, then revealed content.
"""
from typing import List, Union

from .board import Board, BoardSnapshot, CellView
from .cell import Cell, CellKind


HIDDEN = "."
FLAG = "F"
EMPTY = " "
MINE = "*"
EXPLODED = "X"


def render_cell(cell: Union[Cell, CellView]) -> str:
    """Get the display character for a single cell."""
    if cell.flagged:
        return FLAG
    if not cell.revealed:
        return HIDDEN
    if cell.kind == CellKind.MINE:
        return EXPLODED if cell.exploded else MINE
    if cell.kind == CellKind.NUMBER:
        return str(cell.adjacent_mines)
    return EMPTY


def render_board(board: Union[Board, BoardSnapshot], coordinates: bool = False) -> str:
    """
    Render a board as text, one line per row.

    Args:
        board: Live board or snapshot to draw.
        coordinates: Prefix rows and add a header with x/y indices
            (last digit only, for compact output).

    Returns:
        Multi-line string; row 0 is the first line.
    """
    snapshot = board.snapshot() if isinstance(board, Board) else board
    lines: List[str] = []

    if coordinates:
        header = " ".join(str(x % 10) for x in range(snapshot.width))
        lines.append("   " + header)

    for y in range(snapshot.height):
        row = " ".join(
            render_cell(snapshot.cell_at(x, y)) for x in range(snapshot.width)
        )
        if coordinates:
            row = f"{y % 100:>2} " + row
        lines.append(row)

    return "\n".join(lines)


def render_status(board: Union[Board, BoardSnapshot]) -> str:
    """Status line with the game phase and remaining mine count."""
    return f"{board.phase.name} | mines left: {board.remaining_mines}"
