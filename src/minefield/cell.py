"""
Cell module for the minefield engine.

Represents individual grid squares with their content (mine, empty,
number) and player-visible state (revealed, flagged, exploded).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """What a grid square contains."""

    INVALID = auto()
    MINE = auto()
    EMPTY = auto()
    NUMBER = auto()


# Observation codes used by array snapshots
OBS_FLAGGED = -2
OBS_HIDDEN = -1
OBS_MINE = 9
OBS_EXPLODED = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single square of the minefield.

    Attributes:
        position: (x, y) coordinate of the cell, matching its grid slot.
        kind: Content of the cell. INVALID marks off-board lookups.
        adjacent_mines: Count of mines among the 8 neighbors (0-8).
        flagged: Player marker that blocks reveals.
        revealed: Whether the cell is shown; never reset within a game.
        exploded: True only for the mine that ended the game.
    """

    position: Position = (0, 0)
    kind: CellKind = CellKind.EMPTY
    adjacent_mines: int = 0
    flagged: bool = False
    revealed: bool = False
    exploded: bool = False

    @classmethod
    def invalid(cls, x: int, y: int) -> "Cell":
        """Pseudo-cell returned for coordinates outside the board."""
        return cls(position=(x, y), kind=CellKind.INVALID)

    @property
    def is_invalid(self) -> bool:
        """Check if cell lies outside the board."""
        return self.kind == CellKind.INVALID

    @property
    def is_mine(self) -> bool:
        """Check if cell contains a mine."""
        return self.kind == CellKind.MINE

    @property
    def is_empty(self) -> bool:
        """Check if cell is a safe cell without adjacent mines."""
        return self.kind == CellKind.EMPTY

    @property
    def is_number(self) -> bool:
        """Check if cell is a safe cell next to at least one mine."""
        return self.kind == CellKind.NUMBER

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.revealed and not self.flagged

    def to_observation(self) -> int:
        """
        Convert cell to an integer code for array snapshots.

        Flags take priority over reveals, so a flagged mine shown after
        a loss still reads as flagged.

        Returns:
            -2: Flagged cell
            -1: Hidden cell
            0-8: Revealed safe cell with adjacent mine count
            9: Revealed mine
            10: Exploded mine
        """
        if self.flagged:
            return OBS_FLAGGED
        if not self.revealed:
            return OBS_HIDDEN
        if self.kind == CellKind.MINE:
            return OBS_EXPLODED if self.exploded else OBS_MINE
        return self.adjacent_mines
