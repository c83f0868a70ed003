"""
Board module for the minefield engine.

Holds the grid of cells, board configuration and validation, the three
construction passes (blank fill, mine placement, numbering) and read-only
snapshots for presentation code.
"""
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .cell import Cell, CellKind, Position


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Lifecycle of a single game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# Offsets of the 8 surrounding cells, diagonals included
ADJACENT_OFFSETS: Tuple[Position, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class InvalidConfiguration(ValueError):
    """Raised when a board cannot be built from the given parameters."""


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        density: Fraction of cells holding a mine, in [0, 1).
    """

    width: int = 9
    height: int = 9
    density: float = 0.125

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(
                    f"Board {name} must be an integer, got {value!r}"
                )
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if not 0 <= self.density < 1:
            raise InvalidConfiguration(
                f"Mine density must be in [0, 1), got {self.density!r}"
            )
        max_mines = self.total_cells - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @classmethod
    def from_percent(cls, width: int, height: int, percent: float) -> "BoardConfig":
        """Build a configuration from a mine percentage such as 15."""
        return cls(width, height, percent / 100)

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def mine_count(self) -> int:
        """Number of mines placed for this configuration."""
        return math.floor(self.total_cells * self.density)


# Preset boards
CLASSIC = BoardConfig(38, 24, 0.15)
BEGINNER = BoardConfig(9, 9, 0.125)
INTERMEDIATE = BoardConfig(16, 16, 0.15625)


# ============================================================================
# Snapshots
# ============================================================================

class CellView(NamedTuple):
    """Immutable copy of one cell's state."""

    position: Position
    kind: CellKind
    adjacent_mines: int
    flagged: bool
    revealed: bool
    exploded: bool


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board for rendering."""

    width: int
    height: int
    phase: GamePhase
    mine_count: int
    flag_count: int
    cells: Tuple[CellView, ...]

    @property
    def remaining_mines(self) -> int:
        """Mines not yet accounted for by flags. May be negative."""
        return self.mine_count - self.flag_count

    def cell_at(self, x: int, y: int) -> CellView:
        """Get the view of the cell at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside the board")
        return self.cells[y * self.width + x]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Cells live in a flat list addressed by ``y * width + x`` and are
    mutated in place. Lookups outside the board return an INVALID
    pseudo-cell instead of raising.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    mine_count: int = 0
    flag_count: int = 0
    phase: GamePhase = GamePhase.PLAYING
    cells: List[Cell] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Blank-fill the grid after dataclass creation."""
        if not self.cells:
            self._init_grid()

    # ========================================================================
    # Construction Passes (Low-level)
    # ========================================================================

    @classmethod
    def generate(
        cls,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> "Board":
        """
        Build a board with randomly placed mines.

        Args:
            config: Validated board configuration.
            rng: Random generator used for mine placement.

        Returns:
            Fully numbered board in the PLAYING phase.
        """
        board = cls(config=config, mine_count=config.mine_count)
        board._place_mines(rng if rng is not None else np.random.default_rng())
        board._calculate_adjacent_mines()
        return board

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with an explicit mine layout.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: (x, y) coordinates of every mine.

        Raises:
            InvalidConfiguration: On duplicate or off-board mines, or when
                no safe cell would remain.
        """
        positions = [tuple(position) for position in mines]
        total = width * height if width > 0 and height > 0 else 0
        config = BoardConfig(width, height, len(positions) / total if total else 0.0)
        if len(set(positions)) != len(positions):
            raise InvalidConfiguration("Mine positions must be unique")

        board = cls(config=config, mine_count=len(positions))
        for x, y in positions:
            if not board.in_bounds(x, y):
                raise InvalidConfiguration(f"Mine ({x}, {y}) is outside the board")
            board._place_mine(x, y)
        board._calculate_adjacent_mines()
        return board

    def _init_grid(self) -> None:
        """Fill every coordinate with an empty cell."""
        self.cells = [
            Cell(position=(x, y))
            for y in range(self.height)
            for x in range(self.width)
        ]

    def _place_mines(self, rng: np.random.Generator) -> None:
        """Place mines by sampling coordinates until enough are distinct."""
        placed = 0
        while placed < self.mine_count:
            x = int(rng.integers(0, self.width))
            y = int(rng.integers(0, self.height))
            if self.get_cell(x, y).is_mine:
                continue
            self._place_mine(x, y)
            placed += 1

    def _place_mine(self, x: int, y: int) -> None:
        self.cells[self._index(x, y)].kind = CellKind.MINE

    def _calculate_adjacent_mines(self) -> None:
        """Number every non-mine cell from its surrounding mines."""
        for cell in self.cells:
            if cell.is_mine:
                continue
            count = self._count_adjacent_mines(*cell.position)
            cell.adjacent_mines = count
            cell.kind = CellKind.NUMBER if count > 0 else CellKind.EMPTY

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines among the in-bounds neighbors of a cell."""
        return sum(1 for cell in self.adjacent_cells(x, y) if cell.is_mine)

    # ========================================================================
    # Grid Access
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _index(self, x: int, y: int) -> int:
        return y * self.config.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def get_cell(self, x: int, y: int) -> Cell:
        """Get cell at position, or an INVALID pseudo-cell if off-board."""
        if not self.in_bounds(x, y):
            return Cell.invalid(x, y)
        return self.cells[self._index(x, y)]

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get the 8 surrounding positions, off-board ones included.

        Callers resolve them through get_cell, which maps off-board
        positions to INVALID pseudo-cells.
        """
        return [(x + dx, y + dy) for dx, dy in ADJACENT_OFFSETS]

    def adjacent_cells(self, x: int, y: int) -> List[Cell]:
        """Get the in-bounds neighbor cells of a position."""
        return [
            self.cells[self._index(nx, ny)]
            for nx, ny in self.neighbors(x, y)
            if self.in_bounds(nx, ny)
        ]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.phase == GamePhase.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.phase == GamePhase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.phase == GamePhase.LOST

    @property
    def remaining_mines(self) -> int:
        """Mines not yet accounted for by flags. May be negative."""
        return self.mine_count - self.flag_count

    def snapshot(self) -> BoardSnapshot:
        """Copy the board state into an immutable snapshot."""
        return BoardSnapshot(
            width=self.width,
            height=self.height,
            phase=self.phase,
            mine_count=self.mine_count,
            flag_count=self.flag_count,
            cells=tuple(
                CellView(
                    position=cell.position,
                    kind=cell.kind,
                    adjacent_mines=cell.adjacent_mines,
                    flagged=cell.flagged,
                    revealed=cell.revealed,
                    exploded=cell.exploded,
                )
                for cell in self.cells
            ),
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array indexed [y, x].

        Returns:
            2D int8 array of cell observation codes
            (see Cell.to_observation).
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self.cells:
            x, y = cell.position
            obs[y, x] = cell.to_observation()
        return obs
