"""
Engine module for the minefield game.

Applies player actions to a board: reveal, flag toggling and chord
reveals, flood reveal of empty regions, and win/loss evaluation.
Invalid actions are silent no-ops; every action method returns whether
it changed the board.
"""
import logging
from collections import deque
from typing import Iterable, Optional

import numpy as np

from .board import Board, BoardConfig, BoardSnapshot, GamePhase, CLASSIC
from .cell import Cell, Position


logger = logging.getLogger(__name__)


# ============================================================================
# Engine Class
# ============================================================================

class Engine:
    """
    Owns the current board and mutates it through player actions.

    A new game replaces the board wholesale. Once the phase is WON or
    LOST the board is frozen and every action is ignored.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the engine and start a first game.

        Args:
            config: Board configuration (default: CLASSIC).
            seed: Seed for mine placement, for reproducible games.
        """
        self.rng = np.random.default_rng(seed)
        self.board = self.new_game_from_config(config or CLASSIC)

    # ========================================================================
    # New Game
    # ========================================================================

    def new_game(self, width: int, height: int, density: float) -> Board:
        """
        Start a new game with randomly placed mines.

        Args:
            width: Number of columns.
            height: Number of rows.
            density: Fraction of cells holding a mine, in [0, 1).

        Returns:
            The new board.

        Raises:
            InvalidConfiguration: If the parameters cannot make a board.
        """
        return self.new_game_from_config(BoardConfig(width, height, density))

    def new_game_from_config(self, config: BoardConfig) -> Board:
        """Start a new game from a validated configuration."""
        self.board = Board.generate(config, self.rng)
        logger.debug(
            "New game %dx%d with %d mines",
            config.width, config.height, self.board.mine_count,
        )
        return self.board

    def load(self, width: int, height: int, mines: Iterable[Position]) -> Board:
        """Start a new game with mines at the given (x, y) positions."""
        self.board = Board.from_mines(width, height, mines)
        logger.debug(
            "Loaded game %dx%d with %d mines",
            width, height, self.board.mine_count,
        )
        return self.board

    def reseed(self, seed: Optional[int]) -> None:
        """Replace the random generator used for mine placement."""
        self.rng = np.random.default_rng(seed)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at (x, y).

        A mine ends the game; an empty cell floods its region; a number
        is revealed alone. No-op for off-board, revealed or flagged cells.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self.board.is_playing:
            return False
        changed = self._reveal_cell(self.board.get_cell(x, y))
        self.check_win_condition()
        return changed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle the flag on the cell at (x, y).

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if not self.board.is_playing:
            return False
        cell = self.board.get_cell(x, y)
        if cell.is_invalid or cell.revealed:
            return False

        cell.flagged = not cell.flagged
        self.board.flag_count += 1 if cell.flagged else -1
        self.check_win_condition()
        return True

    def chord_reveal(self, x: int, y: int) -> bool:
        """
        Reveal all neighbors of a revealed number whose flags match it.

        The chord only fires when exactly ``adjacent_mines`` neighbors
        are flagged. A misplaced flag can therefore lose the game.

        Returns:
            True if any neighbor changed, False otherwise.
        """
        if not self._can_chord(x, y):
            return False

        changed = False
        for nx, ny in self.board.neighbors(x, y):
            if self._reveal_cell(self.board.get_cell(nx, ny)):
                changed = True
        self.check_win_condition()
        return changed

    def _can_chord(self, x: int, y: int) -> bool:
        """Check if chord action is valid."""
        if not self.board.is_playing:
            return False
        cell = self.board.get_cell(x, y)
        if not cell.revealed or not cell.is_number:
            return False
        return self._count_adjacent_flags(x, y) == cell.adjacent_mines

    def _count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged cells among the in-bounds neighbors."""
        return sum(1 for cell in self.board.adjacent_cells(x, y) if cell.flagged)

    # ========================================================================
    # Reveal Logic
    # ========================================================================

    def _reveal_cell(self, cell: Cell) -> bool:
        """Reveal a single cell and handle consequences."""
        if cell.is_invalid or cell.revealed or cell.flagged:
            return False
        if not self.board.is_playing:
            return False

        if cell.is_mine:
            self._explode(cell)
        elif cell.is_empty:
            self._flood_reveal(cell)
        else:
            cell.revealed = True
        return True

    def _flood_reveal(self, start: Cell) -> None:
        """
        Reveal the connected empty region around start and its border.

        Uses an explicit breadth-first work list. Cells are marked
        revealed before their neighbors are queued, so each cell is
        processed at most once.
        """
        start.revealed = True
        queue = deque([start])
        while queue:
            cell = queue.popleft()
            if not cell.is_empty:
                continue
            for nx, ny in self.board.neighbors(*cell.position):
                neighbor = self.board.get_cell(nx, ny)
                if neighbor.is_invalid or neighbor.revealed or neighbor.flagged:
                    continue
                if neighbor.is_mine:
                    # Unreachable on a consistently numbered board
                    self._explode(neighbor)
                    return
                neighbor.revealed = True
                queue.append(neighbor)

    def _explode(self, cell: Cell) -> None:
        """Lose the game on this mine and uncover every other mine."""
        cell.exploded = True
        cell.revealed = True
        self._set_phase(GamePhase.LOST)
        for other in self.board:
            if other.is_mine:
                other.revealed = True

    # ========================================================================
    # Game State
    # ========================================================================

    def check_win_condition(self) -> bool:
        """
        Mark the game as won when every cell is accounted for.

        A cell counts when it is a revealed safe cell or a flagged mine.
        Hidden safe cells and unflagged hidden mines both block the win.

        Returns:
            True if the game is won.
        """
        if not self.board.is_playing:
            return self.board.is_won

        resolved = 0
        for cell in self.board:
            if cell.revealed and not cell.is_mine:
                resolved += 1
            if cell.flagged and cell.is_mine:
                resolved += 1

        if resolved == self.board.config.total_cells:
            self._set_phase(GamePhase.WON)
        return self.board.is_won

    def _set_phase(self, phase: GamePhase) -> None:
        logger.debug("Game phase %s -> %s", self.board.phase.name, phase.name)
        self.board.phase = phase

    def remaining_mine_count(self) -> int:
        """Mines minus flags, unclamped; negative when over-flagged."""
        return self.board.remaining_mines

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self.board.phase

    def snapshot(self) -> BoardSnapshot:
        """Get a read-only copy of the current board."""
        return self.board.snapshot()
