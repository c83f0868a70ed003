"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, CellKind, Engine


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine() -> Engine:
    """Create a seeded engine on a beginner board."""
    return Engine(BoardConfig(9, 9, 0.125), seed=1234)


@pytest.fixture
def center_mine_engine(engine: Engine) -> Engine:
    """3x3 board with a single mine in the middle."""
    engine.load(3, 3, [(1, 1)])
    return engine


@pytest.fixture
def corner_mine_engine(engine: Engine) -> Engine:
    """2x2 board with a single mine at (0, 0)."""
    engine.load(2, 2, [(0, 0)])
    return engine


@pytest.fixture
def open_field_engine(engine: Engine) -> Engine:
    """5x5 board with one mine in the far corner."""
    engine.load(5, 5, [(4, 4)])
    return engine


@pytest.fixture
def row_engine(engine: Engine) -> Engine:
    """5x1 row without mines."""
    engine.load(5, 1, [])
    return engine


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the middle."""
    return Board.from_mines(3, 3, [(1, 1)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden empty cell."""
    return Cell(position=(2, 3))


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(kind=CellKind.MINE)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    return Cell(kind=CellKind.NUMBER, adjacent_mines=3, revealed=True)
