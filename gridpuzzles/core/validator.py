"""Validation utilities for the four puzzles.

The `is_valid_*` predicates accept partially filled grids and are used for
pruning; the `validate_*_solution` functions check a finished answer against
the original board.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np

from .grid import Coord, Grid
from .rules import Direction, EdgeConstraint, QueensCell, TangoSymbol, sudoku_units

if TYPE_CHECKING:
    from .board import QueensBoard, SudokuBoard, TangoBoard, ZipBoard


# ---------------------------------------------------------------------------
# Sudoku
# ---------------------------------------------------------------------------

def is_valid_placement(grid: Grid, row: int, col: int, value: int,
                       block_rows: int, block_cols: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Args:
        grid: Current values.
        row: Row index.
        col: Column index.
        value: Value to check (1 to grid.size).
        block_rows, block_cols: Block shape.

    Returns:
        True if the value is not yet used in the row, column or block.
    """
    if value < 1 or value > grid.size:
        return False

    if value in grid.get_row(row):
        return False

    if value in grid.get_col(col):
        return False

    if value in grid.get_block(row, col, block_rows, block_cols):
        return False

    return True


def is_valid_sudoku(grid: Grid, block_rows: int, block_cols: int) -> bool:
    """
    Check that no row, column or block repeats a value.
    Does not check if the grid is complete.
    """
    if np.any(grid.cells < 0) or np.any(grid.cells > grid.size):
        return False
    for unit in sudoku_units(grid.size, block_rows, block_cols):
        values = [grid.get(r, c) for r, c in unit]
        non_zero = [v for v in values if v != 0]
        if len(non_zero) != len(set(non_zero)):
            return False
    return True


def validate_sudoku_solution(board: SudokuBoard, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Returns:
        True if the solution is complete, conflict free and keeps every
        prefilled cell.
    """
    if solution.size != board.size:
        return False

    if not np.array_equal(solution.cells[board.prefilled], board.grid.cells[board.prefilled]):
        return False

    return solution.is_complete() and is_valid_sudoku(solution, board.block_rows, board.block_cols)


# ---------------------------------------------------------------------------
# Queens
# ---------------------------------------------------------------------------

def has_adjacent_queen(grid: Grid, row: int, col: int) -> bool:
    """True if any of the 8 neighbours of (row, col) holds a queen."""
    return any(grid.get(r, c) == QueensCell.QUEEN for r, c in grid.king_neighbors(row, col))


def is_valid_queens(grid: Grid, regions: np.ndarray) -> bool:
    """At most one queen per row, column and region, and no two queens touching."""
    queens = grid.cells == QueensCell.QUEEN
    if np.any(queens.sum(axis=1) > 1) or np.any(queens.sum(axis=0) > 1):
        return False

    per_region = np.bincount(regions[queens], minlength=grid.size)
    if np.any(per_region > 1):
        return False

    for r, c in zip(*np.nonzero(queens)):
        if has_adjacent_queen(grid, int(r), int(c)):
            return False
    return True


def validate_queens_solution(board: QueensBoard, solution: Grid) -> bool:
    """Exactly one queen per row, column and region; no touching queens; givens kept."""
    if solution.size != board.size:
        return False

    queens = solution.cells == QueensCell.QUEEN
    given = board.grid.cells == QueensCell.QUEEN
    if np.any(given & ~queens):
        return False
    if np.any(queens & (board.grid.cells == QueensCell.EXCLUDED)):
        return False

    if not (np.all(queens.sum(axis=1) == 1) and np.all(queens.sum(axis=0) == 1)):
        return False
    if not np.all(np.bincount(board.regions[queens], minlength=board.size) == 1):
        return False

    return is_valid_queens(solution, board.regions)


# ---------------------------------------------------------------------------
# Zip
# ---------------------------------------------------------------------------

def validate_zip_path(board: ZipBoard, path: Sequence[Coord]) -> bool:
    """
    Check a Zip path.

    The path must cover every cell exactly once, start on waypoint 1, move
    between orthogonal neighbours without crossing a wall, and meet the
    waypoints in ascending label order.
    """
    size = board.size
    if len(path) != size * size:
        return False

    cells = [(int(r), int(c)) for r, c in path]
    if len(set(cells)) != len(cells):
        return False
    if any(not (0 <= r < size and 0 <= c < size) for r, c in cells):
        return False
    if cells[0] != board.start:
        return False

    for prev, curr in zip(cells, cells[1:]):
        try:
            direction = Direction.between(prev, curr)
        except ValueError:
            return False
        if board.walls.blocks(prev, direction):
            return False

    position = {coord: i for i, coord in enumerate(cells)}
    order = [position[coord] for coord in board.waypoints.values()]
    return all(a < b for a, b in zip(order, order[1:]))


# ---------------------------------------------------------------------------
# Tango
# ---------------------------------------------------------------------------

def _lines(grid: Grid) -> Iterable[np.ndarray]:
    for i in range(grid.size):
        yield grid.get_row(i)
        yield grid.get_col(i)


def has_triple(line: np.ndarray) -> bool:
    """True if three consecutive cells hold the same symbol."""
    for i in range(len(line) - 2):
        if line[i] != 0 and line[i] == line[i + 1] == line[i + 2]:
            return True
    return False


def is_valid_tango(grid: Grid, constraints: Iterable[EdgeConstraint]) -> bool:
    """
    Check a (possibly partial) Tango grid.

    Every edge constraint holds wherever both sides are known, no line has
    three identical symbols in a row, and no line holds more than N/2 of
    either symbol.
    """
    for edge in constraints:
        if not edge.holds(grid.get(*edge.a), grid.get(*edge.b)):
            return False

    half = grid.size // 2
    for line in _lines(grid):
        if has_triple(line):
            return False
        if np.sum(line == TangoSymbol.SUN) > half or np.sum(line == TangoSymbol.MOON) > half:
            return False
    return True


def validate_tango_solution(board: TangoBoard, solution: Grid) -> bool:
    """Complete, balanced, triple free, every edge honoured and givens kept."""
    if solution.size != board.size or not solution.is_complete():
        return False

    given = board.grid.cells != TangoSymbol.EMPTY
    if not np.array_equal(solution.cells[given], board.grid.cells[given]):
        return False

    half = board.size // 2
    for line in _lines(solution):
        if np.sum(line == TangoSymbol.SUN) != half or np.sum(line == TangoSymbol.MOON) != half:
            return False
    return is_valid_tango(solution, board.constraints)
