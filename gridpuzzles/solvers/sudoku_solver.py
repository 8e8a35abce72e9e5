"""Backtracking solver for the 6x6 Sudoku variant."""

from __future__ import annotations
import logging
from typing import Iterator, Optional, Tuple

from .base_solver import BaseSolver
from .search import BacktrackingSearch, SearchBudget, SearchProblem
from ..core.board import SudokuBoard
from ..core.grid import Grid
from ..core.validator import is_valid_placement, is_valid_sudoku, validate_sudoku_solution


logger = logging.getLogger(__name__)

Placement = Tuple[int, int, int]


class SudokuProblem(SearchProblem[Placement]):
    """Fill the first empty cell in row-major order with values tried ascending."""

    def __init__(self, board: SudokuBoard):
        self.grid = board.grid.copy()
        self.block_rows = board.block_rows
        self.block_cols = board.block_cols

    def is_complete(self) -> bool:
        return self.grid.is_complete()

    def candidates(self) -> Iterator[Placement]:
        row, col = self.grid.first_empty()
        for value in range(1, self.grid.size + 1):
            yield (row, col, value)

    def is_valid(self, move: Placement) -> bool:
        row, col, value = move
        return is_valid_placement(self.grid, row, col, value, self.block_rows, self.block_cols)

    def apply(self, move: Placement) -> None:
        row, col, value = move
        self.grid.set(row, col, value)

    def undo(self, move: Placement) -> None:
        row, col, _ = move
        self.grid.clear(row, col)

    def accept(self) -> bool:
        return is_valid_sudoku(self.grid, self.block_rows, self.block_cols)

    def solution(self) -> Grid:
        return self.grid.copy()


class SudokuSolver(BaseSolver[SudokuBoard, Grid]):
    """
    Depth-first backtracking over cells in row-major order.

    Given several solutions, the one returned is the first by scan order and
    then by value order.
    """

    name = "Sudoku Backtracking"
    puzzle = "sudoku"

    def _solve(self, board: SudokuBoard, budget: SearchBudget) -> Optional[Grid]:
        """Solve using DFS with backtracking."""
        if not is_valid_sudoku(board.grid, board.block_rows, board.block_cols):
            logger.info("Sudoku givens already conflict")
            return None

        self.stats.extra["empty_cells"] = board.grid.count_empty()
        return BacktrackingSearch(budget, self.stats).run(SudokuProblem(board))

    def verify(self, board: SudokuBoard, solution: Grid) -> bool:
        return validate_sudoku_solution(board, solution)
