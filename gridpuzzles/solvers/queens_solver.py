"""Row-by-row backtracking solver for region-constrained Queens."""

from __future__ import annotations
import logging
from typing import Iterator, Optional, Tuple

import numpy as np

from .base_solver import BaseSolver
from .search import BacktrackingSearch, SearchBudget, SearchProblem
from ..core.board import QueensBoard
from ..core.grid import Grid
from ..core.rules import QueensCell
from ..core.validator import has_adjacent_queen, is_valid_queens, validate_queens_solution


logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class QueensProblem(SearchProblem[Cell]):
    """
    Place one queen in each row that lacks one, top to bottom.

    Row, column and region occupancy counts are scratch state owned by this
    object; `apply` increments them and `undo` restores them.
    """

    def __init__(self, board: QueensBoard):
        self.grid = board.grid.copy()
        self.regions = board.regions
        size = board.size

        queens = self.grid.cells == QueensCell.QUEEN
        self.row_counts = queens.sum(axis=1).astype(np.int32)
        self.col_counts = queens.sum(axis=0).astype(np.int32)
        self.region_counts = np.bincount(self.regions[queens], minlength=size).astype(np.int32)

    def _next_row(self) -> Optional[int]:
        empty_rows = np.flatnonzero(self.row_counts == 0)
        return int(empty_rows[0]) if len(empty_rows) else None

    def is_complete(self) -> bool:
        return self._next_row() is None

    def candidates(self) -> Iterator[Cell]:
        row = self._next_row()
        for col in range(self.grid.size):
            yield (row, col)

    def is_valid(self, move: Cell) -> bool:
        row, col = move
        if self.grid.get(row, col) != QueensCell.EMPTY:
            return False
        if self.col_counts[col] >= 1:
            return False
        if self.region_counts[self.regions[row, col]] >= 1:
            return False
        return not has_adjacent_queen(self.grid, row, col)

    def apply(self, move: Cell) -> None:
        row, col = move
        self.grid.set(row, col, QueensCell.QUEEN)
        self.row_counts[row] += 1
        self.col_counts[col] += 1
        self.region_counts[self.regions[row, col]] += 1

    def undo(self, move: Cell) -> None:
        row, col = move
        self.grid.set(row, col, QueensCell.EMPTY)
        self.row_counts[row] -= 1
        self.col_counts[col] -= 1
        self.region_counts[self.regions[row, col]] -= 1

    def accept(self) -> bool:
        # Pre-placed queens can leave a column empty even when every row is filled.
        return bool(np.all(self.col_counts == 1))

    def solution(self) -> Grid:
        return self.grid.copy()


class QueensSolver(BaseSolver[QueensBoard, Grid]):
    """
    Queens solver: one queen per row, column and region, none touching.

    Rows are filled top to bottom with columns tried left to right; rows that
    already hold a queen are skipped. Excluded cells never receive a queen.
    """

    name = "Queens Backtracking"
    puzzle = "queens"

    def _solve(self, board: QueensBoard, budget: SearchBudget) -> Optional[Grid]:
        if not is_valid_queens(board.grid, board.regions):
            logger.info("Pre-placed queens already conflict")
            return None

        self.stats.extra["preplaced"] = board.grid.count(QueensCell.QUEEN)
        return BacktrackingSearch(budget, self.stats).run(QueensProblem(board))

    def verify(self, board: QueensBoard, solution: Grid) -> bool:
        return validate_queens_solution(board, solution)
