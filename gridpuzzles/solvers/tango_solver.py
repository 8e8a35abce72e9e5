"""Propagation plus backtracking solver for Tango."""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Tuple

from .base_solver import BaseSolver
from .propagation import TangoPropagator
from .search import BacktrackingSearch, SearchBudget, SearchProblem
from ..core.board import TangoBoard
from ..core.grid import Coord, Grid
from ..core.rules import TangoSymbol
from ..core.validator import is_valid_tango, validate_tango_solution


logger = logging.getLogger(__name__)

Assignment = Tuple[int, int, int]


class TangoProblem(SearchProblem[Assignment]):
    """
    Branch on the first empty cell, then propagate.

    Each `apply` records every cell it fills (the guess and all propagated
    cells) on a trail frame; `undo` clears exactly that frame.
    """

    def __init__(self, grid: Grid, board: TangoBoard, propagator: TangoPropagator):
        self.grid = grid
        self.constraints = board.constraints
        self.propagator = propagator
        self._trail: List[List[Coord]] = []
        self.forced_cells = 0

    def is_complete(self) -> bool:
        return self.grid.is_complete()

    def accept(self) -> bool:
        return is_valid_tango(self.grid, self.constraints)

    def candidates(self) -> Iterator[Assignment]:
        if not is_valid_tango(self.grid, self.constraints):
            return
        row, col = self.grid.first_empty()
        yield (row, col, int(TangoSymbol.SUN))
        yield (row, col, int(TangoSymbol.MOON))

    def apply(self, move: Assignment) -> None:
        row, col, value = move
        frame = [(row, col)]
        self._trail.append(frame)
        self.grid.set(row, col, value)
        self.forced_cells += self.propagator.propagate(self.grid, frame)

    def undo(self, move: Assignment) -> None:
        for r, c in self._trail.pop():
            self.grid.clear(r, c)

    def solution(self) -> Grid:
        return self.grid.copy()


class TangoSolver(BaseSolver[TangoBoard, Grid]):
    """
    Tango solver.

    Runs propagation to a fixpoint, then backtracks on the first empty cell
    (sun before moon) with propagation repeated after every guess. Branches
    whose partial grid breaks a rule are cut immediately.
    """

    name = "Tango Propagation+Backtracking"
    puzzle = "tango"

    def _solve(self, board: TangoBoard, budget: SearchBudget) -> Optional[Grid]:
        grid = board.grid.copy()
        propagator = TangoPropagator(board.constraints, self.limits.max_propagation_passes)

        forced = propagator.propagate(grid)
        self.stats.extra["initial_forced"] = forced
        self.stats.extra["propagation_passes"] = propagator.passes
        logger.debug("Initial propagation forced %d cells", forced)

        problem = TangoProblem(grid, board, propagator)
        solution = BacktrackingSearch(budget, self.stats).run(problem)
        self.stats.extra["search_forced"] = problem.forced_cells
        return solution

    def verify(self, board: TangoBoard, solution: Grid) -> bool:
        return validate_tango_solution(board, solution)
