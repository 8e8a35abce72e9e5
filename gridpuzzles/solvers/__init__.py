"""Solvers module for the four puzzles."""

from .base_solver import BaseSolver, SolverStats, SolveStatus
from .propagation import TangoPropagator
from .queens_solver import QueensSolver
from .search import BacktrackingSearch, SearchBudget, SearchProblem
from .sudoku_solver import SudokuSolver
from .tango_solver import TangoSolver
from .zip_solver import ZipSolver

SOLVERS = {
    "sudoku": SudokuSolver,
    "queens": QueensSolver,
    "zip": ZipSolver,
    "tango": TangoSolver,
}

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolveStatus",
    "BacktrackingSearch",
    "SearchBudget",
    "SearchProblem",
    "TangoPropagator",
    "SudokuSolver",
    "QueensSolver",
    "ZipSolver",
    "TangoSolver",
    "SOLVERS",
]
