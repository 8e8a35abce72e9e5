"""Constraint solvers for small grid logic puzzles: Sudoku, Queens, Zip and Tango."""

from .core import (
    Grid,
    InvalidBoardError,
    QueensBoard,
    SearchLimits,
    SudokuBoard,
    TangoBoard,
    ZipBoard,
    load_board,
)
from .solvers import (
    QueensSolver,
    SolverStats,
    SolveStatus,
    SudokuSolver,
    TangoSolver,
    ZipSolver,
)

__version__ = "1.0.0"

__all__ = [
    "Grid",
    "InvalidBoardError",
    "SearchLimits",
    "SudokuBoard",
    "QueensBoard",
    "ZipBoard",
    "TangoBoard",
    "load_board",
    "SudokuSolver",
    "QueensSolver",
    "ZipSolver",
    "TangoSolver",
    "SolverStats",
    "SolveStatus",
]
