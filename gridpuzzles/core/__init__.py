"""Core module: grid, rule data, board snapshots and validation."""

from .board import QueensBoard, SudokuBoard, TangoBoard, ZipBoard, load_board
from .config import SearchLimits, load_limits
from .exceptions import BudgetExhausted, InvalidBoardError, PropagationLimitExceeded
from .grid import Coord, Grid
from .rules import Direction, EdgeConstraint, QueensCell, Relation, TangoSymbol, WallMap

__all__ = [
    "Coord",
    "Grid",
    "SudokuBoard",
    "QueensBoard",
    "ZipBoard",
    "TangoBoard",
    "load_board",
    "SearchLimits",
    "load_limits",
    "InvalidBoardError",
    "BudgetExhausted",
    "PropagationLimitExceeded",
    "Direction",
    "EdgeConstraint",
    "Relation",
    "QueensCell",
    "TangoSymbol",
    "WallMap",
]
