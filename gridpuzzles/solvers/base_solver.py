"""Base solver interface and common utilities."""

from __future__ import annotations
import logging
import time
import tracemalloc
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Mapping, Optional, Tuple, TypeVar, Union

from ..core.board import load_board
from ..core.config import SearchLimits
from ..core.exceptions import BudgetExhausted, InvalidBoardError
from .search import SearchBudget


logger = logging.getLogger(__name__)

BoardT = TypeVar("BoardT")
SolutionT = TypeVar("SolutionT")


class SolveStatus(Enum):
    """Outcome of a solve."""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXHAUSTED = "budget_exhausted"
    INVALID = "invalid"


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Outcome
    status: SolveStatus = SolveStatus.UNSOLVABLE
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "status": self.status.value,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC, Generic[BoardT, SolutionT]):
    """Abstract base class for puzzle solvers."""

    name: str = "BaseSolver"
    puzzle: str = ""

    def __init__(self, limits: Optional[SearchLimits] = None):
        """
        Args:
            limits: Node, time and propagation bounds. Defaults to unbounded
                    search with the standard propagation pass cap.
        """
        self.limits = limits or SearchLimits()
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: Union[BoardT, Mapping[str, Any]]) -> Tuple[Optional[SolutionT], SolverStats]:
        """
        Solve a puzzle with timing and memory tracking.

        Args:
            board: The board to solve, or its snapshot dict.

        Returns:
            Tuple of (solution or None, stats). `stats.status` tells an
            unsolvable board apart from an exhausted budget or a malformed
            snapshot.
        """
        self.stats = SolverStats(algorithm=self.name)

        tracemalloc.start()
        start_time = time.perf_counter()

        solution = None
        budget = None
        try:
            if isinstance(board, Mapping):
                board = load_board(self.puzzle, board)
            budget = SearchBudget.from_limits(self.limits)
            solution = self._solve(board, budget)
            self.stats.extra["nodes"] = budget.nodes
        except InvalidBoardError as e:
            self.stats.status = SolveStatus.INVALID
            self.stats.extra["error"] = str(e)
            logger.info("%s: invalid board: %s", self.name, e)
        except BudgetExhausted as e:
            self.stats.status = SolveStatus.BUDGET_EXHAUSTED
            self.stats.extra["error"] = str(e)
            # Propagation aborts do not know the node count
            self.stats.extra["nodes"] = e.nodes or (budget.nodes if budget is not None else 0)
            logger.info("%s: %s", self.name, e)
        else:
            if solution is not None and not self.verify(board, solution):
                logger.error("%s produced a solution that fails validation", self.name)
                solution = None
            self.stats.status = SolveStatus.SOLVED if solution is not None else SolveStatus.UNSOLVABLE
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        self.stats.solved = self.stats.status is SolveStatus.SOLVED
        logger.debug("%s finished: %s in %.4fs", self.name, self.stats.status.value, self.stats.time_seconds)
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: BoardT, budget: SearchBudget) -> Optional[SolutionT]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: The validated board. Must not be modified.
            budget: Node/time budget to tick on every search node.

        Returns:
            The solution, or None if the board has none.
        """

    @abstractmethod
    def verify(self, board: BoardT, solution: SolutionT) -> bool:
        """Post-hoc check of a solution against every rule of the puzzle."""

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
