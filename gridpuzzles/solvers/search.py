"""Generic depth-first backtracking search with exact undo and a node/time budget."""

from __future__ import annotations
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, Hashable, Iterable, Optional, TypeVar, TYPE_CHECKING

from ..core.config import SearchLimits
from ..core.exceptions import BudgetExhausted

if TYPE_CHECKING:
    from .base_solver import SolverStats


logger = logging.getLogger(__name__)

Move = TypeVar("Move", bound=Hashable)


class SearchBudget:
    """Counts search nodes and raises BudgetExhausted once a limit is passed."""

    def __init__(self, max_nodes: Optional[int] = None, time_limit_seconds: Optional[float] = None):
        self.max_nodes = max_nodes
        self.time_limit_seconds = time_limit_seconds
        self.nodes = 0
        self._deadline = (
            time.perf_counter() + time_limit_seconds if time_limit_seconds is not None else None
        )

    @classmethod
    def from_limits(cls, limits: SearchLimits) -> SearchBudget:
        return cls(limits.max_nodes, limits.time_limit_seconds)

    def tick(self) -> None:
        """Account for one node."""
        self.nodes += 1
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            raise BudgetExhausted(f"Node budget of {self.max_nodes} exhausted", self.nodes)
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise BudgetExhausted(
                f"Time budget of {self.time_limit_seconds}s exhausted", self.nodes
            )


class SearchProblem(ABC, Generic[Move]):
    """
    Mutable search state driven by BacktrackingSearch.

    Subclasses own their scratch state (grid, counters, path) and must make
    `undo` the exact inverse of `apply`.
    """

    @abstractmethod
    def is_complete(self) -> bool:
        """True when no decision is left to make."""

    @abstractmethod
    def candidates(self) -> Iterable[Move]:
        """Moves to try at the current node, in the order they should be tried."""

    def is_valid(self, move: Move) -> bool:
        """Validity predicate for a candidate. Defaults to accepting everything."""
        return True

    @abstractmethod
    def apply(self, move: Move) -> None:
        """Commit a move."""

    @abstractmethod
    def undo(self, move: Move) -> None:
        """Revert the most recent `apply(move)`."""

    def accept(self) -> bool:
        """Terminal check run once `is_complete()` holds."""
        return True

    @abstractmethod
    def solution(self) -> Any:
        """Snapshot of the current (complete) state."""


class BacktrackingSearch:
    """
    Depth-first search: try a candidate, recurse, undo, try the next one.

    The first accepted terminal state wins, so results are deterministic for
    a deterministic candidate order. Undo always runs, including when the
    recursion unwinds with a solution or an exception, so the problem is left
    in its starting state.
    """

    def __init__(self, budget: Optional[SearchBudget] = None, stats: Optional[SolverStats] = None):
        self.budget = budget or SearchBudget()
        self.stats = stats

    def run(self, problem: SearchProblem) -> Optional[Any]:
        """Return the first solution snapshot, or None if the tree is exhausted."""
        result = self._search(problem, 0)
        logger.debug("Search finished after %d nodes (found=%s)", self.budget.nodes, result is not None)
        return result

    def _search(self, problem: SearchProblem, depth: int) -> Optional[Any]:
        self.budget.tick()
        if self.stats is not None:
            self.stats.iterations += 1

        if problem.is_complete():
            return problem.solution() if problem.accept() else None

        if self.stats is not None:
            self.stats.nodes_explored += 1

        for move in problem.candidates():
            if not problem.is_valid(move):
                continue
            try:
                problem.apply(move)
                result = self._search(problem, depth + 1)
                if result is not None:
                    return result
            finally:
                problem.undo(move)
            if self.stats is not None:
                self.stats.backtracks += 1

        return None
