"""Hamiltonian path search through ordered waypoints (Zip)."""

from __future__ import annotations
import logging
from collections import deque
from typing import Iterator, List, Optional

import numpy as np

from .base_solver import BaseSolver
from .search import BacktrackingSearch, SearchBudget, SearchProblem
from ..core.config import SearchLimits
from ..core.board import ZipBoard
from ..core.grid import Coord
from ..core.rules import Direction
from ..core.validator import validate_zip_path


logger = logging.getLogger(__name__)


class ZipProblem(SearchProblem[Coord]):
    """
    Extend a path from waypoint 1 one cell at a time.

    Stepping onto a waypoint is only allowed when it is the next label due;
    reaching a higher label early could never be repaired, since a cell is
    visited once.
    """

    def __init__(self, board: ZipBoard, prune_disconnected: bool = True):
        self.size = board.size
        self.walls = board.walls
        self.labels = board.labels
        self.label_grid = board.label_grid()
        self.prune_disconnected = prune_disconnected

        self.visited = np.zeros((self.size, self.size), dtype=bool)
        self.path: List[Coord] = []
        self.next_index = 0
        self._advanced: List[bool] = []
        self.apply(board.start)

    def _expected_label(self) -> Optional[int]:
        if self.next_index >= len(self.labels):
            return None
        return self.labels[self.next_index]

    def is_complete(self) -> bool:
        return len(self.path) == self.size * self.size

    def accept(self) -> bool:
        return self.next_index >= len(self.labels)

    def candidates(self) -> Iterator[Coord]:
        head = self.path[-1]
        for direction in Direction:
            r, c = direction.step(head)
            if not (0 <= r < self.size and 0 <= c < self.size):
                continue
            if self.visited[r, c] or self.walls.blocks(head, direction):
                continue
            yield (r, c)

    def is_valid(self, move: Coord) -> bool:
        label = self.label_grid.get(*move)
        if label and label != self._expected_label():
            return False
        if self.prune_disconnected:
            return self._rest_connected(move)
        return True

    def _rest_connected(self, head: Coord) -> bool:
        """True if every cell still unvisited after stepping to head is reachable from it."""
        remaining = self.size * self.size - len(self.path) - 1
        if remaining == 0:
            return True

        seen = {head}
        queue = deque([head])
        reached = 0
        while queue:
            cell = queue.popleft()
            for direction in Direction:
                r, c = direction.step(cell)
                if not (0 <= r < self.size and 0 <= c < self.size):
                    continue
                if (r, c) in seen or self.visited[r, c] or self.walls.blocks(cell, direction):
                    continue
                seen.add((r, c))
                reached += 1
                queue.append((r, c))
        return reached == remaining

    def apply(self, move: Coord) -> None:
        r, c = move
        self.path.append(move)
        self.visited[r, c] = True
        label = self.label_grid.get(r, c)
        advanced = bool(label) and label == self._expected_label()
        if advanced:
            self.next_index += 1
        self._advanced.append(advanced)

    def undo(self, move: Coord) -> None:
        r, c = self.path.pop()
        self.visited[r, c] = False
        if self._advanced.pop():
            self.next_index -= 1

    def solution(self) -> List[Coord]:
        return list(self.path)


class ZipSolver(BaseSolver[ZipBoard, List[Coord]]):
    """
    Depth-first search for a path that covers every cell once and meets the
    waypoints in label order.

    Directions are explored up, down, left, right. With
    `prune_disconnected` the search also drops branches that cut the
    unvisited cells off from the path head; this never changes which path is
    returned, only how fast it is found.
    """

    name = "Zip Path Search"
    puzzle = "zip"

    def __init__(self, limits: Optional[SearchLimits] = None, prune_disconnected: bool = True):
        super().__init__(limits)
        self.prune_disconnected = prune_disconnected

    def _solve(self, board: ZipBoard, budget: SearchBudget) -> Optional[List[Coord]]:
        self.stats.extra["waypoints"] = len(board.waypoints)
        self.stats.extra["wall_cells"] = board.walls.count()
        problem = ZipProblem(board, prune_disconnected=self.prune_disconnected)
        path = BacktrackingSearch(budget, self.stats).run(problem)
        if path is None:
            logger.info("No Zip path found for %r", board)
        return path

    def verify(self, board: ZipBoard, solution: List[Coord]) -> bool:
        return validate_zip_path(board, solution)
