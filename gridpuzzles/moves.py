"""Translate solutions into the abstract actions a UI adapter replays.

Nothing here touches a user interface: each function returns plain data
(cells to type into, click counts, arrow directions) for an external
driver to perform.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .core.board import QueensBoard, SudokuBoard, TangoBoard
from .core.grid import Coord, Grid
from .core.rules import Direction, QueensCell, TangoSymbol


@dataclass(frozen=True)
class Entry:
    """Select a cell and type a value into it."""
    row: int
    col: int
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "col": self.col, "value": self.value}


@dataclass(frozen=True)
class Click:
    """Click a cell `times` times."""
    row: int
    col: int
    times: int

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "col": self.col, "times": self.times}


def sudoku_entries(board: SudokuBoard, solution: Grid) -> List[Entry]:
    """Cells to type, row-major; prefilled and already-correct cells are skipped."""
    entries = []
    for row, col in solution.coords():
        if board.prefilled[row, col]:
            continue
        target = solution.get(row, col)
        if board.grid.get(row, col) != target:
            entries.append(Entry(row, col, target))
    return entries


# A queens cell cycles empty -> excluded -> queen -> empty on each click.
_QUEENS_CLICKS = {
    QueensCell.EMPTY: 2,
    QueensCell.EXCLUDED: 1,
}


def queens_clicks(board: QueensBoard, solution: Grid) -> List[Click]:
    """Clicks that turn every solution queen cell into a queen."""
    clicks = []
    for row, col in solution.coords():
        if solution.get(row, col) != QueensCell.QUEEN:
            continue
        current = QueensCell(board.grid.get(row, col))
        times = _QUEENS_CLICKS.get(current, 0)
        if times:
            clicks.append(Click(row, col, times))
    return clicks


def tango_clicks(board: TangoBoard, solution: Grid) -> List[Click]:
    """
    Clicks for cells that were empty in the snapshot.

    A Tango cell cycles empty -> sun -> moon -> empty, so the click count is
    the forward distance from the current to the target state.
    """
    cycle = len(TangoSymbol)
    clicks = []
    for row, col in solution.coords():
        current = board.grid.get(row, col)
        if current != TangoSymbol.EMPTY:
            continue
        times = (solution.get(row, col) - current) % cycle
        if times:
            clicks.append(Click(row, col, times))
    return clicks


def zip_directions(path: Sequence[Coord]) -> List[Direction]:
    """Arrow-key directions that trace the path from its first cell."""
    return [Direction.between(prev, curr) for prev, curr in zip(path, path[1:])]


ARROW_KEYS = {
    Direction.UP: "ArrowUp",
    Direction.DOWN: "ArrowDown",
    Direction.LEFT: "ArrowLeft",
    Direction.RIGHT: "ArrowRight",
}


def zip_keys(path: Sequence[Coord]) -> List[str]:
    """Key names for `zip_directions`."""
    return [ARROW_KEYS[d] for d in zip_directions(path)]
