"""Board snapshots for the four puzzles, validated on construction."""

from __future__ import annotations
import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .exceptions import InvalidBoardError
from .grid import Coord, Grid, as_integral
from .rules import EdgeConstraint, QueensCell, TangoSymbol, WallMap


def default_block_shape(size: int) -> Tuple[int, int]:
    """Block shape for a Sudoku of the given size: 6 -> (2, 3), 9 -> (3, 3)."""
    rows = max(d for d in range(1, math.isqrt(size) + 1) if size % d == 0)
    return rows, size // rows


def _read_grid(data: Mapping[str, Any], decode: Callable[[Any], int]) -> Grid:
    """
    Build a Grid from a snapshot's `grid` (2D) or `cells` (flat) entry.

    A declared `size` must agree with the cell data.
    """
    if "grid" in data:
        rows = data["grid"]
        values = [[decode(v) for v in row] for row in rows]
        grid = Grid.from_2d_list(values)
    elif "cells" in data:
        flat = [decode(v) for v in data["cells"]]
        size = math.isqrt(len(flat))
        if size == 0 or size * size != len(flat):
            raise InvalidBoardError(f"Cell count must be a perfect square, got {len(flat)}")
        grid = Grid(size, np.array(flat, dtype=np.int32).reshape(size, size))
    else:
        raise InvalidBoardError("Snapshot has neither 'grid' nor 'cells'")

    declared = data.get("size")
    if declared is not None and as_integral(declared, "Size") != grid.size:
        raise InvalidBoardError(f"Declared size {declared} does not match grid size {grid.size}")
    return grid


def read_coord(value: Any) -> Coord:
    """A (row, col) pair from `[row, col]` or `{row, col}`."""
    if isinstance(value, Mapping):
        if "row" not in value or "col" not in value:
            raise InvalidBoardError(f"Coordinate needs row and col, got {value!r}")
        return (as_integral(value["row"], "Row"), as_integral(value["col"], "Column"))
    if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 2:
        raise InvalidBoardError(f"Coordinate must be a [row, col] pair, got {value!r}")
    row, col = value
    return (as_integral(row, "Row"), as_integral(col, "Column"))


def _read_label(value: Any) -> int:
    # JSON object keys arrive as strings
    if isinstance(value, str):
        if not value.strip().isdigit():
            raise InvalidBoardError(f"Waypoint label must be an integer, got {value!r}")
        return int(value)
    return as_integral(value, "Waypoint label")


def _decode_symbol(names: Mapping[str, int]) -> Callable[[Any], int]:
    def decode(value: Any) -> int:
        if value is None:
            return 0
        if isinstance(value, str):
            key = value.strip().lower()
            if key in names:
                return names[key]
            raise InvalidBoardError(f"Unknown cell value {value!r}")
        return as_integral(value, "Cell value")
    return decode


class SudokuBoard:
    """
    Sudoku-variant snapshot: an N x N grid split into block_rows x block_cols
    blocks, with the prefilled (immutable) cells flagged.
    """

    def __init__(
        self,
        grid: Grid,
        prefilled: Optional[np.ndarray] = None,
        block_shape: Optional[Tuple[int, int]] = None,
    ):
        """
        Args:
            grid: Cell values, 0 for empty and 1..N otherwise.
            prefilled: Boolean mask of immutable cells. Defaults to every
                       non-empty cell.
            block_shape: (rows, cols) of a block. Defaults to the most
                         square factorisation of N (2x3 for 6x6).
        """
        size = grid.size
        self.block_rows, self.block_cols = block_shape or default_block_shape(size)
        if self.block_rows * self.block_cols != size:
            raise InvalidBoardError(
                f"Block shape {self.block_rows}x{self.block_cols} does not tile a {size}x{size} grid"
            )
        if np.any(grid.cells < 0) or np.any(grid.cells > size):
            raise InvalidBoardError(f"Sudoku values must be 0-{size}")

        if prefilled is None:
            prefilled = grid.cells != 0
        prefilled = np.asarray(prefilled, dtype=bool)
        if prefilled.shape != (size, size):
            raise InvalidBoardError(f"Prefilled mask shape must be ({size}, {size})")
        if np.any(prefilled & (grid.cells == 0)):
            raise InvalidBoardError("Prefilled cells must hold a value")

        self.size = size
        self.grid = grid.copy()
        self.prefilled = prefilled.copy()

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """Board from a row-major string; every given digit is prefilled."""
        return cls(Grid.from_string(s))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SudokuBoard:
        """Board from a `{size, grid, prefilled}` snapshot."""
        grid = _read_grid(data, lambda v: 0 if v is None else as_integral(v, "Cell value"))
        prefilled = data.get("prefilled")
        block = data.get("block")
        return cls(
            grid,
            None if prefilled is None else np.array(prefilled, dtype=bool),
            tuple(block) if block else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": self.grid.to_list(),
            "prefilled": self.prefilled.tolist(),
            "block": [self.block_rows, self.block_cols],
        }

    def __repr__(self) -> str:
        return f"SudokuBoard(size={self.size}, prefilled={int(self.prefilled.sum())})"


class QueensBoard:
    """Queens snapshot: cell states plus a region label for every cell."""

    CELL_NAMES = {
        "empty": QueensCell.EMPTY,
        "queen": QueensCell.QUEEN,
        "excluded": QueensCell.EXCLUDED,
        "cross": QueensCell.EXCLUDED,
    }

    def __init__(self, grid: Grid, regions: Iterable[Iterable[Any]]):
        size = grid.size
        if not np.isin(grid.cells, [int(v) for v in QueensCell]).all():
            raise InvalidBoardError("Queens cells must be empty, queen or excluded")

        raw = np.array([list(row) for row in regions])
        if raw.shape != (size, size):
            raise InvalidBoardError(f"Region map shape must be ({size}, {size}), got {raw.shape}")
        labels, inverse = np.unique(raw, return_inverse=True)
        if len(labels) != size:
            raise InvalidBoardError(
                f"A {size}x{size} board needs {size} regions, found {len(labels)}"
            )

        self.size = size
        self.grid = grid.copy()
        self.regions = inverse.reshape(size, size).astype(np.int32)
        self.region_labels = labels.tolist()

    def region_of(self, row: int, col: int) -> int:
        return int(self.regions[row, col])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueensBoard:
        """Board from a `{size, grid, regions}` snapshot."""
        grid = _read_grid(data, _decode_symbol(cls.CELL_NAMES))
        if "regions" not in data:
            raise InvalidBoardError("Queens snapshot is missing 'regions'")
        return cls(grid, data["regions"])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": self.grid.to_list(),
            "regions": self.regions.tolist(),
        }

    def __repr__(self) -> str:
        return f"QueensBoard(size={self.size}, queens={self.grid.count(QueensCell.QUEEN)})"


class ZipBoard:
    """
    Zip snapshot: grid size, numbered waypoints and walls.

    Waypoint labels are visited in ascending order starting from label 1.
    """

    def __init__(
        self,
        size: int,
        waypoints: Mapping[int, Coord],
        walls: Optional[WallMap] = None,
        strict_walls: bool = False,
    ):
        """
        Args:
            size: Grid dimension.
            waypoints: label -> (row, col).
            walls: Wall flags. Defaults to no walls.
            strict_walls: Reject walls recorded on only one side of an edge
                          instead of mirroring them.
        """
        if size <= 0:
            raise InvalidBoardError(f"Grid size must be positive, got {size}")
        if not waypoints:
            raise InvalidBoardError("Zip board has no waypoints")

        seen: Dict[Coord, int] = {}
        for label, coord in waypoints.items():
            if int(label) <= 0:
                raise InvalidBoardError(f"Waypoint labels must be positive, got {label}")
            r, c = coord
            if not (0 <= r < size and 0 <= c < size):
                raise InvalidBoardError(f"Waypoint {label} at {coord} is off the board")
            if (r, c) in seen:
                raise InvalidBoardError(
                    f"Waypoints {seen[(r, c)]} and {label} share cell {(r, c)}"
                )
            seen[(r, c)] = int(label)
        if min(waypoints) != 1:
            raise InvalidBoardError("Zip board has no starting waypoint 1")

        walls = walls if walls is not None else WallMap(size)
        if walls.size != size:
            raise InvalidBoardError(f"Wall map size {walls.size} does not match board size {size}")
        walls = WallMap(size, walls.flags)
        for (r, c), side in walls.one_sided_edges():
            if strict_walls:
                raise InvalidBoardError(f"Wall on {side} of {(r, c)} is missing its other side")
            walls.add_wall(r, c, side)

        self.size = size
        self.waypoints: Dict[int, Coord] = {
            int(label): (int(coord[0]), int(coord[1]))
            for label, coord in sorted(waypoints.items())
        }
        self.walls = walls

    @property
    def labels(self) -> List[int]:
        """Waypoint labels in visiting order."""
        return list(self.waypoints)

    @property
    def start(self) -> Coord:
        return self.waypoints[self.labels[0]]

    def label_grid(self) -> Grid:
        """Grid holding each waypoint's label, 0 elsewhere."""
        grid = Grid(self.size)
        for label, (r, c) in self.waypoints.items():
            grid.set(r, c, label)
        return grid

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict_walls: bool = False) -> ZipBoard:
        """
        Board from a `{size, waypoints, walls}` snapshot.

        Waypoints may be a mapping label -> [row, col] or a list of
        `{label, row, col}` entries; `walls` is optional.
        """
        if "size" not in data:
            raise InvalidBoardError("Zip snapshot is missing 'size'")
        size = as_integral(data["size"], "Size")

        raw = data.get("waypoints") or {}
        waypoints: Dict[int, Coord] = {}
        if isinstance(raw, Mapping):
            items = [(_read_label(label), read_coord(coord)) for label, coord in raw.items()]
        else:
            items = [(_read_label(entry["label"]), read_coord(entry)) for entry in raw]
        for label, coord in items:
            if label in waypoints:
                raise InvalidBoardError(f"Duplicate waypoint label {label}")
            waypoints[label] = coord

        walls = None
        if data.get("walls") is not None:
            walls = WallMap.from_list(size, data["walls"])
        return cls(size, waypoints, walls, strict_walls=strict_walls)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "waypoints": {str(label): list(coord) for label, coord in self.waypoints.items()},
            "walls": self.walls.to_list(),
        }

    def __repr__(self) -> str:
        return f"ZipBoard(size={self.size}, waypoints={len(self.waypoints)}, walls={self.walls.count()})"


class TangoBoard:
    """Tango snapshot: a sun/moon grid and its equal/opposite edge constraints."""

    SYMBOL_NAMES = {
        "empty": TangoSymbol.EMPTY,
        "": TangoSymbol.EMPTY,
        "sun": TangoSymbol.SUN,
        "a": TangoSymbol.SUN,
        "moon": TangoSymbol.MOON,
        "b": TangoSymbol.MOON,
    }

    def __init__(self, grid: Grid, constraints: Iterable[EdgeConstraint] = ()):
        size = grid.size
        if size % 2:
            raise InvalidBoardError(f"Tango needs an even grid size, got {size}")
        if not np.isin(grid.cells, [int(v) for v in TangoSymbol]).all():
            raise InvalidBoardError("Tango cells must be empty, sun or moon")

        constraints = list(constraints)
        seen = set()
        for edge in constraints:
            for r, c in (edge.a, edge.b):
                if not grid.in_bounds(r, c):
                    raise InvalidBoardError(f"Edge {edge.a}-{edge.b} is off the board")
            if edge.key in seen:
                raise InvalidBoardError(f"More than one relation on edge {edge.a}-{edge.b}")
            seen.add(edge.key)

        self.size = size
        self.grid = grid.copy()
        self.constraints: List[EdgeConstraint] = constraints

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TangoBoard:
        """Board from a `{size, grid, constraints}` snapshot."""
        grid = _read_grid(data, _decode_symbol(cls.SYMBOL_NAMES))
        constraints = [EdgeConstraint.from_dict(c) for c in data.get("constraints", [])]
        return cls(grid, constraints)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": self.grid.to_list(),
            "constraints": [edge.to_dict() for edge in self.constraints],
        }

    def __repr__(self) -> str:
        return f"TangoBoard(size={self.size}, constraints={len(self.constraints)})"


BOARD_TYPES = {
    "sudoku": SudokuBoard,
    "queens": QueensBoard,
    "zip": ZipBoard,
    "tango": TangoBoard,
}


def load_board(puzzle: str, data: Mapping[str, Any]):
    """Parse a snapshot dict for the named puzzle."""
    try:
        board_cls = BOARD_TYPES[puzzle]
    except KeyError:
        raise InvalidBoardError(f"Unknown puzzle type {puzzle!r}")
    try:
        return board_cls.from_dict(data)
    except InvalidBoardError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidBoardError(f"Malformed {puzzle} snapshot: {e}") from e
