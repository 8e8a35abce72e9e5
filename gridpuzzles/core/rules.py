"""Declarative rule data for the four puzzles: cell states, edges, walls, units."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .exceptions import InvalidBoardError
from .grid import Coord, as_integral


class QueensCell(IntEnum):
    """Cell states on a Queens board."""
    EMPTY = 0
    QUEEN = 1
    EXCLUDED = 2


class TangoSymbol(IntEnum):
    """Cell states on a Tango board. SUN and MOON are the two symbols."""
    EMPTY = 0
    SUN = 1
    MOON = 2

    @property
    def opposite(self) -> TangoSymbol:
        if self is TangoSymbol.EMPTY:
            return TangoSymbol.EMPTY
        return TangoSymbol.MOON if self is TangoSymbol.SUN else TangoSymbol.SUN


def opposite_symbol(value: int) -> int:
    """Opposite Tango symbol of a raw cell value (0 stays 0)."""
    return int(TangoSymbol(value).opposite)


class Direction(Enum):
    """Orthogonal moves, in the fixed exploration order used by path search."""
    UP = (-1, 0, "top", "bottom")
    DOWN = (1, 0, "bottom", "top")
    LEFT = (0, -1, "left", "right")
    RIGHT = (0, 1, "right", "left")

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value[0], self.value[1]

    @property
    def exit_side(self) -> str:
        """Wall side on the cell being left that blocks this move."""
        return self.value[2]

    @property
    def entry_side(self) -> str:
        """Wall side on the cell being entered that blocks this move."""
        return self.value[3]

    def step(self, coord: Coord) -> Coord:
        dr, dc = self.delta
        return (coord[0] + dr, coord[1] + dc)

    @classmethod
    def between(cls, a: Coord, b: Coord) -> Direction:
        """Direction of the move from a to an orthogonally adjacent b."""
        delta = (b[0] - a[0], b[1] - a[1])
        for direction in cls:
            if direction.delta == delta:
                return direction
        raise ValueError(f"{a} and {b} are not orthogonally adjacent")


WALL_SIDES = ("top", "right", "bottom", "left")

_SIDE_INDEX = {side: i for i, side in enumerate(WALL_SIDES)}
_SIDE_OFFSET = {"top": (-1, 0), "right": (0, 1), "bottom": (1, 0), "left": (0, -1)}
_MIRROR = {"top": "bottom", "bottom": "top", "left": "right", "right": "left"}


class WallMap:
    """
    Per-cell barrier flags for the four sides of every cell.

    A wall recorded on either side of an edge blocks movement across it in
    both directions.
    """

    def __init__(self, size: int, flags: Optional[np.ndarray] = None):
        self.size = size
        if flags is None:
            self.flags = np.zeros((size, size, 4), dtype=bool)
        else:
            flags = np.asarray(flags, dtype=bool)
            if flags.shape != (size, size, 4):
                raise InvalidBoardError(
                    f"Wall map shape must be ({size}, {size}, 4), got {flags.shape}"
                )
            self.flags = flags.copy()

    def has_wall(self, row: int, col: int, side: str) -> bool:
        return bool(self.flags[row, col, _SIDE_INDEX[side]])

    def add_wall(self, row: int, col: int, side: str) -> None:
        """Record a wall on one side of a cell and on the matching side of its neighbour."""
        self.flags[row, col, _SIDE_INDEX[side]] = True
        dr, dc = _SIDE_OFFSET[side]
        r, c = row + dr, col + dc
        if 0 <= r < self.size and 0 <= c < self.size:
            self.flags[r, c, _SIDE_INDEX[_MIRROR[side]]] = True

    def blocks(self, coord: Coord, direction: Direction) -> bool:
        """True if moving from coord in direction crosses a wall."""
        if self.has_wall(coord[0], coord[1], direction.exit_side):
            return True
        r, c = direction.step(coord)
        if 0 <= r < self.size and 0 <= c < self.size:
            return self.has_wall(r, c, direction.entry_side)
        return False

    def one_sided_edges(self) -> List[Tuple[Coord, str]]:
        """Interior walls recorded on only one of the two cells sharing the edge."""
        found = []
        for row in range(self.size):
            for col in range(self.size):
                for side in WALL_SIDES:
                    if not self.has_wall(row, col, side):
                        continue
                    dr, dc = _SIDE_OFFSET[side]
                    r, c = row + dr, col + dc
                    if 0 <= r < self.size and 0 <= c < self.size:
                        if not self.has_wall(r, c, _MIRROR[side]):
                            found.append(((row, col), side))
        return found

    def count(self) -> int:
        """Number of cells carrying at least one wall flag."""
        return int(np.sum(self.flags.any(axis=2)))

    def to_list(self) -> List[List[Dict[str, bool]]]:
        return [
            [
                {side: bool(self.flags[r, c, i]) for i, side in enumerate(WALL_SIDES)}
                for c in range(self.size)
            ]
            for r in range(self.size)
        ]

    @classmethod
    def from_list(cls, size: int, data: List[List[Any]]) -> WallMap:
        """
        Build a wall map from per-cell entries.

        Each entry is either a mapping with top/right/bottom/left booleans or a
        4-sequence in that order.
        """
        if len(data) != size or any(len(row) != size for row in data):
            raise InvalidBoardError(f"Wall map must be {size}x{size}")
        flags = np.zeros((size, size, 4), dtype=bool)
        for r, row in enumerate(data):
            for c, cell in enumerate(row):
                if isinstance(cell, Mapping):
                    values = [bool(cell.get(side, False)) for side in WALL_SIDES]
                else:
                    values = [bool(v) for v in cell]
                    if len(values) != 4:
                        raise InvalidBoardError(f"Wall entry at ({r}, {c}) needs 4 flags")
                flags[r, c] = values
        return cls(size, flags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WallMap):
            return False
        return self.size == other.size and np.array_equal(self.flags, other.flags)


class Relation(Enum):
    """Tango edge relation between two adjacent cells."""
    EQUAL = "equal"
    OPPOSITE = "opposite"


@dataclass(frozen=True)
class EdgeConstraint:
    """An equal/opposite relation between two orthogonally adjacent cells."""
    a: Coord
    b: Coord
    relation: Relation

    def __post_init__(self):
        if abs(self.a[0] - self.b[0]) + abs(self.a[1] - self.b[1]) != 1:
            raise InvalidBoardError(f"Edge {self.a}-{self.b} does not join adjacent cells")

    @property
    def key(self) -> Tuple[Coord, Coord]:
        """Unordered pair identity."""
        return (min(self.a, self.b), max(self.a, self.b))

    def holds(self, v1: int, v2: int) -> bool:
        """True unless both sides are known and the relation is broken."""
        if v1 == 0 or v2 == 0:
            return True
        if self.relation is Relation.EQUAL:
            return v1 == v2
        return v1 != v2

    def forced(self, known: int) -> int:
        """Value the other side must take when one side holds `known`."""
        if self.relation is Relation.EQUAL:
            return known
        return opposite_symbol(known)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.relation.value, "a": list(self.a), "b": list(self.b)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EdgeConstraint:
        try:
            relation = Relation(str(data["type"]).lower())
        except (KeyError, ValueError):
            raise InvalidBoardError(f"Unknown edge constraint type in {dict(data)}")
        if "a" in data:
            a, b = tuple(data["a"]), tuple(data["b"])
        else:
            a, b = (data["row1"], data["col1"]), (data["row2"], data["col2"])
        if len(a) != 2 or len(b) != 2:
            raise InvalidBoardError(f"Edge endpoints must be [row, col] pairs in {dict(data)}")
        return cls(
            (as_integral(a[0], "Row"), as_integral(a[1], "Column")),
            (as_integral(b[0], "Row"), as_integral(b[1], "Column")),
            relation,
        )


def sudoku_units(size: int, block_rows: int, block_cols: int) -> Iterable[List[Coord]]:
    """Yield every uniqueness scope: rows, then columns, then blocks."""
    for r in range(size):
        yield [(r, c) for c in range(size)]
    for c in range(size):
        yield [(r, c) for r in range(size)]
    for top in range(0, size, block_rows):
        for left in range(0, size, block_cols):
            yield [
                (top + i, left + j)
                for i in range(block_rows)
                for j in range(block_cols)
            ]
