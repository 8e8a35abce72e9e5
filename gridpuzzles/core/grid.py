"""Square grid container shared by all puzzle boards."""

from __future__ import annotations
import numpy as np
from typing import Any, Iterator, List, Optional, Tuple

from .exceptions import InvalidBoardError


Coord = Tuple[int, int]

ORTHOGONAL_STEPS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
KING_STEPS: Tuple[Coord, ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


def as_integral(value: Any, what: str = "Value") -> int:
    """
    Return value as an int, refusing anything that would be truncated.

    Booleans, strings and non-integral floats raise InvalidBoardError;
    a float such as 3.0 is accepted.
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidBoardError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    raise InvalidBoardError(f"{what} must be an integer, got {value!r}")


class Grid:
    """
    Square matrix of small integer cell values.

    Value 0 is the "empty" sentinel for every puzzle domain; what the other
    values mean is up to the board that owns the grid.
    """

    def __init__(self, size: int, cells: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            size: Number of rows (and columns). Must be positive.
            cells: Optional initial values. If None, creates an empty grid.
        """
        if size <= 0:
            raise InvalidBoardError(f"Grid size must be positive, got {size}")

        self.size = size

        if cells is not None:
            cells = np.asarray(cells)
            if cells.shape != (size, size):
                raise InvalidBoardError(
                    f"Grid shape must be ({size}, {size}), got {cells.shape}"
                )
            self.cells = cells.astype(np.int32)
        else:
            self.cells = np.zeros((size, size), dtype=np.int32)

    def copy(self) -> Grid:
        """Create a deep copy of the grid."""
        new_grid = Grid(self.size)
        new_grid.cells = self.cells.copy()
        return new_grid

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.cells[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        self.cells[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.cells[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.cells[row, col] == 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.cells[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.cells[:, col]

    def get_block(self, row: int, col: int, block_rows: int, block_cols: int) -> np.ndarray:
        """Get all values in the block_rows x block_cols block containing (row, col)."""
        top = (row // block_rows) * block_rows
        left = (col // block_cols) * block_cols
        return self.cells[top:top + block_rows, left:left + block_cols].flatten()

    def neighbors(self, row: int, col: int) -> Iterator[Coord]:
        """Yield in-bounds orthogonal neighbours in up, down, left, right order."""
        for dr, dc in ORTHOGONAL_STEPS:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                yield (r, c)

    def king_neighbors(self, row: int, col: int) -> Iterator[Coord]:
        """Yield in-bounds neighbours in all 8 directions."""
        for dr, dc in KING_STEPS:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                yield (r, c)

    def coords(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for i in range(self.size):
            for j in range(self.size):
                yield (i, j)

    def get_empty_cells(self) -> List[Coord]:
        """Get list of all empty cell positions in row-major order."""
        return [(i, j) for i, j in self.coords() if self.is_empty(i, j)]

    def first_empty(self) -> Optional[Coord]:
        """First empty cell in row-major order, or None if the grid is full."""
        for i, j in self.coords():
            if self.is_empty(i, j):
                return (i, j)
        return None

    def count(self, value: int) -> int:
        return int(np.sum(self.cells == value))

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return self.count(0)

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def to_list(self) -> List[List[int]]:
        return self.cells.tolist()

    def to_string(self) -> str:
        """Compact row-major string. 0 for empty cells, values above 9 as letters."""
        chars = []
        for val in self.cells.flatten():
            if val <= 9:
                chars.append(str(val))
            else:
                chars.append(chr(ord('A') + val - 10))
        return ''.join(chars)

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Create a grid from a row-major string.

        '0' or '.' mark empty cells, digits and letters (A=10) mark values.
        The string length must be a perfect square.
        """
        size = int(round(np.sqrt(len(s))))
        if size * size != len(s) or size == 0:
            raise InvalidBoardError(f"String length must be a perfect square, got {len(s)}")

        values = []
        for c in s:
            if c in '0.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                values.append(ord(c.upper()) - ord('A') + 10)
        return cls(size, np.array(values, dtype=np.int32).reshape(size, size))

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> Grid:
        """Create a grid from a 2D list. Rows must all have the grid's length."""
        try:
            square = bool(data) and all(len(row) == len(data) for row in data)
        except TypeError:
            square = False
        if not square:
            raise InvalidBoardError("Grid rows must form a non-empty square")
        values = [[as_integral(v, "Cell value") for v in row] for row in data]
        arr = np.array(values, dtype=np.int32)
        return cls(arr.shape[0], arr)

    def __str__(self) -> str:
        return '\n'.join(
            ' '.join('.' if v == 0 else str(v) for v in row) for row in self.cells
        )

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, empty={self.count_empty()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return self.size == other.size and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.size, self.cells.tobytes()))
