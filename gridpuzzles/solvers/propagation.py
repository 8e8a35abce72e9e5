"""Forced-value propagation for Tango grids."""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from ..core.config import DEFAULT_PROPAGATION_PASSES
from ..core.exceptions import PropagationLimitExceeded
from ..core.grid import Coord, Grid
from ..core.rules import EdgeConstraint, TangoSymbol, opposite_symbol


logger = logging.getLogger(__name__)

EMPTY = int(TangoSymbol.EMPTY)
SUN = int(TangoSymbol.SUN)
MOON = int(TangoSymbol.MOON)


class TangoPropagator:
    """
    Repeats three deduction rules until a pass changes nothing.

    1. Edge forcing: one known side of an equal/opposite edge fixes the other.
    2. No-triple forcing: an empty cell next to (or between) two equal
       symbols on the same axis takes the other symbol.
    3. Balance forcing: a row or column already holding N/2 of one symbol
       takes the other symbol in its remaining blanks.

    Only empty cells are ever written, so the rules never overwrite a value.
    They can still write a value that breaks another rule when the input is
    inconsistent; callers validate the grid afterwards.
    """

    def __init__(self, constraints: Sequence[EdgeConstraint],
                 max_passes: int = DEFAULT_PROPAGATION_PASSES):
        self.constraints = list(constraints)
        self.max_passes = max_passes
        self.passes = 0

    def propagate(self, grid: Grid, trail: Optional[List[Coord]] = None) -> int:
        """
        Fill forced cells in place until a fixpoint.

        Args:
            grid: Grid to update.
            trail: If given, every filled coordinate is appended to it.

        Returns:
            Number of cells filled.

        Raises:
            PropagationLimitExceeded: the pass cap was hit while cells were
                still changing.
        """
        filled = 0
        self.passes = 0
        changed = True
        while changed:
            if self.passes >= self.max_passes:
                raise PropagationLimitExceeded(
                    f"No fixpoint after {self.max_passes} propagation passes"
                )
            self.passes += 1
            count = self._apply_edges(grid, trail)
            count += self._apply_no_triple(grid, trail)
            count += self._apply_balance(grid, trail)
            filled += count
            changed = count > 0

        logger.debug("Propagation filled %d cells in %d passes", filled, self.passes)
        return filled

    @staticmethod
    def _fill(grid: Grid, row: int, col: int, value: int, trail: Optional[List[Coord]]) -> int:
        grid.set(row, col, value)
        if trail is not None:
            trail.append((row, col))
        return 1

    def _apply_edges(self, grid: Grid, trail: Optional[List[Coord]]) -> int:
        count = 0
        for edge in self.constraints:
            v1 = grid.get(*edge.a)
            v2 = grid.get(*edge.b)
            if v1 != EMPTY and v2 == EMPTY:
                count += self._fill(grid, edge.b[0], edge.b[1], edge.forced(v1), trail)
            elif v2 != EMPTY and v1 == EMPTY:
                count += self._fill(grid, edge.a[0], edge.a[1], edge.forced(v2), trail)
        return count

    def _apply_no_triple(self, grid: Grid, trail: Optional[List[Coord]]) -> int:
        count = 0
        for row, col in grid.coords():
            if not grid.is_empty(row, col):
                continue
            forced = self._triple_forced(grid, row, col)
            if forced != EMPTY:
                count += self._fill(grid, row, col, forced, trail)
        return count

    @staticmethod
    def _triple_forced(grid: Grid, row: int, col: int) -> int:
        """Symbol forced into an empty cell by a neighbouring pair, or EMPTY."""
        for dr, dc in ((0, 1), (1, 0)):
            # XX_, _XX, X_X along one axis
            for (r1, c1), (r2, c2) in (
                ((row - dr, col - dc), (row - 2 * dr, col - 2 * dc)),
                ((row + dr, col + dc), (row + 2 * dr, col + 2 * dc)),
                ((row - dr, col - dc), (row + dr, col + dc)),
            ):
                if not (grid.in_bounds(r1, c1) and grid.in_bounds(r2, c2)):
                    continue
                v = grid.get(r1, c1)
                if v != EMPTY and v == grid.get(r2, c2):
                    return opposite_symbol(v)
        return EMPTY

    def _apply_balance(self, grid: Grid, trail: Optional[List[Coord]]) -> int:
        count = 0
        half = grid.size // 2
        for i in range(grid.size):
            for line in (
                [(i, j) for j in range(grid.size)],
                [(j, i) for j in range(grid.size)],
            ):
                values = [grid.get(r, c) for r, c in line]
                if values.count(SUN) == half:
                    fill = MOON
                elif values.count(MOON) == half:
                    fill = SUN
                else:
                    continue
                for (r, c), v in zip(line, values):
                    if v == EMPTY:
                        count += self._fill(grid, r, c, fill, trail)
        return count
