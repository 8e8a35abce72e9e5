"""Tests for the Sudoku backtracking solver."""

import pytest
from gridpuzzles.core.board import SudokuBoard
from gridpuzzles.core.config import SearchLimits
from gridpuzzles.solvers import SolveStatus, SudokuSolver


SOLUTION = "123456456123231564564231312645645312"

# Diagonal blanked: each hole is the only gap in its row, so the answer is unique.
DIAGONAL_HOLES = "023456406123230564564031312605645310"


class TestSudokuSolver:
    """Tests for SudokuSolver."""

    def test_solve_unique_puzzle(self):
        """Test solve unique puzzle."""
        board = SudokuBoard.from_string(DIAGONAL_HOLES)
        solution, stats = SudokuSolver().solve(board)

        assert stats.status is SolveStatus.SOLVED
        assert stats.solved
        assert solution.to_string() == SOLUTION
        assert stats.extra["empty_cells"] == 6

    def test_board_not_modified(self):
        """Test that solving leaves the input board untouched."""
        board = SudokuBoard.from_string(DIAGONAL_HOLES)
        SudokuSolver().solve(board)
        assert board.grid.to_string() == DIAGONAL_HOLES

    def test_empty_grid_lexicographic_first(self):
        """Row-major scan with ascending values picks the smallest completion."""
        board = SudokuBoard.from_string("0" * 36)
        solution, stats = SudokuSolver().solve(board)
        assert solution.to_string() == "123456456123214365365214531642642531"

    def test_complete_grid_returned_as_is(self):
        """Test that a complete grid is returned unchanged."""
        board = SudokuBoard.from_string(SOLUTION)
        solution, stats = SudokuSolver().solve(board)
        assert stats.status is SolveStatus.SOLVED
        assert solution == board.grid

    def test_conflicting_givens_unsolvable(self):
        """Test conflicting givens unsolvable."""
        board = SudokuBoard.from_string("550000" + "0" * 30)
        solution, stats = SudokuSolver().solve(board)
        assert solution is None
        assert stats.status is SolveStatus.UNSOLVABLE
        assert not stats.solved

    def test_dead_end_unsolvable(self):
        """No conflict in the givens, but (0, 5) has no legal value."""
        board = SudokuBoard.from_string("123450" + "000006" + "0" * 24)
        solution, stats = SudokuSolver().solve(board)
        assert solution is None
        assert stats.status is SolveStatus.UNSOLVABLE

    def test_node_budget(self):
        """Test that the node budget stops the search."""
        solver = SudokuSolver(SearchLimits(max_nodes=5))
        solution, stats = solver.solve(SudokuBoard.from_string("0" * 36))
        assert solution is None
        assert stats.status is SolveStatus.BUDGET_EXHAUSTED
        assert stats.extra["nodes"] == 6

    def test_snapshot_dict_accepted(self):
        """Test snapshot dict accepted."""
        solution, stats = SudokuSolver().solve({"cells": list(map(int, DIAGONAL_HOLES))})
        assert stats.status is SolveStatus.SOLVED
        assert solution.to_string() == SOLUTION

    def test_malformed_snapshot_invalid(self):
        """Test malformed snapshot invalid."""
        solution, stats = SudokuSolver().solve({"grid": [[1, 2], [3]]})
        assert solution is None
        assert stats.status is SolveStatus.INVALID
        assert "error" in stats.extra

    def test_fractional_given_invalid(self):
        """Test that a fractional given is reported as an invalid board, not solved."""
        grid = [[1.7] + [0] * 5] + [[0] * 6 for _ in range(5)]
        solution, stats = SudokuSolver().solve({"size": 6, "grid": grid})
        assert solution is None
        assert stats.status is SolveStatus.INVALID

    def test_stats_recorded(self):
        """Test that solver statistics are recorded."""
        _, stats = SudokuSolver().solve(SudokuBoard.from_string(DIAGONAL_HOLES))
        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.algorithm == "Sudoku Backtracking"
        assert stats.to_dict()["status"] == "solved"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
