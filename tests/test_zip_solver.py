"""Tests for the Zip path solver."""

import pytest
from gridpuzzles.core.board import ZipBoard
from gridpuzzles.core.config import SearchLimits
from gridpuzzles.core.rules import Direction, WallMap
from gridpuzzles.solvers import SolveStatus, ZipSolver
from gridpuzzles.solvers.zip_solver import ZipProblem


SNAKE = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]


class TestZipProblem:
    """Tests for ZipProblem."""

    def test_starts_on_first_waypoint(self):
        """Test starts on first waypoint."""
        problem = ZipProblem(ZipBoard(3, {1: (0, 0), 2: (2, 2)}))
        assert problem.path == [(0, 0)]
        assert problem.next_index == 1

    def test_candidates_follow_direction_order(self):
        """Test candidates follow direction order."""
        problem = ZipProblem(ZipBoard(3, {1: (1, 1), 2: (2, 2)}))
        assert list(problem.candidates()) == [(0, 1), (2, 1), (1, 0), (1, 2)]

    def test_walls_block_candidates(self):
        """Test walls block candidates."""
        walls = WallMap(3)
        walls.add_wall(1, 1, "top")
        problem = ZipProblem(ZipBoard(3, {1: (1, 1), 2: (2, 2)}, walls))
        assert (0, 1) not in list(problem.candidates())

    def test_early_waypoint_rejected(self):
        """Test early waypoint rejected."""
        problem = ZipProblem(ZipBoard(3, {1: (0, 0), 2: (2, 2), 3: (0, 1)}),
                             prune_disconnected=False)
        assert not problem.is_valid((0, 1))
        assert problem.is_valid((1, 0))

    def test_disconnecting_step_pruned(self):
        """Test disconnecting step pruned."""
        # Path across the middle row: stepping up from (1, 2) strands the bottom row.
        board = ZipBoard(3, {1: (0, 0), 2: (2, 2)})
        problem = ZipProblem(board)
        for cell in [(1, 0), (1, 1), (1, 2)]:
            problem.apply(cell)
        assert not problem.is_valid((0, 2))

        unpruned = ZipProblem(board, prune_disconnected=False)
        for cell in [(1, 0), (1, 1), (1, 2)]:
            unpruned.apply(cell)
        assert unpruned.is_valid((0, 2))

    def test_undo_restores_waypoint_progress(self):
        """Test undo restores waypoint progress."""
        problem = ZipProblem(ZipBoard(2, {1: (0, 0), 2: (0, 1)}))
        problem.apply((0, 1))
        assert problem.next_index == 2
        problem.undo((0, 1))
        assert problem.next_index == 1
        assert problem.path == [(0, 0)]
        assert not problem.visited[0, 1]


class TestZipSolver:
    """Tests for ZipSolver."""

    @pytest.mark.parametrize("prune", [True, False])
    def test_snake_path(self, prune):
        """Test the 3x3 path with and without pruning."""
        board = ZipBoard(3, {1: (0, 0), 2: (2, 2)})
        path, stats = ZipSolver(prune_disconnected=prune).solve(board)
        assert stats.status is SolveStatus.SOLVED
        assert path == SNAKE

    def test_three_waypoints(self):
        """Test three waypoints."""
        board = ZipBoard(3, {1: (0, 0), 2: (0, 2), 3: (2, 0)})
        path, stats = ZipSolver().solve(board)
        assert path == [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]
        assert stats.extra["waypoints"] == 3

    def test_two_by_two(self):
        """Test two by two."""
        path, _ = ZipSolver().solve(ZipBoard(2, {1: (0, 0), 2: (0, 1)}))
        assert path == [(0, 0), (1, 0), (1, 1), (0, 1)]

    def test_wall_makes_board_unsolvable(self):
        """Test wall makes board unsolvable."""
        walls = WallMap(2)
        walls.add_wall(1, 0, "right")
        path, stats = ZipSolver().solve(ZipBoard(2, {1: (0, 0), 2: (0, 1)}, walls))
        assert path is None
        assert stats.status is SolveStatus.UNSOLVABLE
        assert stats.extra["wall_cells"] == 2

    def test_path_routes_around_wall(self):
        """Test that a solvable walled board gets a path that never crosses the wall."""
        walls = WallMap(3)
        walls.add_wall(0, 0, "bottom")
        board = ZipBoard(3, {1: (0, 0), 2: (2, 2)}, walls)
        path, stats = ZipSolver().solve(board)

        assert stats.status is SolveStatus.SOLVED
        assert path == [(0, 0), (0, 1), (1, 1), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]
        for prev, curr in zip(path, path[1:]):
            assert not walls.blocks(prev, Direction.between(prev, curr))

    def test_single_cell(self):
        """Test a 1x1 board."""
        path, stats = ZipSolver().solve(ZipBoard(1, {1: (0, 0)}))
        assert path == [(0, 0)]
        assert stats.status is SolveStatus.SOLVED

    def test_node_budget(self):
        """Test that the node budget stops the search."""
        board = ZipBoard(6, {1: (0, 0), 2: (5, 5)})
        path, stats = ZipSolver(SearchLimits(max_nodes=3)).solve(board)
        assert path is None
        assert stats.status is SolveStatus.BUDGET_EXHAUSTED

    def test_snapshot_with_one_sided_wall(self):
        """Test snapshot with one-sided wall."""
        data = {
            "size": 2,
            "waypoints": [{"label": 1, "row": 0, "col": 0}, {"label": 2, "row": 0, "col": 1}],
            "walls": [[{}, {}], [{"right": True}, {}]],
        }
        path, stats = ZipSolver().solve(data)
        assert stats.status is SolveStatus.UNSOLVABLE

    def test_bad_snapshot_invalid(self):
        """Test that a board without waypoint 1 is invalid."""
        path, stats = ZipSolver().solve({"size": 3, "waypoints": {"2": [0, 0]}})
        assert path is None
        assert stats.status is SolveStatus.INVALID


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
