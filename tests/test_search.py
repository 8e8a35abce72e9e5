"""Tests for the generic backtracking engine and search budgets."""

import pytest
from gridpuzzles.core.config import SearchLimits, load_limits
from gridpuzzles.core.exceptions import BudgetExhausted
from gridpuzzles.solvers.base_solver import SolverStats
from gridpuzzles.solvers.search import BacktrackingSearch, SearchBudget, SearchProblem


class BitStringProblem(SearchProblem):
    """Build a bit string of fixed length whose bits sum to a target."""

    def __init__(self, length, target):
        self.length = length
        self.target = target
        self.bits = []
        self.applied = 0
        self.undone = 0

    def is_complete(self):
        return len(self.bits) == self.length

    def candidates(self):
        return [0, 1]

    def is_valid(self, move):
        return sum(self.bits) + move <= self.target

    def apply(self, move):
        self.bits.append(move)
        self.applied += 1

    def undo(self, move):
        assert self.bits.pop() == move
        self.undone += 1

    def accept(self):
        return sum(self.bits) == self.target

    def solution(self):
        return list(self.bits)


class TestBacktrackingSearch:
    """Tests for BacktrackingSearch."""

    def test_first_solution_in_candidate_order(self):
        """Test first solution in candidate order."""
        problem = BitStringProblem(3, 2)
        assert BacktrackingSearch().run(problem) == [0, 1, 1]

    def test_state_restored_after_success(self):
        """Undo runs on the way back out, even for the winning branch."""
        problem = BitStringProblem(4, 2)
        BacktrackingSearch().run(problem)
        assert problem.bits == []
        assert problem.applied == problem.undone

    def test_exhausted_tree_returns_none(self):
        """Test exhausted tree returns none."""
        problem = BitStringProblem(2, 3)
        assert BacktrackingSearch().run(problem) is None
        assert problem.bits == []

    def test_stats_collected(self):
        """Test that search statistics are collected."""
        stats = SolverStats()
        BacktrackingSearch(stats=stats).run(BitStringProblem(3, 2))
        assert stats.iterations > 0
        assert stats.nodes_explored > 0
        assert stats.backtracks > 0

    def test_node_budget(self):
        """Test that the node budget stops the search."""
        problem = BitStringProblem(10, 10)
        with pytest.raises(BudgetExhausted) as info:
            BacktrackingSearch(SearchBudget(max_nodes=5)).run(problem)
        assert info.value.nodes == 6
        assert problem.bits == []

    def test_time_budget(self):
        """Test time budget."""
        budget = SearchBudget(time_limit_seconds=1e-9)
        with pytest.raises(BudgetExhausted):
            BacktrackingSearch(budget).run(BitStringProblem(16, 16))


class TestSearchLimits:
    """Tests for SearchLimits configuration."""

    def test_defaults(self):
        """Test default search limits."""
        limits = SearchLimits()
        assert limits.max_nodes is None
        assert limits.time_limit_seconds is None
        assert limits.max_propagation_passes == 1000

    def test_replace_ignores_none(self):
        """Test replace ignores none."""
        limits = SearchLimits(max_nodes=10).replace(max_nodes=None, time_limit_seconds=2.0)
        assert limits.max_nodes == 10
        assert limits.time_limit_seconds == 2.0

    def test_rejects_non_positive(self):
        """Test rejects non-positive."""
        with pytest.raises(ValueError):
            SearchLimits(max_nodes=0)

    def test_rejects_non_numeric(self):
        """Test that string or boolean limits raise ValueError."""
        with pytest.raises(ValueError):
            SearchLimits(max_nodes="10")
        with pytest.raises(ValueError):
            SearchLimits(time_limit_seconds=True)
        with pytest.raises(ValueError):
            SearchLimits.from_dict({"max_propagation_passes": 2.5})

    def test_from_dict_rejects_unknown_keys(self):
        """Test from dict rejects unknown keys."""
        with pytest.raises(ValueError):
            SearchLimits.from_dict({"max_depth": 3})

    def test_load_limits(self, tmp_path):
        """Test loading limits from JSON."""
        path = tmp_path / "limits.json"
        path.write_text('{"max_nodes": 500, "time_limit_seconds": 1.5}')
        limits = load_limits(str(path))
        assert limits.max_nodes == 500
        assert limits.time_limit_seconds == 1.5

    def test_load_limits_missing_file(self, tmp_path):
        """Test load limits missing file."""
        with pytest.raises(FileNotFoundError):
            load_limits(str(tmp_path / "nope.json"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
