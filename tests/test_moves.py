"""Tests for move planning."""

import pytest
from gridpuzzles.core.board import QueensBoard, SudokuBoard, TangoBoard
from gridpuzzles.core.grid import Grid
from gridpuzzles.core.rules import Direction, QueensCell, TangoSymbol
from gridpuzzles.moves import (
    Click,
    Entry,
    queens_clicks,
    sudoku_entries,
    tango_clicks,
    zip_directions,
    zip_keys,
)


SOLUTION = "123456456123231564564231312645645312"


class TestSudokuEntries:
    """Tests for sudoku_entries."""

    def test_only_blank_cells_entered(self):
        """Test only blank cells entered."""
        board = SudokuBoard.from_string("0" + SOLUTION[1:5] + "0" + SOLUTION[6:])
        entries = sudoku_entries(board, Grid.from_string(SOLUTION))
        assert entries == [Entry(0, 0, 1), Entry(0, 5, 6)]

    def test_wrong_unfixed_value_overwritten(self):
        """Test wrong unfixed value overwritten."""
        grid = Grid.from_string(SOLUTION)
        grid.set(0, 0, 2)
        prefilled = grid.cells != 0
        prefilled[0, 0] = False
        board = SudokuBoard(grid, prefilled)
        assert sudoku_entries(board, Grid.from_string(SOLUTION)) == [Entry(0, 0, 1)]

    def test_to_dict(self):
        """Test entry serialisation."""
        assert Entry(1, 2, 3).to_dict() == {"row": 1, "col": 2, "value": 3}


class TestQueensClicks:
    """Tests for queens_clicks."""

    REGIONS = [[0, 0, 1, 1], [0, 0, 1, 1], [2, 2, 3, 3], [2, 2, 3, 3]]

    def test_click_counts(self):
        """Test click counts per starting cell state."""
        grid = Grid(4)
        grid.set(0, 1, QueensCell.QUEEN)
        grid.set(1, 3, QueensCell.EXCLUDED)
        board = QueensBoard(grid, self.REGIONS)

        solution = Grid(4)
        for row, col in enumerate([1, 3, 0, 2]):
            solution.set(row, col, QueensCell.QUEEN)

        assert queens_clicks(board, solution) == [
            Click(1, 3, 1),
            Click(2, 0, 2),
            Click(3, 2, 2),
        ]


class TestTangoClicks:
    """Tests for tango_clicks."""

    def test_click_counts(self):
        """Test click counts per starting cell state."""
        board = TangoBoard(Grid(2))
        solution = Grid.from_2d_list([[1, 2], [2, 1]])
        clicks = tango_clicks(board, solution)
        assert clicks == [Click(0, 0, 1), Click(0, 1, 2), Click(1, 0, 2), Click(1, 1, 1)]

    def test_givens_not_clicked(self):
        """Test givens not clicked."""
        grid = Grid(2)
        grid.set(0, 0, TangoSymbol.MOON)
        board = TangoBoard(grid)
        solution = Grid.from_2d_list([[2, 1], [1, 2]])
        assert all((c.row, c.col) != (0, 0) for c in tango_clicks(board, solution))


class TestZipKeys:
    """Tests for zip_directions and zip_keys."""

    PATH = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]

    def test_directions(self):
        """Test direction sequence along a path."""
        directions = zip_directions(self.PATH)
        assert len(directions) == len(self.PATH) - 1
        assert directions[:3] == [Direction.DOWN, Direction.DOWN, Direction.RIGHT]

    def test_keys(self):
        """Test arrow key names along a path."""
        assert zip_keys(self.PATH) == [
            "ArrowDown", "ArrowDown", "ArrowRight", "ArrowUp",
            "ArrowUp", "ArrowRight", "ArrowDown", "ArrowDown",
        ]

    def test_single_cell_has_no_keys(self):
        """Test single cell has no keys."""
        assert zip_keys([(0, 0)]) == []

    def test_non_adjacent_step_rejected(self):
        """Test non-adjacent step rejected."""
        with pytest.raises(ValueError):
            zip_directions([(0, 0), (1, 1)])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
