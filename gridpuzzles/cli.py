"""Command-line interface for the puzzle solvers."""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .core.board import SudokuBoard, load_board, read_coord
from .core.config import SearchLimits, load_limits
from .core.exceptions import InvalidBoardError
from .core.grid import Grid
from .core.validator import (
    validate_queens_solution,
    validate_sudoku_solution,
    validate_tango_solution,
    validate_zip_path,
)
from .moves import queens_clicks, sudoku_entries, tango_clicks, zip_keys
from .solvers import SOLVERS, ZipSolver

PUZZLES = ["sudoku", "queens", "zip", "tango"]

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Solver for Sudoku (6x6), Queens, Zip and Tango grid puzzles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a 6x6 Sudoku given as a string
  gridpuzzles solve sudoku --puzzle "120000000000..."

  # Solve a Tango snapshot and print the clicks needed
  gridpuzzles solve tango board.json --moves

  # Check a saved Zip path against its board
  gridpuzzles check zip board.json solution.json
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a board snapshot")
    solve_parser.add_argument("puzzle", choices=PUZZLES, help="Puzzle type")
    solve_parser.add_argument(
        "board", nargs="?", default=None,
        help="Board snapshot JSON file"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", dest="puzzle_string", type=str, default=None,
        help="Sudoku only: row-major string, 0 or . for empty cells"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    solve_parser.add_argument(
        "--moves", "-m", action="store_true",
        help="Print the actions needed to enter the solution"
    )
    solve_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Write the solution and stats to a JSON file"
    )
    solve_parser.add_argument(
        "--max-nodes", type=int, default=None,
        help="Give up after this many search nodes"
    )
    solve_parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Give up after this many seconds"
    )
    solve_parser.add_argument(
        "--limits", type=str, default=None,
        help="JSON file with search limits"
    )
    solve_parser.add_argument(
        "--no-prune", action="store_true",
        help="Zip only: disable connectivity pruning"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Validate a solution against a board")
    check_parser.add_argument("puzzle", choices=PUZZLES, help="Puzzle type")
    check_parser.add_argument("board", help="Board snapshot JSON file")
    check_parser.add_argument("solution", help="Solution JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return EXIT_FAILED

    if args.command == "solve":
        return cmd_solve(args)
    return cmd_check(args)


def _read_json(path: str) -> Any:
    with open(path, "r") as f:
        return json.load(f)


def _load(args) -> Any:
    if args.puzzle_string is not None:
        if args.puzzle != "sudoku":
            raise InvalidBoardError("--puzzle strings are only supported for sudoku")
        return SudokuBoard.from_string(args.puzzle_string)
    if args.board is None:
        raise InvalidBoardError("A board file is required")
    return load_board(args.puzzle, _read_json(args.board))


def format_path(size: int, path: List[Any]) -> str:
    """Render a Zip path as a grid of 1-based step numbers."""
    steps = [[0] * size for _ in range(size)]
    for i, (r, c) in enumerate(path, 1):
        steps[r][c] = i
    width = len(str(size * size))
    return '\n'.join(' '.join(str(v).rjust(width) for v in row) for row in steps)


def _moves(puzzle: str, board: Any, solution: Any) -> List[Any]:
    if puzzle == "sudoku":
        return [e.to_dict() for e in sudoku_entries(board, solution)]
    if puzzle == "queens":
        return [c.to_dict() for c in queens_clicks(board, solution)]
    if puzzle == "tango":
        return [c.to_dict() for c in tango_clicks(board, solution)]
    return zip_keys(solution)


def cmd_solve(args) -> int:
    """Handle the solve command."""
    try:
        board = _load(args)
        limits = load_limits(args.limits) if args.limits else SearchLimits()
        limits = limits.replace(max_nodes=args.max_nodes, time_limit_seconds=args.time_limit)
    except (InvalidBoardError, ValueError, TypeError, OSError) as e:
        print(f"Error loading input: {e}")
        return EXIT_BAD_INPUT

    if args.puzzle == "zip":
        solver = ZipSolver(limits, prune_disconnected=not args.no_prune)
    else:
        solver = SOLVERS[args.puzzle](limits)

    print(f"Solving {args.puzzle} ({board!r}) with {solver.name}...")
    solution, stats = solver.solve(board)

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
    else:
        print(f"✗ {stats.status.value.replace('_', ' ').capitalize()}")
        if "error" in stats.extra:
            print(f"  {stats.extra['error']}")

    if args.verbose:
        print(f"  Iterations: {stats.iterations:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")

    moves = None
    if solution is not None:
        if args.puzzle == "zip":
            print(format_path(board.size, solution))
        else:
            print(solution)
        if args.moves:
            moves = _moves(args.puzzle, board, solution)
            print(f"\nMoves ({len(moves)}):")
            for move in moves:
                print(f"  {move}")

    if args.output:
        result = {
            "puzzle": args.puzzle,
            "status": stats.status.value,
            "solution": _solution_to_json(solution),
            "stats": stats.to_dict(),
        }
        if moves is not None:
            result["moves"] = moves
        with open(args.output, "w") as f:
            json.dump(result, f, indent=2)
        print(f"\nResult saved to {args.output}")

    return EXIT_OK if stats.solved else EXIT_FAILED


def _solution_to_json(solution: Any) -> Any:
    if solution is None:
        return None
    if isinstance(solution, Grid):
        return solution.to_list()
    return [list(coord) for coord in solution]


def _read_solution(puzzle: str, data: Any) -> Any:
    """Parse a saved solution: a coordinate list for zip, a 2D grid otherwise."""
    if not isinstance(data, list):
        raise InvalidBoardError(f"Solution must be a list, got {type(data).__name__}")
    if puzzle == "zip":
        return [read_coord(coord) for coord in data]
    return Grid.from_2d_list(data)


def cmd_check(args) -> int:
    """Handle the check command."""
    try:
        board = load_board(args.puzzle, _read_json(args.board))
        data = _read_json(args.solution)
        if isinstance(data, dict):
            data = data.get("solution")
        solution = None if data is None else _read_solution(args.puzzle, data)
    except (InvalidBoardError, ValueError, TypeError, OSError) as e:
        print(f"Error loading input: {e}")
        return EXIT_BAD_INPUT

    if solution is None:
        print("✗ Solution file holds no solution")
        return EXIT_FAILED

    if args.puzzle == "zip":
        valid = validate_zip_path(board, solution)
    else:
        validators = {
            "sudoku": validate_sudoku_solution,
            "queens": validate_queens_solution,
            "tango": validate_tango_solution,
        }
        valid = validators[args.puzzle](board, solution)

    print("✓ Valid solution" if valid else "✗ Invalid solution")
    return EXIT_OK if valid else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
