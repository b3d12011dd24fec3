"""Command-line driver: load a puzzle, run the propagation solver, print the grid, narration and outcome, and optionally export JSON / PNG / GIF artifacts."""

# demo_cli.py
# End-to-end run:
# - Takes an 81-character puzzle string (--puzzle), a text file (--file), or the built-in demo grid
# - Builds the puzzle and solves it by propagation only
# - Prints the final grid (optionally coloured) and the reason the solver stopped
#
# Usage:
#   python -m apps.cli.demo_cli --puzzle "53..7....6..195....98....6.8...6...34..8..6...2...3.6....28....419..5....8..79"
#   python -m apps.cli.demo_cli --file puzzle.txt --max-checks 20000 --color --verbose
#   python -m apps.cli.demo_cli --out solve_export --gif

import argparse
import json
import sys
from pathlib import Path

from sudoku_propagation.deduction import new_puzzle, solve
from sudoku_propagation.solver_core import (
    DEFAULT_MAX_CHECKS,
    DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    ActionType,
    ConstructionError,
    InternalConsistencyError,
    SolveState,
    grid_from_string,
    solution_string,
)
from sudoku_propagation.sudoku_tools import (
    action_to_record,
    candidates_map,
    describe_action,
    describe_outcome,
    summarize_actions,
)

from .grid_printer import RenderOptions, render_grid, render_plain

EXIT_SOLVED = 0
EXIT_INTERNAL_ERROR = 1
EXIT_BAD_INPUT = 2
EXIT_STALLED = 3

DEMO_GRID = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


def load_grid(args):
    """Return the 9x9 grid selected by --puzzle / --file, or the demo grid."""
    if args.puzzle:
        return grid_from_string(args.puzzle)
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
        lines = [ln for ln in text.splitlines() if ln.strip() and not ln.lstrip().startswith("#")]
        return grid_from_string("".join(lines).replace("|", "").replace("-", "").replace("+", ""))
    return [row[:] for row in DEMO_GRID]


def build_parser():
    ap = argparse.ArgumentParser(description="Solve a 9x9 Sudoku by constraint propagation only.")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--puzzle", type=str, default=None, help="81 characters, '0' or '.' for blanks")
    src.add_argument("--file", type=str, default=None, help="Text file holding the puzzle (9 lines or one line)")
    ap.add_argument("--max-checks", type=int, default=DEFAULT_MAX_CHECKS)
    ap.add_argument("--max-checks-without-action", type=int, default=DEFAULT_MAX_CHECKS_WITHOUT_ACTION)
    ap.add_argument("--color", dest="color", action="store_true", help="ANSI colours in the grid output")
    ap.add_argument("--no-color", dest="color", action="store_false")
    ap.set_defaults(color=sys.stdout.isatty())
    ap.add_argument("--plain", action="store_true", help="Compact grid output: digits only, no box rules")
    ap.add_argument("--verbose", action="store_true", help="Narrate every fill")
    ap.add_argument("--all-actions", action="store_true", help="With --verbose, narrate eliminations too")
    ap.add_argument("--json", type=str, default=None, help="Write the full payload JSON here ('-' for stdout)")
    ap.add_argument("--out", type=str, default=None, help="Export folder for board.png (and fill frames)")
    ap.add_argument("--gif", action="store_true", help="With --out, also write fill frames and fills.gif")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    options = RenderOptions(enable_color=args.color)

    def show(p):
        return render_plain(p) if args.plain else render_grid(p, options)

    try:
        grid = load_grid(args)
        puzzle = new_puzzle(grid)
    except (ConstructionError, OSError) as e:
        print(f"[solver] bad puzzle input: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print(show(puzzle))
    print("[solver] Starting solve...")
    try:
        state = solve(puzzle, args.max_checks, args.max_checks_without_action)
    except ValueError as e:
        print(f"[solver] bad solve parameters: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except InternalConsistencyError as e:
        print(f"[solver] {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    if args.verbose:
        for action in puzzle.actions:
            if action.action_type is ActionType.REMOVE_CANDIDATES and not args.all_actions:
                continue
            print(describe_action(puzzle, action))

    print(describe_outcome(puzzle), file=sys.stdout if state is SolveState.SOLVED else sys.stderr)
    print(show(puzzle))

    payload = {
        "status": state.value,
        "given": grid,
        "solution": solution_string(puzzle),
        "check_counter": puzzle.check_counter,
        "last_check_with_action": puzzle.last_check_with_action,
        "candidates": candidates_map(puzzle),
        "summary": summarize_actions(puzzle.actions),
        "actions": [action_to_record(a) for a in puzzle.actions],
    }

    if args.out:
        # Pillow is only needed for image export
        from .overlay_renderer import render_board, render_fill_frames

        export_dir = Path(args.out)
        export_dir.mkdir(parents=True, exist_ok=True)
        payload["board"] = render_board(puzzle, str(export_dir / "board.png"))
        if args.gif:
            from .animate_gif import animate

            frames = render_fill_frames(puzzle, str(export_dir))
            payload["frames"] = frames
            payload["gif"] = animate(frames, str(export_dir / "fills.gif"), size=600,
                                     include_board=True, board_path=payload["board"])

    if args.json == "-":
        print(json.dumps(payload, indent=2))
    elif args.json:
        Path(args.json).write_text(json.dumps(payload, indent=2), encoding="utf-8")

    return EXIT_SOLVED if state is SolveState.SOLVED else EXIT_STALLED


if __name__ == "__main__":
    sys.exit(main())
