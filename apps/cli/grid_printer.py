from __future__ import annotations

"""Terminal rendering of a puzzle: box-drawing grid, '?' for unfilled cells, optional ANSI colours (givens bold, deduced digits green, highlighted cell inverted)."""


# grid_printer.py
from dataclasses import dataclass
from typing import Optional

from sudoku_propagation.solver_core import SIZE, Puzzle

RESET = "\033[0m"
BOLD = "\033[1m"
GREEN = "\033[32m"
DIM = "\033[2m"
INVERT = "\033[7m"

TOP = "┏━━━━━━━┯━━━━━━━┯━━━━━━━┓"
MID = "┠───────┼───────┼───────┨"
BOTTOM = "┗━━━━━━━┷━━━━━━━┷━━━━━━━┛"


@dataclass
class RenderOptions:
    enable_color: bool = False


def _paint(text: str, *codes: str, options: RenderOptions) -> str:
    if not options.enable_color or not codes:
        return text
    return "".join(codes) + text + RESET


def render_cell(puzzle: Puzzle, index: int, options: RenderOptions, highlight: Optional[int] = None) -> str:
    cell = puzzle.cells[index]
    codes = []
    if cell.value is None:
        text = "?"
        codes.append(DIM)
    else:
        text = str(cell.value)
        codes.append(BOLD if cell.given else GREEN)
    if highlight == index:
        codes.append(INVERT)
    return _paint(text, *codes, options=options)


def render_grid(puzzle: Puzzle, options: Optional[RenderOptions] = None, highlight: Optional[int] = None) -> str:
    """Return the 9x9 grid as a multi-line string."""
    options = options or RenderOptions()
    lines = [TOP]
    for r in range(SIZE):
        if r and r % 3 == 0:
            lines.append(MID)
        groups = []
        for b in range(3):
            groups.append(" ".join(render_cell(puzzle, r * SIZE + b * 3 + k, options, highlight) for k in range(3)))
        lines.append("┃ " + " │ ".join(groups) + " ┃")
    lines.append(BOTTOM)
    return "\n".join(lines)


def render_plain(puzzle: Puzzle) -> str:
    """Compact form: one row per line, digits separated by spaces."""
    rows = []
    for r in range(SIZE):
        rows.append(" ".join(str(puzzle.cells[r * SIZE + c].value or "?") for c in range(SIZE)))
    return "\n".join(rows)
