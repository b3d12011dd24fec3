# types_sudoku.py
from __future__ import annotations

from typing import Any, Optional, TypedDict

Grid = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty)."""

Candidates = dict[str, list[int]]
"""Map from cell key (e.g., 'r1c1') to the candidate digits still open for that cell."""


class ActionRecord(TypedDict):
    """One entry of the solver's action log, in JSON-friendly form."""

    step: int  # check counter when the action was logged
    type: str  # 'fill_cell', 'remove_candidates', 'puzzle_solved', 'quit_...'
    reason: str  # 'only_candidate', 'row_check', 'column_check', 'box_check', ...
    cells: list[str]  # cell keys, empty for puzzle-level events
    digits: list[int]


class SolvePayload(TypedDict, total=False):
    """Result of solve_tool(), shared by the CLI, the API and the batch tool."""

    status: str  # 'solved', 'stalled_budget', 'stalled_stagnation'
    solved: bool
    solution: str  # 81 chars, '0' for unfilled cells
    grid: Grid
    check_counter: int
    last_check_with_action: Optional[int]
    max_checks: int
    max_checks_without_action: int
    candidates: Candidates
    actions: list[ActionRecord]
    summary: dict[str, Any]  # action counts by type and reason
