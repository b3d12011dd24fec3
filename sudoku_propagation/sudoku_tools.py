from __future__ import annotations
from collections import Counter
from typing import Dict, List, Optional

from types_sudoku import ActionRecord, Candidates, Grid, SolvePayload
"""Tool-friendly helpers around the deduction engine: solve payloads, candidate maps, action records, narration text and a grid sanity check. Used by the CLI, the API and the batch tool."""


# sudoku_tools.py
from .deduction import new_puzzle, solve
from .solver_core import (
    DEFAULT_MAX_CHECKS,
    DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    SIZE,
    Action,
    ActionReason,
    ActionType,
    Area,
    Puzzle,
    SolveState,
    cells_in_area,
    index_to_rc,
    puzzle_from_grid,
    rc_to_key,
    solution_string,
    to_grid,
    validate_grid,
)

UNIT_PREFIX = {Area.ROW: "r", Area.COLUMN: "c", Area.BOX: "b"}

FILL_REASON_TEXT = {
    ActionReason.ONLY_CANDIDATE: "cell had only one candidate",
    ActionReason.ROW_CHECK: "it was the only place in its row for that value",
    ActionReason.COLUMN_CHECK: "it was the only place in its column for that value",
    ActionReason.BOX_CHECK: "it was the only place in its box for that value",
}

REMOVE_REASON_TEXT = {
    ActionReason.ROW_CHECK: "a cell in the same row holds it",
    ActionReason.COLUMN_CHECK: "a cell in the same column holds it",
    ActionReason.BOX_CHECK: "a cell in the same box holds it",
}


def sanity_check(original: Grid, current: Grid) -> Dict:
    """Compare a grid against its givens: overwritten givens and duplicate digits per unit (r#, c#, b#)."""
    validate_grid(original)
    issues = []
    for r in range(SIZE):
        for c in range(SIZE):
            given = original[r][c]
            if given != 0 and current[r][c] not in (0, given):
                issues.append({"type": "given_overwritten", "cell": rc_to_key(r, c),
                               "given": given, "found": current[r][c]})
    puzzle = puzzle_from_grid(current)
    for area in (Area.ROW, Area.COLUMN, Area.BOX):
        for i in range(SIZE):
            cells = cells_in_area(puzzle, area, i)
            counts = Counter(cell.value for cell in cells if cell.is_filled)
            dups = sorted(d for d, n in counts.items() if n > 1)
            if dups:
                issues.append({
                    "type": "duplicate",
                    "unit": f"{UNIT_PREFIX[area]}{i + 1}",
                    "digits": dups,
                    "cells": [rc_to_key(cell.row, cell.column) for cell in cells if cell.value in dups],
                })
    return {"ok": len(issues) == 0, "issues": issues}


def candidates_map(puzzle: Puzzle) -> Candidates:
    """Remaining candidates of every unfilled cell, keyed 'r1c1'..'r9c9'."""
    return {rc_to_key(c.row, c.column): list(c.candidates) for c in puzzle.cells if not c.is_filled}


def compute_candidates_tool(current: Grid) -> Dict:
    """Seed candidates for `current` (givens only, no solving) and return {'candidates': {...}}."""
    return {"candidates": candidates_map(new_puzzle(current))}


def action_to_record(action: Action) -> ActionRecord:
    return {
        "step": action.step,
        "type": action.action_type.value,
        "reason": action.reason.value,
        "cells": [rc_to_key(*index_to_rc(i)) for i in action.cells],
        "digits": list(action.candidates),
    }


def summarize_actions(actions: List[Action]) -> Dict[str, Dict[str, int]]:
    by_type = Counter(a.action_type.value for a in actions)
    fills = Counter(a.reason.value for a in actions if a.action_type is ActionType.FILL_CELL)
    removals = Counter(a.reason.value for a in actions if a.action_type is ActionType.REMOVE_CANDIDATES)
    return {"by_type": dict(by_type), "fills_by_reason": dict(fills), "removals_by_reason": dict(removals)}


def solve_tool(
    grid: Grid,
    max_checks: int = DEFAULT_MAX_CHECKS,
    max_checks_without_action: int = DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    include_actions: bool = True,
) -> SolvePayload:
    """Build, solve and serialize a puzzle in one call."""
    puzzle = new_puzzle(grid)
    state = solve(puzzle, max_checks, max_checks_without_action)
    payload: SolvePayload = {
        "status": state.value,
        "solved": state is SolveState.SOLVED,
        "solution": solution_string(puzzle),
        "grid": to_grid(puzzle),
        "check_counter": puzzle.check_counter,
        "last_check_with_action": puzzle.last_check_with_action,
        "max_checks": puzzle.parameters.max_checks,
        "max_checks_without_action": puzzle.parameters.max_checks_without_action,
        "candidates": candidates_map(puzzle),
        "summary": summarize_actions(puzzle.actions),
    }
    if include_actions:
        payload["actions"] = [action_to_record(a) for a in puzzle.actions]
    return payload


def describe_action(puzzle: Puzzle, action: Action) -> str:
    """One line of narration for an action, e.g. 'Step 12: Filled in cell 40 (row 5, column 5) with value 5 because ...'."""
    head = f"Step {action.step}:"
    if action.action_type is ActionType.FILL_CELL:
        cell = puzzle.cells[action.cells[0]]
        why = FILL_REASON_TEXT.get(action.reason, "NO EXPLANATION GIVEN")
        return (f"{head} Filled in cell {cell.index} (row {cell.row + 1}, column {cell.column + 1}) "
                f"with value {action.candidates[0]} because {why}")
    if action.action_type is ActionType.REMOVE_CANDIDATES:
        cell = puzzle.cells[action.cells[0]]
        why = REMOVE_REASON_TEXT.get(action.reason, "NO EXPLANATION GIVEN")
        return (f"{head} Removed candidate {action.candidates[0]} from cell {cell.index} "
                f"(row {cell.row + 1}, column {cell.column + 1}) because {why}")
    if action.action_type is ActionType.PUZZLE_SOLVED:
        return f"{head} Puzzle solved"
    return f"{head} Stopped: {quit_reason_text(puzzle, action.reason)}"


def quit_reason_text(puzzle: Puzzle, reason: ActionReason) -> str:
    params = puzzle.parameters
    if reason is ActionReason.MAX_CHECKS_EXCEEDED:
        return f"Exceeded maximum number of checks ({params.max_checks:,})"
    if reason is ActionReason.MAX_CHECKS_WITHOUT_ACTION_EXCEEDED:
        return f"Exceeded maximum number of checks without any actions ({params.max_checks_without_action:,})"
    return "Unknown!"


def describe_outcome(puzzle: Puzzle) -> str:
    if puzzle.state is SolveState.SOLVED:
        return f"Solved the puzzle in {puzzle.check_counter:,} steps!"
    if puzzle.state is SolveState.RUNNING:
        return "Puzzle has not been solved yet."
    last: Optional[Action] = puzzle.actions[-1] if puzzle.actions else None
    reason = quit_reason_text(puzzle, last.reason) if last else "Unknown!"
    return f"Failed to solve the puzzle after {puzzle.check_counter:,} steps! Reason for failure: {reason}"
