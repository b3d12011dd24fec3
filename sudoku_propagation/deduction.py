"""Deduction engine: candidate seeding, peer elimination, sole-candidate location, fill propagation, the control loop and post-solve verification.

Every atomic comparison advances ``puzzle.check_counter`` by one and is
followed by a call to :func:`okay_to_keep_trying`, so both budgets are
enforced at the granularity of a single check. Rule order inside
:func:`check_cell` is fixed; it decides the exact action log and step counts.
"""

# deduction.py
from __future__ import annotations

from typing import Sequence

from .solver_core import (
    AREA_REASONS,
    DEFAULT_MAX_CHECKS,
    DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    DIGITS,
    Action,
    ActionReason,
    ActionType,
    Area,
    Cell,
    CellFilter,
    ConflictError,
    Filled,
    InternalConsistencyError,
    Puzzle,
    SolveParameters,
    SolveState,
    Unfilled,
    cells_in_area,
    peers,
    puzzle_from_grid,
    shared_area,
    unfilled_cells,
)

AREAS = (Area.ROW, Area.COLUMN, Area.BOX)


def new_puzzle(grid: Sequence[Sequence[int]]) -> Puzzle:
    """Construct a puzzle from a 9x9 grid (0 = blank) and seed candidates. Raises ConstructionError on bad input."""
    puzzle = puzzle_from_grid(grid)
    initialize_candidates(puzzle)
    return puzzle


def initialize_candidates(puzzle: Puzzle) -> None:
    for cell in unfilled_cells(puzzle):
        cell.state = Unfilled(list(DIGITS))
    for cell in puzzle.cells:
        for area in AREAS:
            if cell.is_filled:
                break
            for peer in cells_in_area(puzzle, area, cell.area_index(area), CellFilter.FILLED, cell.index):
                if peer.value in cell.candidates:
                    remove_candidate(puzzle, cell, peer.value, AREA_REASONS[area])
                if len(cell.candidates) == 1:
                    fill_cell(puzzle, cell, cell.candidates[0], ActionReason.ONLY_CANDIDATE)
                    break


def remove_candidate(puzzle: Puzzle, cell: Cell, candidate: int, reason: ActionReason) -> None:
    cell.candidates.remove(candidate)
    puzzle.log_action(
        Action(
            action_type=ActionType.REMOVE_CANDIDATES,
            reason=reason,
            cells=(cell.index,),
            candidates=(candidate,),
            step=puzzle.check_counter,
        )
    )


def fill_cell(puzzle: Puzzle, cell: Cell, value: int, reason: ActionReason) -> None:
    """Place `value` in `cell` and strike it from every unfilled peer."""
    if cell.is_filled:
        raise InternalConsistencyError(
            f"ERROR at step {puzzle.check_counter}: Asked to fill in cell {cell.index} "
            f"(row {cell.row + 1}, column {cell.column + 1}) with value {value}, "
            f"but it already has a value ({cell.value})"
        )
    cell.state = Filled(value)
    puzzle.unfilled_count -= 1
    puzzle.log_action(
        Action(
            action_type=ActionType.FILL_CELL,
            reason=reason,
            cells=(cell.index,),
            candidates=(value,),
            step=puzzle.check_counter,
        )
    )
    for peer in peers(puzzle, cell, CellFilter.UNFILLED):
        if value in peer.candidates:
            remove_candidate(puzzle, peer, value, AREA_REASONS[shared_area(cell, peer)])


def _log_terminal(puzzle: Puzzle, state: SolveState, action_type: ActionType, reason: ActionReason) -> None:
    puzzle.state = state
    puzzle.log_action(Action(action_type=action_type, reason=reason, step=puzzle.check_counter))


def okay_to_keep_trying(puzzle: Puzzle) -> bool:
    """Budget guard. Moves the puzzle to a terminal state (logging it once) when solving must stop."""
    if puzzle.terminal:
        return False
    if puzzle.unfilled_count == 0:
        _log_terminal(puzzle, SolveState.SOLVED, ActionType.PUZZLE_SOLVED, ActionReason.PUZZLE_SOLVED)
        return False
    params = puzzle.parameters
    if puzzle.check_counter >= params.max_checks:
        _log_terminal(
            puzzle,
            SolveState.STALLED_BUDGET,
            ActionType.QUIT_MAX_CHECKS_EXCEEDED,
            ActionReason.MAX_CHECKS_EXCEEDED,
        )
        return False
    since = puzzle.check_counter - (puzzle.last_check_with_action or 0)
    if since >= params.max_checks_without_action:
        _log_terminal(
            puzzle,
            SolveState.STALLED_STAGNATION,
            ActionType.QUIT_MAX_CHECKS_WITHOUT_ACTION_EXCEEDED,
            ActionReason.MAX_CHECKS_WITHOUT_ACTION_EXCEEDED,
        )
        return False
    return True


def check_cell_against_area(puzzle: Puzzle, cell: Cell, area: Area) -> None:
    """Strike the values of filled area-mates from the cell's candidates."""
    if cell.is_filled:
        return
    for peer in cells_in_area(puzzle, area, cell.area_index(area), CellFilter.FILLED, cell.index):
        puzzle.check_counter += 1
        if peer.value in cell.candidates:
            remove_candidate(puzzle, cell, peer.value, AREA_REASONS[area])
        if len(cell.candidates) == 1:
            fill_cell(puzzle, cell, cell.candidates[0], ActionReason.ONLY_CANDIDATE)
            return
        if not okay_to_keep_trying(puzzle):
            return


def check_only_possibility_in_area(puzzle: Puzzle, cell: Cell, area: Area) -> None:
    """Fill the cell with any candidate no other cell in the area can still hold."""
    if cell.is_filled:
        return
    others = cells_in_area(puzzle, area, cell.area_index(area), CellFilter.ALL, cell.index)
    for candidate in list(cell.candidates):
        possible_elsewhere = False
        for other in others:
            puzzle.check_counter += 1
            if candidate in other.candidates:
                possible_elsewhere = True
                break
            if not okay_to_keep_trying(puzzle):
                return
        if not possible_elsewhere:
            fill_cell(puzzle, cell, candidate, AREA_REASONS[area])
            return
        if not okay_to_keep_trying(puzzle):
            return


CELL_CHECKS = (
    (check_only_possibility_in_area, Area.ROW),
    (check_only_possibility_in_area, Area.COLUMN),
    (check_only_possibility_in_area, Area.BOX),
    (check_cell_against_area, Area.ROW),
    (check_cell_against_area, Area.COLUMN),
    (check_cell_against_area, Area.BOX),
)


def check_cell(puzzle: Puzzle, cell: Cell) -> None:
    for rule, area in CELL_CHECKS:
        if cell.is_filled or not okay_to_keep_trying(puzzle):
            return
        rule(puzzle, cell, area)


def solve(
    puzzle: Puzzle,
    max_checks: int = DEFAULT_MAX_CHECKS,
    max_checks_without_action: int = DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
) -> SolveState:
    """Run the propagation loop to a terminal state, mutating `puzzle` in place.

    Returns SOLVED, STALLED_BUDGET or STALLED_STAGNATION. Stalls are normal
    outcomes; InternalConsistencyError (including ConflictError from the final
    verification) means the result cannot be trusted.
    """
    if puzzle.terminal:
        return puzzle.state
    puzzle.parameters = SolveParameters(max_checks, max_checks_without_action)
    while okay_to_keep_trying(puzzle):
        for cell in unfilled_cells(puzzle):
            check_cell(puzzle, cell)
    if puzzle.state is SolveState.SOLVED:
        verify_solution(puzzle)
    return puzzle.state


def verify_solution(puzzle: Puzzle) -> None:
    for cell in puzzle.cells:
        for area in (Area.BOX, Area.COLUMN, Area.ROW):
            for other in cells_in_area(puzzle, area, cell.area_index(area), CellFilter.ALL, cell.index):
                if not other.is_filled or other.value == cell.value:
                    raise ConflictError(cell.index, cell.row, cell.column, cell.value, area)
