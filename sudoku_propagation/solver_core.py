"""Core Sudoku model used by the deduction engine: cells, puzzle state, the action log, index math and area queries."""

# solver_core.py
# - Cell / Puzzle / Action model (cell state is Unfilled | Filled)
# - puzzle construction from a 9x9 grid of ints (0 = blank)
# - row / column / box queries in ascending cell-index order
# - 81-character solution string
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from types_sudoku import Grid

SIZE = 9
CELL_COUNT = SIZE * SIZE
DIGITS = tuple(range(1, SIZE + 1))

DEFAULT_MAX_CHECKS = 10000
DEFAULT_MAX_CHECKS_WITHOUT_ACTION = 500


class SudokuError(Exception):
    """Base class for solver errors."""


class ConstructionError(SudokuError, ValueError):
    """The input grid is malformed; no solve is attempted."""


class InternalConsistencyError(SudokuError, RuntimeError):
    """The engine reached a state its rules should never produce."""


class ConflictError(InternalConsistencyError):
    """A solved grid failed verification."""

    def __init__(self, index: int, row: int, column: int, value: Optional[int], area: "Area"):
        self.index = index
        self.row = row
        self.column = column
        self.value = value
        self.area = area
        super().__init__(
            f"Conflict found! Cell {index} (row {row + 1}, column {column + 1}) "
            f"has the same value ({value}) as another cell in the same {area.value}, "
            f"or a cell in that {area.value} is still unfilled."
        )


class Area(str, Enum):
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


class CellFilter(str, Enum):
    ALL = "all"
    FILLED = "filled"
    UNFILLED = "unfilled"


class ActionType(str, Enum):
    FILL_CELL = "fill_cell"
    REMOVE_CANDIDATES = "remove_candidates"
    IDENTIFY_TUPLE = "identify_tuple"  # reserved, never produced
    QUIT_MAX_CHECKS_EXCEEDED = "quit_max_checks_exceeded"
    QUIT_MAX_CHECKS_WITHOUT_ACTION_EXCEEDED = "quit_max_checks_without_action_exceeded"
    PUZZLE_SOLVED = "puzzle_solved"


class ActionReason(str, Enum):
    ONLY_CANDIDATE = "only_candidate"
    ROW_CHECK = "row_check"
    COLUMN_CHECK = "column_check"
    BOX_CHECK = "box_check"
    ROW_TUPLE_CHECK = "row_tuple_check"  # reserved
    COLUMN_TUPLE_CHECK = "column_tuple_check"  # reserved
    BOX_TUPLE_CHECK = "box_tuple_check"  # reserved
    MAX_CHECKS_EXCEEDED = "max_checks_exceeded"
    MAX_CHECKS_WITHOUT_ACTION_EXCEEDED = "max_checks_without_action_exceeded"
    ERROR_DETECTED_DUPLICATE_VALUE = "error_detected_duplicate_value"
    PUZZLE_SOLVED = "puzzle_solved"


AREA_REASONS = {
    Area.ROW: ActionReason.ROW_CHECK,
    Area.COLUMN: ActionReason.COLUMN_CHECK,
    Area.BOX: ActionReason.BOX_CHECK,
}

INFERENCE_ACTIONS = (ActionType.FILL_CELL, ActionType.REMOVE_CANDIDATES)


class SolveState(str, Enum):
    RUNNING = "running"
    SOLVED = "solved"
    STALLED_BUDGET = "stalled_budget"
    STALLED_STAGNATION = "stalled_stagnation"


@dataclass
class Unfilled:
    candidates: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Filled:
    value: int


CellState = Union[Unfilled, Filled]


@dataclass
class Cell:
    index: int
    row: int
    column: int
    box: int
    given: bool = False
    state: CellState = field(default_factory=Unfilled)

    @property
    def is_filled(self) -> bool:
        return isinstance(self.state, Filled)

    @property
    def value(self) -> Optional[int]:
        return self.state.value if isinstance(self.state, Filled) else None

    @property
    def candidates(self) -> list[int]:
        """Remaining digits; a filled cell reports the singleton [value]."""
        if isinstance(self.state, Filled):
            return [self.state.value]
        return self.state.candidates

    def area_index(self, area: Area) -> int:
        if area is Area.ROW:
            return self.row
        if area is Area.COLUMN:
            return self.column
        return self.box


@dataclass(frozen=True)
class Action:
    action_type: ActionType
    reason: ActionReason
    cells: tuple[int, ...] = ()
    candidates: tuple[int, ...] = ()
    step: int = 0


@dataclass
class SolveParameters:
    max_checks: int = DEFAULT_MAX_CHECKS
    max_checks_without_action: int = DEFAULT_MAX_CHECKS_WITHOUT_ACTION

    def __post_init__(self):
        for name in ("max_checks", "max_checks_without_action"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise ValueError(f"{name} must be a positive integer, got {v!r}")


@dataclass
class Puzzle:
    cells: list[Cell]
    boxes: list[list[int]]
    check_counter: int = 0
    last_check_with_action: Optional[int] = None
    actions: list[Action] = field(default_factory=list)
    parameters: SolveParameters = field(default_factory=SolveParameters)
    state: SolveState = SolveState.RUNNING
    unfilled_count: int = CELL_COUNT

    def log_action(self, action: Action) -> None:
        self.actions.append(action)
        if action.action_type in INFERENCE_ACTIONS:
            self.last_check_with_action = self.check_counter

    @property
    def terminal(self) -> bool:
        return self.state is not SolveState.RUNNING


def which_box(row: int, column: int) -> int:
    return (row // 3) * 3 + column // 3


def index_to_rc(index: int) -> tuple[int, int]:
    return divmod(index, SIZE)


def rc_to_key(row: int, column: int) -> str:
    """0-based (row, column) -> 1-based 'r{row}c{col}' key used in tool payloads."""
    return f"r{row + 1}c{column + 1}"


def validate_grid(grid: Sequence[Sequence[int]]) -> None:
    if isinstance(grid, (str, bytes)) or not isinstance(grid, Sequence) or len(grid) != SIZE:
        raise ConstructionError(f"Puzzle grid must have {SIZE} rows")
    for r, row in enumerate(grid):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence) or len(row) != SIZE:
            raise ConstructionError(f"Row {r + 1} must have {SIZE} columns")
        for c, v in enumerate(row):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConstructionError(
                    f"Cell at row {r + 1}, column {c + 1} is not an integer: {v!r}"
                )
            if not 0 <= v <= SIZE:
                raise ConstructionError(
                    f"Cell at row {r + 1}, column {c + 1} has value {v}; expected 0..{SIZE}"
                )


def empty_puzzle() -> Puzzle:
    cells = []
    boxes: list[list[int]] = [[] for _ in range(SIZE)]
    for row in range(SIZE):
        for column in range(SIZE):
            index = row * SIZE + column
            box = which_box(row, column)
            cells.append(Cell(index=index, row=row, column=column, box=box))
            boxes[box].append(index)
    return Puzzle(cells=cells, boxes=boxes)


def puzzle_from_grid(grid: Sequence[Sequence[int]]) -> Puzzle:
    """Build the 81 cells and place the givens. Candidates are left empty."""
    validate_grid(grid)
    puzzle = empty_puzzle()
    for cell in puzzle.cells:
        v = grid[cell.row][cell.column]
        if v:
            cell.state = Filled(v)
            cell.given = True
            puzzle.unfilled_count -= 1
    return puzzle


def cells_in_area(
    puzzle: Puzzle,
    area: Area,
    area_index: int,
    cell_filter: CellFilter = CellFilter.ALL,
    exclude: Optional[int] = None,
) -> list[Cell]:
    if area is Area.BOX:
        members = [puzzle.cells[i] for i in puzzle.boxes[area_index]]
    else:
        members = [c for c in puzzle.cells if c.area_index(area) == area_index]
    out = []
    for c in members:
        if exclude is not None and c.index == exclude:
            continue
        if cell_filter is CellFilter.FILLED and not c.is_filled:
            continue
        if cell_filter is CellFilter.UNFILLED and c.is_filled:
            continue
        out.append(c)
    return out


def cells_in_row(puzzle: Puzzle, row: int, cell_filter: CellFilter = CellFilter.ALL, exclude: Optional[int] = None) -> list[Cell]:
    return cells_in_area(puzzle, Area.ROW, row, cell_filter, exclude)


def cells_in_column(puzzle: Puzzle, column: int, cell_filter: CellFilter = CellFilter.ALL, exclude: Optional[int] = None) -> list[Cell]:
    return cells_in_area(puzzle, Area.COLUMN, column, cell_filter, exclude)


def cells_in_box(puzzle: Puzzle, box: int, cell_filter: CellFilter = CellFilter.ALL, exclude: Optional[int] = None) -> list[Cell]:
    return cells_in_area(puzzle, Area.BOX, box, cell_filter, exclude)


def unfilled_cells(puzzle: Puzzle) -> list[Cell]:
    return [c for c in puzzle.cells if not c.is_filled]


def peers(puzzle: Puzzle, cell: Cell, cell_filter: CellFilter = CellFilter.ALL) -> list[Cell]:
    """Every other cell sharing a row, column or box with `cell`, ascending index."""
    out = []
    for c in puzzle.cells:
        if c.index == cell.index:
            continue
        if c.row != cell.row and c.column != cell.column and c.box != cell.box:
            continue
        if cell_filter is CellFilter.FILLED and not c.is_filled:
            continue
        if cell_filter is CellFilter.UNFILLED and c.is_filled:
            continue
        out.append(c)
    return out


def shared_area(cell: Cell, other: Cell) -> Optional[Area]:
    """Box wins over column, column over row."""
    if cell.box == other.box:
        return Area.BOX
    if cell.column == other.column:
        return Area.COLUMN
    if cell.row == other.row:
        return Area.ROW
    return None


def to_grid(puzzle: Puzzle) -> Grid:
    grid = [[0] * SIZE for _ in range(SIZE)]
    for c in puzzle.cells:
        grid[c.row][c.column] = c.value or 0
    return grid


def solution_string(puzzle: Puzzle) -> str:
    return "".join(str(c.value or 0) for c in puzzle.cells)


def grid_from_string(text: str) -> Grid:
    """Parse 81 digits ('.' also accepted for blanks, whitespace ignored) into a 9x9 grid."""
    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != CELL_COUNT:
        raise ConstructionError(f"Expected {CELL_COUNT} cells, got {len(chars)}")
    values = []
    for i, ch in enumerate(chars):
        if ch == ".":
            values.append(0)
        elif ch in "0123456789":
            values.append(int(ch))
        else:
            r, c = index_to_rc(i)
            raise ConstructionError(
                f"Unexpected character {ch!r} at row {r + 1}, column {c + 1}"
            )
    return [values[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]
