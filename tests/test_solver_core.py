# tests/test_solver_core.py
import pytest

from sudoku_propagation.solver_core import (
    Area,
    CellFilter,
    ConstructionError,
    Filled,
    SolveParameters,
    Unfilled,
    cells_in_box,
    cells_in_column,
    cells_in_row,
    empty_puzzle,
    grid_from_string,
    peers,
    puzzle_from_grid,
    shared_area,
    solution_string,
    to_grid,
    which_box,
)


def test_cells_know_their_row_column_and_box():
    p = empty_puzzle()
    assert len(p.cells) == 81
    c = p.cells[40]
    assert (c.index, c.row, c.column, c.box) == (40, 4, 4, 4)
    c = p.cells[80]
    assert (c.row, c.column, c.box) == (8, 8, 8)
    c = p.cells[33]  # r4c7
    assert (c.row, c.column, c.box) == (3, 6, 5)
    assert which_box(7, 2) == 6
    assert p.boxes[4] == [30, 31, 32, 39, 40, 41, 48, 49, 50]


def test_givens_are_filled_and_flagged(classic_grid):
    p = puzzle_from_grid(classic_grid)
    assert p.cells[0].given and p.cells[0].value == 5
    assert isinstance(p.cells[0].state, Filled)
    assert p.cells[0].candidates == [5]
    assert not p.cells[2].given and p.cells[2].value is None
    assert isinstance(p.cells[2].state, Unfilled)
    assert sum(c.given for c in p.cells) == 30
    assert to_grid(p) == classic_grid


@pytest.mark.parametrize(
    "mutate",
    [
        lambda g: g.pop(),  # 8 rows
        lambda g: g[3].append(0),  # 10 columns
        lambda g: g[2].__setitem__(4, 10),
        lambda g: g[2].__setitem__(4, -1),
        lambda g: g[0].__setitem__(0, True),
        lambda g: g[0].__setitem__(0, "5"),
        lambda g: g[0].__setitem__(0, 1.0),
    ],
)
def test_malformed_grids_are_rejected(classic_grid, mutate):
    mutate(classic_grid)
    with pytest.raises(ConstructionError):
        puzzle_from_grid(classic_grid)


def test_construction_error_names_the_cell(blank_grid):
    blank_grid[4][6] = 12
    with pytest.raises(ConstructionError, match="row 5, column 7"):
        puzzle_from_grid(blank_grid)


def test_area_queries_are_in_index_order():
    p = empty_puzzle()
    assert [c.index for c in cells_in_row(p, 1)] == list(range(9, 18))
    assert [c.index for c in cells_in_column(p, 2)] == [2, 11, 20, 29, 38, 47, 56, 65, 74]
    assert [c.index for c in cells_in_box(p, 8, exclude=80)] == [60, 61, 62, 69, 70, 71, 78, 79]


def test_area_queries_filter_filled_and_unfilled(classic_grid):
    p = puzzle_from_grid(classic_grid)
    assert [c.index for c in cells_in_row(p, 0, CellFilter.FILLED)] == [0, 1, 4]
    assert [c.index for c in cells_in_row(p, 0, CellFilter.UNFILLED, exclude=2)] == [3, 5, 6, 7, 8]
    assert [c.value for c in cells_in_column(p, 0, CellFilter.FILLED, exclude=0)] == [6, 8, 4, 7]
    assert [c.value for c in cells_in_box(p, 0, CellFilter.FILLED)] == [5, 3, 6, 9, 8]


def test_peers_and_shared_area():
    p = empty_puzzle()
    cell = p.cells[0]
    ps = peers(p, cell)
    assert len(ps) == 20
    assert [c.index for c in ps] == sorted(c.index for c in ps)
    assert shared_area(cell, p.cells[1]) is Area.BOX  # also same row
    assert shared_area(cell, p.cells[9]) is Area.BOX  # also same column
    assert shared_area(cell, p.cells[5]) is Area.ROW
    assert shared_area(cell, p.cells[45]) is Area.COLUMN
    assert shared_area(cell, p.cells[40]) is None


def test_solution_string_is_81_digits(classic_grid):
    p = puzzle_from_grid(classic_grid)
    s = solution_string(p)
    assert len(s) == 81
    assert s == "".join(str(v) for row in classic_grid for v in row)


def test_grid_from_string_accepts_dots_and_whitespace(classic_grid):
    text = "53..7....\n6..195...\n.98....6.\n8...6...3\n4..8.3..1\n7...2...6\n.6....28.\n...419..5\n....8..79"
    assert grid_from_string(text) == classic_grid


@pytest.mark.parametrize("text", ["0" * 80, "0" * 82, "x" + "0" * 80])
def test_grid_from_string_rejects_bad_text(text):
    with pytest.raises(ConstructionError):
        grid_from_string(text)


@pytest.mark.parametrize("kwargs", [{"max_checks": 0}, {"max_checks_without_action": -5}, {"max_checks": True}])
def test_solve_parameters_must_be_positive(kwargs):
    with pytest.raises(ValueError):
        SolveParameters(**kwargs)


def test_solve_parameter_defaults():
    params = SolveParameters()
    assert (params.max_checks, params.max_checks_without_action) == (10000, 500)
