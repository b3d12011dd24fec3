# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "apps", "sudoku_propagation", "tools" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

CLASSIC = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
CLASSIC_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


@pytest.fixture
def classic_grid():
    return [[int(ch) for ch in CLASSIC[r * 9:(r + 1) * 9]] for r in range(9)]


@pytest.fixture
def classic_solution():
    return CLASSIC_SOLUTION


@pytest.fixture
def blank_grid():
    return [[0] * 9 for _ in range(9)]


@pytest.fixture
def stuck_grid():
    # first row 1..8 forces r1c9 = 9, after that nothing else is decidable
    grid = [[0] * 9 for _ in range(9)]
    grid[0] = [1, 2, 3, 4, 5, 6, 7, 8, 0]
    return grid
