from __future__ import annotations

from types_sudoku import Grid

"""Rendering utilities that draw a puzzle onto a 900x900 board image: givens, deduced digits, pencil-mark candidates, and per-fill highlight frames (fill_XXX.png) used by the GIF animation."""


# overlay_renderer.py
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from sudoku_propagation.solver_core import SIZE, Action, ActionReason, ActionType, Puzzle, index_to_rc, to_grid

CELL = 100  # 900/9
W = H = 900

GIVEN_INK = (0, 0, 0)
DEDUCED_INK = (0, 128, 0)
PENCIL_INK = (110, 110, 110)
AREA_FILL = {
    ActionReason.ROW_CHECK: (255, 255, 0, 64),
    ActionReason.COLUMN_CHECK: (0, 255, 255, 64),
    ActionReason.BOX_CHECK: (255, 0, 255, 48),
}


def cell_rect(r, c, pad=2):
    # r, c are 0-based here
    x0 = c * CELL + pad
    y0 = r * CELL + pad
    x1 = (c + 1) * CELL - pad
    y1 = (r + 1) * CELL - pad
    return (x0, y0, x1, y1)


def row_rect(r, pad=0):
    return (0 + pad, r * CELL + pad, W - pad, (r + 1) * CELL - pad)


def col_rect(c, pad=0):
    return (c * CELL + pad, 0 + pad, (c + 1) * CELL - pad, H - pad)


def box_rect(b, pad=2):
    br, bc = divmod(b, 3)
    return (bc * 3 * CELL + pad, br * 3 * CELL + pad, (bc + 1) * 3 * CELL - pad, (br + 1) * 3 * CELL - pad)


def load_font(size):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size)


def draw_board_lines(d: ImageDraw.ImageDraw) -> None:
    for i in range(SIZE + 1):
        width = 6 if i % 3 == 0 else 2
        d.line((i * CELL, 0, i * CELL, H), fill=(0, 0, 0, 255), width=width)
        d.line((0, i * CELL, W, i * CELL), fill=(0, 0, 0, 255), width=width)


def draw_digits(d: ImageDraw.ImageDraw, grid: Grid, givens: Grid, candidates: Optional[dict] = None) -> None:
    big = load_font(64)
    small = load_font(22)
    for r in range(SIZE):
        for c in range(SIZE):
            x0, y0, x1, y1 = cell_rect(r, c)
            v = grid[r][c]
            if v:
                ink = GIVEN_INK if givens[r][c] else DEDUCED_INK
                d.text(((x0 + x1) // 2, (y0 + y1) // 2), str(v), fill=ink + (255,), font=big, anchor="mm")
            elif candidates and (r, c) in candidates:
                # 3x3 pencil-mark layout
                for digit in candidates[(r, c)]:
                    pr, pc = divmod(digit - 1, 3)
                    cx = x0 + (pc + 0.5) * (x1 - x0) / 3
                    cy = y0 + (pr + 0.5) * (y1 - y0) / 3
                    d.text((cx, cy), str(digit), fill=PENCIL_INK + (255,), font=small, anchor="mm")


def givens_grid(puzzle: Puzzle) -> Grid:
    grid = [[0] * SIZE for _ in range(SIZE)]
    for cell in puzzle.cells:
        if cell.given:
            grid[cell.row][cell.column] = cell.value
    return grid


def render_board(puzzle: Puzzle, out_path: str, show_candidates: bool = True) -> str:
    """Render the current puzzle state to a PNG and return its path."""
    im = Image.new("RGBA", (W, H), (255, 255, 255, 255))
    d = ImageDraw.Draw(im)
    cands = None
    if show_candidates:
        cands = {(c.row, c.column): list(c.candidates) for c in puzzle.cells if not c.is_filled}
    draw_digits(d, to_grid(puzzle), givens_grid(puzzle), cands)
    draw_board_lines(d)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    im.convert("RGB").save(out_path)
    return out_path


def draw_fill(grid: Grid, givens: Grid, action: Action, out_path: str) -> str:
    """Render one fill action: the area that justified it, the placed digit, and a caption band."""
    im = Image.new("RGBA", (W, H), (255, 255, 255, 255))
    overlay = Image.new("RGBA", im.size, (0, 0, 0, 0))
    d = ImageDraw.Draw(overlay)
    r, c = index_to_rc(action.cells[0])
    if action.reason is ActionReason.ROW_CHECK:
        d.rectangle(row_rect(r), fill=AREA_FILL[action.reason])
    elif action.reason is ActionReason.COLUMN_CHECK:
        d.rectangle(col_rect(c), fill=AREA_FILL[action.reason])
    elif action.reason is ActionReason.BOX_CHECK:
        d.rectangle(box_rect((r // 3) * 3 + c // 3), fill=AREA_FILL[action.reason])
    d.rectangle(cell_rect(r, c), fill=(144, 238, 144, 128), outline=(0, 128, 0, 255), width=3)
    draw_digits(d, grid, givens)
    draw_board_lines(d)

    title = f"step {action.step}: r{r + 1}c{c + 1} = {action.candidates[0]} ({action.reason.value})"
    ftitle = load_font(28)
    pad = 10
    tw, th = d.textbbox((0, 0), title, font=ftitle)[2:]
    d.rectangle((pad, pad, pad + tw + 20, pad + th + 20), fill=(0, 0, 0, 160))
    d.text((pad + 10, pad + 10), title, fill=(255, 255, 255, 255), font=ftitle)

    out = Image.alpha_composite(im, overlay).convert("RGB")
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    out.save(out_path)
    return out_path


def render_fill_frames(puzzle: Puzzle, out_dir: str) -> list[str]:
    """Replay the FILL_CELL actions from the givens and write fill_001.png, fill_002.png, ..."""
    givens = givens_grid(puzzle)
    grid = [row[:] for row in givens]
    paths = []
    fills = [a for a in puzzle.actions if a.action_type is ActionType.FILL_CELL]
    for i, action in enumerate(fills, 1):
        r, c = index_to_rc(action.cells[0])
        grid[r][c] = action.candidates[0]
        paths.append(draw_fill(grid, givens, action, str(Path(out_dir) / f"fill_{i:03d}.png")))
    return paths
