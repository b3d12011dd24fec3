"""Turn the per-fill frames of a solve into an animated GIF."""

# animate_gif.py
# Frames come from overlay_renderer.render_fill_frames (fill_001.png, fill_002.png, ...).
# Usage:
#   python -m apps.cli.animate_gif solve_export --out solve_export/fills.gif --size 600 --hold-ms 1500

import argparse
import sys
from pathlib import Path

from PIL import Image, ImageOps


def gather_frames(dir_path):
    """Fill frames in step order; the zero-padded names sort correctly."""
    return sorted(str(p) for p in Path(dir_path).glob("fill_*.png"))


def load_frame(path, size=None):
    with Image.open(path) as im:
        frame = im.convert("RGB")
    if size:
        frame = ImageOps.fit(frame, (size, size), method=Image.Resampling.BICUBIC)
    return frame


def frame_durations(count, first_ms, fill_ms, hold_ms):
    if count == 0:
        return []
    durations = [fill_ms] * count
    durations[0] = first_ms
    durations[-1] = max(durations[-1], hold_ms)
    return durations


def animate(frame_paths, out_path, size=None, include_board=False, board_path=None,
            first_ms=800, fill_ms=400, hold_ms=1500):
    """Write an animated GIF of `frame_paths` (plus the finished board when asked) and return its path."""
    paths = list(frame_paths)
    if include_board and board_path and Path(board_path).exists():
        paths.append(board_path)
    if not paths:
        raise ValueError("No frames to animate")

    frames = [load_frame(p, size=size) for p in paths]
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        out,
        save_all=True,
        append_images=frames[1:],
        duration=frame_durations(len(frames), first_ms, fill_ms, hold_ms),
        loop=0,
    )
    return str(out)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Animate fill_*.png frames into a GIF")
    ap.add_argument("dir", help="directory holding fill_*.png (and board.png)")
    ap.add_argument("--out", default=None, help="defaults to <dir>/fills.gif")
    ap.add_argument("--size", type=int, default=600, help="square output size in px")
    ap.add_argument("--no-board", action="store_true", help="do not end on board.png")
    ap.add_argument("--first-ms", type=int, default=800)
    ap.add_argument("--fill-ms", type=int, default=400)
    ap.add_argument("--hold-ms", type=int, default=1500)
    args = ap.parse_args(argv)

    frames = gather_frames(args.dir)
    if not frames:
        print(f"[gif] no fill_*.png frames in {args.dir}", file=sys.stderr)
        return 1
    out = animate(
        frames,
        args.out or str(Path(args.dir) / "fills.gif"),
        size=args.size,
        include_board=not args.no_board,
        board_path=str(Path(args.dir) / "board.png"),
        first_ms=args.first_ms,
        fill_ms=args.fill_ms,
        hold_ms=args.hold_ms,
    )
    print(f"[gif] wrote {out} ({len(frames)} fill frames)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
