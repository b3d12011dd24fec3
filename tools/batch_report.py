#!/usr/bin/env python3
"""
Batch propagation report

Usage:
  python -m tools.batch_report puzzles.txt [--jsonl report.jsonl] [--max-checks N] [--max-checks-without-action N]

Input: one puzzle per line (81 characters, '0' or '.' for blanks). Blank lines
and lines starting with '#' are skipped.

What it prints:
- how many puzzles were read, and how many lines could not be parsed
- terminal state counts (solved / stalled_budget / stalled_stagnation)
- average checks per terminal state
- fills by reason across all solved puzzles
"""

import argparse
import json
import sys
from collections import Counter, defaultdict

from sudoku_propagation.solver_core import (
    DEFAULT_MAX_CHECKS,
    DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    ConstructionError,
    grid_from_string,
)
from sudoku_propagation.sudoku_tools import solve_tool


def load_puzzles(path: str):
    puzzles = []
    bad_lines = []
    with open(path, "r", encoding="utf-8") as f:
        for i, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                puzzles.append((i, grid_from_string(line)))
            except ConstructionError as e:
                bad_lines.append((i, str(e)))
    return puzzles, bad_lines


def run_batch(puzzles, max_checks=DEFAULT_MAX_CHECKS, max_checks_without_action=DEFAULT_MAX_CHECKS_WITHOUT_ACTION):
    """Solve every (line_no, grid) pair; returns (rows, state_counts, checks_by_state, fill_reasons)."""
    rows = []
    states = Counter()
    checks = defaultdict(list)
    fill_reasons = Counter()
    for line_no, grid in puzzles:
        payload = solve_tool(grid, max_checks, max_checks_without_action, include_actions=False)
        states[payload["status"]] += 1
        checks[payload["status"]].append(payload["check_counter"])
        if payload["solved"]:
            fill_reasons.update(payload["summary"]["fills_by_reason"])
        rows.append({
            "line": line_no,
            "status": payload["status"],
            "check_counter": payload["check_counter"],
            "solution": payload["solution"],
            "unfilled": payload["solution"].count("0"),
        })
    return rows, states, checks, fill_reasons


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("path")
    ap.add_argument("--jsonl", type=str, default=None, help="Write one JSON row per puzzle here")
    ap.add_argument("--max-checks", type=int, default=DEFAULT_MAX_CHECKS)
    ap.add_argument("--max-checks-without-action", type=int, default=DEFAULT_MAX_CHECKS_WITHOUT_ACTION)
    args = ap.parse_args(argv)

    puzzles, bad_lines = load_puzzles(args.path)
    print(f"Loaded puzzles: {len(puzzles)}   (bad/unparseable lines: {len(bad_lines)})")
    for line_no, err in bad_lines:
        print(f"[WARN] line {line_no}: {err}")
    if not puzzles:
        print("No parseable puzzles found.")
        return 1

    rows, states, checks, fill_reasons = run_batch(
        puzzles, args.max_checks, args.max_checks_without_action
    )

    print("\n== TERMINAL STATES ==")
    for state, n in states.most_common():
        avg = sum(checks[state]) / len(checks[state])
        print(f"{state:<20} {n:>6}   avg checks {avg:,.0f}")

    if fill_reasons:
        print("\n== FILLS BY REASON (solved puzzles) ==")
        print(", ".join(f"{k}={v}" for k, v in fill_reasons.most_common()))

    if args.jsonl:
        with open(args.jsonl, "w", encoding="utf-8") as f:
            for row in rows:
                f.write(json.dumps(row) + "\n")
        print(f"\nWrote {args.jsonl} ({len(rows)} rows)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
