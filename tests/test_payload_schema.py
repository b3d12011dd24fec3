# tests/test_payload_schema.py
import json

from apps.cli.demo_cli import EXIT_BAD_INPUT, EXIT_SOLVED, EXIT_STALLED, main


def test_cli_payload_shape(tmp_path, classic_solution, capsys):
    out = tmp_path / "payload.json"
    code = main(["--no-color", "--json", str(out)])
    assert code == EXIT_SOLVED
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert set(payload) == {
        "status", "given", "solution", "check_counter", "last_check_with_action",
        "candidates", "summary", "actions",
    }
    assert payload["status"] == "solved"
    assert payload["solution"] == classic_solution
    assert "Solved the puzzle in" in capsys.readouterr().out


def test_cli_reports_a_stall(capsys):
    code = main(["--puzzle", "0" * 81, "--max-checks", "50", "--no-color"])
    assert code == EXIT_STALLED
    err = capsys.readouterr().err
    assert "Failed to solve the puzzle after 50 steps!" in err


def test_cli_rejects_bad_input(capsys):
    assert main(["--puzzle", "123", "--no-color"]) == EXIT_BAD_INPUT
    assert "bad puzzle input" in capsys.readouterr().err


def test_cli_reads_a_file_and_narrates(tmp_path, capsys):
    f = tmp_path / "puzzle.txt"
    f.write_text(
        "# classic\n53..7....\n6..195...\n.98....6.\n8...6...3\n4..8.3..1\n"
        "7...2...6\n.6....28.\n...419..5\n....8..79\n",
        encoding="utf-8",
    )
    assert main(["--file", str(f), "--no-color", "--verbose"]) == EXIT_SOLVED
    out = capsys.readouterr().out
    assert "Filled in cell 40 (row 5, column 5) with value 5" in out
    assert "Removed candidate" not in out


def test_cli_exports_images(tmp_path, classic_solution):
    puzzle = "00" + classic_solution[2:]
    code = main(["--puzzle", puzzle, "--no-color", "--out", str(tmp_path), "--gif", "--json", "-"])
    assert code == EXIT_SOLVED
    assert (tmp_path / "board.png").exists()
    assert (tmp_path / "fill_001.png").exists()
    assert (tmp_path / "fill_002.png").exists()
    assert (tmp_path / "fills.gif").exists()


def test_cli_plain_grid_output(classic_solution, capsys):
    assert main(["--plain", "--no-color"]) == EXIT_SOLVED
    out = capsys.readouterr().out
    assert " ".join(classic_solution[:9]) in out
    assert "┃" not in out
