from __future__ import annotations

import pytest

from solution_io import (
    SolutionFormatError,
    format_solution,
    full_cycle,
    parse_solution_line,
    read_solutions,
    solution_path,
    write_solutions,
)


N21_SAMPLE = ((1, 4, 5, 8, 15), (2, 11, 12, 18, 7))
N21_LINE = "(1 4 5 8 15 20 17 16 13 6) (2 11 12 18 7 19 10 9 3 14)"


def test_full_cycle_appends_partners():
    assert full_cycle((1, 4, 3), 13) == (1, 4, 3, 12, 9, 10)


def test_format_solution():
    assert format_solution(N21_SAMPLE, 21) == N21_LINE


def test_parse_solution_line():
    assert parse_solution_line(N21_LINE + "\n", 21) == N21_SAMPLE
    assert parse_solution_line("  (1 3 8 6)   (2 4 7 5) ", 9) == ((1, 3), (2, 4))


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "(1 3 8 6) x (2 4 7 5)",
        "(1 3 8) (2 4 7 5)",
        "(1 3 8 5) (2 4 7 5)",
        "(1 a 8 6) (2 4 7 5)",
        "() (2 4 7 5)",
        "1 3 8 6",
    ],
)
def test_parse_rejects_malformed(line):
    with pytest.raises(SolutionFormatError):
        parse_solution_line(line, 9)


def test_solution_path():
    assert solution_path(21).as_posix() == "sol/perms_21.txt"


def test_write_solutions_sorted_and_truncated(tmp_path):
    out_dir = tmp_path / "nested" / "sol"
    sols = [((1, 6), (2, 5)), ((1, 3), (2, 4)), ((1, 4), (2, 6))]
    path = write_solutions(sols, 9, out_dir)
    assert path == out_dir / "perms_9.txt"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "(1 3 8 6) (2 4 7 5)",
        "(1 4 8 5) (2 6 7 3)",
        "(1 6 8 3) (2 5 7 4)",
    ]
    assert read_solutions(path, 9) == sorted(sols)

    write_solutions([], 9, out_dir)
    assert path.read_text(encoding="utf-8") == ""


def test_read_solutions_reports_line_number(tmp_path):
    path = tmp_path / "perms_9.txt"
    path.write_text("(1 3 8 6) (2 4 7 5)\n\n(1 3 8)\n", encoding="utf-8")
    with pytest.raises(SolutionFormatError, match=":3:"):
        read_solutions(path, 9)
