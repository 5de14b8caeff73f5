"""
solution_io.py

Flat text format for solution catalogs.

One line per solution. Each slot is written as a parenthesised group holding
the slot's labels followed by their inverse partners (N - label), e.g. for N=21

    (1 4 5 8 15 20 17 16 13 6) (2 11 12 18 7 19 10 9 3 14)
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from symm_perm_search import Solution


_GROUP_RE = re.compile(r"\(([^()]*)\)")


class SolutionFormatError(ValueError):
    pass


def full_cycle(cycle: Sequence[int], n: int) -> Tuple[int, ...]:
    """The slot's labels followed by their partners."""
    return tuple(cycle) + tuple(n - label for label in cycle)


def format_solution(solution: Solution, n: int) -> str:
    groups = []
    for cycle in solution:
        groups.append("(" + " ".join(str(x) for x in full_cycle(cycle, n)) + ")")
    return " ".join(groups)


def solution_path(n: int, out_dir: Union[str, Path] = "sol") -> Path:
    return Path(out_dir) / f"perms_{n}.txt"


def write_solutions(solutions: Iterable[Solution], n: int, out_dir: Union[str, Path] = "sol") -> Path:
    """
    Write solutions (sorted, so the file does not depend on thread scheduling)
    to out_dir/perms_<n>.txt, truncating any previous file.
    """
    path = solution_path(n, out_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for sol in sorted(solutions):
            f.write(format_solution(sol, n) + "\n")
    return path


def parse_solution_line(line: str, n: int) -> Solution:
    """Inverse of format_solution. Raises SolutionFormatError on malformed input."""
    text = line.strip()
    if not text:
        raise SolutionFormatError("empty solution line")
    if _GROUP_RE.sub("", text).strip():
        raise SolutionFormatError(f"unexpected text outside groups: {text!r}")

    out: List[Tuple[int, ...]] = []
    for body in _GROUP_RE.findall(text):
        try:
            labels = [int(tok) for tok in body.split()]
        except ValueError as exc:
            raise SolutionFormatError(f"non-integer label in group ({body})") from exc
        if not labels or len(labels) % 2:
            raise SolutionFormatError(f"group ({body}) must hold an even, non-zero number of labels")
        half = len(labels) // 2
        cycle = tuple(labels[:half])
        if tuple(labels[half:]) != tuple(n - x for x in cycle):
            raise SolutionFormatError(f"group ({body}) does not end with the partners of its first half")
        out.append(cycle)
    return tuple(out)


def read_solutions(path: Union[str, Path], n: int) -> List[Solution]:
    out: List[Solution] = []
    with Path(path).open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                out.append(parse_solution_line(line, n))
            except SolutionFormatError as exc:
                raise SolutionFormatError(f"{path}:{lineno}: {exc}") from exc
    return out
