"""
verify_solutions.py

Independent checks for accepted solutions.

The derived cycle table is rebuilt directly from the recorded slots (without
going through SearchState), then every pair of entries at cyclic distance 1 or 2
in the same row is collected as a claimed edge in a networkx Graph. A solution
is valid when

- its slots start with the seed labels and each holds exactly K labels,
- the labels and their partners cover 1..N-1 exactly once,
- no derived-table position is written twice, and
- no edge is claimed by two different adjacencies.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import networkx as nx

from symm_perm_search import Solution
from symm_perm_state import SEED_LABELS, check_problem_size


class SolutionCheckError(ValueError):
    pass


def derived_table(solution: Solution, n: int) -> List[List[Optional[int]]]:
    """Final derived cycle table implied by the slots of a solution."""
    k = check_problem_size(n)
    table: List[List[Optional[int]]] = [[None] * n for _ in range(k + 1)]

    def put(row: int, pos: int, value: int) -> None:
        if not 0 <= row <= k:
            raise SolutionCheckError(f"slot too long: derived row {row} out of range")
        if table[row][pos] is not None:
            raise SolutionCheckError(f"derived position (row {row}, label {pos}) written twice")
        table[row][pos] = value

    for seq in solution:
        for i in range(1, len(seq)):
            v = seq[i]
            length = i + 1
            for it in range(i):
                p = seq[it]
                fwd = length - 1 - it
                bwd = k + 1 + it - length
                put(fwd, p, v)
                put(bwd, v, n - p)
                put(fwd, n - p, n - v)
                put(bwd, n - v, p)
    return table


def claimed_edge_graph(solution: Solution, n: int) -> nx.Graph:
    """
    Graph on labels with one edge per adjacency in the derived table.

    Edges carry the row and the two positions that claim them. Raises
    SolutionCheckError if an edge is claimed twice.
    """
    table = derived_table(solution, n)
    g = nx.Graph()
    g.add_nodes_from(range(1, n))
    for row_idx, row in enumerate(table):
        for pos, value in enumerate(row):
            if value is None:
                continue
            for off in (1, 2):
                q = (pos + off) % n
                other = row[q]
                if other is None:
                    continue
                if g.has_edge(value, other):
                    prev = g.edges[value, other]
                    raise SolutionCheckError(
                        f"edge {{{value}, {other}}} claimed by row {prev['row']} "
                        f"positions {prev['positions']} and row {row_idx} positions {(pos, q)}"
                    )
                g.add_edge(value, other, row=row_idx, positions=(pos, q))
    return g


def check_solution(solution: Solution, n: int) -> nx.Graph:
    """Raise SolutionCheckError unless solution is a valid accepted solution."""
    k = check_problem_size(n)
    if len(solution) != len(SEED_LABELS):
        raise SolutionCheckError(f"expected {len(SEED_LABELS)} slots, got {len(solution)}")
    for seed, seq in zip(SEED_LABELS, solution):
        if not seq or seq[0] != seed:
            raise SolutionCheckError(f"slot {tuple(seq)} does not start with seed {seed}")
        if len(seq) != k:
            raise SolutionCheckError(f"slot {tuple(seq)} holds {len(seq)} labels, expected K={k}")

    seen: Dict[int, int] = {}
    for seq in solution:
        for label in seq:
            for x in (label, n - label):
                seen[x] = seen.get(x, 0) + 1
    doubles = sorted(x for x, c in seen.items() if c > 1)
    if doubles:
        raise SolutionCheckError(f"labels used more than once: {doubles}")
    expected = set(range(1, n))
    if set(seen) != expected:
        raise SolutionCheckError(
            f"labels do not cover 1..{n - 1}: missing {sorted(expected - set(seen))}, "
            f"unexpected {sorted(set(seen) - expected)}"
        )

    return claimed_edge_graph(solution, n)


def check_all(solutions, n: int) -> List[Tuple[Solution, str]]:
    """Return (solution, reason) for every solution that fails check_solution."""
    bad: List[Tuple[Solution, str]] = []
    for sol in solutions:
        try:
            check_solution(sol, n)
        except SolutionCheckError as exc:
            bad.append((sol, str(exc)))
    return bad
