from __future__ import annotations

import networkx as nx
import pytest

from symm_perm_search import enumerate_all
from symm_perm_state import SearchState
from verify_solutions import (
    SolutionCheckError,
    check_all,
    check_solution,
    claimed_edge_graph,
    derived_table,
)


def _replay(solution, n):
    st = SearchState(n)
    for slot, seq in enumerate(solution):
        for label in seq[1:]:
            assert st.extend(label, slot)
    return st


@pytest.mark.parametrize("n", [9, 13])
def test_claimed_edges_match_search_state(n):
    for sol in enumerate_all(n):
        g = check_solution(sol, n)
        assert isinstance(g, nx.Graph)
        st = _replay(sol, n)
        state_edges = {frozenset(e) for e in st.snapshot().edges}
        graph_edges = {frozenset(e) for e in g.edges()}
        assert graph_edges == state_edges
        assert g.number_of_edges() == st.num_used_edges()


def test_derived_table_matches_search_state():
    sol = ((1, 4, 3), (2, 8, 6))
    st = _replay(sol, 13)
    table = derived_table(sol, 13)
    assert [tuple(row) for row in table] == [st.derived_row(i) for i in range(st.k + 1)]


def test_edges_record_their_row():
    g = claimed_edge_graph(((1, 3), (2, 4)), 9)
    assert g.has_edge(3, 8)
    assert g.edges[3, 8]["row"] == 1


@pytest.mark.parametrize(
    "n, sol, message",
    [
        (9, ((1, 3),), "expected 2 slots"),
        (9, ((3, 1), (2, 4)), "does not start with seed"),
        (9, ((1, 3, 4), (2, 5)), "expected K=2"),
        (9, ((1, 3), (2, 6)), "more than once"),
        (13, ((1, 6, 3), (2, 4, 5)), "claimed|written twice"),
    ],
)
def test_check_solution_rejects(n, sol, message):
    with pytest.raises(SolutionCheckError, match=message):
        check_solution(sol, n)


def test_check_all_collects_failures():
    good = ((1, 3), (2, 4))
    bad = ((1, 3), (2, 6))
    failures = check_all([good, bad], 9)
    assert len(failures) == 1
    assert failures[0][0] == bad
