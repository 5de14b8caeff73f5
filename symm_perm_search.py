"""
symm_perm_search.py

Depth-first enumeration of symmetric permutations on top of SearchState.

One SymmPermSearch is one search instance: it owns a SearchState, fixes the
first label of the short slot (the branch it is responsible for) and then
recursively tries every unused candidate label in increasing order, always
retracting its own extension before moving on.

Slot 0 is filled until it holds K labels, then slot 1. A solution is recorded
as soon as slot 1 holds K labels.

Run directly for the single-threaded counts of a few small sizes.
    python symm_perm_search.py
"""

from __future__ import annotations

from typing import List, Tuple

from symm_perm_state import LONG_SLOT, SHORT_SLOT, SearchState, check_problem_size


Solution = Tuple[Tuple[int, ...], ...]


def candidate_labels(n: int) -> range:
    """
    Labels tried at every level, and as first labels by the fan-out.

    Labels N-2 and N-1 are the partners of the seeds and are never candidates.
    """
    return range(3, n - 2)


class SymmPermSearch:
    """Exhaustive search over one branch (first label) of the problem of size n."""

    def __init__(self, n: int) -> None:
        self.k = check_problem_size(n)
        self.n = n
        self.state = SearchState(n)
        self.solutions: List[Solution] = []

    def candidates(self) -> range:
        return candidate_labels(self.n)

    def enumerate_from(self, first_label: int) -> List[Solution]:
        """
        Run the search with first_label appended to the short slot.

        Accepted solutions are accumulated on self.solutions, which is returned.
        """
        if first_label not in self.candidates():
            raise ValueError(
                f"first label must lie in [{self.candidates().start}, {self.candidates().stop}), got {first_label}"
            )
        st = self.state
        if st.extend(first_label, SHORT_SLOT):
            self._recurse()
            st.retract(first_label, SHORT_SLOT)
        return self.solutions

    def _recurse(self) -> None:
        st = self.state
        if st.slot_len(LONG_SLOT) == self.k:
            self.solutions.append(st.solution())
            return

        slot = SHORT_SLOT if st.slot_len(SHORT_SLOT) < self.k else LONG_SLOT
        for label in self.candidates():
            if st.is_used(label):
                continue
            if st.extend(label, slot):
                self._recurse()
                st.retract(label, slot)


def enumerate_all(n: int) -> List[Solution]:
    """Single-threaded run over every first label, one search instance each."""
    check_problem_size(n)
    out: List[Solution] = []
    for first in candidate_labels(n):
        out.extend(SymmPermSearch(n).enumerate_from(first))
    return out


def _demo() -> None:
    for n in (5, 9, 13, 17):
        sols = enumerate_all(n)
        print(f"N={n}: {len(sols)} solution(s)")
        for sol in sols[:4]:
            print("  ", sol)


if __name__ == "__main__":
    _demo()
