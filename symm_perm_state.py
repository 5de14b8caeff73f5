"""
symm_perm_state.py

Mutable search state for enumerating symmetric permutations of N = 4K+1 labels.

The state holds:

- two perm-cycle slots: slot 0 (the short group, seeded with label 1) and
  slot 1 (the long member, seeded with label 2);
- a usage bitmap, where marking label i also marks its inverse partner N-i;
- the derived cycle table: K+1 rows of N entries (None = empty). Appending a
  label to a slot writes four entries per earlier element of that slot;
- a symmetric used-edge matrix. Every derived-table write claims the edges
  between the written value and its non-empty neighbours at offsets
  -2, -1, +1, +2 (cyclic) in the same row. Claiming an edge twice is a conflict.

extend() and retract() are the only mutators. A failed extend() is rolled back
through its undo log, so the state is exactly as it was before the call.
retract() must be called in LIFO order against successful extend() calls;
this is not checked.

Run directly to see a small demo.
    python symm_perm_state.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple


SHORT_SLOT = 0
LONG_SLOT = 1
SEED_LABELS = (1, 2)

# Positions around a derived-table write whose values form an edge with it.
_NEIGHBOUR_OFFSETS = (-2, -1, 1, 2)


def check_problem_size(n: int) -> int:
    """Return K = (n-1)/4, or raise ValueError unless n = 4K+1 with K >= 1."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"The number of labels must be an int, got {n!r}")
    if n < 5 or (n - 1) % 4 != 0:
        raise ValueError(f"The number of labels must be 1 more than a multiple of 4, got {n}")
    return (n - 1) // 4


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable copy of every structure in a SearchState, for comparisons."""
    slots: Tuple[Tuple[int, ...], ...]
    used: Tuple[bool, ...]
    derived: Tuple[Tuple[Optional[int], ...], ...]
    edges: FrozenSet[Tuple[int, int]]


@dataclass
class UndoLog:
    """Writes made by a single extend() attempt."""
    # (row, position, previous value)
    derived_writes: List[Tuple[int, int, Optional[int]]] = field(default_factory=list)
    # (a, b) edges claimed, in claim order
    edge_writes: List[Tuple[int, int]] = field(default_factory=list)


class SearchState:
    """
    In-progress construction for one search instance.

    Not shared between threads: every worker builds its own.
    """

    def __init__(self, n: int) -> None:
        self.k = check_problem_size(n)
        self.n = n
        self._slots: List[List[int]] = [[SEED_LABELS[0]], [SEED_LABELS[1]]]
        self._used: List[bool] = [False] * n
        self._derived: List[List[Optional[int]]] = [[None] * n for _ in range(self.k + 1)]
        self._edges: List[bytearray] = [bytearray(n) for _ in range(n)]
        for label in SEED_LABELS:
            self._set_used(label, True)

    # ----------------------------
    # Read-only accessors
    # ----------------------------

    def inv(self, label: int) -> int:
        return self.n - label

    def is_used(self, label: int) -> bool:
        return self._used[label]

    def slot(self, index: int) -> Tuple[int, ...]:
        return tuple(self._slots[index])

    def slot_len(self, index: int) -> int:
        return len(self._slots[index])

    def derived_row(self, index: int) -> Tuple[Optional[int], ...]:
        return tuple(self._derived[index])

    def edge_used(self, a: int, b: int) -> bool:
        return bool(self._edges[a][b])

    def num_used_edges(self) -> int:
        count = 0
        for a in range(self.n):
            row = self._edges[a]
            for b in range(a, self.n):
                if row[b]:
                    count += 1
        return count

    def solution(self) -> Tuple[Tuple[int, ...], ...]:
        """Deep copy of the current slots."""
        return tuple(tuple(seq) for seq in self._slots)

    def snapshot(self) -> StateSnapshot:
        edges = frozenset(
            (a, b)
            for a in range(self.n)
            for b in range(a, self.n)
            if self._edges[a][b]
        )
        return StateSnapshot(
            slots=self.solution(),
            used=tuple(self._used),
            derived=tuple(tuple(row) for row in self._derived),
            edges=edges,
        )

    # ----------------------------
    # Mutators
    # ----------------------------

    def extend(self, label: int, slot: int) -> bool:
        """
        Append label to the given slot.

        Returns False (leaving the state untouched) if some implied edge of the
        derived cycle table is already in use.
        """
        if slot not in (SHORT_SLOT, LONG_SLOT):
            raise ValueError(f"slot must be {SHORT_SLOT} or {LONG_SLOT}, got {slot}")
        if not 1 <= label < self.n:
            raise ValueError(f"label must satisfy 1 <= label < {self.n}, got {label}")
        seq = self._slots[slot]
        if len(seq) > self.k:
            raise ValueError(f"slot {slot} already holds {len(seq)} labels (K={self.k})")

        seq.append(label)
        self._set_used(label, True)

        n = self.n
        length = len(seq)
        inv_label = n - label
        log = UndoLog()
        for it in range(length - 1):
            prev = seq[it]
            inv_prev = n - prev
            fwd = length - 1 - it
            bwd = self.k + 1 + it - length
            ok = (
                self._write(fwd, prev, label, log)
                and self._write(bwd, label, inv_prev, log)
                and self._write(fwd, inv_prev, inv_label, log)
                and self._write(bwd, inv_label, prev, log)
            )
            if not ok:
                self._rollback(log)
                self._set_used(label, False)
                seq.pop()
                return False
        return True

    def retract(self, label: int, slot: int) -> None:
        """Undo the most recent successful extend(label, slot)."""
        seq = self._slots[slot]
        n = self.n
        length = len(seq)
        for it in range(length - 1):
            prev = seq[it]
            fwd = length - 1 - it
            bwd = self.k + 1 + it - length
            self._clear(fwd, prev)
            self._clear(bwd, label)
            self._clear(fwd, n - prev)
            self._clear(bwd, n - label)
        seq.pop()
        self._set_used(label, False)

    # ----------------------------
    # Internals
    # ----------------------------

    def _set_used(self, label: int, value: bool) -> None:
        self._used[label] = value
        self._used[self.n - label] = value

    def _write(self, row: int, pos: int, value: int, log: UndoLog) -> bool:
        entries = self._derived[row]
        log.derived_writes.append((row, pos, entries[pos]))
        entries[pos] = value

        n = self.n
        edges = self._edges
        for off in _NEIGHBOUR_OFFSETS:
            other = entries[(pos + off) % n]
            if other is None:
                continue
            if edges[other][value]:
                return False
            edges[other][value] = 1
            edges[value][other] = 1
            log.edge_writes.append((other, value))
        return True

    def _rollback(self, log: UndoLog) -> None:
        edges = self._edges
        for a, b in reversed(log.edge_writes):
            edges[a][b] = 0
            edges[b][a] = 0
        for row, pos, old in reversed(log.derived_writes):
            self._derived[row][pos] = old

    def _clear(self, row: int, pos: int) -> None:
        entries = self._derived[row]
        value = entries[pos]
        if value is None:
            return
        entries[pos] = None

        n = self.n
        edges = self._edges
        for off in _NEIGHBOUR_OFFSETS:
            other = entries[(pos + off) % n]
            if other is not None:
                edges[other][value] = 0
                edges[value][other] = 0

    def __str__(self) -> str:
        parts = [
            f"SearchState(n={self.n}, k={self.k}, used_edges={self.num_used_edges()})",
            f"  slots={self.solution()}",
        ]
        for i, row in enumerate(self._derived):
            cells = " ".join("." if v is None else str(v) for v in row)
            parts.append(f"  row {i}: {cells}")
        return "\n".join(parts)


def _demo() -> None:
    print("=== Demo: extend, conflict and retract (N=13) ===")
    st = SearchState(13)
    print(st)
    print()

    print("extend(6, short):", st.extend(6, SHORT_SLOT))
    print(st)
    print()

    before = st.snapshot()
    print("extend(3, short):", st.extend(3, SHORT_SLOT))
    print("unchanged after conflict:", st.snapshot() == before)
    print()

    st.retract(6, SHORT_SLOT)
    print("After retract(6, short):")
    print(st)


if __name__ == "__main__":
    _demo()
