"""
parallel_search.py

Fan the search for one problem size out over a thread pool.

Each task gets its own SymmPermSearch with a distinct first label, runs it to
exhaustion, and merges its solutions into a shared SolutionCollector. The
collector lock is taken once per task, after the task's search is finished.

Failures are not isolated: the first worker exception cancels the tasks that
have not started yet and is re-raised to the caller.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from symm_perm_search import Solution, SymmPermSearch, candidate_labels
from symm_perm_state import check_problem_size


class SolutionCollector:
    """Shared, lock-guarded list of accepted solutions."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._solutions: List[Solution] = []
        self._final: Optional[Tuple[Solution, ...]] = None

    def merge(self, solutions: Iterable[Solution]) -> None:
        with self._lock:
            if self._final is not None:
                raise RuntimeError("SolutionCollector is already finalized")
            self._solutions.extend(solutions)

    def finalize(self) -> Tuple[Solution, ...]:
        """Freeze the collection; later merges raise RuntimeError."""
        with self._lock:
            if self._final is None:
                self._final = tuple(self._solutions)
            return self._final

    def __len__(self) -> int:
        with self._lock:
            return len(self._solutions)


@dataclass(frozen=True)
class ParallelSearchResult:
    n: int
    num_threads: int
    solutions: Tuple[Solution, ...]
    # (first label, number of solutions found from it), sorted by label
    per_first_label: Tuple[Tuple[int, int], ...]
    elapsed: float


def _run_worker(n: int, first_label: int, collector: SolutionCollector) -> int:
    search = SymmPermSearch(n)
    found = search.enumerate_from(first_label)
    collector.merge(found)
    return len(found)


def run_parallel_search(n: int, num_threads: int, *, verbose: bool = False) -> ParallelSearchResult:
    """Search every first label of problem size n on num_threads worker threads."""
    check_problem_size(n)
    if num_threads < 1:
        raise ValueError(f"num_threads must be positive, got {num_threads}")

    collector = SolutionCollector()
    counts: Dict[int, int] = {}
    start = time.time()

    with ThreadPoolExecutor(max_workers=num_threads) as ex:
        futures: Dict[Future[int], int] = {
            ex.submit(_run_worker, n, first, collector): first
            for first in candidate_labels(n)
        }
        try:
            for fut in as_completed(futures):
                first = futures[fut]
                counts[first] = fut.result()
                if verbose:
                    print(f"  first label {first}: {counts[first]} solution(s)")
        except BaseException:
            for other in futures:
                other.cancel()
            raise

    return ParallelSearchResult(
        n=n,
        num_threads=num_threads,
        solutions=collector.finalize(),
        per_first_label=tuple(sorted(counts.items())),
        elapsed=time.time() - start,
    )
