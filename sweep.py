"""
sweep.py

Enumerate symmetric permutations for a list of problem sizes and write one
solution catalog per size.

Usage:
    python sweep.py <num_threads> [--sizes 21 25 ...] [--out-dir sol] [--verify]

Each size is searched in parallel over <num_threads> worker threads; sizes are
processed one after the other. Solutions for size N are written to
<out-dir>/perms_<N>.txt.
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from parallel_search import ParallelSearchResult, run_parallel_search
from solution_io import write_solutions
from symm_perm_state import check_problem_size
from verify_solutions import check_all

# ----------------------------
# Config
# ----------------------------

PROBLEM_SIZES: Tuple[int, ...] = (21, 25, 29, 33, 37)
OUT_DIR = "sol"
VERIFY = False   # re-check every accepted solution before writing

# ANSI
_RESET = "\033[0m"
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_RED = "\033[31m"


@dataclass(frozen=True)
class SweepConfig:
    problem_sizes: Tuple[int, ...]
    worker_count: int
    out_dir: Path = Path(OUT_DIR)
    verify: bool = VERIFY

    def __post_init__(self) -> None:
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be positive, got {self.worker_count}")
        if not self.problem_sizes:
            raise ValueError("problem_sizes must not be empty")
        for n in self.problem_sizes:
            check_problem_size(n)


def run_size(n: int, config: SweepConfig, *, verbose: bool = False) -> ParallelSearchResult:
    print(f"{_CYAN}=== Symmetric permutations N={n} ==={_RESET}")
    print(f"Threads: {config.worker_count}")
    result = run_parallel_search(n, config.worker_count, verbose=verbose)
    print(f"Starting labels: {len(result.per_first_label)}")
    print(f"Number of solutions found: {len(result.solutions)}")

    if config.verify:
        bad = check_all(result.solutions, n)
        if bad:
            for sol, reason in bad:
                print(f"{_RED}Invalid solution {sol}: {reason}{_RESET}")
            raise RuntimeError(f"{len(bad)} invalid solution(s) for N={n}")
        print(f"{_GREEN}Verified {len(result.solutions)} solution(s){_RESET}")

    path = write_solutions(result.solutions, n, config.out_dir)
    print(f"Written to: {path}")
    print(f"Elapsed: {result.elapsed:.2f}s")
    print()
    return result


def run_sweep(config: SweepConfig, *, verbose: bool = False) -> List[ParallelSearchResult]:
    start = time.time()
    results = [run_size(n, config, verbose=verbose) for n in config.problem_sizes]
    total = sum(len(r.solutions) for r in results)
    print(f"{_CYAN}=== Summary ==={_RESET}")
    for r in results:
        print(f"  N={r.n}: {len(r.solutions)} solution(s) in {r.elapsed:.2f}s")
    print(f"Total solutions: {total}")
    print(f"Elapsed: {time.time() - start:.2f}s")
    return results


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def _problem_size(text: str) -> int:
    value = _positive_int(text)
    try:
        check_problem_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate symmetric permutations of 4k+1 labels into solution catalogs."
    )
    parser.add_argument("num_threads", type=_positive_int, help="Number of worker threads")
    parser.add_argument(
        "--sizes",
        type=_problem_size,
        nargs="+",
        default=list(PROBLEM_SIZES),
        help=f"Problem sizes to sweep (default: {' '.join(map(str, PROBLEM_SIZES))})",
    )
    parser.add_argument("--out-dir", type=Path, default=Path(OUT_DIR), help="Output directory")
    parser.add_argument("--verify", action="store_true", default=VERIFY, help="Check every solution before writing")
    parser.add_argument("--verbose", action="store_true", help="Print per-starting-label counts")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = SweepConfig(
        problem_sizes=tuple(args.sizes),
        worker_count=args.num_threads,
        out_dir=args.out_dir,
        verify=args.verify,
    )
    run_sweep(config, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
