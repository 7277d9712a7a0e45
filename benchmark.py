#!/usr/bin/env python
"""
benchmark.py

Time how fast the engine advances a 128-cell lattice.

Usage
-------
python benchmark.py --rule 110 --generations 10000 --repeats 5 --workers 1
python benchmark.py --rule 30 --boundary periodic --csv results/bench.csv
"""

from __future__ import annotations
import argparse, csv, pathlib, sys, time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Union

from lattice import BoundaryMode, coerce, single_cell
from simulate import Automaton, Initial


@dataclass
class BenchResult:
    rule: int
    boundary: BoundaryMode
    generations: int
    repeats: int
    workers: int
    best_seconds: float
    mean_seconds: float
    final_cells: int

    @property
    def generations_per_second(self) -> float:
        if self.best_seconds <= 0:
            return float("inf")
        return self.generations / self.best_seconds


def benchmark(
    rule: int,
    initial: Initial,
    boundary_mode: Union[BoundaryMode, str] = BoundaryMode.FIXED,
    generations: int = 1000,
    repeats: int = 3,
    workers: int = 1,
) -> BenchResult:
    '''
    Run `generations` steps from the same start `repeats` times and keep the timings.
    '''
    if generations < 0 or repeats < 1:
        raise ValueError("generations must be >= 0 and repeats >= 1")
    start = coerce(initial)
    mode = BoundaryMode.parse(boundary_mode)

    timings: List[float] = []
    final = start
    for _ in range(repeats):
        with Automaton(rule, start, mode, workers=workers) as automaton:
            t0 = time.perf_counter()
            for _ in range(generations):
                automaton.step()
            timings.append(time.perf_counter() - t0)
            final = automaton.cells

    return BenchResult(
        rule=rule,
        boundary=mode,
        generations=generations,
        repeats=repeats,
        workers=workers,
        best_seconds=min(timings),
        mean_seconds=sum(timings) / len(timings),
        final_cells=final,
    )


def append_csv(result: BenchResult, path: pathlib.Path) -> None:
    """Append one row to the results ledger, writing the header on first use."""
    first_write = not path.exists()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", newline="") as fp:
        writer = csv.writer(fp)
        if first_write:
            writer.writerow([
                "date_utc",
                "rule",
                "boundary",
                "generations",
                "repeats",
                "workers",
                "best_s",
                "mean_s",
                "gen_per_s",
            ])
        writer.writerow([
            datetime.now(timezone.utc).isoformat(timespec="seconds"),
            result.rule,
            result.boundary.value,
            result.generations,
            result.repeats,
            result.workers,
            f"{result.best_seconds:.6f}",
            f"{result.mean_seconds:.6f}",
            f"{result.generations_per_second:.1f}",
        ])


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark the 128-cell CA engine.")
    p.add_argument("--rule", type=int, default=110, help="Wolfram rule number, 0-255.")
    p.add_argument("--boundary", choices=[m.value for m in BoundaryMode], default=BoundaryMode.FIXED.value)
    p.add_argument("--generations", type=int, default=1000, help="Steps per timed run.")
    p.add_argument("--repeats", type=int, default=3, help="Number of timed runs.")
    p.add_argument("--workers", type=int, default=1, help="Threads per generation.")
    p.add_argument("--csv", type=pathlib.Path, help="Append the result to this CSV file.")
    return p


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        result = benchmark(
            args.rule,
            single_cell(),
            args.boundary,
            generations=args.generations,
            repeats=args.repeats,
            workers=args.workers,
        )
    except ValueError as exc:  # InvalidInput included
        parser.error(str(exc))

    print(f"-Rule {result.rule} ({result.boundary.value}), {result.generations} generations x {result.repeats} runs, {result.workers} worker(s)")
    print(f"-Best: {result.best_seconds:.4f}s  Mean: {result.mean_seconds:.4f}s")
    print(f"-Throughput: {result.generations_per_second:,.0f} generations/s")
    if args.csv:
        append_csv(result, args.csv)
        print(f"Appended result to {args.csv}", file=sys.stderr)


if __name__ == "__main__":
    main()
