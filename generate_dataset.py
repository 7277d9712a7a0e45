"""
generate_dataset.py

Create a JSONL file of 128-cell elementary CA tasks with ground truth.

Example
-------
python generate_dataset.py \
       --n 2048 --timesteps 4 --boundary periodic \
       --density 0.4 --seed 123 \
       --outfile data/train.jsonl
"""

from __future__ import annotations
import argparse, json, pathlib
from typing import List
from generate import LatticeProblem, LatticeProblemGenerator
from lattice import BoundaryMode, to_string
from simulate import simulate

def problem_to_jsonl(problem: LatticeProblem) -> str:
    """
    Serialize a LatticeProblem (+ ground truth) as one JSON line.
    Lattices are 128-char strings, cell 127 first.
    """
    target = simulate(problem.start, problem.rule, problem.timesteps, problem.boundary_mode)
    return json.dumps(
        {
            "rule": problem.rule.number,
            "boundary": problem.boundary_mode.value,
            "timesteps": problem.timesteps,
            "init": to_string(problem.start),
            "target": to_string(target),
        },
        separators=(",", ":"),
    )

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate a JSONL file of 128-cell elementary CA tasks.")

    p.add_argument("--n", type=int, required=True, help="Number of problems to generate.")
    p.add_argument("--timesteps", type=int, default=4, help="Evolution steps per problem.")
    p.add_argument("--boundary", choices=[m.value for m in BoundaryMode], default=BoundaryMode.FIXED.value, help="Edge policy.")
    p.add_argument("--density", type=float, default=0.5, help="Probability a cell is alive in the initial state.")
    p.add_argument("--seed", type=int, default=42, help="RNG seed for reproducibility.")
    p.add_argument("--keep-trivial", action="store_true", help="Do not filter out static or uniform start states.")
    p.add_argument("--outfile", type=pathlib.Path, required=True, help="Where to write the JSONL.")
    return p

def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    gen = LatticeProblemGenerator(
        seed=args.seed,
        density=args.density,
        boundary_mode=BoundaryMode(args.boundary),
    )
    batch = gen.generate_batch(
        num_problems=args.n,
        timesteps=args.timesteps,
        trim_trivial=not args.keep_trivial,
    )

    args.outfile.parent.mkdir(parents=True, exist_ok=True)
    with args.outfile.open("w", encoding="utf-8") as f:
        for prob in batch:
            f.write(problem_to_jsonl(prob) + "\n")

    print(f"Wrote {len(batch):,} problems to {args.outfile}")


if __name__ == "__main__":
    main()
