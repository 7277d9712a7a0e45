#!/usr/bin/env python
"""
run_automaton.py

Run a 128-cell elementary CA and print every generation.

Usage
-------
python run_automaton.py --rule 30 --init single --generations 64
python run_automaton.py --config run.yaml --boundary periodic --format jsonl --outfile out/r30.jsonl
"""

from __future__ import annotations
import argparse, json, pathlib, sys
from typing import Iterator, List

from lattice import InvalidInput, BoundaryMode
from render import render_row
from run_config import RunConfig, load_config
from simulate import Automaton


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run a 128-cell elementary cellular automaton.")
    p.add_argument("--config", type=pathlib.Path, help="YAML file with run parameters; flags override it.")
    p.add_argument("--rule", type=int, help="Wolfram rule number, 0-255.")
    p.add_argument("--init", help="Start lattice: single, random, 0b..., 0x... or an integer.")
    p.add_argument("--boundary", choices=[m.value for m in BoundaryMode], help="Edge policy.")
    p.add_argument("--generations", type=int, help="Number of steps to run.")
    p.add_argument("--density", type=float, help="Live-cell probability for --init random.")
    p.add_argument("--seed", type=int, help="RNG seed for --init random.")
    p.add_argument("--alive", help="Character drawn for live cells (text format).")
    p.add_argument("--dead", help="Character drawn for dead cells (text format).")
    p.add_argument("--format", choices=["text", "bits", "jsonl"], default="text", help="Output format.")
    p.add_argument("--outfile", type=pathlib.Path, help="Write here instead of stdout.")
    return p


def resolve_config(args: argparse.Namespace) -> RunConfig:
    base = load_config(args.config) if args.config else RunConfig()
    return base.merged(vars(args))


def format_lines(automaton: Automaton, cfg: RunConfig, fmt: str) -> Iterator[str]:
    '''
    Yield one output line for the start state and one per generation.
    '''
    def line(gen: int, cells: List[int]) -> str:
        if fmt == "jsonl":
            return json.dumps({"generation": gen, "cells": "".join(map(str, cells))}, separators=(",", ":"))
        if fmt == "bits":
            return "".join(map(str, cells))
        return render_row(cells, cfg.alive, cfg.dead)

    yield line(automaton.generation, automaton.to_sequence())
    for cells in automaton.run(cfg.generations):
        yield line(automaton.generation, cells)


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = resolve_config(args)
        automaton = Automaton(cfg.rule, cfg.initial_cells(), cfg.boundary)
    except InvalidInput as exc:
        parser.error(str(exc))

    lines = format_lines(automaton, cfg, args.format)
    if args.outfile is None:
        for text in lines:
            print(text)
        return

    args.outfile.parent.mkdir(parents=True, exist_ok=True)
    with args.outfile.open("w", encoding="utf-8") as f:
        for text in lines:
            f.write(text + "\n")
    print(f"Wrote {cfg.generations + 1} generations of rule {cfg.rule} to {args.outfile}", file=sys.stderr)


if __name__ == "__main__":
    main()
