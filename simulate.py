from __future__ import annotations
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterator, List, Optional, Sequence, Union

from lattice import (
    LEFT, RIGHT, WIDTH, BoundaryMode, boundary_value, coerce, get_bit, popcount,
    to_string, unpack,
)
from rules import ElementaryRule, apply_rule

Initial = Union[int, Sequence[int]]


def detect_pattern(cells: int, index: int, mode: BoundaryMode = BoundaryMode.FIXED) -> int:
    '''
    3-bit neighborhood (left|center|right) of `index` in the snapshot `cells`.
    Left is the next more-significant bit, right the next less-significant one.
    '''
    if index < WIDTH - 1:
        left = get_bit(cells, index + 1)
    else:
        left = boundary_value(cells, index, LEFT, mode)
    center = get_bit(cells, index)
    if index > 0:
        right = get_bit(cells, index - 1)
    else:
        right = boundary_value(cells, index, RIGHT, mode)
    return (left << 2) | (center << 1) | right


def _update_range(cells: int, rule: int, mode: BoundaryMode, start: int, stop: int) -> int:
    out = 0
    for i in range(start, stop):
        out |= apply_rule(detect_pattern(cells, i, mode), rule) << i
    return out


def next_generation(
    cells: int,
    rule: int,
    mode: BoundaryMode = BoundaryMode.FIXED,
    workers: int = 1,
    executor: Optional[Executor] = None,
) -> int:
    """
    Compute the generation after `cells`.

    Every index reads the untouched snapshot `cells`; results go into a
    separate accumulator that is only returned once all 128 positions are
    done. With workers > 1 the index range is split into contiguous chunks,
    each computed on its own thread into a private partial, and the partials
    are OR-ed together after every chunk has finished. Pass `executor` to
    reuse a pool across generations; otherwise a pool is made for this call.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if workers == 1:
        return _update_range(cells, rule, mode, 0, WIDTH)

    chunk = -(-WIDTH // workers)
    bounds = [(lo, min(lo + chunk, WIDTH)) for lo in range(0, WIDTH, chunk)]
    if executor is None:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(lambda b: _update_range(cells, rule, mode, b[0], b[1]), bounds))
    else:
        partials = list(executor.map(lambda b: _update_range(cells, rule, mode, b[0], b[1]), bounds))
    out = 0
    for p in partials:
        out |= p
    return out


class Automaton:
    """
    A 128-cell elementary cellular automaton.

    The rule and boundary mode are fixed at construction; the lattice is
    replaced wholesale by each call to `step`.

    Args:
        rule: Wolfram rule number 0..255 (or an ElementaryRule)
        initial: packed int (bit i = cell i) or a sequence of 128 cells,
            most-significant first
        boundary_mode: BoundaryMode or "fixed" / "periodic"
        workers: threads used per generation (1 = sequential); the thread
            pool lives as long as the automaton, release it with `close()`
            or a `with` block

    Raises:
        InvalidInput: if any of the above is malformed
    """

    def __init__(
        self,
        rule: Union[int, ElementaryRule],
        initial: Initial,
        boundary_mode: Union[BoundaryMode, str] = BoundaryMode.FIXED,
        workers: int = 1,
    ):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._rule = ElementaryRule.coerce(rule)
        self._boundary_mode = BoundaryMode.parse(boundary_mode)
        self._cells = coerce(initial)
        self._generation = 0
        self._workers = workers
        self._executor: Optional[ThreadPoolExecutor] = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=workers)

    @property
    def rule(self) -> int:
        return self._rule.number

    @property
    def boundary_mode(self) -> BoundaryMode:
        return self._boundary_mode

    @property
    def cells(self) -> int:
        """Current lattice in packed form."""
        return self._cells

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> int:
        return popcount(self._cells)

    def step(self) -> None:
        self._cells = next_generation(
            self._cells, self._rule.number, self._boundary_mode, self._workers, self._executor
        )
        self._generation += 1

    def close(self) -> None:
        """Shut down the worker pool; later steps run on a fresh pool per generation."""
        if self._executor is not None:
            self._executor.shutdown()
            self._executor = None

    def __enter__(self) -> Automaton:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def to_sequence(self) -> List[int]:
        """Current lattice as 128 cells, index 127 first."""
        return unpack(self._cells)

    def run(self, generations: int) -> Iterator[List[int]]:
        '''
        Step `generations` times, yielding the sequence view after each step.
        '''
        for _ in range(generations):
            self.step()
            yield self.to_sequence()

    def __str__(self) -> str:
        return to_string(self._cells)

    def __repr__(self) -> str:
        return (
            f"Automaton(rule={self.rule}, boundary_mode={self._boundary_mode.value}, "
            f"generation={self._generation}, cells={self._cells:#x})"
        )


def simulate(
    initial: Initial,
    rule: Union[int, ElementaryRule],
    timesteps: int = 1,
    boundary_mode: Union[BoundaryMode, str] = BoundaryMode.FIXED,
) -> int:
    """Packed lattice after `timesteps` generations."""
    automaton = Automaton(rule, initial, boundary_mode)
    for _ in range(timesteps):
        automaton.step()
    return automaton.cells


def history(
    initial: Initial,
    rule: Union[int, ElementaryRule],
    timesteps: int = 1,
    boundary_mode: Union[BoundaryMode, str] = BoundaryMode.FIXED,
) -> List[int]:
    """Packed generations 0..timesteps, start state included."""
    automaton = Automaton(rule, initial, boundary_mode)
    states = [automaton.cells]
    for _ in range(timesteps):
        automaton.step()
        states.append(automaton.cells)
    return states
