from dataclasses import dataclass
import numpy as np
from typing import List, Sequence, Union
from lattice import MASK, WIDTH, BoundaryMode, pack
from rules import ElementaryRule, MAX_RULE
from simulate import next_generation

@dataclass
class LatticeProblem:
    '''
    One task: a start lattice (packed), the rule, the edge policy and how many generations to run.
    '''
    start: int
    rule: ElementaryRule
    boundary_mode: BoundaryMode = BoundaryMode.FIXED
    timesteps: int = 1


class LatticeProblemGenerator:
    '''
    Random 128-cell elementary CA tasks (any of the 256 Wolfram rules).
    '''
    def __init__(self, seed: int = 42, density: float = 0.5, boundary_mode: Union[BoundaryMode, str] = BoundaryMode.FIXED):
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be in [0, 1], got {density}")
        self.density = density
        self.boundary_mode = BoundaryMode.parse(boundary_mode)
        self.rng = np.random.default_rng(seed)

    def _make_rule(self) -> ElementaryRule:
        return ElementaryRule(int(self.rng.integers(0, MAX_RULE + 1)))

    def _make_lattice(self) -> int:
        '''
        Random start lattice; each cell is alive with probability self.density.
        '''
        alive = self.rng.random(WIDTH) < self.density
        return pack([int(x) for x in alive])

    def generate(self, timesteps: int = 1) -> LatticeProblem:
        return LatticeProblem(
            start=self._make_lattice(),
            rule=self._make_rule(),
            boundary_mode=self.boundary_mode,
            timesteps=timesteps,
        )

    def is_trivial(self, problem: LatticeProblem) -> bool:
        """
        True if the start is all dead or all alive, or one step leaves it unchanged.
        """
        if problem.start in (0, MASK):
            return True
        nxt = next_generation(problem.start, problem.rule.number, problem.boundary_mode)
        return nxt == problem.start

    def generate_batch(self, num_problems: int, timesteps: Sequence[int] | int, trim_trivial: bool = True, max_attempts_factor: int = 10) -> List[LatticeProblem]:
        '''
        Draw problems until `num_problems` are kept; trivial ones are discarded unless
        trim_trivial is False. `timesteps` is one count for all, or one per kept problem.
        '''
        steps = [timesteps] * num_problems if isinstance(timesteps, int) else list(timesteps)
        if len(steps) < num_problems:
            raise ValueError(f"need {num_problems} timesteps values, got {len(steps)}")

        budget = max_attempts_factor * num_problems
        kept: List[LatticeProblem] = []
        for _ in range(budget):
            if len(kept) == num_problems:
                break
            candidate = self.generate(steps[len(kept)])
            if trim_trivial and self.is_trivial(candidate):
                continue
            kept.append(candidate)
        if len(kept) < num_problems:
            raise RuntimeError(f"only {len(kept)} of {num_problems} problems were nontrivial after {budget} draws")
        return kept
