"""
run_config.py

Parameters for a single automaton run, loadable from YAML.

Example run.yaml
-------
rule: 30
boundary: periodic
generations: 64
init: single        # single | random | 0b101 | 101 | 0x1f
density: 0.5        # only used for init: random
seed: 42

`init` is always read as text: bare digits are a binary lattice (cell 0 last,
like an integer literal) and `0x` marks hex, so `init: 0101` in a file means
the same as `--init 0101` on the command line.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import yaml

from lattice import WIDTH, BoundaryMode, InvalidInput, from_string, pack, single_cell, validate_packed
from rules import MAX_RULE


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")


@dataclass
class RunConfig:
    rule: int = 30
    boundary: BoundaryMode = BoundaryMode.FIXED
    generations: int = 32
    init: str = "single"
    density: float = 0.5
    seed: int = 42
    alive: str = "█"
    dead: str = " "

    def __post_init__(self) -> None:
        for name in ("rule", "generations", "seed"):
            _require_int(name, getattr(self, name))
        if isinstance(self.density, bool) or not isinstance(self.density, (int, float)):
            raise InvalidInput(f"density must be a number, got {self.density!r}")
        self.boundary = BoundaryMode.parse(self.boundary)
        # a Python int is already a packed lattice
        if isinstance(self.init, int) and not isinstance(self.init, bool):
            self.init = hex(validate_packed(self.init))
        if not isinstance(self.init, str):
            raise InvalidInput(f"init must be text, got {self.init!r}")
        self.init = self.init.strip()
        if not 0 <= self.rule <= MAX_RULE:
            raise InvalidInput(f"rule must be in [0, {MAX_RULE}], got {self.rule}")
        if self.generations < 0:
            raise InvalidInput(f"generations must be >= 0, got {self.generations}")
        if not 0.0 <= self.density <= 1.0:
            raise InvalidInput(f"density must be in [0, 1], got {self.density}")
        for name in ("alive", "dead"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise InvalidInput(f"{name} must be a single character, got {value!r}")

    def initial_cells(self) -> int:
        '''
        Resolve `init` into a packed lattice.
        '''
        key = self.init.lower()
        if key == "single":
            return single_cell()
        if key == "random":
            rng = np.random.default_rng(self.seed)
            return pack([int(x) for x in rng.random(WIDTH) < self.density])
        if key.startswith("0x"):
            try:
                return validate_packed(int(key, 16))
            except ValueError as exc:
                raise InvalidInput(f"bad hex lattice {self.init!r}: {exc}") from exc
        if key.startswith("0b") or set(key) <= {"0", "1", "_"}:
            return from_string(key)
        raise InvalidInput(f"init must be 'single', 'random', a binary string or a 0x hex literal, got {self.init!r}")

    def merged(self, overrides: Dict[str, Any]) -> RunConfig:
        """New config with every non-None override applied on top of this one."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if k in values and v is not None})
        return RunConfig.from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["boundary"] = self.boundary.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> RunConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in set(d) - known)
        if unknown:
            raise InvalidInput(f"unknown config keys: {', '.join(unknown)}")
        return cls(**d)


def _raw_scalar(text: str, key: str) -> Optional[str]:
    '''
    Source text of a top-level scalar, before YAML resolves it to an int or bool.
    '''
    node = yaml.compose(text, Loader=yaml.SafeLoader)
    if not isinstance(node, yaml.MappingNode):
        return None
    for k, v in node.value:
        if isinstance(k, yaml.ScalarNode) and k.value == key and isinstance(v, yaml.ScalarNode):
            return v.value
    return None


def load_config(path: Path) -> RunConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        raw_init = _raw_scalar(text, "init")
    except OSError as exc:
        raise InvalidInput(f"cannot read config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidInput(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return RunConfig()
    if not isinstance(data, dict):
        raise InvalidInput(f"{path}: expected a YAML mapping at top level")
    if raw_init is not None:
        data["init"] = raw_init
    return RunConfig.from_dict(data)
