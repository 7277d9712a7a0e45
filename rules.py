from __future__ import annotations
from dataclasses import dataclass
from typing import List

from lattice import InvalidInput

NUM_PATTERNS = 8
MAX_RULE = 255


def apply_rule(pattern: int, rule: int) -> int:
    '''
    Output cell for a 3-bit neighborhood pattern: bit `pattern` of `rule`.
    '''
    return (rule >> pattern) & 1


@dataclass(frozen=True)
class ElementaryRule:
    """
    Wolfram-numbered rule for a 2-state, 3-neighbor automaton.

    Bit p of `number` is the new center value for the neighborhood
    pattern p = (left << 2) | (center << 1) | right, so rule 30
    (0b00011110) maps 100, 011, 010 and 001 to 1 and everything else to 0.
    """
    number: int

    def __post_init__(self):
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise InvalidInput(f"rule must be an int, got {type(self.number).__name__}")
        if not 0 <= self.number <= MAX_RULE:
            raise InvalidInput(f"rule must be in [0, {MAX_RULE}], got {self.number}")

    def __call__(self, pattern: int) -> int:
        return apply_rule(pattern, self.number)

    def __int__(self) -> int:
        return self.number

    @property
    def bits(self) -> str:
        """Outputs for patterns 111 down to 000, the usual way rule tables are printed."""
        return f"{self.number:08b}"

    @property
    def table(self) -> List[int]:
        """Outputs indexed by pattern, 000 first."""
        return [apply_rule(p, self.number) for p in range(NUM_PATTERNS)]

    @classmethod
    def from_bits(cls, bits: str) -> ElementaryRule:
        """Construct from an 8-char bit-string, pattern 111 first, e.g. "00011110" for rule 30."""
        if len(bits) != NUM_PATTERNS or any(c not in "01" for c in bits):
            raise InvalidInput(f"rule bit-string must be {NUM_PATTERNS} binary digits, got {bits!r}")
        return cls(int(bits, 2))

    @classmethod
    def coerce(cls, rule: int | ElementaryRule) -> ElementaryRule:
        if isinstance(rule, cls):
            return rule
        return cls(rule)
