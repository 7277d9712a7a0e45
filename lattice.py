from __future__ import annotations
from enum import Enum
from typing import List, Sequence, Union

WIDTH = 128
MASK = (1 << WIDTH) - 1

# neighbor offsets in the packed form: left is the next more-significant bit
LEFT = 1
RIGHT = -1


class InvalidInput(ValueError):
    """Raised when a lattice, rule or boundary mode cannot be accepted."""


class BoundaryMode(Enum):
    FIXED = "fixed"
    PERIODIC = "periodic"

    @classmethod
    def parse(cls, value: Union[str, "BoundaryMode"]) -> "BoundaryMode":
        '''
        Accept either a BoundaryMode or its string value ("fixed" / "periodic", any case).
        '''
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(m.value for m in cls)
        raise InvalidInput(f"boundary mode must be one of {choices}, got {value!r}")


def get_bit(cells: int, index: int) -> int:
    return (cells >> index) & 1


def boundary_value(cells: int, index: int, direction: int, mode: BoundaryMode) -> int:
    """
    Value of a neighbor that falls off the lattice.

    Only called for the two out-of-range reads: the left neighbor of index 127
    and the right neighbor of index 0. Fixed edges read as 0, periodic edges
    wrap to the opposite end of the same snapshot.
    """
    if mode is BoundaryMode.FIXED:
        return 0
    wrapped = (index + direction) % WIDTH
    return get_bit(cells, wrapped)


def validate_cells(cells: Sequence[int]) -> List[int]:
    '''
    Check an explicit lattice: exactly WIDTH entries, each 0 or 1. Returns a plain list of ints.
    '''
    if isinstance(cells, (str, bytes)):
        raise InvalidInput("lattice must be a sequence of 0/1 values, not a string (use from_string)")
    values = list(cells)
    if len(values) != WIDTH:
        raise InvalidInput(f"lattice must have exactly {WIDTH} cells, got {len(values)}")
    for pos, v in enumerate(values):
        if v not in (0, 1):  # True/False compare equal to 1/0
            raise InvalidInput(f"cell at position {pos} must be 0 or 1, got {v!r}")
    return [int(v) for v in values]


def validate_packed(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"packed lattice must be an int, got {type(value).__name__}")
    if not 0 <= value <= MASK:
        raise InvalidInput(f"packed lattice must be in [0, 2**{WIDTH}), got {value}")
    return value


def pack(cells: Sequence[int]) -> int:
    """
    Sequence (most-significant first) -> packed int.
    Position 0 of the sequence becomes bit 127, position 127 becomes bit 0.
    """
    values = validate_cells(cells)
    packed = 0
    for v in values:
        packed = (packed << 1) | v
    return packed


def unpack(cells: int) -> List[int]:
    """Packed int -> list of WIDTH cells, bit 127 first."""
    validate_packed(cells)
    return [get_bit(cells, i) for i in range(WIDTH - 1, -1, -1)]


def to_string(cells: int) -> str:
    return format(validate_packed(cells), f"0{WIDTH}b")


def from_string(bits: str) -> int:
    '''
    Parse a "0"/"1" string of up to WIDTH digits (an optional "0b" prefix and "_" separators allowed).
    Shorter strings are read as the low end of the lattice, like an integer literal.
    '''
    text = bits.strip().replace("_", "")
    if text[:2].lower() == "0b":
        text = text[2:]
    if not text or any(c not in "01" for c in text):
        raise InvalidInput(f"not a binary lattice string: {bits!r}")
    if len(text) > WIDTH:
        raise InvalidInput(f"binary lattice string has {len(text)} digits, max is {WIDTH}")
    return int(text, 2)


def coerce(initial: Union[int, Sequence[int]]) -> int:
    """Packed int or explicit sequence -> validated packed int."""
    if isinstance(initial, int) and not isinstance(initial, bool):
        return validate_packed(initial)
    return pack(initial)


def single_cell(index: int = WIDTH // 2) -> int:
    if not 0 <= index < WIDTH:
        raise InvalidInput(f"cell index must be in [0, {WIDTH}), got {index}")
    return 1 << index


def popcount(cells: int) -> int:
    return bin(cells).count("1")
