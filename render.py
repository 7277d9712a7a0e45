from __future__ import annotations
from typing import Iterable, List, Sequence

ALIVE = "█"
DEAD = " "


def render_row(cells: Sequence[int], alive: str = ALIVE, dead: str = DEAD) -> str:
    '''
    One generation as text, in sequence order (cell 127 leftmost).
    '''
    return "".join(alive if c else dead for c in cells)


def render_history(rows: Iterable[Sequence[int]], alive: str = ALIVE, dead: str = DEAD) -> str:
    lines: List[str] = [render_row(r, alive, dead) for r in rows]
    return "\n".join(lines)
