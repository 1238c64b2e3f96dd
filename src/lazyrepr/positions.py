"""
Source positions for values.

Positions are stored once in a PosTable and referred to by a small integer
index (PosIdx), so values carry an index rather than a full location.
"""

from dataclasses import dataclass
from typing import List, Optional

PosIdx = int

NO_POS: PosIdx = 0


@dataclass(frozen=True)
class Pos:
    """A position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    origin: Optional[str] = None   # file name, or None for inline strings

    def __str__(self) -> str:
        if self.line == 0:
            return "«none»"
        origin = self.origin if self.origin is not None else "«string»"
        return f"{origin}:{self.line}:{self.column}"


NONE_POS = Pos(0, 0)


class PosTable:
    """Interns positions. Index 0 is reserved for 'no position'."""

    def __init__(self):
        self._positions: List[Pos] = [NONE_POS]

    def add(self, line: int, column: int, origin: Optional[str] = None) -> PosIdx:
        """Register a position and return its index."""
        self._positions.append(Pos(line, column, origin))
        return len(self._positions) - 1

    def __getitem__(self, idx: PosIdx) -> Pos:
        if 0 < idx < len(self._positions):
            return self._positions[idx]
        return NONE_POS

    def __len__(self) -> int:
        return len(self._positions) - 1
