"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chessroom.core.exceptions import InvalidPositionError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILES = "abcdefgh"

# Signed (dx, dy) step. Candidate squares are computed with these before a Position exists.
Vector = tuple[int, int]


@dataclass(frozen=True)
class Position:
    """
    Zero-based coordinates: x is the file (0 = a-file), y is the row (0 = White's back rank).

    A Position can only exist on the board. Off-board candidates are filtered out by `on_board()`
    on the plain integers, so no wrapped/ out-of-range square ever reaches the board lookup.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if not Position.on_board(self.x, self.y):
            raise InvalidPositionError(
                f"({self.x}, {self.y}) is not on a {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )

    @staticmethod
    def on_board(x: int, y: int) -> bool:
        return (0 <= x < BOARD_DIMENSIONS[0]) and (0 <= y < BOARD_DIMENSIONS[1])

    @classmethod
    def from_index(cls, index: int) -> Position:
        return cls(index % BOARD_DIMENSIONS[0], index // BOARD_DIMENSIONS[0])

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or sq[0].lower() not in FILES or not sq[1].isdigit():
            raise InvalidPositionError(f"Cannot interpret {sq!r} as a square.")
        return cls(FILES.index(sq[0].lower()), int(sq[1]) - 1)

    @property
    def index(self) -> int:
        """Board index: a1 = 0, b1 = 1, ..., h8 = 63. Scans over the board run in this order."""
        return self.y * BOARD_DIMENSIONS[0] + self.x

    def to_algebraic(self) -> str:
        return f"{FILES[self.x]}{self.y + 1}"

    def shifted(self, delta: Vector) -> Optional[Position]:
        """The square one step along `delta`, or None when that would leave the board."""
        dx, dy = delta
        x, y = self.x + dx, self.y + dy
        if not Position.on_board(x, y):
            return None
        return Position(x, y)

    def __str__(self) -> str:
        return self.to_algebraic()


def all_positions() -> list[Position]:
    """Every square in board-index order"""
    return [
        Position.from_index(index)
        for index in range(BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1])
    ]
