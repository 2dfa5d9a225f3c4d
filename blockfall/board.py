"""The playfield grid of locked cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from blockfall.tetromino import PieceType

BOARD_WIDTH = 10
BOARD_HEIGHT = 20

log = logging.getLogger(__name__)


class Board:
    """A BOARD_WIDTH x BOARD_HEIGHT grid; each cell holds a piece kind or None."""

    def __init__(self) -> None:
        self._grid: List[List[Optional["PieceType"]]] = [
            [None] * BOARD_WIDTH for _ in range(BOARD_HEIGHT)
        ]

    @staticmethod
    def _inside(x: int, y: int) -> bool:
        return 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT

    def is_occupied(self, x: int, y: int) -> bool:
        """True for walls, the floor and filled cells; rows above the top are free."""
        if x < 0 or x >= BOARD_WIDTH:
            log.debug("is_occupied: collision with wall (x=%d)", x)
            return True
        if y < 0:
            log.debug("is_occupied: above board (y=%d)", y)
            return False
        if y >= BOARD_HEIGHT:
            log.debug("is_occupied: collision with floor (y=%d)", y)
            return True
        return self._grid[y][x] is not None

    def occupy(self, x: int, y: int, kind: Optional["PieceType"]) -> None:
        """Set a cell; coordinates outside the board are ignored."""
        if self._inside(x, y):
            self._grid[y][x] = kind

    def cell_type(self, x: int, y: int) -> Optional["PieceType"]:
        """Kind stored in a cell, or None when empty or outside the board."""
        if not self._inside(x, y):
            return None
        return self._grid[y][x]

    def clear_full_lines(self) -> int:
        """Remove full rows, shift the rows above down, return how many went."""
        kept = [row for row in self._grid if any(cell is None for cell in row)]
        cleared = BOARD_HEIGHT - len(kept)
        self._grid = [[None] * BOARD_WIDTH for _ in range(cleared)] + kept
        return cleared