"""Falling pieces: their shapes, rotations, colours and wall kicks."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Iterator, Optional, Tuple

from blockfall.board import BOARD_WIDTH

if TYPE_CHECKING:
    from blockfall.board import Board

Shape = Tuple[Tuple[int, ...], ...]
Color = Tuple[int, int, int, int]


class PieceType(IntEnum):
    """The seven tetromino kinds."""

    I = 0  # noqa: E741
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6


_BASE_SHAPES: dict[PieceType, Shape] = {
    PieceType.I: ((0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0), (0, 0, 0, 0)),
    PieceType.O: ((0, 0, 0, 0), (0, 1, 1, 0), (0, 1, 1, 0), (0, 0, 0, 0)),
    PieceType.T: ((0, 1, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 0)),
    PieceType.S: ((0, 0, 0, 0), (0, 1, 1, 0), (1, 1, 0, 0), (0, 0, 0, 0)),
    PieceType.Z: ((0, 0, 0, 0), (1, 1, 0, 0), (0, 1, 1, 0), (0, 0, 0, 0)),
    PieceType.J: ((0, 0, 0, 0), (1, 0, 0, 0), (1, 1, 1, 0), (0, 0, 0, 0)),
    PieceType.L: ((0, 0, 0, 0), (0, 0, 1, 0), (1, 1, 1, 0), (0, 0, 0, 0)),
}

_COLORS: dict[PieceType, Color] = {
    PieceType.I: (0, 255, 255, 255),
    PieceType.O: (255, 255, 0, 255),
    PieceType.T: (128, 0, 128, 255),
    PieceType.S: (0, 255, 0, 255),
    PieceType.Z: (255, 0, 0, 255),
    PieceType.J: (0, 0, 255, 255),
    PieceType.L: (255, 165, 0, 255),
}

EMPTY_COLOR: Color = (200, 200, 200, 255)

# Offsets tried in order when a rotation would collide.
KICK_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


def rotate_shape(shape: Shape) -> Shape:
    """Return the 4x4 shape rotated a quarter turn clockwise."""
    size = len(shape)
    return tuple(
        tuple(shape[size - 1 - col][row] for col in range(size)) for row in range(size)
    )


def piece_color(kind: Optional[PieceType]) -> Color:
    """RGBA colour of a piece kind; an empty cell (None) is light grey."""
    if kind is None:
        return EMPTY_COLOR
    return _COLORS.get(PieceType(kind), EMPTY_COLOR)


def _rotations(kind: PieceType) -> Tuple[Shape, ...]:
    shapes = [_BASE_SHAPES[kind]]
    for _ in range(3):
        shapes.append(rotate_shape(shapes[-1]))
    return tuple(shapes)


class Tetromino:
    """A piece with a position on the board and a rotation state."""

    def __init__(self, kind: PieceType, x: Optional[int] = None, y: int = 0) -> None:
        self.kind = PieceType(kind)
        self.x = BOARD_WIDTH // 2 - 2 if x is None else x
        self.y = y
        self.rotation = 0
        self._rotations = _rotations(self.kind)

    def __repr__(self) -> str:
        return (
            f"Tetromino({self.kind.name}, x={self.x}, y={self.y}, "
            f"rotation={self.rotation})"
        )

    def current_shape(self) -> Shape:
        """The 4x4 shape for the current rotation."""
        return self._rotations[self.rotation]

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Board coordinates (x, y) of the filled cells."""
        return _shape_cells(self.current_shape(), self.x, self.y)

    def color(self) -> Color:
        """RGBA colour of this piece."""
        return piece_color(self.kind)

    def try_rotate_cw(self, board: "Board") -> bool:
        """Rotate clockwise with wall kicks; return whether it rotated."""
        return self._try_rotate(board, (self.rotation + 1) % 4)

    def try_rotate_ccw(self, board: "Board") -> bool:
        """Rotate counter-clockwise with wall kicks; return whether it rotated."""
        return self._try_rotate(board, (self.rotation + 3) % 4)

    def _try_rotate(self, board: "Board", new_rotation: int) -> bool:
        if self.kind is PieceType.O:
            self.rotation = new_rotation
            return True
        shape = self._rotations[new_rotation]
        for dx, dy in KICK_OFFSETS:
            if not _collides(board, shape, self.x + dx, self.y + dy):
                self.rotation = new_rotation
                self.x += dx
                self.y += dy
                return True
        return False


def _shape_cells(shape: Shape, x: int, y: int) -> Iterator[Tuple[int, int]]:
    for i, row in enumerate(shape):
        for j, filled in enumerate(row):
            if filled:
                yield x + j, y + i


def _collides(board: "Board", shape: Shape, x: int, y: int) -> bool:
    return any(board.is_occupied(cx, cy) for cx, cy in _shape_cells(shape, x, y))