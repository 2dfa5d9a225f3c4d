"""Drawing the board, the falling piece and the score panel."""

from __future__ import annotations

from typing import Tuple

import pygame

from blockfall.board import BOARD_HEIGHT, BOARD_WIDTH, Board
from blockfall.tetromino import Color, Tetromino, piece_color

CELL_SIZE = 30
BOARD_PIX_W = BOARD_WIDTH * CELL_SIZE
BOARD_PIX_H = BOARD_HEIGHT * CELL_SIZE

BORDER_COLOR: Color = (50, 50, 50, 255)
TEXT_COLOR: Color = (255, 255, 255, 255)
SCORE_PANEL_GAP = 20


class Renderer:
    """Draws game elements onto a surface, with the board at an offset."""

    def __init__(self, surface: pygame.Surface, offset_x: int, offset_y: int, font) -> None:
        self.surface = surface
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.font = font

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        """Screen rectangle of board cell (x, y)."""
        return pygame.Rect(
            self.offset_x + x * CELL_SIZE,
            self.offset_y + y * CELL_SIZE,
            CELL_SIZE,
            CELL_SIZE,
        )

    def _draw_cell(self, x: int, y: int, color: Tuple[int, int, int, int]) -> None:
        rect = self.cell_rect(x, y)
        self.surface.fill(color, rect)
        pygame.draw.rect(self.surface, BORDER_COLOR, rect, 1)

    def draw_board(self, board: Board) -> None:
        """Draw every cell of the board, empty ones in grey."""
        for y in range(BOARD_HEIGHT):
            for x in range(BOARD_WIDTH):
                self._draw_cell(x, y, piece_color(board.cell_type(x, y)))

    def draw_tetromino(self, piece: Tetromino) -> None:
        """Draw the filled cells of a piece."""
        color = piece.color()
        for x, y in piece.cells():
            self._draw_cell(x, y, color)

    def draw_score(self, score: int, level: int, lines: int) -> pygame.Rect:
        """Draw score, level and lines to the right of the board; return the area used."""
        texts = (f"Score: {score}", f"Level: {level}", f"Lines: {lines}")
        left = self.offset_x + BOARD_PIX_W + SCORE_PANEL_GAP
        top = self.offset_y
        area = pygame.Rect(left, top, 0, 0)
        line_height = self.font.get_linesize()
        for index, text in enumerate(texts):
            rendered = self.font.render(text, True, TEXT_COLOR)
            dest = rendered.get_rect(topleft=(left, top + index * line_height))
            self.surface.blit(rendered, dest)
            area = area.union(dest)
        return area