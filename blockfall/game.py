"""Game rules: state machine, input handling, gravity, scoring and levels."""

from __future__ import annotations

import logging
import random
from enum import Enum, auto
from typing import Callable, Optional

from blockfall.board import BOARD_WIDTH, Board
from blockfall.tetromino import PieceType, Tetromino

log = logging.getLogger(__name__)

BASE_DROP_INTERVAL = 500
MIN_DROP_INTERVAL = 50
DROP_INTERVAL_STEP = 25
LINES_PER_LEVEL = 10
BLINK_INTERVAL = 500

# Points for clearing 0..4 lines at once, multiplied by the level.
POINTS_PER_CLEAR = (0, 100, 300, 500, 800)


class GameState(Enum):
    """Screens the game moves between."""

    START_SCREEN = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class Key(Enum):
    """Keys the game reacts to; anything else is OTHER."""

    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()
    A = auto()
    D = auto()
    S = auto()
    Q = auto()
    E = auto()
    P = auto()
    RETURN = auto()
    OTHER = auto()


class Sound(Enum):
    """Sound effects and music changes the game asks the front end for."""

    DROP = auto()
    GAME_OVER = auto()
    START_OR_CONTINUE = auto()
    LEVEL_UP = auto()
    LINE_CLEAR = auto()
    MOVE = auto()
    PAUSE = auto()
    ROTATE_CCW = auto()
    ROTATE_CW = auto()
    MUSIC_GAME = auto()
    MUSIC_PAUSE = auto()
    MUSIC_RESUME = auto()


def drop_interval_for(level: int) -> int:
    """Milliseconds between gravity steps at a level, never below the minimum."""
    return max(MIN_DROP_INTERVAL, BASE_DROP_INTERVAL - (level - 1) * DROP_INTERVAL_STEP)


class Game:
    """The playable game, driven by key presses and a millisecond clock."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        on_sound: Optional[Callable[[Sound], None]] = None,
        now: int = 0,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._on_sound = on_sound
        self._now = now
        self.state = GameState.START_SCREEN
        self.board = Board()
        self.current_piece: Optional[Tetromino] = None
        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.drop_interval = BASE_DROP_INTERVAL
        self.last_drop_time = 0
        self.blink_timer = now
        self.show_text = True
        self.running = True

    def _play(self, sound: Sound) -> None:
        if self._on_sound is not None:
            self._on_sound(sound)

    def start_fresh_game(self) -> None:
        """Clear the board and counters and spawn the first piece."""
        self.board = Board()
        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.current_piece = None
        self.spawn_new_piece()

    def spawn_new_piece(self) -> None:
        """Put a random piece at the top centre and restart the drop timer."""
        kind = PieceType(self._rng.randrange(len(PieceType)))
        self.current_piece = Tetromino(kind, x=BOARD_WIDTH // 2 - 2, y=0)
        self.last_drop_time = self._now
        log.debug("Spawned tetromino: %s", kind.name)

    def _piece(self) -> Tetromino:
        if self.current_piece is None:
            raise RuntimeError("no piece in play")
        return self.current_piece

    def check_collision(self, x: int, y: int) -> bool:
        """Whether the current piece would hit something at position (x, y)."""
        shape = self._piece().current_shape()
        return any(
            self.board.is_occupied(x + j, y + i)
            for i, row in enumerate(shape)
            for j, filled in enumerate(row)
            if filled
        )

    def lock_piece(self) -> None:
        """Write the current piece's cells into the board."""
        piece = self._piece()
        log.debug("Locked tetromino: %s", piece.kind.name)
        for cx, cy in piece.cells():
            self.board.occupy(cx, cy, piece.kind)

    def handle_key(self, key: Key, now: int) -> None:
        """React to one key press at time `now` (milliseconds)."""
        self._now = now
        if self.state is GameState.START_SCREEN:
            self._play(Sound.START_OR_CONTINUE)
            self.start_fresh_game()
            self._play(Sound.MUSIC_GAME)
            self.state = GameState.PLAYING
            self.last_drop_time = now
        elif self.state is GameState.PLAYING:
            self._handle_playing_key(key)
        elif self.state is GameState.PAUSED:
            if key is Key.P:
                self._play(Sound.PAUSE)
                self._play(Sound.MUSIC_RESUME)
                self.state = GameState.PLAYING
        elif self.state is GameState.GAME_OVER:
            if key is Key.Q:
                self.running = False
            if key is Key.RETURN:
                self.start_fresh_game()
                self._play(Sound.START_OR_CONTINUE)
                self.state = GameState.PLAYING

    def _handle_playing_key(self, key: Key) -> None:
        piece = self._piece()
        moves = {
            Key.LEFT: (-1, 0),
            Key.A: (-1, 0),
            Key.RIGHT: (1, 0),
            Key.D: (1, 0),
            Key.DOWN: (0, 1),
            Key.S: (0, 1),
        }
        if key in moves:
            dx, dy = moves[key]
            if not self.check_collision(piece.x + dx, piece.y + dy):
                piece.x += dx
                piece.y += dy
            self._play(Sound.MOVE)
        elif key is Key.Q:
            piece.try_rotate_ccw(self.board)
            self._play(Sound.ROTATE_CCW)
        elif key is Key.E:
            piece.try_rotate_cw(self.board)
            self._play(Sound.ROTATE_CW)
        elif key is Key.P:
            self._play(Sound.PAUSE)
            self._play(Sound.MUSIC_PAUSE)
            self.state = GameState.PAUSED

    def update(self, now: int) -> None:
        """Advance blinking or gravity to time `now` (milliseconds)."""
        self._now = now
        if self.state is not GameState.PLAYING:
            if self.state is GameState.START_SCREEN and now - self.blink_timer > BLINK_INTERVAL:
                self.blink_timer = now
                self.show_text = not self.show_text
            return

        if now - self.last_drop_time < self.drop_interval:
            return
        self.last_drop_time = now

        piece = self._piece()
        if not self.check_collision(piece.x, piece.y + 1):
            piece.y += 1
            return

        self.lock_piece()
        cleared = self.board.clear_full_lines()
        if cleared > 0:
            self._play(Sound.LINE_CLEAR)
            self.lines_cleared += cleared
            self.score += POINTS_PER_CLEAR[cleared] * self.level
            self.level = 1 + self.lines_cleared // LINES_PER_LEVEL
            self.drop_interval = drop_interval_for(self.level)

        self.spawn_new_piece()
        new_piece = self._piece()
        if self.check_collision(new_piece.x, new_piece.y):
            self.state = GameState.GAME_OVER
            self._play(Sound.GAME_OVER)