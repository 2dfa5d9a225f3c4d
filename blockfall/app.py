"""Window, sound and main loop around the game rules."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import pygame

from blockfall.board import Board
from blockfall.game import Game, GameState, Key, Sound
from blockfall.renderer import BOARD_PIX_H, BOARD_PIX_W, Renderer

log = logging.getLogger(__name__)

DEFAULT_ASSET_DIR = Path("..") / "assets"
FONT_FILE = "Helvetica.ttc"
FONT_SIZE = 24
LOGO_FILE = "Tetris_logo.png"
MENU_MUSIC = Path("sound") / "music" / "mainMenuTheme.mp3"
GAME_MUSIC = Path("sound") / "music" / "inGameMusic.mp3"

_EFFECT_FILES: Dict[Sound, str] = {
    Sound.DROP: "blockDrop.ogg",
    Sound.GAME_OVER: "gameOver.ogg",
    Sound.LEVEL_UP: "levelUp.ogg",
    Sound.LINE_CLEAR: "lineClear.ogg",
    Sound.MOVE: "move.ogg",
    Sound.PAUSE: "pause.ogg",
    Sound.ROTATE_CCW: "rotateCCW.ogg",
    Sound.ROTATE_CW: "rotateCW.ogg",
    Sound.START_OR_CONTINUE: "startOrContinue.ogg",
}

_KEYS: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_s: Key.S,
    pygame.K_q: Key.Q,
    pygame.K_e: Key.E,
    pygame.K_p: Key.P,
    pygame.K_RETURN: Key.RETURN,
}

WHITE = (255, 255, 255, 255)
BACKGROUND = (0, 0, 0)
PAUSE_SHADE = (0, 0, 0, 160)
START_TEXT_SPACING = 20
FPS = 60


class AppError(RuntimeError):
    """Raised when the window, audio or a required asset cannot be set up."""


class App:
    """A running game: window, assets, sound and the frame loop."""

    def __init__(
        self,
        title: str = "Tetris",
        width: int = 800,
        height: int = 800,
        asset_dir: Path | str = DEFAULT_ASSET_DIR,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.asset_dir = Path(asset_dir)
        try:
            pygame.display.init()
            pygame.font.init()
        except pygame.error as exc:
            raise AppError(f"video init failed: {exc}") from exc
        try:
            pygame.mixer.init(frequency=44100, channels=2, buffer=2048)
        except pygame.error as exc:
            raise AppError(f"audio init failed: {exc}") from exc

        self._clock = clock if clock is not None else pygame.time.get_ticks
        self._effects = {sound: self._load_effect(name) for sound, name in _EFFECT_FILES.items()}

        try:
            self.font = pygame.font.Font(str(self.asset_dir / FONT_FILE), FONT_SIZE)
        except (OSError, pygame.error) as exc:
            raise AppError(f"cannot open font: {exc}") from exc

        try:
            self.screen = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            raise AppError(f"cannot create window: {exc}") from exc
        pygame.display.set_caption(title)
        self.width, self.height = self.screen.get_size()

        offset_x = (self.width - BOARD_PIX_W) // 2
        offset_y = (self.height - BOARD_PIX_H) // 2

        self.start_text = self.font.render("Press Any Key to Start", True, WHITE)
        try:
            self.logo = pygame.image.load(str(self.asset_dir / LOGO_FILE))
        except (OSError, pygame.error) as exc:
            raise AppError(f"cannot load logo: {exc}") from exc

        logo_w, logo_h = self.logo.get_size()
        text_w, text_h = self.start_text.get_size()
        group_y = (self.height - (logo_h + START_TEXT_SPACING + text_h)) // 2
        self.logo_dst = pygame.Rect((self.width - logo_w) // 2, group_y, logo_w, logo_h)
        self.start_dst = pygame.Rect(
            (self.width - text_w) // 2, group_y + logo_h + START_TEXT_SPACING, text_w, text_h
        )

        self.game_over_text = self.font.render("Game Over", True, WHITE)
        self.instr_text = self.font.render("Q: Quit    Enter: Continue?", True, WHITE)
        go_w, go_h = self.game_over_text.get_size()
        in_w, in_h = self.instr_text.get_size()
        self.game_over_dst = pygame.Rect(
            (self.width - go_w) // 2, (self.height - go_h) // 2 - 20, go_w, go_h
        )
        self.instr_dst = pygame.Rect(
            (self.width - in_w) // 2, self.game_over_dst.y + go_h + 10, in_w, in_h
        )

        self.pause_text = self.font.render("Paused (Press P to unpause)", True, WHITE)
        p_w, p_h = self.pause_text.get_size()
        self.pause_dst = pygame.Rect((self.width - p_w) // 2, (self.height - p_h) // 2, p_w, p_h)

        self.renderer = Renderer(self.screen, offset_x, offset_y, self.font)
        self.game = Game(rng=rng, on_sound=self._on_sound, now=self._clock())
        self._play_music(MENU_MUSIC)

    def __enter__(self) -> "App":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release audio and the window."""
        pygame.mixer.quit()
        pygame.quit()

    def _load_effect(self, name: str) -> Optional[pygame.mixer.Sound]:
        path = self.asset_dir / "sound" / "effects" / name
        try:
            return pygame.mixer.Sound(str(path))
        except (OSError, pygame.error) as exc:
            log.warning("cannot load sound %s: %s", path, exc)
            return None

    def _play_music(self, relative: Path) -> None:
        path = self.asset_dir / relative
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.play(-1)
        except (OSError, pygame.error) as exc:
            log.warning("cannot play music %s: %s", path, exc)

    def _on_sound(self, sound: Sound) -> None:
        if sound is Sound.MUSIC_GAME:
            self._play_music(GAME_MUSIC)
        elif sound is Sound.MUSIC_PAUSE:
            pygame.mixer.music.pause()
        elif sound is Sound.MUSIC_RESUME:
            pygame.mixer.music.unpause()
        else:
            effect = self._effects.get(sound)
            if effect is not None:
                effect.play()

    def process_input(self) -> None:
        """Feed pending window events to the game."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.game.running = False
            if event.type == pygame.KEYDOWN:
                self.game.handle_key(_KEYS.get(event.key, Key.OTHER), self._clock())

    def _draw_play_field(self) -> None:
        piece = self.game.current_piece
        self.renderer.draw_board(self.game.board if self.game.board else Board())
        if piece is not None:
            self.renderer.draw_tetromino(piece)
        self.renderer.draw_score(self.game.score, self.game.level, self.game.lines_cleared)

    def render(self) -> None:
        """Draw the screen for the current game state."""
        self.screen.fill(BACKGROUND)
        state = self.game.state
        if state is GameState.START_SCREEN:
            self.screen.blit(self.logo, self.logo_dst)
            if self.game.show_text:
                self.screen.blit(self.start_text, self.start_dst)
        elif state is GameState.PLAYING:
            self._draw_play_field()
        elif state is GameState.PAUSED:
            self._draw_play_field()
            shade = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            shade.fill(PAUSE_SHADE)
            self.screen.blit(shade, (0, 0))
            self.screen.blit(self.pause_text, self.pause_dst)
        elif state is GameState.GAME_OVER:
            self.screen.blit(self.game_over_text, self.game_over_dst)
            self.screen.blit(self.instr_text, self.instr_dst)
        pygame.display.flip()

    def run(self) -> None:
        """Run frames at a fixed rate until the game stops."""
        frame_delay = 1000 // FPS
        while self.game.running:
            frame_start = self._clock()
            self.process_input()
            self.game.update(self._clock())
            self.render()
            frame_time = self._clock() - frame_start
            if frame_delay > frame_time:
                pygame.time.delay(frame_delay - frame_time)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game; return the process exit status."""
    parser = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle game.")
    parser.add_argument(
        "--assets", default=str(DEFAULT_ASSET_DIR), help="directory holding fonts, images and sounds"
    )
    args = parser.parse_args(argv)
    try:
        app = App("Tetris", 800, 800, asset_dir=args.assets)
    except AppError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        pygame.quit()
        return -1
    with app:
        app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())