import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random  # noqa: E402
import shutil  # noqa: E402
from pathlib import Path  # noqa: E402

import pygame  # noqa: E402
import pytest  # noqa: E402

from blockfall.app import App, AppError, main  # noqa: E402
from blockfall.game import GameState  # noqa: E402

LOGO_COLOR = (10, 200, 30)


def _make_assets(root: Path, with_font: bool = True, with_logo: bool = True) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    if with_font:
        font_src = Path(pygame.__file__).parent / pygame.font.get_default_font()
        shutil.copy(font_src, root / "Helvetica.ttc")
    if with_logo:
        pygame.display.init()
        logo = pygame.Surface((100, 50))
        logo.fill(LOGO_COLOR)
        pygame.image.save(logo, str(root / "Tetris_logo.png"))
    return root


class _Ticks:
    def __init__(self) -> None:
        self.now = 1000

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def app(tmp_path):
    assets = _make_assets(tmp_path / "assets")
    application = App(asset_dir=assets, rng=random.Random(3), clock=_Ticks())
    pygame.event.clear()
    yield application
    application.close()


def _press(key):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key, mod=0))


def test_missing_font_raises(tmp_path):
    assets = _make_assets(tmp_path / "assets", with_font=False)
    with pytest.raises(AppError):
        App(asset_dir=assets)
    pygame.quit()


def test_missing_logo_raises(tmp_path):
    assets = _make_assets(tmp_path / "assets", with_logo=False)
    with pytest.raises(AppError):
        App(asset_dir=assets)
    pygame.quit()


def test_start_screen_layout(app):
    assert app.logo_dst.size == (100, 50)
    assert app.start_dst.top == app.logo_dst.bottom + 20
    assert abs(app.logo_dst.centerx - app.width // 2) <= 1
    assert abs(app.start_dst.centerx - app.width // 2) <= 1


def test_game_over_layout(app):
    assert app.instr_dst.top == app.game_over_dst.bottom + 10
    assert app.game_over_dst.top == (app.height - app.game_over_dst.height) // 2 - 20


def test_any_key_starts_game(app):
    _press(pygame.K_SPACE)
    app.process_input()
    assert app.game.state is GameState.PLAYING
    assert app.game.current_piece is not None


def test_p_pauses_and_unpauses(app):
    _press(pygame.K_SPACE)
    _press(pygame.K_p)
    app.process_input()
    assert app.game.state is GameState.PAUSED
    _press(pygame.K_p)
    app.process_input()
    assert app.game.state is GameState.PLAYING


def test_quit_event_stops(app):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.process_input()
    assert app.game.running is False


def test_render_start_screen_shows_logo(app):
    app.render()
    assert tuple(app.screen.get_at(app.logo_dst.center))[:3] == LOGO_COLOR


def test_render_pause_darkens_board(app):
    _press(pygame.K_SPACE)
    app.process_input()
    point = app.renderer.cell_rect(0, 19).center
    app.render()
    assert tuple(app.screen.get_at(point))[:3] == (200, 200, 200)
    _press(pygame.K_p)
    app.process_input()
    app.render()
    shaded = tuple(app.screen.get_at(point))[:3]
    assert all(channel < 200 for channel in shaded)


def test_render_game_over_hides_board(app):
    _press(pygame.K_SPACE)
    app.process_input()
    app.game.state = GameState.GAME_OVER
    app.render()
    point = app.renderer.cell_rect(0, 19).center
    assert tuple(app.screen.get_at(point))[:3] == (0, 0, 0)


def test_run_ends_after_quit(app):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.run()
    assert app.game.running is False
    assert app.game.state is GameState.START_SCREEN


def test_main_fails_without_assets(tmp_path):
    assert main(["--assets", str(tmp_path / "missing")]) == -1