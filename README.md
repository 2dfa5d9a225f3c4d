# blockfall

A falling-block puzzle game for the desktop, built on pygame.

Pieces appear at the top of a 10 × 20 board and fall at a steady pace.
When a row is full, it is cleared and the rows above it move down. The game
ends when a new piece has no room at the top.

## Installing

```
pip install .
```

## Playing

```
blockfall
```

This opens an 800 × 800 window on the title screen, with a blinking
"Press Any Key to Start". Press any key to start.

To load assets from a different directory:

```
blockfall --assets path/to/assets
```

If the window, the audio, the font or the logo cannot be set up, the command
prints an error to standard error and exits with status -1.

### Controls

| Key            | Action                      |
|----------------|-----------------------------|
| Left / A       | Move left                   |
| Right / D      | Move right                  |
| Down / S       | Move down one row           |
| Q              | Rotate counter-clockwise    |
| E              | Rotate clockwise            |
| P              | Pause or resume             |

If a rotation does not fit where the piece is, the game tries it one cell to
the left, then one to the right, then one up, then one down. If none of these
fits, the piece stays as it was. The square piece always rotates.

On the game-over screen, press **Enter** to play again or **Q** to quit.
Closing the window quits at any time.

### Scoring

Lines cleared in one go score these points, times the current level:

| Lines | Points |
|-------|--------|
| 1     | 100    |
| 2     | 300    |
| 3     | 500    |
| 4     | 800    |

The level is 1 plus one for every 10 lines cleared. A piece falls one row
every 500 ms at the start. Each time lines are cleared, the interval is set
to 500 ms less 25 ms for each level above 1, but never below 50 ms. The
interval is not reset when you continue from the game-over screen.

### Assets

By default the game looks for its assets in `../assets`, relative to the
current working directory. It expects:

- `Helvetica.ttc`, the font
- `Tetris_logo.png`, the title-screen logo
- `sound/music/mainMenuTheme.mp3` and `sound/music/inGameMusic.mp3`
- `sound/effects/` holding `move.ogg`, `rotateCW.ogg`, `rotateCCW.ogg`,
  `pause.ogg`, `lineClear.ogg`, `gameOver.ogg`, `startOrContinue.ogg`,
  `blockDrop.ogg` and `levelUp.ogg`

The game will not start without the font or the logo. A missing music or
sound file is logged as a warning and that sound is silent.

## Using the game logic in code

The rules do not need a display, so you can drive them directly:

```python
from blockfall.board import Board
from blockfall.tetromino import Tetromino, PieceType

board = Board()
piece = Tetromino(PieceType.T)
piece.try_rotate_cw(board)
print(list(piece.cells()))
print(board.clear_full_lines())
```

`blockfall.game.Game` holds the state machine. `Game.handle_key(key, now)`
takes a `Key`, and `Game.update(now)` advances gravity. Both take the current
time in milliseconds. Pass `rng=` for repeatable pieces and `on_sound=` to
receive the `Sound` events the game asks for.

`blockfall.renderer.Renderer` draws a board, a piece and the score panel onto
any pygame surface. `blockfall.app.App` wires everything into a window with
sound.

## What it does not do

There is no hard drop, no preview of the next piece, no hold slot and no
saved high scores. The game-over screen does not show the final score.

## Running the tests

```
pip install .[test]
pytest
```