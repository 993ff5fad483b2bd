"""The game session: loading levels, handling keys and running the main loop."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from lostdungeon.canvas import Canvas, Painter, RecordingCanvas
from lostdungeon.enemy import enemy_attack, enemy_chase, enemy_patrol
from lostdungeon.layout import TILE
from lostdungeon.mage import (
    ATTACK_ACTION,
    DIRECTION_KEYS,
    KEY_SPACE,
    attack_blocked,
    fade,
    mage_attack,
    mage_move,
    press_direction,
)
from lostdungeon.mapfile import MapError, read_map, validate_map
from lostdungeon.state import Game
from lostdungeon.xpm import XpmError

KEY_ESCAPE = 53
KEY_RESET = 15
KEY_RETURN = 36
TITLE = "Lost Dungeon"
LABEL_COLOR = 0xFFFFFF
TICKS_PER_FRAME = 250
FRAMES_PER_SECOND = 60

_PYGAME_KEYS = {
    pygame.K_w: 13,
    pygame.K_UP: 126,
    pygame.K_s: 1,
    pygame.K_DOWN: 125,
    pygame.K_a: 0,
    pygame.K_LEFT: 123,
    pygame.K_d: 2,
    pygame.K_RIGHT: 124,
    pygame.K_SPACE: KEY_SPACE,
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_r: KEY_RESET,
    pygame.K_RETURN: KEY_RETURN,
}


def _can_read(path: Path) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


@dataclass(frozen=True)
class LevelSource:
    """Where levels come from: the given files in order, or numbered maps."""

    files: tuple[Path, ...] = ()
    directory: Path = Path("map")

    def path(self, index: int) -> Path:
        """Return the map file of level ``index``."""
        if not self.files:
            return self.directory / f"map{index}.ber"
        if not 0 <= index < len(self.files):
            raise MapError(f"invalid map: no level {index}")
        return Path(self.files[index])

    def is_last(self, index: int) -> bool:
        """Tell whether level ``index`` has no readable level after it."""
        if self.files and index + 1 >= len(self.files):
            return True
        return not _can_read(self.path(index + 1))


def _recording_canvas(width: int, height: int) -> Painter:
    return RecordingCanvas()


def _window_canvas(width: int, height: int) -> Painter:
    surface = pygame.display.set_mode((width, height))
    pygame.display.set_caption(TITLE)
    return Canvas(surface)


@dataclass
class Session:
    """A run of the game over a sequence of levels.

    ``make_canvas`` receives the window size in pixels and returns the
    surface a new level is drawn on.
    """

    source: LevelSource = field(default_factory=LevelSource)
    make_canvas: Callable[[int, int], Painter] = _recording_canvas
    level: int = 0
    game: Game | None = field(default=None, init=False)
    running: bool = field(default=True, init=False)

    def _load(self, canvas: Painter | None) -> None:
        game_map = read_map(self.source.path(self.level))
        validate_map(game_map)
        if canvas is None:
            canvas = self.make_canvas(game_map.width * TILE, game_map.height * TILE)
        game = Game(game_map, canvas)
        game.draw_map()
        label_x = (game_map.width - 2) * TILE
        canvas.text(label_x, 20, LABEL_COLOR, "MOVES")
        canvas.text(label_x, 40, LABEL_COLOR, "COUNT")
        self.game = game

    def start(self) -> None:
        """Load the current level on a new canvas."""
        self._load(None)

    def reset(self) -> None:
        """Restart the current level on the same canvas."""
        if self.game is None:
            self.start()
        else:
            self._load(self.game.canvas)

    def next_level(self) -> None:
        """Open the current level (after ``level`` changed) on a new canvas."""
        self.start()

    def _direction_key(self, key: int) -> None:
        game = self.game
        if key in DIRECTION_KEYS:
            press_direction(game, key)
        elif key == KEY_SPACE and not attack_blocked(game) and game.last_key == -1:
            game.last_key = ATTACK_ACTION

    def key_press(self, key: int) -> None:
        """Handle one key code: quit, restart, continue, move or attack."""
        if key == KEY_ESCAPE:
            self.running = False
            return
        if self.game is None:
            return
        if key == KEY_RESET:
            if self.game.end == 2:
                self.level = 0
                self.next_level()
            else:
                self.reset()
        elif self.game.end == 1:
            if key == KEY_RETURN:
                self.level += 1
                self.next_level()
        elif self.game.end == 0:
            self._direction_key(key)

    def tick(self) -> None:
        """Advance every animation and actor by one loop step."""
        game = self.game
        if game is None:
            return
        game.animate_collectibles()
        if game.end in (0, -1):
            if game.last_key not in (-1, ATTACK_ACTION) and game.end == 0:
                mage_move(game)
            elif game.last_key == ATTACK_ACTION:
                mage_attack(game)
            enemy_patrol(game)
            enemy_chase(game)
            enemy_attack(game)
        if not game.collectibles and not game.exit_open:
            game.animate_exit()
        player = game.player
        if game.game_map.tile(player.arrival_x, player.arrival_y) == "E":
            fade(game, self.source.is_last(self.level))


def main(argv: list[str] | None = None) -> int:
    """Play the levels named on the command line, or the numbered maps."""
    args = sys.argv[1:] if argv is None else list(argv)
    source = LevelSource(files=tuple(Path(a) for a in args)) if args else LevelSource()
    pygame.init()
    try:
        session = Session(source, _window_canvas)
        session.start()
        clock = pygame.time.Clock()
        while session.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    session.running = False
                elif event.type == pygame.KEYDOWN:
                    code = _PYGAME_KEYS.get(event.key)
                    if code is not None:
                        session.key_press(code)
            for _ in range(TICKS_PER_FRAME):
                if not session.running:
                    break
                session.tick()
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
        return 0
    except (MapError, XpmError) as exc:
        print(f"error : {exc}", file=sys.stderr)
        return 1
    finally:
        pygame.quit()