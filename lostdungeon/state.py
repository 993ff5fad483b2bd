"""Level state: the map, the mage, the enemies, the collectibles and the exit."""

from __future__ import annotations

from dataclasses import dataclass, field

from lostdungeon.canvas import (
    Delay,
    Painter,
    RecordingCanvas,
    draw_sprite,
    put_floor_map,
)
from lostdungeon.layout import TILE, Banner, banner_placement
from lostdungeon.mapfile import GameMap, validate_map

WALL_TOP = "./spr/w_f/wall3.xpm"
WALL_SIDE = "./spr/w_f/wall4.xpm"
MAGE_FRONT = "./spr/mg/mg_front0.xpm"
COIN_FIRST = "./spr/obj/coin0.xpm"
DOOR_FIRST = "./spr/door/door0.xpm"
ENEMY_FIRST = "./spr/enm/enm_back0.xpm"
COIN_PREFIX = "./spr/obj/coin"
DOOR_PREFIX = "./spr/door/door"
MOVE_COUNT_COLOR = 0xFF00

BLOCKING_TILES = frozenset("1ECN")
"""Tiles an enemy cannot enter: wall, exit, collectible and another enemy."""


@dataclass
class Enemy:
    """One enemy on the map.

    ``state`` is -1 or 0 while patrolling, 1 while chasing the mage and 2
    while attacking; ``frame`` is the current animation frame and
    (``dx``, ``dy``) the direction it faces.
    """

    x: int
    y: int
    dx: int = 0
    dy: int = 0
    state: int = 0
    frame: int = 0


@dataclass
class Player:
    """The mage.

    ``frame`` steps through the walking animation, ``facing`` is the last
    direction (1 up, 2 down, 3 left, 4 right), ``attack_frame`` steps through
    the spell, (``target_x``, ``target_y``) is where the spell is cast from and
    (``arrival_x``, ``arrival_y``) is the exit cell once the mage reaches it.
    """

    x: int = 0
    y: int = 0
    frame: int = 0
    target_x: int = 0
    target_y: int = 0
    facing: int = 0
    attack_frame: int = 0
    arrival_x: int = 0
    arrival_y: int = 0
    move_delay: Delay = field(default_factory=Delay)
    attack_delay: Delay = field(default_factory=Delay)


@dataclass
class Game:
    """One level in play.

    The map is validated on creation (raising ``MapError``) and the mage,
    exit, collectibles and enemies are located in reading order.
    ``end`` is 0 while playing, -1 after dying or while fading out,
    1 once the level is won and 2 once the last level is won.
    """

    game_map: GameMap
    canvas: Painter = field(default_factory=RecordingCanvas)
    end: int = 0
    last_key: int = -1
    moves: int = 0
    exit_open: bool = False
    coin_frame: int = 0
    exit_frame: int = 0
    fade_frame: int = 0
    coin_delay: Delay = field(default_factory=Delay)
    exit_delay: Delay = field(default_factory=Delay)
    fade_delay: Delay = field(default_factory=Delay)
    chase_delay: Delay = field(default_factory=Delay)
    patrol_delay: Delay = field(default_factory=Delay)
    attack_delay: Delay = field(default_factory=Delay)
    player: Player = field(init=False)
    exit_pos: tuple[int, int] = field(init=False)
    collectibles: list[tuple[int, int]] = field(init=False)
    enemies: list[Enemy] = field(init=False)

    def __post_init__(self) -> None:
        validate_map(self.game_map)
        self.player = Player()
        self.exit_pos = (0, 0)
        self.collectibles = []
        self.enemies = []
        for y, x, char in self._cells():
            if char == "P":
                self.player.x, self.player.y = x, y
            elif char == "E":
                self.exit_pos = (x, y)
            elif char == "C":
                self.collectibles.append((x, y))
            elif char == "N":
                self.enemies.append(Enemy(x, y))

    def _cells(self):
        gm = self.game_map
        for y, row in enumerate(gm.rows[: gm.height]):
            for x, char in enumerate(row[: gm.width]):
                yield y, x, char

    def _wall_sprite(self, x: int, y: int) -> str:
        gm = self.game_map
        open_sides = (
            0 < x < gm.width - 1
            and gm.tile(x - 1, y) != "1"
            and gm.tile(x + 1, y) != "1"
        )
        if open_sides or y in (0, gm.height - 1):
            return WALL_TOP
        return WALL_SIDE

    def draw_map(self) -> None:
        """Draw every tile of the level with its starting sprite."""
        sprites = {
            "P": MAGE_FRONT,
            "C": COIN_FIRST,
            "E": DOOR_FIRST,
            "N": ENEMY_FIRST,
        }
        for y, x, char in self._cells():
            if char == "1":
                self.canvas.draw(self._wall_sprite(x, y), x * TILE, y * TILE)
                continue
            put_floor_map(self.canvas, x, y)
            sprite = sprites.get(char)
            if sprite is not None:
                self.canvas.draw(sprite, x * TILE, y * TILE)

    def is_blocked(self, y: int, x: int) -> bool:
        """Tell whether an enemy may not step onto cell (x, y)."""
        return self.game_map.tile(x, y) in BLOCKING_TILES

    def collect(self, y: int, x: int) -> bool:
        """Pick up the collectible at cell (x, y); return whether there was one."""
        try:
            self.collectibles.remove((x, y))
        except ValueError:
            return False
        return True

    def _show_banner(self, banner: Banner) -> None:
        placement = banner_placement(
            banner, self.game_map.width, self.game_map.height
        )
        if placement is not None:
            path, px, py = placement
            self.canvas.draw(path, px, py)

    def you_died(self) -> None:
        """Kill the mage: clear its cell, calm the enemies and show the banner."""
        self.end = -1
        self.game_map.set_tile(self.player.x, self.player.y, "0")
        self.player.x = 0
        self.player.y = 0
        for enemy in self.enemies:
            enemy.state = 0
        self._show_banner(Banner.YOU_DIED)

    def end_game(self, last_level: bool) -> bool:
        """Finish the level if the mage stands on the exit.

        Shows the game-over banner after the last level and the next-level
        banner otherwise. Returns whether the level was finished.
        """
        if self.game_map.tile(self.player.x, self.player.y) != "E":
            return False
        if last_level:
            self.end = 2
            self._show_banner(Banner.GAME_OVER)
        else:
            self.end = 1
            self._show_banner(Banner.NEXT_LEVEL)
        return True

    def animate_collectibles(self) -> None:
        """Advance the spinning-coin animation of every remaining collectible."""
        if self.coin_frame > 5:
            self.coin_frame = 0
        if not self.coin_delay.tick(1000):
            return
        for x, y in self.collectibles:
            draw_sprite(self.canvas, COIN_PREFIX, x, y, self.coin_frame, True)
        self.coin_frame += 1

    def animate_exit(self) -> None:
        """Play the door-opening animation; the exit opens after its last frame."""
        if not self.exit_delay.tick(1000):
            return
        if self.exit_frame < 4:
            x, y = self.exit_pos
            draw_sprite(self.canvas, DOOR_PREFIX, x, y, self.exit_frame, True)
            self.exit_frame += 1
            return
        self.exit_open = True
        self.exit_frame = 0

    def draw_move_count(self) -> None:
        """Count one more move and redraw the counter in the top-right corner."""
        column = self.game_map.width - 1
        self.moves += 1
        self.canvas.draw(WALL_TOP, column * TILE, 0)
        text_x = column * 129 // 2
        self.canvas.text(text_x, 30, MOVE_COUNT_COLOR, str(self.moves))