"""The mage: turning, walking, casting its spell and fading out through the exit."""

from __future__ import annotations

import enum

from lostdungeon.canvas import draw_sprite, put_floor
from lostdungeon.state import Game

MOVE_DELAY = 700
ATTACK_DELAY = 1000
FADE_DELAY = 1000
FADE_FRAMES = 8
FADE_PREFIX = "./spr/mg_fade/mg_fade"

ATTACK_ACTION = 7
"""Value of ``Game.last_key`` while the mage casts its spell."""

KEY_SPACE = 49


class Direction(enum.IntEnum):
    """The four directions the mage can face, numbered as in ``Player.facing``."""

    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

    @property
    def offset(self) -> tuple[int, int]:
        """Return the (dx, dy) step of this direction."""
        return _OFFSETS[self]

    @property
    def walk_prefix(self) -> str:
        """Return the sprite prefix of the walking animation."""
        return _WALK_PREFIX[self]

    @property
    def attack_prefix(self) -> str:
        """Return the sprite prefix of the spell animation."""
        return _ATTACK_PREFIX[self]

    @classmethod
    def from_key(cls, key: int) -> Direction | None:
        """Return the direction bound to a key code, or None."""
        return DIRECTION_KEYS.get(key)


_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_WALK_PREFIX = {
    Direction.UP: "./spr/mg/mg_back",
    Direction.DOWN: "./spr/mg/mg_front",
    Direction.LEFT: "./spr/mg/mg_sx",
    Direction.RIGHT: "./spr/mg/mg_dx",
}

_ATTACK_PREFIX = {
    Direction.UP: "./spr/mg_atk/mg_atk_bk",
    Direction.DOWN: "./spr/mg_atk/mg_atk_fr",
    Direction.LEFT: "./spr/mg_atk/mg_atk_sx",
    Direction.RIGHT: "./spr/mg_atk/mg_atk_dx",
}

DIRECTION_KEYS = {
    13: Direction.UP,
    126: Direction.UP,
    1: Direction.DOWN,
    125: Direction.DOWN,
    0: Direction.LEFT,
    123: Direction.LEFT,
    2: Direction.RIGHT,
    124: Direction.RIGHT,
}
"""Key codes (W/S/A/D and the arrow keys) and the directions they select."""

_DIRECTION_VALUES = frozenset(int(d) for d in Direction)


def press_direction(game: Game, key: int) -> None:
    """Handle a direction key: the first press turns the mage, the next one walks."""
    direction = Direction.from_key(key)
    if direction is None:
        return
    player = game.player
    dx, dy = direction.offset
    ahead = game.game_map.tile(player.x + dx, player.y + dy)
    if ahead == "1" or (ahead == "E" and not game.exit_open):
        return
    if game.last_key == -1 and player.facing == direction:
        game.last_key = int(direction)
    elif game.last_key == -1 and game.end == 0:
        player.facing = int(direction)
        draw_sprite(game.canvas, direction.walk_prefix, player.x, player.y, 0, True)


def attack_blocked(game: Game) -> bool:
    """Tell whether the cell the mage faces cannot be targeted by its spell."""
    player = game.player
    if player.facing not in _DIRECTION_VALUES:
        return True
    dx, dy = Direction(player.facing).offset
    return game.game_map.tile(player.x + dx, player.y + dy) in ("1", "E", "C")


def _arrive(game: Game, direction: Direction, x: int, y: int) -> None:
    player = game.player
    gm = game.game_map
    if gm.tile(x, y) != "E":
        gm.set_tile(player.x, player.y, "0")
        gm.set_tile(x, y, "P")
        game.collect(y, x)
    player.frame += 1
    draw_sprite(game.canvas, direction.walk_prefix, x, y, player.frame, False)
    if gm.tile(x, y) == "E":
        player.arrival_x, player.arrival_y = x, y
        game.last_key = -1


def _walk_frame(game: Game, direction: Direction) -> None:
    player = game.player
    dx, dy = direction.offset
    x, y = player.x + dx, player.y + dy
    prefix = direction.walk_prefix
    if player.frame == 5:
        draw_sprite(game.canvas, prefix, player.x, player.y, 0, True)
        return
    if player.frame == 4:
        put_floor(game.canvas, player.x, player.y)
        player.x, player.y = x, y
    draw_sprite(game.canvas, prefix, player.x, player.y, player.frame, True)
    if player.frame == 1 and game.last_key == Direction.UP:
        draw_sprite(game.canvas, prefix, x, y, 6, False)
    if player.frame == 2:
        _arrive(game, direction, x, y)


def mage_move(game: Game) -> None:
    """Advance the walking animation; the mage changes cell half way through."""
    player = game.player
    if player.frame > 5:
        player.frame = 1
    if player.frame > 1 and not player.move_delay.tick(MOVE_DELAY):
        return
    if game.game_map.tile(player.x, player.y) == "N":
        game.you_died()
    elif game.last_key in _DIRECTION_VALUES:
        _walk_frame(game, Direction(game.last_key))
    player.frame += 1
    if player.frame > 5:
        player.facing = game.last_key
        game.last_key = -1
        game.draw_move_count()


def _strike(game: Game, x: int, y: int) -> None:
    """Destroy an attacking enemy when the spell hits a matching tile."""
    gm = game.game_map
    for index, enemy in enumerate(game.enemies):
        if gm.tile(x, y) == gm.tile(enemy.x, enemy.y) and enemy.state == 2:
            gm.set_tile(enemy.x, enemy.y, "0")
            del game.enemies[index]
            return


def _attack_frame(game: Game, prefix: str, x: int, y: int) -> None:
    player = game.player
    frame = player.attack_frame
    canvas = game.canvas
    if frame <= 10:
        _strike(game, x, y)
    if frame <= 1 or frame in (3, 8):
        draw_sprite(canvas, prefix, player.x, player.y, frame, True)
    if frame in (1, 3, 8):
        player.attack_frame += 1
        draw_sprite(canvas, prefix, x, y, player.attack_frame, False)
    elif frame in (5, 6, 7):
        draw_sprite(canvas, prefix, x, y, frame, False)
    elif frame > 9:
        draw_sprite(canvas, prefix, x, y, frame, True)


def mage_attack(game: Game) -> None:
    """Advance the spell animation; it hits the cell in front of the mage."""
    player = game.player
    if not player.attack_delay.tick(ATTACK_DELAY):
        return
    if player.x != 0 and player.y != 0:
        player.target_x, player.target_y = player.x, player.y
    frame = player.attack_frame
    if game.end == 0 or (frame > 1 and frame not in (3, 8)):
        if player.facing in _DIRECTION_VALUES:
            direction = Direction(player.facing)
            dx, dy = direction.offset
            _attack_frame(
                game,
                direction.attack_prefix,
                player.target_x + dx,
                player.target_y + dy,
            )
    player.attack_frame += 1
    if player.attack_frame > 12:
        player.attack_frame = 0
        game.last_key = -1


def fade(game: Game, last_level: bool) -> bool:
    """Play the mage fading into the exit, then finish the level.

    Returns True while a fade frame was drawn, False otherwise.
    """
    player = game.player
    game.end = -1
    if not game.fade_delay.tick(FADE_DELAY):
        return False
    exit_x, exit_y = game.exit_pos
    if game.fade_frame < FADE_FRAMES:
        draw_sprite(game.canvas, FADE_PREFIX, exit_x, exit_y, game.fade_frame, True)
        game.fade_frame += 1
        if player.x != player.arrival_x or player.y != player.arrival_y:
            put_floor(game.canvas, player.x, player.y)
            player.x, player.y = exit_x, exit_y
        return True
    game.end_game(last_level)
    player.arrival_x += 1
    game.fade_frame = 0
    return False