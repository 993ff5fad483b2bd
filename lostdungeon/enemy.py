"""Enemy behaviour: patrolling, chasing the mage and attacking it."""

from __future__ import annotations

from lostdungeon.canvas import draw_sprite, put_floor
from lostdungeon.state import Enemy, Game

PATROL_DELAY = 2000
CHASE_DELAY = 700
ATTACK_DELAY = 1000
SIGHT_RANGE = 5

_WALK_PREFIX = {
    (0, -1): "./spr/enm/enm_back",
    (0, 1): "./spr/enm/enm_fnt",
    (-1, 0): "./spr/enm/enm_sx",
    (1, 0): "./spr/enm/enm_dx",
}

_ATTACK_PREFIX = {
    (0, -1): "./spr/enm/atk/enm_atk_back",
    (0, 1): "./spr/enm/atk/enm_atk_front",
    (-1, 0): "./spr/enm/atk/enm_atk_sx",
    (1, 0): "./spr/enm/atk/enm_atk_dx",
}

_ATTACK_ORDER = ((0, -1), (0, 1), (-1, 0), (1, 0))
_PATROL_ORDER = ((0, -1), (-1, 0), (1, 0), (0, 1))


def _facing(enemy: Enemy) -> tuple[int, int] | None:
    """Return the single direction an enemy acts in; vertical wins."""
    if enemy.dy in (-1, 1):
        return 0, enemy.dy
    if enemy.dx in (-1, 1):
        return enemy.dx, 0
    return None


def _face(enemy: Enemy, dx: int, dy: int) -> None:
    enemy.dx, enemy.dy = dx, dy


def _player_offset(game: Game, enemy: Enemy) -> tuple[int, int]:
    return game.player.x - enemy.x, game.player.y - enemy.y


def _on_player(game: Game, enemy: Enemy) -> bool:
    return game.game_map.tile(enemy.x, enemy.y) == "P"


def check_attack(game: Game, enemy: Enemy) -> bool:
    """Face the mage if it stands next to the enemy; return whether it does."""
    for dx, dy in _ATTACK_ORDER:
        if game.game_map.tile(enemy.x + dx, enemy.y + dy) == "P":
            _face(enemy, dx, dy)
            return True
    return False


def check_player_near(game: Game, enemy: Enemy) -> None:
    """At the start of a cycle, start chasing when the mage is within sight."""
    if enemy.frame != 0:
        return
    off_x, off_y = _player_offset(game, enemy)
    if off_x == 0 and off_y == 0:
        game.you_died()
    if abs(off_x) < SIGHT_RANGE and abs(off_y) < SIGHT_RANGE:
        enemy.state = 1


def choose_patrol_direction(game: Game, enemy: Enemy) -> None:
    """Face the first free neighbour, trying up, left, right and down."""
    for dx, dy in _PATROL_ORDER:
        if not game.is_blocked(enemy.y + dy, enemy.x + dx):
            _face(enemy, dx, dy)
            return


def _toward(game: Game, enemy: Enemy, offset: int, horizontal: bool) -> None:
    """Face along one axis toward ``offset`` if that cell is free, else stand."""
    step = 0
    if offset < 0:
        candidate = -1
    elif offset > 0:
        candidate = 1
    else:
        candidate = 0
    if candidate:
        nx = enemy.x + candidate if horizontal else enemy.x
        ny = enemy.y if horizontal else enemy.y + candidate
        if not game.is_blocked(ny, nx):
            step = candidate
    if horizontal:
        _face(enemy, step, 0)
    else:
        _face(enemy, 0, step)


def _sidestep(game: Game, enemy: Enemy, horizontal: bool) -> None:
    """Face the first free cell on one axis, negative side first."""
    for candidate in (-1, 1):
        nx = enemy.x + candidate if horizontal else enemy.x
        ny = enemy.y if horizontal else enemy.y + candidate
        if not game.is_blocked(ny, nx):
            step = candidate
            break
    else:
        step = 0
    if horizontal:
        _face(enemy, step, 0)
    else:
        _face(enemy, 0, step)


def choose_chase_direction(game: Game, enemy: Enemy) -> None:
    """Face the mage along the axis where it is farther away."""
    off_x, off_y = _player_offset(game, enemy)
    if off_x == 0 and off_y == 0:
        game.you_died()
    if abs(off_x) >= abs(off_y):
        _toward(game, enemy, off_x, horizontal=True)
    else:
        _toward(game, enemy, off_y, horizontal=False)


def choose_chase_direction_alt(game: Game, enemy: Enemy) -> None:
    """Second choice when the first chase direction is blocked."""
    off_x, off_y = _player_offset(game, enemy)
    dist_x, dist_y = abs(off_x), abs(off_y)
    if off_x == 0 and off_y == 0:
        game.you_died()
    if dist_x < dist_y and off_x != 0:
        _toward(game, enemy, off_x, horizontal=True)
    elif dist_y <= dist_x and off_y != 0:
        _toward(game, enemy, off_y, horizontal=False)
    elif off_y == 0:
        _sidestep(game, enemy, horizontal=False)
    elif off_x == 0:
        _sidestep(game, enemy, horizontal=True)


def step_enemy(game: Game, enemy: Enemy) -> bool:
    """Play one walking frame; on frame 2 the enemy moves one cell.

    Returns False when the enemy faces nowhere or its way is blocked on the
    frame where it should move, True otherwise.
    """
    facing = _facing(enemy)
    if facing is None:
        return False
    dx, dy = facing
    ahead_x, ahead_y = enemy.x + dx, enemy.y + dy
    if enemy.frame == 2 and game.is_blocked(ahead_y, ahead_x):
        return False
    prefix = _WALK_PREFIX[facing]
    behind_x, behind_y = enemy.x - dx, enemy.y - dy
    if enemy.frame == 4 and not game.is_blocked(behind_y, behind_x):
        put_floor(game.canvas, behind_x, behind_y)
    draw_sprite(game.canvas, prefix, enemy.x, enemy.y, enemy.frame, True)
    if enemy.frame == 2:
        game.game_map.set_tile(enemy.x, enemy.y, "0")
        enemy.frame += 1
        enemy.x, enemy.y = ahead_x, ahead_y
        game.game_map.set_tile(enemy.x, enemy.y, "N")
        draw_sprite(game.canvas, prefix, enemy.x, enemy.y, enemy.frame, False)
    return True


def _patrol_one(game: Game, enemy: Enemy) -> None:
    if enemy.frame == 0 and enemy.state == 0:
        choose_patrol_direction(game, enemy)
        enemy.state = -1
    if not step_enemy(game, enemy) and enemy.frame == 2:
        choose_patrol_direction(game, enemy)
        enemy.frame -= 1
    else:
        enemy.frame += 1


def enemy_patrol(game: Game) -> None:
    """Advance every patrolling enemy, noticing the mage when it comes close."""
    if not game.patrol_delay.tick(PATROL_DELAY):
        return
    for enemy in list(game.enemies):
        if enemy.frame > 4 and enemy.state in (-1, 0):
            enemy.frame = 0
        if _on_player(game, enemy) and game.player.frame == 5:
            game.you_died()
        check_player_near(game, enemy)
        if enemy.state in (-1, 0):
            _patrol_one(game, enemy)


def _chase_one(game: Game, enemy: Enemy) -> None:
    if enemy.frame == 1:
        choose_chase_direction(game, enemy)
    if not step_enemy(game, enemy) and enemy.frame == 2:
        choose_chase_direction_alt(game, enemy)
        if not step_enemy(game, enemy):
            enemy.state = 0
    enemy.frame += 1


def enemy_chase(game: Game) -> None:
    """Advance every chasing enemy; an enemy next to the mage starts attacking."""
    if not game.chase_delay.tick(CHASE_DELAY):
        return
    for enemy in list(game.enemies):
        if enemy.frame > 4 and enemy.state == 1:
            enemy.frame = 0
        if _on_player(game, enemy) and game.player.frame == 5:
            game.you_died()
        if enemy.frame == 1 and enemy.state == 1 and check_attack(game, enemy):
            enemy.frame = 0
            enemy.state = 2
        if enemy.state == 1:
            _chase_one(game, enemy)


def _attack_frame(game: Game, enemy: Enemy) -> None:
    facing = _facing(enemy)
    if facing is None:
        return
    dx, dy = facing
    target_x, target_y = enemy.x + dx, enemy.y + dy
    if _on_player(game, enemy):
        game.you_died()
    prefix = _ATTACK_PREFIX[facing]
    canvas = game.canvas
    draw_sprite(canvas, prefix, enemy.x, enemy.y, enemy.frame, True)
    if enemy.frame == 5:
        put_floor(canvas, target_x, target_y)
        if game.game_map.tile(target_x, target_y) == "P":
            game.you_died()
    elif enemy.frame == 1:
        enemy.frame += 1
        draw_sprite(canvas, prefix, target_x, target_y, enemy.frame, False)
    elif enemy.frame == 3:
        put_floor(canvas, target_x, target_y)
        enemy.frame += 1
        draw_sprite(canvas, prefix, target_x, target_y, enemy.frame, True)


def enemy_attack(game: Game) -> None:
    """Advance every attacking enemy; the last frame strikes the facing cell."""
    if not game.attack_delay.tick(ATTACK_DELAY):
        return
    for enemy in list(game.enemies):
        if enemy.state != 2:
            continue
        _attack_frame(game, enemy)
        if enemy.frame == 5:
            enemy.state = -1
        else:
            enemy.frame += 1