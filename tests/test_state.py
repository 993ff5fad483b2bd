import pytest

from lostdungeon.canvas import RecordingCanvas
from lostdungeon.layout import Banner, banner_placement
from lostdungeon.mapfile import MapError, parse_map
from lostdungeon.state import Enemy, Game

MAP_TEXT = "1111111\n1PC0N01\n10000E1\n1111111\n"


def make_game():
    return Game(parse_map(MAP_TEXT), RecordingCanvas())


def draws(game):
    return [call for call in game.canvas.calls if call[0] == "draw"]


def test_locates_everything_on_creation():
    game = make_game()
    assert (game.player.x, game.player.y) == (1, 1)
    assert game.exit_pos == (5, 2)
    assert game.collectibles == [(2, 1)]
    assert game.enemies == [Enemy(4, 1)]
    assert game.end == 0
    assert game.last_key == -1


def test_invalid_map_is_rejected():
    with pytest.raises(MapError):
        Game(parse_map("1111\n1P01\n1111\n"), RecordingCanvas())


@pytest.mark.parametrize(
    "x, y, blocked",
    [(0, 0, True), (5, 2, True), (2, 1, True), (4, 1, True), (3, 1, False), (1, 1, False)],
)
def test_is_blocked(x, y, blocked):
    assert make_game().is_blocked(y, x) is blocked


def test_collect_removes_only_matching_collectible():
    game = make_game()
    assert game.collect(1, 3) is False
    assert game.collectibles == [(2, 1)]
    assert game.collect(1, 2) is True
    assert game.collectibles == []


def test_you_died_resets_player_and_enemies():
    game = make_game()
    game.enemies[0].state = 2
    game.you_died()
    assert game.end == -1
    assert game.game_map.tile(1, 1) == "0"
    assert (game.player.x, game.player.y) == (0, 0)
    assert all(enemy.state == 0 for enemy in game.enemies)
    path, px, py = banner_placement(Banner.YOU_DIED, 7, 4)
    assert draws(game) == [("draw", path, px, py)]
    assert path == "./spr/you_died/you_died_5.xpm"


def test_end_game_requires_exit():
    game = make_game()
    assert game.end_game(False) is False
    assert game.end == 0
    assert game.canvas.calls == []


def test_end_game_next_level_and_game_over():
    game = make_game()
    game.player.x, game.player.y = game.exit_pos
    assert game.end_game(False) is True
    assert game.end == 1
    path, px, py = banner_placement(Banner.NEXT_LEVEL, 7, 4)
    assert draws(game)[-1] == ("draw", path, px, py)
    assert game.end_game(True) is True
    assert game.end == 2
    path, px, py = banner_placement(Banner.GAME_OVER, 7, 4)
    assert draws(game)[-1] == ("draw", path, px, py)


def test_animate_collectibles_waits_then_draws():
    game = make_game()
    for _ in range(1001):
        game.animate_collectibles()
    assert game.canvas.calls == []
    game.animate_collectibles()
    assert ("draw", "./spr/obj/coin0.xpm", 2 * 64, 1 * 64) in draws(game)
    assert game.coin_frame == 1


def test_animate_exit_opens_after_four_frames():
    game = make_game()
    for _ in range(5 * 1002):
        game.animate_exit()
    door = [call[1] for call in draws(game) if "door" in call[1]]
    assert door == [f"./spr/door/door{i}.xpm" for i in range(4)]
    assert game.exit_open is True
    assert game.exit_frame == 0


def test_draw_move_count():
    game = make_game()
    game.draw_move_count()
    assert game.moves == 1
    assert game.canvas.calls == [
        ("draw", "./spr/w_f/wall3.xpm", 6 * 64, 0),
        ("text", 387, 30, 0xFF00, "1"),
    ]
    game.draw_move_count()
    assert game.canvas.calls[-1][-1] == "2"


def test_draw_map_draws_every_tile():
    game = make_game()
    game.draw_map()
    calls = draws(game)
    walls = [c for c in calls if c[1] in ("./spr/w_f/wall3.xpm", "./spr/w_f/wall4.xpm")]
    assert len(walls) == MAP_TEXT.count("1")
    floors = [c for c in calls if c[1] == "./spr/w_f/floor_map.xpm"]
    assert len(floors) == 7 * 4 - MAP_TEXT.count("1")
    assert ("draw", "./spr/mg/mg_front0.xpm", 64, 64) in calls
    assert ("draw", "./spr/door/door0.xpm", 5 * 64, 2 * 64) in calls
    assert ("draw", "./spr/enm/enm_back0.xpm", 4 * 64, 64) in calls
    assert ("draw", "./spr/w_f/wall4.xpm", 0, 64) in calls
    assert all(c[1] == "./spr/w_f/wall3.xpm" for c in walls if c[3] == 0)