from pathlib import Path

import pytest

from lostdungeon.app import LevelSource, Session, main
from lostdungeon.mage import ATTACK_ACTION, Direction
from lostdungeon.mapfile import MapError

MAP = "1111111\n1PC0001\n10000E1\n1111111\n"
SECOND = "11111\n1P0C1\n100E1\n11111\n"


@pytest.fixture
def two_levels(tmp_path):
    first = tmp_path / "a.ber"
    second = tmp_path / "b.ber"
    first.write_text(MAP)
    second.write_text(SECOND)
    return LevelSource(files=(first, second))


def run_until(step, done, limit=30000):
    for _ in range(limit):
        if done():
            break
        step()
    return done()


def test_numbered_paths():
    source = LevelSource()
    assert source.path(3) == Path("map") / "map3.ber"


def test_file_paths_and_missing_level(two_levels):
    assert two_levels.path(1) == two_levels.files[1]
    with pytest.raises(MapError):
        two_levels.path(2)


def test_is_last_with_files(two_levels, tmp_path):
    assert two_levels.is_last(0) is False
    assert two_levels.is_last(1) is True
    broken = LevelSource(files=(two_levels.files[0], tmp_path / "missing.ber"))
    assert broken.is_last(0) is True


def test_is_last_with_directory(tmp_path):
    (tmp_path / "map0.ber").write_text(MAP)
    (tmp_path / "map1.ber").write_text(SECOND)
    source = LevelSource(directory=tmp_path)
    assert source.is_last(0) is False
    assert source.is_last(1) is True


def test_start_draws_labels(two_levels):
    session = Session(two_levels)
    session.start()
    texts = [call[-1] for call in session.game.canvas.calls if call[0] == "text"]
    assert texts == ["MOVES", "COUNT"]
    assert (session.game.player.x, session.game.player.y) == (1, 1)


def test_start_rejects_invalid_map(tmp_path):
    bad = tmp_path / "bad.ber"
    bad.write_text("1111\n1P01\n1111\n")
    session = Session(LevelSource(files=(bad,)))
    with pytest.raises(MapError):
        session.start()


def test_escape_stops(two_levels):
    session = Session(two_levels)
    session.start()
    session.key_press(53)
    assert session.running is False


def test_direction_key_turns_mage(two_levels):
    session = Session(two_levels)
    session.start()
    session.key_press(2)
    assert session.game.player.facing == Direction.RIGHT


def test_space_starts_attack_only_when_target_free(two_levels):
    session = Session(two_levels)
    session.start()
    session.key_press(49)
    assert session.game.last_key == -1
    session.game.player.facing = Direction.DOWN
    session.key_press(49)
    assert session.game.last_key == ATTACK_ACTION


def test_reset_reloads_on_same_canvas(two_levels):
    session = Session(two_levels)
    session.start()
    old = session.game
    old.player.x = 4
    session.key_press(15)
    assert session.game is not old
    assert session.game.canvas is old.canvas
    assert session.game.player.x == 1


def test_reset_after_game_over_restarts_first_level(two_levels):
    session = Session(two_levels)
    session.level = 1
    session.start()
    session.game.end = 2
    session.key_press(15)
    assert session.level == 0
    assert session.game.end == 0
    assert session.game.exit_pos == (5, 2)


def test_return_goes_to_next_level_only_when_won(two_levels):
    session = Session(two_levels)
    session.start()
    session.key_press(36)
    assert session.level == 0
    session.game.end = 1
    session.key_press(36)
    assert session.level == 1
    assert session.game.exit_pos == (3, 2)


def test_tick_opens_exit_when_coins_gone(two_levels):
    session = Session(two_levels)
    session.start()
    session.game.collectibles.clear()
    assert run_until(session.tick, lambda: session.game.exit_open)
    paths = [call[1] for call in session.game.canvas.calls if call[0] == "draw"]
    assert "./spr/door/door3.xpm" in paths


def test_tick_runs_attack(two_levels):
    session = Session(two_levels)
    session.start()
    game = session.game
    game.player.facing = Direction.DOWN
    game.last_key = ATTACK_ACTION
    assert run_until(session.tick, lambda: game.player.attack_frame == 1)
    assert game.player.frame == 0


def test_tick_fades_into_exit(two_levels):
    session = Session(two_levels)
    session.start()
    game = session.game
    game.player.x, game.player.y = game.exit_pos
    game.player.arrival_x, game.player.arrival_y = game.exit_pos
    assert run_until(session.tick, lambda: game.end == 1)
    session.key_press(36)
    assert session.level == 1
    assert session.game.end == 0


def test_main_reports_missing_map(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    assert main([str(tmp_path / "missing.ber")]) == 1
    assert "invalid map" in capsys.readouterr().err


def test_main_reports_open_wall(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    bad = tmp_path / "bad.ber"
    bad.write_text("11111\n1PCE0\n11111\n")
    assert main([str(bad)]) == 1
    assert "wall incomplete" in capsys.readouterr().err