import pygame
import pytest

from lostdungeon.canvas import (
    FLOOR,
    FLOOR_MAP,
    Canvas,
    Delay,
    RecordingCanvas,
    draw_sprite,
    put_floor,
    put_floor_map,
    sprite_path,
)
from lostdungeon.layout import TILE
from lostdungeon.xpm import XpmError

SPRITE = """/* XPM */
static char *s[] = {
"2 1 2 1",
"r c #FF0000",
". c None",
"r."
};
"""


def test_sprite_path():
    assert sprite_path("./spr/obj/coin", 3) == "./spr/obj/coin3.xpm"


def test_delay_waits_then_fires_and_resets():
    delay = Delay()
    results = [delay.tick(2) for _ in range(4)]
    assert results == [False, False, False, True]
    assert delay.count == 0
    assert delay.tick(2) is False


def test_put_floor_records_tile_position():
    canvas = RecordingCanvas()
    put_floor(canvas, 2, 3)
    assert canvas.calls == [("draw", FLOOR, 2 * TILE, 3 * TILE)]


def test_put_floor_map_draws_background_then_floor():
    canvas = RecordingCanvas()
    put_floor_map(canvas, 1, 0)
    assert canvas.calls == [
        ("draw", FLOOR_MAP, TILE, 0),
        ("draw", FLOOR, TILE, 0),
    ]


def test_draw_sprite_with_floor():
    canvas = RecordingCanvas()
    draw_sprite(canvas, "./spr/mg/mg_front", 1, 2, 4, True)
    assert canvas.calls == [
        ("draw", FLOOR, TILE, 2 * TILE),
        ("draw", "./spr/mg/mg_front4.xpm", TILE, 2 * TILE),
    ]


def test_draw_sprite_without_floor():
    canvas = RecordingCanvas()
    draw_sprite(canvas, "./spr/door/door", 0, 0, 1, False)
    assert canvas.calls == [("draw", "./spr/door/door1.xpm", 0, 0)]


def test_recording_text():
    canvas = RecordingCanvas()
    canvas.text(10, 20, 0xFFFFFF, "MOVES")
    assert canvas.calls == [("text", 10, 20, 0xFFFFFF, "MOVES")]


def test_canvas_draw_blits_sprite(tmp_path):
    (tmp_path / "s.xpm").write_text(SPRITE)
    surface = pygame.Surface((4, 4))
    surface.fill((0, 0, 255))
    canvas = Canvas(surface, root=tmp_path)
    canvas.draw("s.xpm", 1, 1)
    assert tuple(surface.get_at((1, 1)))[:3] == (255, 0, 0)
    # The transparent pixel leaves the background untouched.
    assert tuple(surface.get_at((2, 1)))[:3] == (0, 0, 255)
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 255)


def test_canvas_draw_missing_sprite(tmp_path):
    canvas = Canvas(pygame.Surface((4, 4)), root=tmp_path)
    with pytest.raises(XpmError):
        canvas.draw("absent.xpm", 0, 0)


def test_canvas_text_paints_pixels():
    surface = pygame.Surface((120, 60))
    surface.fill((0, 0, 0))
    Canvas(surface).text(5, 40, 0xFFFFFF, "MOVES")
    painted = sum(
        1
        for x in range(120)
        for y in range(60)
        if tuple(surface.get_at((x, y)))[:3] != (0, 0, 0)
    )
    assert painted > 0