import pytest

from lostdungeon.layout import Banner, banner_placement, min_dimension


def test_min_dimension_picks_smaller():
    assert min_dimension(4, 9) == 4
    assert min_dimension(9, 4) == 4
    assert min_dimension(6, 6) == 6


@pytest.mark.parametrize("a, b", [(-1, 5), (5, -1)])
def test_min_dimension_rejects_negative(a, b):
    with pytest.raises(ValueError):
        min_dimension(a, b)


def test_banner_placement_rejects_negative():
    with pytest.raises(ValueError):
        banner_placement(Banner.GAME_OVER, -3, 10)


@pytest.mark.parametrize(
    "banner, width, height, path",
    [
        (Banner.NEXT_LEVEL, 20, 18, "./spr/next_level/next_level_21.xpm"),
        (Banner.NEXT_LEVEL, 16, 30, "./spr/next_level/next_level_17.xpm"),
        (Banner.NEXT_LEVEL, 12, 10, "./spr/next_level/next_level_15.xpm"),
        (Banner.NEXT_LEVEL, 8, 7, "./spr/next_level/next_level_10.xpm"),
        (Banner.NEXT_LEVEL, 5, 6, "./spr/next_level/next_level_7.xpm"),
        (Banner.NEXT_LEVEL, 3, 4, "./spr/next_level/next_level_5.xpm"),
        (Banner.GAME_OVER, 17, 17, "./spr/game_over/game_over_21.xpm"),
        (Banner.GAME_OVER, 9, 9, "./spr/game_over/game_over_10.xpm"),
        (Banner.YOU_DIED, 15, 40, "./spr/you_died/you_died_17.xpm"),
        (Banner.YOU_DIED, 4, 4, "./spr/you_died/you_died_5.xpm"),
    ],
)
def test_banner_sprite_tier(banner, width, height, path):
    placement = banner_placement(banner, width, height)
    assert placement is not None
    assert placement[0] == path


@pytest.mark.parametrize("banner", list(Banner))
def test_too_small_map_has_no_banner(banner):
    assert banner_placement(banner, 2, 10) is None
    assert banner_placement(banner, 10, 2) is None


def test_wider_map_shifts_banner_one_tile_per_two_columns():
    _, x1, y1 = banner_placement(Banner.GAME_OVER, 20, 20)
    _, x2, y2 = banner_placement(Banner.GAME_OVER, 22, 20)
    assert x2 - x1 == 64
    assert y2 == y1


def test_odd_width_rounds_down_to_even():
    assert banner_placement(Banner.YOU_DIED, 21, 20) == banner_placement(
        Banner.YOU_DIED, 20, 20
    )


def test_game_over_and_you_died_share_geometry():
    for width, height in [(3, 3), (6, 9), (11, 12), (16, 16), (25, 19)]:
        _, gx, gy = banner_placement(Banner.GAME_OVER, width, height)
        _, dx, dy = banner_placement(Banner.YOU_DIED, width, height)
        assert (gx, gy) == (dx, dy)


def test_next_level_banner_is_taller_than_game_over():
    _, nx, ny = banner_placement(Banner.NEXT_LEVEL, 20, 20)
    _, gx, gy = banner_placement(Banner.GAME_OVER, 20, 20)
    assert nx == gx
    assert ny < gy