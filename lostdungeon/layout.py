"""Placement of the centred end-of-level banners."""

from __future__ import annotations

import enum

TILE = 64


class Banner(enum.Enum):
    """The three overlay banners; the value is the sprite directory name."""

    NEXT_LEVEL = "next_level"
    GAME_OVER = "game_over"
    YOU_DIED = "you_died"


# (minimum map side, sprite size suffix, banner width in pixels)
_TIERS = (
    (17, 21, 1344),
    (15, 17, 1088),
    (10, 15, 960),
    (7, 10, 640),
    (5, 7, 448),
    (3, 5, 320),
)

# Banner heights, tier by tier, in the same order as _TIERS.
_HEIGHTS = {
    Banner.NEXT_LEVEL: (939, 760, 671, 447, 313, 224),
    Banner.GAME_OVER: (756, 612, 540, 360, 252, 180),
    Banner.YOU_DIED: (756, 612, 540, 360, 252, 180),
}


def min_dimension(a: int, b: int) -> int:
    """Return the smaller of two map dimensions; negative values are rejected."""
    if a < 0 or b < 0:
        raise ValueError("map dimensions must not be negative")
    return min(a, b)


def banner_placement(
    banner: Banner, width: int, height: int
) -> tuple[str, int, int] | None:
    """Choose the banner sprite that fits a map of ``width`` x ``height`` tiles.

    Returns ``(path, x, y)`` with the pixel position that centres the banner,
    or None when the map is too small for any banner.
    """
    smallest = min_dimension(width, height)
    for (threshold, suffix, pixel_width), pixel_height in zip(
        _TIERS, _HEIGHTS[banner]
    ):
        if smallest >= threshold:
            x = (width // 2) * TILE - pixel_width // 2
            y = (height // 2) * TILE - pixel_height // 2
            name = banner.value
            return f"./spr/{name}/{name}_{suffix}.xpm", x, y
    return None