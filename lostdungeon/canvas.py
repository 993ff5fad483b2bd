"""Drawing surfaces for tiles and text, and the frame-count delay."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import pygame

from lostdungeon.layout import TILE
from lostdungeon.xpm import XpmImage, load_xpm

FLOOR = "./spr/w_f/floor.xpm"
FLOOR_MAP = "./spr/w_f/floor_map.xpm"
FONT_SIZE = 20


def _to_surface(image: XpmImage) -> pygame.Surface:
    surface = pygame.Surface((image.width, image.height), pygame.SRCALPHA)
    for y, row in enumerate(image.pixels):
        for x, pixel in enumerate(row):
            alpha = 255 - ((pixel >> 24) & 0xFF)
            surface.set_at(
                (x, y),
                ((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF, alpha),
            )
    return surface


class Canvas:
    """Draws sprites and text onto a pygame surface.

    Sprite paths are resolved against ``root``; decoded sprites are cached.
    """

    def __init__(self, surface: pygame.Surface, root: str | Path = ".") -> None:
        self.surface = surface
        self.root = Path(root)
        self._sprites: dict[str, pygame.Surface] = {}
        self._font: pygame.font.Font | None = None

    def _sprite(self, path: str) -> pygame.Surface:
        sprite = self._sprites.get(path)
        if sprite is None:
            sprite = _to_surface(load_xpm(self.root / path))
            self._sprites[path] = sprite
        return sprite

    def draw(self, path: str, px: int, py: int) -> None:
        """Draw the XPM sprite at ``path`` with its top-left corner at (px, py)."""
        self.surface.blit(self._sprite(path), (px, py))

    def text(self, px: int, py: int, color: int, text: str) -> None:
        """Write ``text`` in colour 0xRRGGBB; ``py`` is near the baseline."""
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, FONT_SIZE)
        rgb = ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
        rendered = self._font.render(text, True, rgb)
        self.surface.blit(rendered, (px, py - rendered.get_height() * 3 // 4))


@dataclass
class RecordingCanvas:
    """A canvas that only records what it was asked to draw."""

    calls: list[tuple] = field(default_factory=list)

    def draw(self, path: str, px: int, py: int) -> None:
        """Record a sprite drawing."""
        self.calls.append(("draw", path, px, py))

    def text(self, px: int, py: int, color: int, text: str) -> None:
        """Record a text drawing."""
        self.calls.append(("text", px, py, color, text))


Painter = Union[Canvas, RecordingCanvas]


@dataclass
class Delay:
    """Counts frames so that an action runs once every ``limit + 2`` ticks."""

    count: int = 0

    def tick(self, limit: int) -> bool:
        """Advance one frame; return True when the action is due (and reset)."""
        if self.count <= limit:
            self.count += 1
            return False
        self.count = 0
        return True


def sprite_path(prefix: str, index: int) -> str:
    """Return the path of frame ``index`` of an animation."""
    return f"{prefix}{index}.xpm"


def put_floor(canvas: Painter, x: int, y: int) -> None:
    """Draw a floor tile on map cell (x, y)."""
    canvas.draw(FLOOR, x * TILE, y * TILE)


def put_floor_map(canvas: Painter, x: int, y: int) -> None:
    """Draw the map background tile and then the floor on cell (x, y)."""
    canvas.draw(FLOOR_MAP, x * TILE, y * TILE)
    put_floor(canvas, x, y)


def draw_sprite(
    canvas: Painter, prefix: str, x: int, y: int, index: int, with_floor: bool
) -> None:
    """Draw frame ``index`` of an animation on cell (x, y), optionally over floor."""
    if with_floor:
        put_floor(canvas, x, y)
    canvas.draw(sprite_path(prefix, index), x * TILE, y * TILE)