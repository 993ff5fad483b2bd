"""Reading, checking and printing of ``.ber`` level maps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ALLOWED_TILES = frozenset("10NPCE")
"""Wall, floor, enemy, player, collectible and exit."""


class MapError(ValueError):
    """Raised when a map cannot be read or is not a valid level."""


@dataclass(frozen=True)
class MapSummary:
    """What a valid map holds, as found by :func:`validate_map`."""

    collectibles: int
    enemies: int
    has_exit: bool
    has_player: bool


@dataclass
class GameMap:
    """A level grid: ``rows[y][x]`` is the tile character at column x, row y.

    ``width`` is the length of the first line of the file and ``height``
    the number of non-empty lines.
    """

    rows: list[list[str]]
    width: int
    height: int

    def tile(self, x: int, y: int) -> str:
        """Return the tile at column ``x``, row ``y``."""
        return self.rows[y][x]

    def set_tile(self, x: int, y: int, char: str) -> None:
        """Replace the tile at column ``x``, row ``y``."""
        self.rows[y][x] = char

    def render(self) -> str:
        """Return the map as text: one line per row, then three blank lines."""
        lines = "".join(
            "".join(row[: self.width]) + "\n" for row in self.rows[: self.height]
        )
        return lines + "\n\n\n"


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping empty pieces."""
    return [piece for piece in text.split("\n") if piece]


def parse_map(text: str) -> GameMap:
    """Build a :class:`GameMap` from the text of a map file."""
    if not text:
        raise MapError("invalid map (empty file)")
    first, _, _ = text.partition("\n")
    rows = [list(line) for line in split_lines(text)]
    return GameMap(rows=rows, width=len(first), height=len(rows))


def read_map(path: str | Path) -> GameMap:
    """Read and parse a map file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MapError(f"invalid map: cannot read {path}") from exc
    return parse_map(data.decode("latin-1"))


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _leading_tiles(row: list[str]) -> int:
    count = 0
    for char in row:
        if not _is_alnum(char):
            break
        if char not in ALLOWED_TILES:
            raise MapError("invalid map (invalid set)")
        count += 1
    return count


def validate_map(game_map: GameMap) -> MapSummary:
    """Check that a map is a playable level and count what it holds.

    The map must use only the allowed tiles, be rectangular, be closed by
    walls, and hold at least one collectible, an exit and a player.
    """
    for row in game_map.rows[: game_map.height]:
        if _leading_tiles(row) != game_map.width:
            raise MapError("invalid map (map is not rectangular)")

    collectibles = enemies = 0
    has_exit = has_player = False
    last_row, last_col = game_map.height - 1, game_map.width - 1
    for y, row in enumerate(game_map.rows[: game_map.height]):
        for x, char in enumerate(row[: game_map.width]):
            on_border = y in (0, last_row) or x in (0, last_col)
            if on_border and char != "1":
                raise MapError("invalid map (wall incomplete)")
            if char == "C":
                collectibles += 1
            elif char == "E":
                has_exit = True
            elif char == "P":
                has_player = True
            elif char == "N":
                enemies += 1

    if not has_exit or collectibles < 1 or not has_player:
        raise MapError("invalid map (missing set)")
    return MapSummary(collectibles, enemies, has_exit, has_player)