"""Loader for XPM images, as used by the game's sprites."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from lostdungeon.colors import color_by_name

TRANSPARENT = 0xFF000000
"""Pixel value of a transparent pixel (the alpha byte marks transparency)."""

_NAME_LIMIT = 63
_WORD_SPLIT = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_HEX = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)"
)


class XpmError(ValueError):
    """Raised when an XPM image cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: ``pixels[y][x]`` holds a 0xAARRGGBB value."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _words(line: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(line) if word]


def text_to_rgb(name: str, end: str | None) -> int:
    """Turn a colour specification into a 0xRRGGBB value.

    ``#rrggbb`` is read as hexadecimal. Otherwise the name, joined with
    ``end`` when given, is looked up in the colour table; ``none`` gives -1
    and an unknown name gives 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        sign, digits = match.group(1), match.group(2)
        value = int(digits, 16) if digits else 0
        return _to_int32(-value if sign == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    color = color_by_name(name)
    return 0 if color is None else color


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, length: int) -> str:
    stop = min(len(text), start + length)
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside double quotes with spaces.

    The text keeps its length, so positions in it do not move.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        # An unterminated comment only loses its opener and one character.
        length = close - begin + 2 if close != -1 else 3
        text = _blank(text, begin, length)
    while (begin := _find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        length = newline - begin + 1 if newline != -1 else 2
        text = _blank(text, begin, length)
    return text


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while (start := text.find('"', pos)) != -1:
        stop = text.find('"', start + 1)
        if stop == -1:
            return
        yield text[start + 1 : stop]
        pos = stop + 1


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what} line") from None


def _pixel(color: int) -> int:
    return TRANSPARENT if color == -1 else color & 0xFFFFFFFF


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings (header, colours, pixel rows)."""
    source = iter(lines)
    header = _words(_next_line(source, "header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("header values must be positive")

    # Short keys overwrite earlier definitions; long keys keep the first one.
    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(source, "colour definition")
        words = _words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"no colour key in {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour key without value in {line!r}")
        end = words[index + 2] if index + 2 < len(words) else None
        rgb = text_to_rgb(words[index + 1], end)
        key = line[:cpp]
        if direct:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    rows = []
    for _ in range(height):
        line = _next_line(source, "pixel")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        keys = (line[start : start + cpp] for start in range(0, width * cpp, cpp))
        rows.append(tuple(_pixel(palette.get(key, 0)) for key in keys))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an image from the text of an XPM file."""
    return parse_xpm_lines(_quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)