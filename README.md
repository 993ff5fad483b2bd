# lostdungeon

A small tile-based dungeon crawler. You play a mage in a walled dungeon:
pick up every coin, avoid or blast the enemies that patrol the halls and
chase you when you come close, then step through the door once it opens.

## Installing

```
pip install .
```

The game window is drawn with pygame, which is installed as a dependency.

## Playing

Run the game from a directory that holds the `map/` and `spr/` folders:

```
lostdungeon
```

With no arguments the levels are read in order from `map/map0.ber`,
`map/map1.ber`, and so on, relative to the current directory. Give your own
map files to play those instead, in the order given:

```
lostdungeon first.ber second.ber third.ber
```

Sprites are XPM files read from `./spr/...` paths relative to the current
directory (for example `./spr/w_f/floor.xpm`, `./spr/mg/mg_front0.xpm`).

### Controls

| Key                  | Action                                  |
|----------------------|-----------------------------------------|
| W / Up arrow         | face or move up                         |
| S / Down arrow       | face or move down                       |
| A / Left arrow       | face or move left                       |
| D / Right arrow      | face or move right                      |
| Space                | cast a spell in the facing direction    |
| R                    | restart the current level               |
| Enter                | go on to the next level after winning   |
| Esc                  | quit                                    |

Pressing a direction once turns the mage to face it; pressing it again
walks one tile. The door opens once every coin has been collected. After
dying, R restarts the level; after the last level is won, R starts again
from the first level. A move counter sits in the top-right corner.

## Map files

A map is a plain text file of equal-length rows using these characters:

- `1` wall
- `0` floor
- `P` the player's start
- `C` a coin (at least one is required)
- `E` the exit (required)
- `N` an enemy

The outer border must be entirely walls. A map that breaks any of these
rules is refused; the command prints a message such as
`error : invalid map (wall incomplete)` and exits with status 1. An
unreadable or malformed sprite file is reported the same way.

```
1111111111
1P0C00N0E1
1111111111
```

## What is not included

The package holds no level maps and no sprite images. The `map/` and
`spr/` folders must be supplied; without them the game stops with an error.
On-screen text is drawn with pygame's default font.

## Using it as a library

The pieces are usable on their own:

- `lostdungeon.mapfile` — `read_map`, `parse_map` and `validate_map` load and
  check `.ber` maps into a `GameMap`; `validate_map` returns a `MapSummary`
  and raises `MapError` on an invalid map. `GameMap.render()` gives the map
  back as text.
- `lostdungeon.xpm` — `load_xpm`, `parse_xpm_text` and `parse_xpm_lines` read
  XPM images into an `XpmImage` (raising `XpmError`);
  `lostdungeon.colors.color_by_name` resolves X11 colour names.
- `lostdungeon.layout` — `banner_placement` chooses and centres the
  next-level, game-over and you-died banners for a map size.
- `lostdungeon.canvas` — `Canvas` draws onto a pygame surface;
  `RecordingCanvas` only records the calls made to it; `Delay` counts frames.
- `lostdungeon.state.Game` holds a level's state. `lostdungeon.enemy` and
  `lostdungeon.mage` advance the enemies and the mage on a `Game`.
- `lostdungeon.app.Session` runs a sequence of levels from a `LevelSource`.
  By default it draws on a `RecordingCanvas`, so it can be driven without a
  window through `start()`, `key_press(code)` and `tick()`.

```python
from pathlib import Path
from lostdungeon.app import LevelSource, Session

session = Session(LevelSource(files=(Path("first.ber"),)))
session.start()
session.tick()
print(session.game.game_map.render())
```

## Running the tests

```
pip install ".[test]"
pytest
```