"""A tile-based dungeon crawler: map and XPM loading, level state, enemies, the mage and a pygame game loop."""

__version__ = "0.1.0"