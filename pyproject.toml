[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lostdungeon"
version = "0.1.0"
description = "A tile-based dungeon crawler: collect every coin, dodge patrolling enemies and reach the exit."
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "dungeon", "tiles", "xpm", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lostdungeon = "lostdungeon.app:main"

[tool.hatch.build.targets.wheel]
packages = ["lostdungeon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
