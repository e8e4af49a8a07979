"""
Built-in sample maps for learning adjacency rules.

Samples are written as rows of tile symbols (see wavemap.core.tiles):

    ^  mountain     .  land     :  coast     ~  water     (space)  empty

The solver only ever sees which tiles touch which, so a handful of rows is
enough to describe a whole style of map: the island sample, for instance,
teaches that water never touches land without coast in between.
"""

from __future__ import annotations

from wavemap.core.tiles import TileType, tile_from_symbol

TileGrid = list[list[TileType]]


SAMPLES: dict[str, str] = {
    # Concentric rings: water -> coast -> land -> mountain
    "island": """
~~~~~~~~
~~::::~~
~:....:~
~:.^^.:~
~:.^^.:~
~:....:~
~~::::~~
~~~~~~~~
""",
    # Land and water alternate; neither may touch itself
    "checkerboard": """
.~.
~.~
.~.
""",
    "mountain": """
^^^
^^^
^^^
""",
    # Horizontal bands with a ridge inland
    "coastline": """
~~~~~~
~~~~~~
::::::
......
..^^..
......
""",
}


def parse_sample(text: str) -> TileGrid:
    """
    Parse symbol rows into a tile grid (grid[y][x]).

    Leading and trailing blank lines are ignored; spaces inside rows are
    EMPTY tiles.

    Raises:
        KeyError: If a symbol is not in the palette
        ValueError: If the rows differ in length or there are none
    """
    rows = text.strip("\n").splitlines()
    if not rows or not any(rows):
        raise ValueError("Sample is empty")

    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("Sample rows must all have the same length")

    return [[tile_from_symbol(symbol) for symbol in row] for row in rows]


def get_sample(name: str) -> TileGrid:
    """
    Get a fresh copy of a built-in sample by name.

    Raises:
        KeyError: If there is no sample with that name
    """
    try:
        text = SAMPLES[name]
    except KeyError:
        known = ", ".join(sorted(SAMPLES))
        raise KeyError(f"Unknown sample {name!r} (known: {known})") from None
    return parse_sample(text)
