"""Canonical text form of a completed map.

Format (fields separated by single spaces)::

    <width> <height> <rows> <base> <boss> [<crit endpoint> ...]

``rows`` is one glyph per cell (``-`` gap, ``.`` none/base, ``N``/``E``/``S``/
``W`` parent direction) with rows joined by ``/``. The top row (highest y) is
written first so the text reads like the map on screen. Coordinates use chess
notation (``a1`` is the bottom-left cell, ``-`` means unset), which caps the
width at 26 files. The boss is left out of the endpoint list; decoding puts it
back when it is a room other than the base. A boss room therefore cannot be
backtracked (see ``pruning.backtrack_crit_endpoint``).

Example, a base at b1 with rooms west, east and north of it::

    3 2 -S-/E.W b1 - b2
"""

from __future__ import annotations

from typing import List

from .directions import Direction, char_to_direction, direction_to_char
from .errors import MapParseError
from .points import INVALID, MAX_FILES, parse_chess_string, to_chess_string

ROW_SEP = "/"
FIELD_SEP = " "


def _rows(dmap: "Map") -> List[str]:
    return [
        "".join(direction_to_char(dmap.grid[x][y]) for x in range(dmap.width))
        for y in range(dmap.height - 1, -1, -1)
    ]


def pretty_map(dmap: "Map") -> str:
    """Multi-line rendering of the grid only, top row first."""
    return "\n".join(_rows(dmap))


def encode_map(dmap: "Map") -> str:
    crit = [to_chess_string(p) for p in dmap.crit_endpoints if p != dmap.boss]
    fields = [
        str(dmap.width),
        str(dmap.height),
        ROW_SEP.join(_rows(dmap)),
        to_chess_string(dmap.base),
        to_chess_string(dmap.boss),
    ] + crit
    return FIELD_SEP.join(fields)


def decode_map(text: str, validate: bool = True) -> "Map":
    """Inverse of :func:`encode_map`.

    Raises ``MapParseError`` for text that does not follow the format and,
    when ``validate`` is set, ``MalformedMapError`` for grids that are not a
    single tree rooted at the base.
    """
    from .map import Map

    if not isinstance(text, str):
        raise MapParseError("map text must be a string")
    tokens = text.split()
    if len(tokens) < 5:
        raise MapParseError(f"expected at least 5 fields, got {len(tokens)}")
    try:
        width, height = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise MapParseError(f"bad dimensions {tokens[0]!r} x {tokens[1]!r}") from None
    if width <= 0 or height <= 0:
        raise MapParseError(f"dimensions must be positive, got {width}x{height}")
    if width > MAX_FILES:
        raise MapParseError(f"width {width} exceeds {MAX_FILES} files (a-z)")

    rows = tokens[2].split(ROW_SEP)
    if len(rows) != height:
        raise MapParseError(f"expected {height} rows, got {len(rows)}")
    grid = [[Direction.GAP] * height for _ in range(width)]
    for r, row in enumerate(rows):
        if len(row) != width:
            raise MapParseError(f"row {r} has {len(row)} cells, expected {width}")
        y = height - 1 - r
        for x, ch in enumerate(row):
            grid[x][y] = char_to_direction(ch)

    base = parse_chess_string(tokens[3])
    boss = parse_chess_string(tokens[4])
    crit = [parse_chess_string(t) for t in tokens[5:]]
    for p in [base, boss] + crit:
        if p != INVALID and not p.is_in_range(width, height):
            raise MapParseError(f"coordinate {to_chess_string(p)} is outside the {width}x{height} grid")

    dmap = Map.from_grid(grid, base, boss, crit, validate=False)
    if boss != INVALID and boss != base and dmap.is_room(boss):
        dmap.crit_endpoints.add(boss)
    if validate:
        dmap.validate()
    return dmap


__all__ = ["encode_map", "decode_map", "pretty_map"]
