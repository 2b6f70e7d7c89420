"""Direction and room-type model for the parent-pointer grid.

Each cell of a map stores one ``Direction``. Cardinal values point at the
cell's parent room; ``NONE`` marks the base (or a cell not visited yet) and
``GAP`` marks a cell that is not part of the dungeon at all.

``RoomType`` flags describe which sides of a room connect to another room and
are combined with bitwise OR (a renderer picks the connector glyph from them).
"""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Dict, Tuple

from .errors import MapParseError


class Direction(IntEnum):
    GAP = -1
    NONE = 0
    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4

    @property
    def is_cardinal(self) -> bool:
        return self > Direction.NONE

    def flip(self) -> "Direction":
        return _FLIPPED.get(self, self)

    def to_room_type(self) -> "RoomType":
        return _ROOM_TYPES.get(self, RoomType.GAP)

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS.get(self, (0, 0))


class RoomType(IntFlag):
    GAP = 0
    NORTH = 1
    EAST = 2
    SOUTH = 4
    WEST = 8


# Fixed scan order for neighbour lookups.
CARDINALS: Tuple[Direction, ...] = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)

# y grows upward (rank 1 is the bottom row).
_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

_FLIPPED: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_ROOM_TYPES: Dict[Direction, RoomType] = {
    Direction.NORTH: RoomType.NORTH,
    Direction.EAST: RoomType.EAST,
    Direction.SOUTH: RoomType.SOUTH,
    Direction.WEST: RoomType.WEST,
}

GAP_CHAR = "-"
NONE_CHAR = "."

_CHARS: Dict[Direction, str] = {
    Direction.GAP: GAP_CHAR,
    Direction.NONE: NONE_CHAR,
    Direction.NORTH: "N",
    Direction.EAST: "E",
    Direction.SOUTH: "S",
    Direction.WEST: "W",
}
_FROM_CHARS: Dict[str, Direction] = {c: d for d, c in _CHARS.items()}


def flip(d: Direction) -> Direction:
    """Opposite cardinal direction; ``NONE`` and ``GAP`` map to themselves."""
    return Direction(d).flip()


def to_room_type(d: Direction) -> RoomType:
    return Direction(d).to_room_type()


def direction_to_char(d: Direction) -> str:
    return _CHARS[Direction(d)]


def char_to_direction(ch: str) -> Direction:
    try:
        return _FROM_CHARS[ch]
    except KeyError:
        raise MapParseError(f"unknown direction glyph {ch!r}") from None


__all__ = [
    "Direction",
    "RoomType",
    "CARDINALS",
    "GAP_CHAR",
    "NONE_CHAR",
    "flip",
    "to_room_type",
    "direction_to_char",
    "char_to_direction",
]
