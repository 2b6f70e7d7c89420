"""Grid points, canonical ordering and chess-style coordinates.

Points order by ``(x, y)``, which is the same order as their chess notation
(file letter first, then rank). ``PointSet`` keeps its members in that order so
iteration and serialization are deterministic.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from .directions import Direction
from .errors import MapParseError, OutOfRangeError

INVALID_CHESS = "-"
# Files run a..z, so grids are at most this wide.
MAX_FILES = 26


class Point(NamedTuple):
    x: int
    y: int

    def add(self, d: Direction) -> "Point":
        dx, dy = Direction(d).vector
        return Point(self.x + dx, self.y + dy)

    def is_in_range(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def to_chess_string(self) -> str:
        return to_chess_string(self)


INVALID = Point(-1, -1)


def point_sort_key(p: Tuple[int, int]) -> Tuple[int, int]:
    return (p[0], p[1])


def range_2d(width: int, height: int) -> Iterator[Point]:
    for x in range(width):
        for y in range(height):
            yield Point(x, y)


def to_chess_string(p: Point) -> str:
    """``Point(2, 0) -> "c1"``; ``INVALID -> "-"``."""
    if p == INVALID:
        return INVALID_CHESS
    if not 0 <= p.x < MAX_FILES or p.y < 0:
        raise OutOfRangeError(f"point {tuple(p)} has no chess notation")
    return f"{chr(ord('a') + p.x)}{p.y + 1}"


def label(p: Tuple[int, int]) -> str:
    """Chess notation when the point has one, else ``(x, y)``; for messages."""
    if p == INVALID or (0 <= p[0] < MAX_FILES and p[1] >= 0):
        return to_chess_string(Point(*p))
    return f"({p[0]}, {p[1]})"


def parse_chess_string(s: str) -> Point:
    if s == INVALID_CHESS:
        return INVALID
    if len(s) < 2 or not ("a" <= s[0] <= "z") or not (s[1:].isascii() and s[1:].isdigit()):
        raise MapParseError(f"bad coordinate {s!r}")
    rank = int(s[1:])
    if rank < 1:
        raise MapParseError(f"bad coordinate {s!r}")
    return Point(ord(s[0]) - ord("a"), rank - 1)


class PointSet:
    """Set of points iterated in canonical order."""

    __slots__ = ("_items",)

    def __init__(self, points: Iterable[Point] = ()):
        self._items: List[Point] = []
        for p in points:
            self.add(p)

    def _index(self, p: Point) -> int:
        return bisect_left(self._items, point_sort_key(p), key=point_sort_key)

    def add(self, p: Point) -> bool:
        p = Point(*p)
        i = self._index(p)
        if i < len(self._items) and self._items[i] == p:
            return False
        self._items.insert(i, p)
        return True

    def remove(self, p: Point) -> bool:
        """Remove ``p``; returns False when it was not a member."""
        i = self._index(Point(*p))
        if i < len(self._items) and self._items[i] == p:
            del self._items[i]
            return True
        return False

    discard = remove

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> "PointSet":
        out = PointSet()
        out._items = list(self._items)
        return out

    def __contains__(self, p) -> bool:
        i = self._index(Point(*p))
        return i < len(self._items) and self._items[i] == p

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, PointSet):
            return self._items == other._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"PointSet({[to_chess_string(p) for p in self._items]})"


__all__ = [
    "Point",
    "INVALID",
    "PointSet",
    "point_sort_key",
    "range_2d",
    "to_chess_string",
    "parse_chess_string",
    "label",
    "MAX_FILES",
]
