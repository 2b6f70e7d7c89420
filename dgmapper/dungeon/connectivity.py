"""Structural validation of a parent-pointer map.

A map is well formed when its stored directions describe a single tree rooted
at the base: the base stores ``NONE``, every cardinal cell points at an
in-range room, and every room can be reached from the base by following child
links. Critical endpoints must be rooms; the boss is either unset or on the
grid.
"""

from __future__ import annotations

from typing import List, Set

from .directions import Direction
from .errors import MalformedMapError
from .points import INVALID, Point, label, range_2d


def reachable_rooms(dmap: "Map") -> Set[Point]:
    """Rooms reachable from the base through child links (base included)."""
    if not dmap.in_range(dmap.base):
        return set()
    found: Set[Point] = set()
    dmap.traverse_subtree(dmap.base, lambda p, _depth: found.add(p))
    return found


def find_problems(dmap: "Map") -> List[str]:
    """Return human-readable structural problems; empty when the map is valid."""
    problems: List[str] = []
    if not dmap.in_range(dmap.base):
        problems.append(f"base {label(dmap.base)} is not on the grid")
        return problems
    if dmap.grid[dmap.base.x][dmap.base.y] != Direction.NONE:
        problems.append(f"base {label(dmap.base)} stores a parent direction")
        return problems
    if dmap.boss != INVALID and not dmap.in_range(dmap.boss):
        problems.append(f"boss {label(dmap.boss)} is not on the grid")

    room_total = 0
    for p in range_2d(dmap.width, dmap.height):
        stored = dmap.grid[p.x][p.y]
        if not stored.is_cardinal:
            continue
        room_total += 1
        parent = p.add(stored)
        if not dmap.in_range(parent):
            problems.append(f"room {label(p)} points off the grid")
        elif not dmap.is_room(parent):
            problems.append(f"room {label(p)} points at non-room {label(parent)}")
    if problems:
        return problems

    try:
        reached = reachable_rooms(dmap)
    except MalformedMapError as e:
        problems.append(str(e))
        return problems
    # The base is counted by reachable_rooms but not by room_total.
    if len(reached) != room_total + 1:
        orphans = [p for p in range_2d(dmap.width, dmap.height) if dmap.grid[p.x][p.y].is_cardinal and p not in reached]
        problems.append(f"{len(orphans)} room(s) do not reach the base, first {label(orphans[0])}")

    for e in dmap.crit_endpoints:
        if not dmap.is_room(e):
            problems.append(f"critical endpoint {label(e)} is not a room")
    return problems


def validate_map(dmap: "Map") -> None:
    problems = find_problems(dmap)
    if problems:
        raise MalformedMapError(problems[0])


__all__ = ["reachable_rooms", "find_problems", "validate_map"]
