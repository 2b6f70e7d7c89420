"""Seeded sample map generator.

Grows a random spanning tree outward from a random base: each step opens a
random gap next to an existing room and links it to that room. The boss is
placed on the room farthest from the base and marked as the critical endpoint.
Useful for demos and tests; real maps come from the screen reader.
"""

from __future__ import annotations

import random
from typing import List, Tuple

from .config import MapConfig
from .directions import CARDINALS, Direction
from .map import Map
from .points import Point


def generate_map(config: MapConfig | None = None, rng=None) -> Map:
    if config is None:
        config = MapConfig()
    if rng is None:
        # Local RNG so callers' use of the random module is unaffected.
        rng = random.Random(config.seed)
    dmap = Map.from_config(config)
    target = max(1, min(config.room_count, dmap.max_rooms))

    base = Point(rng.randrange(config.width), rng.randrange(config.height))
    dmap.base = base
    dmap[base] = Direction.NONE
    rooms: List[Point] = [base]

    while len(rooms) < target:
        frontier = _frontier(dmap, rooms)
        if not frontier:
            break
        cell, toward_parent = rng.choice(frontier)
        dmap[cell] = toward_parent
        rooms.append(cell)

    boss, dist = dmap.get_farthest_point(base)
    if dist > 0:
        dmap.boss = boss
        dmap.add_crit_endpoint(boss)
    return dmap


def _frontier(dmap: Map, rooms: List[Point]) -> List[Tuple[Point, Direction]]:
    """Gap cells next to a room, paired with the direction back to that room."""
    out = []
    for room in rooms:
        for d in CARDINALS:
            cell = room.add(d)
            if dmap.in_range(cell) and dmap[cell] == Direction.GAP:
                out.append((cell, d.flip()))
    return out


__all__ = ["generate_map"]
