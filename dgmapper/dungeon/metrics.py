"""Distance metrics, mutation counters and the analysis summary."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from .points import Point, to_chess_string


def init_metrics() -> Dict[str, int]:
    return {
        'crit_endpoints_added': 0,
        'crit_backtracks': 0,
        'dead_ends_removed': 0,
        'base_moves': 0,
        'rebases': 0,
        'clears': 0,
    }


def distance_to_base(dmap: "Map", p: Point) -> int:
    dist = 0

    def count(_):
        nonlocal dist
        dist += 1

    dmap.traverse_to_base(p, count)
    return dist


def subtree_size(dmap: "Map", p: Point) -> int:
    if not dmap.in_range(p):
        return 0
    count = 0

    def bump(_p, _depth):
        nonlocal count
        count += 1

    dmap.traverse_subtree(p, bump)
    return count


def tree_height(dmap: "Map") -> int:
    """Depth of the deepest room below the base; -1 without a base."""
    if not dmap.in_range(dmap.base):
        return -1
    max_depth = -1

    def track(_p, depth):
        nonlocal max_depth
        max_depth = max(max_depth, depth)

    dmap.traverse_subtree(dmap.base, track)
    return max_depth


def farthest_point(dmap: "Map", p: Point) -> Tuple[Point, int]:
    """Farthest room from ``p`` and its hop distance.

    Ties go to the first point reported by ``traverse_whole_tree``.
    """
    farthest = Point(*p)
    max_dist = 0

    def track(q, _dir, dist):
        nonlocal farthest, max_dist
        if max_dist < dist:
            max_dist = dist
            farthest = q

    dmap.traverse_whole_tree(p, track)
    return farthest, max_dist


def eccentricity(dmap: "Map", p: Point) -> int:
    return farthest_point(dmap, p)[1]


def diameter(dmap: "Map") -> int:
    # Double sweep: the farthest point from any room is one end of a longest path.
    end, _ = farthest_point(dmap, dmap.base)
    return eccentricity(dmap, end)


def summarize_map(dmap: "Map") -> Dict[str, Any]:
    """JSON-friendly analysis of a map; points use chess notation."""

    def chess_list(points):
        return [to_chess_string(p) for p in points]

    has_base = dmap.in_range(dmap.base)
    room_types = {to_chess_string(p): int(dmap.get_room_type(p)) for p in dmap.get_rooms() if dmap.in_range(p)}
    return {
        'width': dmap.width,
        'height': dmap.height,
        'base': to_chess_string(dmap.base),
        'boss': to_chess_string(dmap.boss),
        'rooms': dmap.room_count,
        'gaps': dmap.gap_count,
        'max_rooms': dmap.max_rooms,
        'dead_ends': chess_list(dmap.get_dead_ends()),
        'bonus_dead_ends': chess_list(dmap.get_bonus_dead_ends()),
        'crit_endpoints': chess_list(dmap.crit_endpoints),
        'crit_rooms': chess_list(dmap.get_crit_rooms()) if has_base else [],
        'tree_height': dmap.get_tree_height(),
        'diameter': dmap.get_diameter() if has_base else 0,
        'base_eccentricity': dmap.get_eccentricity(dmap.base) if has_base else 0,
        'room_types': room_types,
        'metrics': dict(dmap.metrics),
    }


__all__ = [
    "init_metrics",
    "distance_to_base",
    "subtree_size",
    "tree_height",
    "farthest_point",
    "eccentricity",
    "diameter",
    "summarize_map",
]
