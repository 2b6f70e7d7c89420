"""Tree walks over the parent-pointer grid.

All walks are iterative so large grids do not hit the recursion limit, and all
of them stop with ``MalformedMapError`` instead of looping when the grid does
not actually encode a tree.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Tuple

from .directions import Direction
from .errors import ContractViolation, MalformedMapError
from .points import Point, label


def traverse_to_base(dmap: "Map", p: Point, visit: Callable[[Point], object]) -> None:
    """Call ``visit`` on ``p`` and every ancestor up to (excluding) the base.

    Starting from a non-room is a caller error (``ContractViolation``). The
    walk is bounded by the number of cells; a longer chain, or one that steps
    onto a non-room, means the grid is malformed.
    """
    p = Point(*p)
    if not dmap.is_room(p):
        raise ContractViolation(f"{label(p)} is not a room")
    limit = dmap.max_rooms
    steps = 0
    while p != dmap.base:
        if steps >= limit:
            raise MalformedMapError(f"parent chain from {label(p)} does not reach the base")
        if not dmap.in_range(p) or not dmap.grid[p.x][p.y].is_cardinal:
            raise MalformedMapError(f"parent chain leaves the tree at {label(p)}")
        visit(p)
        p = dmap.parent(p)
        steps += 1


def traverse_subtree(dmap: "Map", p: Point, visit: Callable[[Point, int], object]) -> None:
    """Pre-order walk of ``p`` and its descendants, children in N/E/S/W order."""
    limit = dmap.max_rooms
    seen = 0
    stack: List[Tuple[Point, int]] = [(Point(*p), 0)]
    while stack:
        node, depth = stack.pop()
        seen += 1
        if seen > limit:
            raise MalformedMapError("child links form a cycle")
        visit(node, depth)
        for d in reversed(dmap.children_dirs(node)):
            stack.append((node.add(d), depth + 1))


def _undirected_edges(dmap: "Map", p: Point) -> Iterator[Tuple[Point, Direction]]:
    """Tree neighbours of ``p`` paired with the direction leading back to ``p``.

    The parent edge comes first, then children in scan order.
    """
    stored = dmap.grid[p.x][p.y]
    if stored.is_cardinal:
        parent = p.add(stored)
        if dmap.in_range(parent):
            yield parent, stored.flip()
    for d in dmap.children_dirs(p):
        yield p.add(d), d.flip()


def traverse_whole_tree(dmap: "Map", root: Point, visit: Callable[[Point, Direction, int], object]) -> None:
    """Depth-first walk of the tree as an undirected graph rooted at ``root``.

    ``visit(point, direction, depth)`` is called for every point except
    ``root`` after that point's own branch is finished (post-order).
    ``direction`` leads from the point back to the one it was reached from,
    i.e. toward its parent if the tree were rooted at ``root``. Because each
    cell is reported only once nothing below it is still pending, so callers
    may overwrite the reported cell in place (see ``pruning.rebase``).
    """
    root = Point(*root)
    if not dmap.in_range(root):
        return
    visited = {root}
    # Frames: point, direction back, depth, pending neighbours.
    stack = [(root, None, 0, _undirected_edges(dmap, root))]
    while stack:
        node, back, depth, pending = stack[-1]
        nxt = next(pending, None)
        if nxt is None:
            stack.pop()
            if back is not None:
                visit(node, back, depth)
            continue
        q, q_back = nxt
        if q in visited:
            continue
        visited.add(q)
        stack.append((q, q_back, depth + 1, _undirected_edges(dmap, q)))


__all__ = ["traverse_to_base", "traverse_subtree", "traverse_whole_tree"]
