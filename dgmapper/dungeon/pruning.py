"""Map mutations: critical-endpoint bookkeeping, dead-end pruning, re-rooting.

Every function mutates the map in place, bumps the matching counter in
``dmap.metrics`` and emits a debug event. Precondition failures raise
``ContractViolation`` before anything is changed.
"""

from __future__ import annotations

from ..logging_utils import get_logger
from .directions import Direction
from .errors import ContractViolation
from .points import Point, label

log = get_logger("dgmapper.pruning")


def add_crit_endpoint(dmap: "Map", p: Point) -> None:
    p = Point(*p)
    if dmap.crit_endpoints.add(p):
        dmap.metrics['crit_endpoints_added'] += 1


def backtrack_crit_endpoint(dmap: "Map", p: Point) -> None:
    """Move a critical endpoint one step toward the base.

    Used when the frontier room has been dealt with and the requirement now
    applies to its parent. The boss room stays critical for as long as it
    exists (the text form marks it implicitly), so it cannot be backtracked;
    remove it as a dead end instead.
    """
    p = Point(*p)
    if p not in dmap.crit_endpoints:
        raise ContractViolation(f"{label(p)} is not a critical endpoint")
    if p == dmap.boss:
        raise ContractViolation(f"boss room {label(p)} cannot be backtracked")
    parent = dmap.parent(p)
    dmap.crit_endpoints.remove(p)
    add_crit_endpoint(dmap, parent)
    dmap.metrics['crit_backtracks'] += 1
    log.debug(event="crit_backtrack", frm=label(p), to=label(parent))


def remove_dead_end(dmap: "Map", p: Point) -> None:
    """Turn a dead-end room into a gap.

    Removing the base is allowed when it has exactly one child; that child
    becomes the new base. Removing a critical endpoint moves the requirement
    to its parent.
    """
    p = Point(*p)
    if not dmap.is_dead_end(p, include_base_and_boss=True):
        raise ContractViolation(f"{label(p)} is not a dead end")
    if p == dmap.base:
        (d,) = dmap.children_dirs(p)
        new_base = p.add(d)
        dmap.base = new_base
        dmap[new_base] = Direction.NONE
        dmap.crit_endpoints.remove(new_base)
        # A requirement pushed onto the old base goes away with its room.
        dmap.crit_endpoints.discard(p)
        dmap.metrics['base_moves'] += 1
        log.debug(event="base_moved", frm=label(p), to=label(new_base))
    elif p in dmap.crit_endpoints:
        dmap.crit_endpoints.remove(p)
        add_crit_endpoint(dmap, dmap.parent(p))
    dmap[p] = Direction.GAP
    dmap.metrics['dead_ends_removed'] += 1
    log.debug(event="dead_end_removed", point=label(p), rooms=dmap.room_count)


def rebase(dmap: "Map", new_base: Point) -> None:
    """Re-root the tree at ``new_base`` in a single pass over the grid.

    Each room is rewritten with the direction toward its parent under the new
    rooting, as reported by ``traverse_whole_tree``.
    """
    new_base = Point(*new_base)
    if new_base == dmap.base:
        return
    if not dmap.is_room(new_base):
        raise ContractViolation(f"cannot rebase onto non-room {label(new_base)}")

    def rewrite(q, d, _depth):
        dmap[q] = d

    old_base = dmap.base
    dmap.traverse_whole_tree(new_base, rewrite)
    dmap[new_base] = Direction.NONE
    dmap.base = new_base
    dmap.metrics['rebases'] += 1
    log.debug(event="rebased", frm=label(old_base), to=label(new_base))


def clear(dmap: "Map") -> None:
    for col in dmap.grid:
        for y in range(len(col)):
            col[y] = Direction.NONE
    dmap.crit_endpoints.clear()
    dmap.metrics['clears'] += 1


__all__ = ["add_crit_endpoint", "backtrack_crit_endpoint", "remove_dead_end", "rebase", "clear"]
