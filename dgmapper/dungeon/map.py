"""Completed dungeoneering map stored as a parent-pointer tree.

Every room cell stores the direction of its parent room; the base (root)
stores ``Direction.NONE``. Children are never stored: ``children_dirs`` finds
them by checking which neighbours point back at the cell. This keeps storage
at one value per cell and lets ``rebase`` re-root the whole tree by rewriting
that single grid.

Public contract:
    Map(width, height)                      fresh all-GAP grid
    Map.from_grid(grid, base, boss, crit_endpoints, validate=True)
    Map.parse(text)                         inverse of ``str(map)``
    Attributes: base, boss, crit_endpoints (PointSet), metrics (dict)
    Grid access: map[point] / map[point] = direction (column-major storage)

Traversals live in ``traversal``, distance metrics in ``metrics``, mutations
in ``pruning`` and validation in ``connectivity``; the methods here delegate
so callers only need the ``Map`` object.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from . import codec
from . import connectivity
from . import metrics as metrics_mod
from . import pruning
from . import traversal
from .config import MapConfig
from .directions import CARDINALS, Direction, RoomType
from .errors import ContractViolation, MapParseError, OutOfRangeError
from .points import INVALID, MAX_FILES, Point, PointSet, range_2d

Grid = List[List[Direction]]


class Map:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ContractViolation(f"map dimensions must be positive, got {width}x{height}")
        if width > MAX_FILES:
            raise ContractViolation(f"map width {width} exceeds {MAX_FILES} files (a-z)")
        # Column-major: grid[x][y]
        self.grid: Grid = [[Direction.GAP for _ in range(height)] for _ in range(width)]
        self.base: Point = INVALID
        self.boss: Point = INVALID
        self.crit_endpoints = PointSet()
        self.metrics = metrics_mod.init_metrics()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_grid(
        cls,
        parent_dirs: Sequence[Sequence[Direction]],
        base: Tuple[int, int],
        boss: Tuple[int, int] = INVALID,
        crit_endpoints=(),
        *,
        validate: bool = True,
    ) -> "Map":
        """Build a map from a column-major grid of parent directions.

        ``parent_dirs[x][y]`` is the stored direction of cell ``(x, y)``. When
        ``validate`` is true the grid must encode a single tree rooted at
        ``base`` (see ``connectivity.validate_map``).
        """
        width = len(parent_dirs)
        height = len(parent_dirs[0]) if width else 0
        if any(len(col) != height for col in parent_dirs):
            raise MapParseError("grid columns have different heights")
        m = cls(width, height)
        m.grid = [[Direction(v) for v in col] for col in parent_dirs]
        m.base = Point(*base)
        m.boss = Point(*boss)
        for p in crit_endpoints:
            m.crit_endpoints.add(Point(*p))
        if validate:
            m.validate()
        return m

    @classmethod
    def from_config(cls, config: MapConfig) -> "Map":
        return cls(config.width, config.height)

    @classmethod
    def parse(cls, text: str, validate: bool = True) -> "Map":
        return codec.decode_map(text, validate=validate)

    def copy(self) -> "Map":
        m = Map(self.width, self.height)
        m.grid = [list(col) for col in self.grid]
        m.base = self.base
        m.boss = self.boss
        m.crit_endpoints = self.crit_endpoints.copy()
        m.metrics = dict(self.metrics)
        return m

    # ------------------------------------------------------------------
    # Grid access
    # ------------------------------------------------------------------
    def __getitem__(self, p: Tuple[int, int]) -> Direction:
        x, y = p
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeError(f"point ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.grid[x][y]

    def __setitem__(self, p: Tuple[int, int], value: Direction) -> None:
        x, y = p
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeError(f"point ({x}, {y}) outside {self.width}x{self.height} grid")
        self.grid[x][y] = Direction(value)

    @property
    def width(self) -> int:
        return len(self.grid)

    @property
    def height(self) -> int:
        return len(self.grid[0])

    @property
    def max_rooms(self) -> int:
        return self.width * self.height

    @property
    def room_count(self) -> int:
        return len(self.get_rooms())

    @property
    def gap_count(self) -> int:
        return len(self.get_gaps())

    def in_range(self, p: Tuple[int, int]) -> bool:
        return 0 <= p[0] < self.width and 0 <= p[1] < self.height

    # ------------------------------------------------------------------
    # Tree structure
    # ------------------------------------------------------------------
    def parent(self, p: Point) -> Point:
        return Point(*p).add(self[p])

    def children_dirs(self, p: Point) -> List[Direction]:
        """Directions from ``p`` toward each child, in N/E/S/W order."""
        p = Point(*p)
        out = []
        for d in CARDINALS:
            p2 = p.add(d)
            if self.in_range(p2) and self.grid[p2.x][p2.y] == d.flip():
                out.append(d)
        return out

    def get_room_type(self, p: Point) -> RoomType:
        room_type = self[p].to_room_type()
        # Not a room (gap or unvisited): nothing else to look at.
        if p != self.base and room_type <= 0:
            return room_type
        for d in self.children_dirs(p):
            room_type |= d.to_room_type()
        return RoomType.GAP if room_type == 0 else room_type

    def is_room(self, p: Point) -> bool:
        return p == self.base or (self.in_range(p) and self.grid[p[0]][p[1]].is_cardinal)

    def is_dead_end(self, p: Point, include_base_and_boss: bool = False) -> bool:
        # Gaps are never dead ends; the boss only counts when asked to.
        if not self.is_room(p) or (p == self.boss and not include_base_and_boss):
            return False
        if p == self.base and include_base_and_boss:
            return len(self.children_dirs(p)) == 1
        return len(self.children_dirs(p)) == 0

    def is_bonus_dead_end(self, p: Point) -> bool:
        return self.is_dead_end(p) and p not in self.crit_endpoints

    def get_density(self, p: Point) -> int:
        """Number of orthogonal neighbours that are rooms (0-4)."""
        p = Point(*p)
        return sum(1 for d in CARDINALS if self.in_range(p.add(d)) and self.is_room(p.add(d)))

    # ------------------------------------------------------------------
    # Full-grid scans
    # ------------------------------------------------------------------
    def get_dead_ends(self, include_base_and_boss: bool = False) -> List[Point]:
        return [p for p in range_2d(self.width, self.height) if self.is_dead_end(p, include_base_and_boss)]

    def get_bonus_dead_ends(self) -> List[Point]:
        return [p for p in range_2d(self.width, self.height) if self.is_bonus_dead_end(p)]

    def get_rooms(self) -> List[Point]:
        return [p for p in range_2d(self.width, self.height) if self.is_room(p)]

    def get_gaps(self) -> List[Point]:
        return [p for p in range_2d(self.width, self.height) if self.grid[p.x][p.y] == Direction.GAP]

    def get_non_rooms(self) -> List[Point]:
        return [p for p in range_2d(self.width, self.height) if not self.is_room(p)]

    def get_crit_rooms(self) -> PointSet:
        """Base plus every room on the path from each critical endpoint to it."""
        rooms = PointSet([self.base])
        for e in self.crit_endpoints:
            self.traverse_to_base(e, rooms.add)
        return rooms

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def traverse_to_base(self, p: Point, visit: Callable[[Point], object]) -> None:
        traversal.traverse_to_base(self, p, visit)

    def traverse_subtree(self, p: Point, visit: Callable[[Point, int], object]) -> None:
        traversal.traverse_subtree(self, p, visit)

    def traverse_whole_tree(self, root: Point, visit: Callable[[Point, Direction, int], object]) -> None:
        traversal.traverse_whole_tree(self, root, visit)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------
    def distance_to_base(self, p: Point) -> int:
        return metrics_mod.distance_to_base(self, p)

    def subtree_size(self, p: Point) -> int:
        return metrics_mod.subtree_size(self, p)

    def get_tree_height(self) -> int:
        return metrics_mod.tree_height(self)

    def get_farthest_point(self, p: Point) -> Tuple[Point, int]:
        return metrics_mod.farthest_point(self, p)

    def get_eccentricity(self, p: Point) -> int:
        return metrics_mod.eccentricity(self, p)

    def get_diameter(self) -> int:
        return metrics_mod.diameter(self)

    def summary(self) -> dict:
        return metrics_mod.summarize_map(self)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_crit_endpoint(self, p: Point) -> None:
        pruning.add_crit_endpoint(self, p)

    def backtrack_crit_endpoint(self, p: Point) -> None:
        pruning.backtrack_crit_endpoint(self, p)

    def remove_dead_end(self, p: Point) -> None:
        pruning.remove_dead_end(self, p)

    def rebase(self, new_base: Point) -> None:
        pruning.rebase(self, new_base)

    def clear(self) -> None:
        pruning.clear(self)

    # ------------------------------------------------------------------
    # Validation / serialization
    # ------------------------------------------------------------------
    def validate(self) -> None:
        connectivity.validate_map(self)

    def is_valid(self) -> bool:
        return not connectivity.find_problems(self)

    def to_pretty_string(self) -> str:
        return codec.pretty_map(self)

    def __str__(self) -> str:
        return codec.encode_map(self)

    def __repr__(self) -> str:
        return f"<Map {self.width}x{self.height} base={self.base} rooms={self.room_count}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return (
            self.grid == other.grid
            and self.base == other.base
            and self.boss == other.boss
            and self.crit_endpoints == other.crit_endpoints
        )

    __hash__ = None  # mutable


__all__ = ["Map", "Grid"]
