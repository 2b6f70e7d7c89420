from dataclasses import dataclass
from typing import Optional


@dataclass
class MapConfig:
    # The in-game dungeon map is an 8x8 grid.
    width: int = 8
    height: int = 8
    # Validate tree structure whenever a map is decoded or built from a grid.
    strict: bool = True
    # Sample generator knobs.
    room_count: int = 24
    seed: Optional[int] = None


__all__ = ["MapConfig"]
