"""Public dungeon map package interface."""

from .codec import decode_map, encode_map, pretty_map  # noqa: F401
from .config import MapConfig  # noqa: F401
from .directions import CARDINALS, Direction, RoomType, flip, to_room_type  # noqa: F401
from .errors import (  # noqa: F401
    ContractViolation,
    MalformedMapError,
    MapError,
    MapParseError,
    OutOfRangeError,
)
from .generator import generate_map  # noqa: F401
from .map import Map  # noqa: F401
from .points import INVALID, Point, PointSet, parse_chess_string, to_chess_string  # noqa: F401

__all__ = [
    "Map",
    "MapConfig",
    "Direction",
    "RoomType",
    "CARDINALS",
    "flip",
    "to_room_type",
    "Point",
    "PointSet",
    "INVALID",
    "to_chess_string",
    "parse_chess_string",
    "encode_map",
    "decode_map",
    "pretty_map",
    "generate_map",
    "MapError",
    "OutOfRangeError",
    "ContractViolation",
    "MalformedMapError",
    "MapParseError",
]
