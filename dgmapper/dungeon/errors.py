"""Error taxonomy for map operations.

All errors derive from ``MapError`` and carry a short ``code`` that the HTTP
layer returns to clients alongside the message.
"""

from __future__ import annotations


class MapError(Exception):
    code = "map_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class OutOfRangeError(MapError, IndexError):
    """A point outside ``[0, width) x [0, height)`` was read or written."""

    code = "out_of_range"


class ContractViolation(MapError, ValueError):
    """An operation's precondition does not hold (e.g. pruning a non dead end)."""

    code = "contract_violation"


class MalformedMapError(MapError, ValueError):
    """The stored directions do not form a single tree rooted at the base."""

    code = "malformed"


class MapParseError(MapError, ValueError):
    code = "parse_error"


__all__ = ["MapError", "OutOfRangeError", "ContractViolation", "MalformedMapError", "MapParseError"]
