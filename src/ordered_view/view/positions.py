"""Position types and the errors raised when they fall out of range."""

from __future__ import annotations

from typing import NamedTuple, Optional, Union


class Coordinate(NamedTuple):
    """(group, offset) position inside a grouped view."""

    group: int
    offset: int


Position = Union[int, Coordinate]


class PositionError(IndexError):
    """Raised when a flat index or group offset is out of range."""

    def __init__(self, message: str, *, position: Optional[Position] = None) -> None:
        super().__init__(message)
        self.position = position


class GroupIndexError(IndexError):
    """Raised when a group index does not name a derived group."""

    def __init__(self, group: int, group_count: int) -> None:
        super().__init__(f"Group {group} out of range (0..{group_count - 1})")
        self.group = group
        self.group_count = group_count
