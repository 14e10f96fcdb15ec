"""Contiguous group ranges derived from a sorted sequence."""

from __future__ import annotations

from bisect import bisect_right
from typing import Callable, Iterable, Optional, Sequence, Tuple, TypeVar

from .positions import Coordinate, GroupIndexError, PositionError

T = TypeVar("T")

GroupBy = Callable[[T], int]

DEFAULT_GROUP = 0


class GroupingIndex:
    """Half-open flat-index ranges, one per maximal run of equal group keys.

    Runs are recorded in the order they appear in the sequence. The caller's
    ordering must keep each key contiguous; that is not checked here.
    """

    __slots__ = ("_ranges", "_keys", "_starts")

    def __init__(
        self,
        ranges: Sequence[range] = (range(0, 0),),
        keys: Optional[Sequence[int]] = None,
    ) -> None:
        if not ranges:
            raise ValueError("GroupingIndex requires at least one range")
        self._ranges: Tuple[range, ...] = tuple(ranges)
        self._keys: Tuple[int, ...] = (
            tuple(keys) if keys is not None else tuple(range(len(self._ranges)))
        )
        if len(self._keys) != len(self._ranges):
            raise ValueError("keys and ranges must have the same length")
        self._starts = [span.start for span in self._ranges]

    @classmethod
    def derive(
        cls, sequence: Sequence[T], group_by: Optional[GroupBy] = None
    ) -> "GroupingIndex":
        size = len(sequence)
        if group_by is None or size == 0:
            return cls((range(0, size),), (DEFAULT_GROUP,))

        ranges: list[range] = []
        keys: list[int] = []
        start = 0
        current = group_by(sequence[0])
        for index in range(1, size):
            key = group_by(sequence[index])
            if key != current:
                ranges.append(range(start, index))
                keys.append(current)
                start = index
                current = key
        ranges.append(range(start, size))
        keys.append(current)
        return cls(ranges, keys)

    @property
    def ranges(self) -> Tuple[range, ...]:
        return self._ranges

    @property
    def keys(self) -> Tuple[int, ...]:
        return self._keys

    @property
    def total(self) -> int:
        return self._ranges[-1].stop

    def number_of_groups(self) -> int:
        return len(self._ranges)

    def range_of(self, group: int) -> range:
        if not 0 <= group < len(self._ranges):
            raise GroupIndexError(group, len(self._ranges))
        return self._ranges[group]

    def coordinate(self, index: int) -> Coordinate:
        """Translate a flat index into ``Coordinate(group, offset)``."""

        if not 0 <= index < self.total:
            raise PositionError(
                f"Index {index} out of range for {self.total} items", position=index
            )
        group = bisect_right(self._starts, index) - 1
        return Coordinate(group, index - self._starts[group])

    def flat_index(self, coordinate: Tuple[int, int]) -> int:
        """Translate ``(group, offset)`` back into a flat index."""

        group, offset = coordinate
        span = self.range_of(group)
        if not 0 <= offset < len(span):
            raise PositionError(
                f"Offset {offset} out of range for group {group} "
                f"with {len(span)} items",
                position=Coordinate(group, offset),
            )
        return span.start + offset

    def coordinates(self, indexes: Iterable[int]) -> Tuple[Coordinate, ...]:
        return tuple(self.coordinate(index) for index in indexes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupingIndex):
            return NotImplemented
        return self._ranges == other._ranges and self._keys == other._keys

    def __repr__(self) -> str:
        spans = ", ".join(
            f"{key}:[{span.start}, {span.stop})"
            for key, span in zip(self._keys, self._ranges)
        )
        return f"GroupingIndex({spans})"
