"""Ordered view engine and its grouping index."""

from .grouping import GroupBy, GroupingIndex
from .ordered import IndexBatch, OrderBy, OrderedView
from .positions import Coordinate, GroupIndexError, Position, PositionError

__all__ = [
    "Coordinate",
    "GroupBy",
    "GroupIndexError",
    "GroupingIndex",
    "IndexBatch",
    "OrderBy",
    "OrderedView",
    "Position",
    "PositionError",
]
