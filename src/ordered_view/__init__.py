"""Sorted item views that turn edit batches into UI index batches."""

from ordered_view.edits import (
    Change,
    EditBatch,
    EditShapeError,
    ElementEdit,
    ListEdit,
    Mode,
    Replacement,
    make_edit,
)
from ordered_view.view import (
    Coordinate,
    GroupIndexError,
    GroupingIndex,
    IndexBatch,
    OrderedView,
    PositionError,
)

__all__ = [
    "Change",
    "Coordinate",
    "EditBatch",
    "EditShapeError",
    "ElementEdit",
    "GroupIndexError",
    "GroupingIndex",
    "IndexBatch",
    "ListEdit",
    "Mode",
    "OrderedView",
    "PositionError",
    "Replacement",
    "make_edit",
    "edits",
    "runtime",
    "view",
]

__version__ = "0.1.0"
