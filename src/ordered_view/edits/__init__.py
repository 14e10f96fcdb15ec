"""Edit batch shapes and change-stream helpers."""

from .changes import (
    Change,
    ChangeCount,
    count,
    deletions,
    delta,
    has_changes,
    insertions,
    normalized,
)
from .models import (
    MODES,
    EditBatch,
    EditShapeError,
    ElementEdit,
    ListEdit,
    Mode,
    Replacement,
    as_mode,
    ensure_mode,
    make_edit,
)

__all__ = [
    "Change",
    "ChangeCount",
    "EditBatch",
    "EditShapeError",
    "ElementEdit",
    "ListEdit",
    "MODES",
    "Mode",
    "Replacement",
    "as_mode",
    "count",
    "deletions",
    "delta",
    "ensure_mode",
    "has_changes",
    "insertions",
    "make_edit",
    "normalized",
]
