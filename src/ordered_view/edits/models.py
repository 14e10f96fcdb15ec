"""Frozen dataclasses describing edit batches.

The same three shapes carry items (what the caller wants to change) and
positions (what the view reports back), so an index batch is simply an
edit batch whose payload is ``int`` or ``Coordinate``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Literal, Tuple, TypeVar, Union, cast

T = TypeVar("T")

Mode = Literal["initial", "list", "element"]
MODES: tuple[str, ...] = ("initial", "list", "element")


def ensure_mode(mode: str) -> Mode:
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}'. Expected one of {MODES}.")
    return cast(Mode, mode)


class EditShapeError(TypeError):
    """Raised when two batches of different shapes are combined."""

    def __init__(self, left: object, right: object) -> None:
        left_mode = getattr(left, "mode", type(left).__name__)
        right_mode = getattr(right, "mode", type(right).__name__)
        super().__init__(
            f"Cannot combine a '{left_mode}' batch with a '{right_mode}' batch"
        )
        self.left = left
        self.right = right


@dataclass(frozen=True, slots=True)
class Replacement(Generic[T]):
    """Full replacement: ``items`` become the entire content."""

    items: Tuple[T, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def mode(self) -> Mode:
        return "initial"

    @property
    def added(self) -> Tuple[T, ...]:
        return self.items

    @property
    def removed(self) -> Tuple[T, ...]:
        return ()

    @property
    def changed(self) -> Tuple[T, ...]:
        return ()

    @property
    def moved(self) -> Tuple[T, ...]:
        return ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __add__(self, other: object) -> "Replacement[T]":
        if not isinstance(other, Replacement):
            raise EditShapeError(self, other)
        return Replacement(self.items + other.items)

    def __str__(self) -> str:
        return f"Δ:initial: {len(self.items)}"


@dataclass(frozen=True, slots=True)
class ListEdit(Generic[T]):
    """Insertions and deletions only."""

    added: Tuple[T, ...] = ()
    removed: Tuple[T, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "added", tuple(self.added))
        object.__setattr__(self, "removed", tuple(self.removed))

    @property
    def mode(self) -> Mode:
        return "list"

    @property
    def changed(self) -> Tuple[T, ...]:
        return ()

    @property
    def moved(self) -> Tuple[T, ...]:
        return ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed)

    def __add__(self, other: object) -> "ListEdit[T]":
        if not isinstance(other, ListEdit):
            raise EditShapeError(self, other)
        return ListEdit(self.added + other.added, self.removed + other.removed)

    def __str__(self) -> str:
        return f"Δ:list: {len(self.added)} added, {len(self.removed)} removed"


@dataclass(frozen=True, slots=True)
class ElementEdit(Generic[T]):
    """Insertions, deletions, in-place changes and move hints."""

    added: Tuple[T, ...] = ()
    removed: Tuple[T, ...] = ()
    changed: Tuple[T, ...] = ()
    moved: Tuple[T, ...] = ()

    def __post_init__(self) -> None:
        for name in ("added", "removed", "changed", "moved"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def mode(self) -> Mode:
        return "element"

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed or self.moved)

    def __add__(self, other: object) -> "ElementEdit[T]":
        if not isinstance(other, ElementEdit):
            raise EditShapeError(self, other)
        return ElementEdit(
            added=self.added + other.added,
            removed=self.removed + other.removed,
            changed=self.changed + other.changed,
            moved=self.moved + other.moved,
        )

    def __str__(self) -> str:
        return (
            f"Δ:element: {len(self.added)} added, {len(self.removed)} removed, "
            f"{len(self.changed)} changed, {len(self.moved)} moved"
        )


EditBatch = Union[Replacement[T], ListEdit[T], ElementEdit[T]]

EDIT_TYPES = (Replacement, ListEdit, ElementEdit)


def make_edit(
    mode: str,
    *,
    added: Iterable[T] = (),
    removed: Iterable[T] = (),
    changed: Iterable[T] = (),
    moved: Iterable[T] = (),
) -> EditBatch[T]:
    """Build the batch shape matching ``mode``.

    Categories the shape cannot carry are dropped: ``"initial"`` keeps only
    ``added`` (as the replacement items) and ``"list"`` ignores ``changed``
    and ``moved``.
    """

    resolved = ensure_mode(mode)
    if resolved == "initial":
        return Replacement(tuple(added))
    if resolved == "list":
        return ListEdit(tuple(added), tuple(removed))
    return ElementEdit(
        added=tuple(added),
        removed=tuple(removed),
        changed=tuple(changed),
        moved=tuple(moved),
    )


def as_mode(batch: EditBatch[T], mode: str) -> EditBatch[T]:
    """Re-express ``batch`` in another shape."""

    if not isinstance(batch, EDIT_TYPES):
        raise TypeError(f"Unsupported edit batch type '{type(batch).__name__}'")
    return make_edit(
        mode,
        added=batch.added,
        removed=batch.removed,
        changed=batch.changed,
        moved=batch.moved,
    )


__all__ = [
    "EDIT_TYPES",
    "EditBatch",
    "EditShapeError",
    "ElementEdit",
    "ListEdit",
    "MODES",
    "Mode",
    "Replacement",
    "as_mode",
    "ensure_mode",
    "make_edit",
]
