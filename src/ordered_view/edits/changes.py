"""Per-item change streams and their conversion into edit batches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, List, Literal, TypeVar

from .models import EditBatch, ensure_mode, make_edit

T = TypeVar("T")

ChangeKind = Literal["deleted", "inserted", "unchanged", "updated"]
CHANGE_KINDS: tuple[str, ...] = ("deleted", "inserted", "unchanged", "updated")


@dataclass(frozen=True, slots=True)
class Change(Generic[T]):
    """A single tagged event about one item."""

    kind: ChangeKind
    value: T

    def __post_init__(self) -> None:
        if self.kind not in CHANGE_KINDS:
            raise ValueError(f"Unknown change kind '{self.kind}'")

    @classmethod
    def deleted(cls, value: T) -> "Change[T]":
        return cls("deleted", value)

    @classmethod
    def inserted(cls, value: T) -> "Change[T]":
        return cls("inserted", value)

    @classmethod
    def unchanged(cls, value: T) -> "Change[T]":
        return cls("unchanged", value)

    @classmethod
    def updated(cls, value: T) -> "Change[T]":
        return cls("updated", value)


@dataclass(frozen=True, slots=True)
class ChangeCount:
    """Category totals for a change stream."""

    added: int = 0
    removed: int = 0
    changed: int = 0
    moved: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)

    def __str__(self) -> str:
        return (
            f"∑: {self.added} added, {self.removed} removed, "
            f"{self.changed} changed, {self.moved} moved"
        )


def delta(changes: Iterable[Change[T]], mode: str) -> EditBatch[T]:
    """Fold a change stream into the edit batch shape for ``mode``.

    ``"initial"`` keeps every value that was not deleted. ``"list"`` keeps
    insertions and deletions. ``"element"`` additionally records updates as
    changes, and unchanged values as moves once an insertion or deletion
    has shifted the stream.
    """

    mode = ensure_mode(mode)
    added: List[T] = []
    removed: List[T] = []
    changed: List[T] = []
    moved: List[T] = []
    has_movement = False

    for change in changes:
        kind = change.kind
        if mode == "initial":
            if kind != "deleted":
                added.append(change.value)
        elif kind == "deleted":
            removed.append(change.value)
        elif kind == "inserted":
            added.append(change.value)
        elif mode == "element":
            if kind == "updated":
                changed.append(change.value)
            elif has_movement:
                moved.append(change.value)

        if kind in ("inserted", "deleted"):
            has_movement = True

    return make_edit(mode, added=added, removed=removed, changed=changed, moved=moved)


def count(changes: Iterable[Change[T]], mode: str = "element") -> ChangeCount:
    batch = delta(changes, mode)
    return ChangeCount(
        added=len(batch.added),
        removed=len(batch.removed),
        changed=len(batch.changed),
        moved=len(batch.moved),
    )


def has_changes(changes: Iterable[Change[T]]) -> bool:
    """True when the stream inserts, deletes or updates anything."""

    return count(changes, "element").has_changes


def normalized(changes: Iterable[Change[T]]) -> List[Change[T]]:
    """Drop deletions and mark every surviving value as unchanged."""

    return [
        Change.unchanged(change.value) for change in changes if change.kind != "deleted"
    ]


def deletions(changes: Iterable[Change[T]]) -> List[T]:
    return [change.value for change in changes if change.kind == "deleted"]


def insertions(changes: Iterable[Change[T]]) -> List[T]:
    return [change.value for change in changes if change.kind == "inserted"]


__all__ = [
    "CHANGE_KINDS",
    "Change",
    "ChangeCount",
    "ChangeKind",
    "count",
    "deletions",
    "delta",
    "has_changes",
    "insertions",
    "normalized",
]
