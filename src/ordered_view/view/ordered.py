"""Sorted view over caller items that turns edit batches into index batches."""

from __future__ import annotations

import operator
from functools import cmp_to_key
from typing import (
    Callable,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from ordered_view.edits import (
    EditBatch,
    ElementEdit,
    ListEdit,
    Mode,
    Replacement,
    as_mode,
    ensure_mode,
    make_edit,
)
from ordered_view.runtime import telemetry

from .grouping import GroupBy, GroupingIndex
from .positions import Coordinate, Position, PositionError

T = TypeVar("T")

OrderBy = Callable[[T, T], bool]
IndexBatch = EditBatch[Position]


def _find(
    items: Sequence[T], item: T, claimed: Optional[set[int]] = None
) -> Optional[int]:
    for index, candidate in enumerate(items):
        if candidate == item and (claimed is None or index not in claimed):
            return index
    return None


class OrderedView(Generic[T]):
    """Owns a sorted item sequence and reports positional changes.

    ``order_by`` is a strict "less than" predicate and ``group_by`` an
    optional classifier mapping each item to a group key. Both are fixed at
    construction. Items are compared with ``==`` when locating them.

    The view has a single writer: ``apply`` must not be called again (or
    the view read) while a previous call is still running.
    """

    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        *,
        order_by: OrderBy = operator.lt,
        group_by: Optional[GroupBy] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self._order_by = order_by
        self._sort_key = cmp_to_key(self._compare)
        self._group_by = group_by
        self._logger_name = logger_name
        self._items: List[T] = []
        self._grouping = GroupingIndex.derive(self._items, group_by)
        self._previous_grouping = self._grouping
        self._indexes: ElementEdit[int] = ElementEdit()
        self._mode: Mode = "initial"
        if items is not None:
            self.apply(Replacement(tuple(items)))

    def apply(self, edit: EditBatch[T]) -> IndexBatch:
        """Apply ``edit`` and return the positions it affected.

        Removed positions refer to the sequence before the edit; added,
        changed and moved positions refer to the sequence after it. When the
        view is grouped every position is a ``Coordinate``.
        """

        if not isinstance(edit, (Replacement, ListEdit, ElementEdit)):
            raise TypeError(f"Unsupported edit batch type '{type(edit).__name__}'")

        with telemetry.apply_span(
            edit.mode, len(self._items), logger_name=self._logger_name
        ) as handle:
            if isinstance(edit, Replacement):
                items, indexes = self._replace(edit.items)
            else:
                items, indexes = self._process(edit)
            grouping = GroupingIndex.derive(items, self._group_by)

            # Nothing above touches the view, so a failing order_by or
            # group_by leaves the previous state intact.
            self._previous_grouping = self._grouping
            self._items = items
            self._grouping = grouping
            self._indexes = indexes
            self._mode = edit.mode

            handle.record_counts(
                added=len(indexes.added),
                removed=len(indexes.removed),
                changed=len(indexes.changed),
                moved=len(indexes.moved),
                size=len(items),
                groups=grouping.number_of_groups(),
            )
            return self.indexes()

    def _replace(self, replacement: Sequence[T]) -> Tuple[List[T], ElementEdit[int]]:
        items = sorted(replacement, key=self._sort_key)
        return items, ElementEdit(added=range(len(items)))

    def _process(
        self, edit: Union[ListEdit[T], ElementEdit[T]]
    ) -> Tuple[List[T], ElementEdit[int]]:
        items = list(self._items)
        if edit.is_empty:
            return items, ElementEdit()

        # Removal positions are relative to the sequence before the edit.
        removed = self._positions(items, edit.removed, "removed")
        for index in reversed(removed):
            del items[index]

        items.extend(edit.added)
        for item in edit.changed:
            index = _find(items, item)
            if index is None:
                self._lookup_miss("changed", item)
                continue
            items[index] = item

        items.sort(key=self._sort_key)

        return items, ElementEdit(
            added=self._positions(items, edit.added, "added"),
            removed=removed,
            changed=self._positions(items, edit.changed, "changed"),
            moved=self._positions(items, edit.moved, "moved"),
        )

    def _compare(self, left: T, right: T) -> int:
        if self._order_by(left, right):
            return -1
        if self._order_by(right, left):
            return 1
        return 0

    def _positions(
        self, items: Sequence[T], targets: Iterable[T], category: str
    ) -> List[int]:
        # Equal targets each claim their own slot so duplicates map to
        # distinct positions.
        claimed: set[int] = set()
        for target in targets:
            index = _find(items, target, claimed)
            if index is None:
                self._lookup_miss(category, target)
                continue
            claimed.add(index)
        return sorted(claimed)

    def _lookup_miss(self, category: str, item: T) -> None:
        telemetry.record_lookup_miss(category, item, logger_name=self._logger_name)

    @property
    def last_edit_mode(self) -> Mode:
        return self._mode

    def indexes(
        self, mode: Optional[str] = None, *, section: Optional[int] = None
    ) -> IndexBatch:
        """Re-express the last computed positions under ``mode``.

        ``"initial"`` reports every current position. Without ``mode`` the
        shape of the last applied edit is used. ``section`` places every
        position of an ungrouped view in that section as a ``Coordinate``;
        grouped views always report their derived coordinates.
        """

        resolved = ensure_mode(mode or self._mode)
        if resolved == "initial":
            flat: EditBatch[int] = Replacement(tuple(range(len(self._items))))
        else:
            flat = as_mode(self._indexes, resolved)

        if self._group_by is None and section is None:
            return flat

        if self._group_by is None:
            return make_edit(
                resolved,
                added=[Coordinate(section, index) for index in flat.added],
                removed=[Coordinate(section, index) for index in flat.removed],
                changed=[Coordinate(section, index) for index in flat.changed],
                moved=[Coordinate(section, index) for index in flat.moved],
            )

        return make_edit(
            resolved,
            added=self._grouping.coordinates(flat.added),
            removed=self._previous_grouping.coordinates(flat.removed),
            changed=self._grouping.coordinates(flat.changed),
            moved=self._grouping.coordinates(flat.moved),
        )

    @property
    def grouping(self) -> GroupingIndex:
        return self._grouping

    def items(self) -> Tuple[T, ...]:
        return tuple(self._items)

    def item(self, position: Union[Position, Tuple[int, int]]) -> T:
        """Return the item at a flat index or a ``(group, offset)`` pair."""

        if isinstance(position, tuple):
            index = self._grouping.flat_index(position)
        else:
            index = position
        try:
            return self._items[index]
        except IndexError as exc:
            raise PositionError(
                f"Index {index} out of range for {len(self._items)} items",
                position=position,
            ) from exc

    __getitem__ = item

    def number_of_groups(self) -> int:
        return self._grouping.number_of_groups()

    def range_of(self, group: int) -> range:
        return self._grouping.range_of(group)

    def coordinate(self, index: int) -> Coordinate:
        return self._grouping.coordinate(index)

    def flat_index(self, coordinate: Tuple[int, int]) -> int:
        return self._grouping.flat_index(coordinate)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return (
            f"OrderedView(size={len(self._items)}, "
            f"groups={self._grouping.number_of_groups()}, mode={self._mode!r})"
        )


__all__ = ["IndexBatch", "OrderBy", "OrderedView"]
