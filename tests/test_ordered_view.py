from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from ordered_view.edits import ElementEdit, ListEdit, Replacement
from ordered_view.view import Coordinate, OrderedView, PositionError

FRUITS = ("Banana", "Apple", "Strawberry")


def make_view(items: Optional[Iterable[str]] = None) -> OrderedView[str]:
    view: OrderedView[str] = OrderedView()
    if items is not None:
        view.apply(Replacement(tuple(items)))
    return view


def assert_sorted(view: OrderedView[str]) -> None:
    values = list(view)
    for left, right in zip(values, values[1:]):
        assert left < right


def test_replacement_sorts_items_and_reports_every_position() -> None:
    view = make_view()

    batch = view.apply(Replacement(FRUITS))

    assert list(view) == ["Apple", "Banana", "Strawberry"]
    assert batch == Replacement((0, 1, 2))
    assert view.last_edit_mode == "initial"


def test_list_edit_reports_added_position_after_sort() -> None:
    view = make_view(FRUITS)

    batch = view.apply(ListEdit(added=("Cherry",)))

    assert list(view) == ["Apple", "Banana", "Cherry", "Strawberry"]
    assert batch == ListEdit(added=(2,), removed=())


def test_element_edit_uses_old_positions_for_removals() -> None:
    view = make_view(FRUITS)

    batch = view.apply(
        ElementEdit(added=("Cherry",), removed=("Strawberry",), changed=("Apple",))
    )

    assert list(view) == ["Apple", "Banana", "Cherry"]
    assert isinstance(batch, ElementEdit)
    assert batch.changed == (0,)
    assert batch.added == (2,)
    assert batch.removed == (2,)
    assert batch.moved == ()


def test_changes_and_additions_after_previous_edits() -> None:
    view = make_view(FRUITS)
    view.apply(
        ElementEdit(added=("Cherry",), removed=("Strawberry",), changed=("Apple",))
    )

    batch = view.apply(ElementEdit(added=("Pineapple",), changed=("Cherry", "Banana")))

    assert list(view) == ["Apple", "Banana", "Cherry", "Pineapple"]
    assert batch.changed == (1, 2)
    assert batch.added == (3,)
    assert batch.removed == ()


def test_remove_all_but_one_reports_pre_edit_indexes() -> None:
    view = make_view(["Pineapple", "Cherry", "Banana", "Apple", "Strawberry"])

    batch = view.apply(
        ListEdit(removed=("Cherry", "Strawberry", "Pineapple", "Apple"))
    )

    assert list(view) == ["Banana"]
    assert batch == ListEdit(added=(), removed=(0, 2, 3, 4))


def test_removed_positions_replay_against_old_sequence() -> None:
    view = make_view(["Kiwi", "Apple", "Fig", "Date", "Lime", "Mango"])
    before = list(view)

    batch = view.apply(ListEdit(removed=("Lime", "Apple", "Date")))

    replay = list(before)
    for index in reversed(batch.removed):
        del replay[index]
    assert replay == list(view)


def test_removing_missing_item_is_a_no_op() -> None:
    view = make_view(FRUITS)

    batch = view.apply(ListEdit(removed=("Durian",)))

    assert batch == ListEdit()
    assert list(view) == ["Apple", "Banana", "Strawberry"]


def test_changing_missing_item_is_skipped() -> None:
    view = make_view(FRUITS)

    batch = view.apply(ElementEdit(changed=("Durian",)))

    assert batch == ElementEdit()
    assert len(view) == 3


def test_empty_edit_keeps_sequence_and_groups() -> None:
    view = make_view(FRUITS)
    grouping = view.grouping
    before = view.items()

    batch = view.apply(ElementEdit())

    assert batch.is_empty
    assert isinstance(batch, ElementEdit)
    assert view.items() == before
    assert view.grouping == grouping


def test_duplicate_additions_claim_distinct_positions() -> None:
    view = make_view(["Apple", "Cherry"])

    batch = view.apply(ListEdit(added=("Banana", "Banana")))

    assert list(view) == ["Apple", "Banana", "Banana", "Cherry"]
    assert batch.added == (1, 2)


def test_batch_counts_match_present_items() -> None:
    view = make_view(["Apple", "Banana", "Cherry", "Date"])

    batch = view.apply(
        ListEdit(added=("Elderberry", "Fig"), removed=("Banana", "Durian", "Date"))
    )

    assert len(batch.added) == 2
    assert len(batch.removed) == 2
    assert_sorted(view)


def test_moved_hints_resolve_to_new_positions() -> None:
    view = make_view(FRUITS)

    batch = view.apply(ElementEdit(added=("Avocado",), moved=("Banana",)))

    assert list(view) == ["Apple", "Avocado", "Banana", "Strawberry"]
    assert batch.moved == (2,)


def test_custom_order_by_is_used_for_sorting() -> None:
    view: OrderedView[str] = OrderedView(order_by=lambda a, b: a > b)

    view.apply(Replacement(FRUITS))
    batch = view.apply(ListEdit(added=("Cherry",)))

    assert list(view) == ["Strawberry", "Cherry", "Banana", "Apple"]
    assert batch.added == (1,)


def test_indexes_re_expresses_last_batch() -> None:
    view = make_view(FRUITS)
    view.apply(ElementEdit(added=("Cherry",), removed=("Banana",)))

    assert view.indexes("list") == ListEdit(added=(1,), removed=(1,))
    assert view.indexes("initial") == Replacement((0, 1, 2))
    assert view.indexes() == ElementEdit(added=(1,), removed=(1,))


def test_indexes_with_section_reports_coordinates() -> None:
    view = make_view(FRUITS)
    view.apply(ListEdit(added=("Cherry",)))

    batch = view.indexes(section=3)

    assert batch == ListEdit(added=(Coordinate(3, 2),), removed=())


def test_indexes_rejects_unknown_mode() -> None:
    view = make_view(FRUITS)

    with pytest.raises(ValueError):
        view.indexes("batch")


def test_apply_rejects_foreign_batch_types() -> None:
    view = make_view()

    with pytest.raises(TypeError):
        view.apply(["Apple"])  # type: ignore[arg-type]


def test_item_access_and_iteration() -> None:
    view = OrderedView(FRUITS)
    seen: List[str] = []

    for value in view:
        seen.append(value)

    assert seen == list(view)
    assert view.item(0) == "Apple"
    assert view[-1] == "Strawberry"
    assert view[(0, 1)] == "Banana"
    assert "Banana" in view
    assert len(view) == 3


def test_iteration_observes_new_state_after_apply() -> None:
    view = make_view(FRUITS)
    first = list(view)

    view.apply(ListEdit(removed=("Apple",)))

    assert first == ["Apple", "Banana", "Strawberry"]
    assert list(view) == ["Banana", "Strawberry"]


def test_item_out_of_range_raises_position_error() -> None:
    view = make_view(FRUITS)

    with pytest.raises(PositionError):
        view.item(3)

    with pytest.raises(IndexError):
        view.item((0, 5))


def test_replacement_discards_previous_content() -> None:
    view = make_view(FRUITS)

    batch = view.apply(Replacement(("Fig",)))

    assert list(view) == ["Fig"]
    assert batch == Replacement((0,))
    assert view.indexes("list") == ListEdit(added=(0,), removed=())


def test_constructor_accepts_initial_items() -> None:
    view = OrderedView(["Cherry", "Apple"])

    assert view.items() == ("Apple", "Cherry")
    assert view.indexes() == Replacement((0, 1))


def test_failing_order_by_leaves_view_untouched() -> None:
    view = make_view(["Apple", "Banana", "Cherry"])
    grouping = view.grouping
    last = view.indexes()

    with pytest.raises(TypeError):
        view.apply(ListEdit(added=(3,), removed=("Banana",)))  # type: ignore[arg-type]

    assert view.items() == ("Apple", "Banana", "Cherry")
    assert view.grouping == grouping
    assert view.indexes() == last
    assert view.apply(ListEdit(removed=("Banana",))) == ListEdit(removed=(1,))
