"""PriorityCollection tests covering slot ordering and the scanning helpers."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from config_sh.domain.priority import PriorityCollection


def test_iteration_follows_slots_not_insertion_order() -> None:
    items: PriorityCollection[str] = PriorityCollection()
    items.set_at(1, "1")
    items.set_at(3, "2")
    items.set_at(2, "3")

    assert list(items) == ["1", "3", "2"]
    assert items.highest == 3


def test_set_at_overwrites_existing_slot() -> None:
    items: PriorityCollection[str] = PriorityCollection()
    items.set_at(1, "1")
    items.set_at(1, "2")

    assert len(items) == 1
    assert items.highest == 1
    assert items.get_at(1) == "2"


def test_add_appends_after_highest_slot() -> None:
    items: PriorityCollection[str] = PriorityCollection()
    assert items.add("1") == 1
    assert items.add("2") == 2

    assert items.get_at(1) == "1"
    assert items.get_at(2) == "2"


def test_add_top_prepends_before_lowest_slot() -> None:
    items: PriorityCollection[str] = PriorityCollection()
    items.add("3")
    items.add_top("1")
    items.add_top("2")

    assert items.lowest == -2
    assert items.get_at(-1) == "1"
    assert items.get_at(-2) == "2"
    assert list(items) == ["2", "1", "3"]


def test_documented_vegetable_order() -> None:
    items: PriorityCollection[str] = PriorityCollection()
    items.add("potato")
    items.add("tomato")
    items.add("carrot")
    items.add_top("onion")

    assert list(items) == ["onion", "potato", "tomato", "carrot"]


def test_iteration_is_restartable() -> None:
    items: PriorityCollection[int] = PriorityCollection()
    for value in (1, 2, 3):
        items.add(value)

    assert list(items) == list(items) == [1, 2, 3]


def test_first_returns_stored_instance() -> None:
    items: PriorityCollection[list[int]] = PriorityCollection()
    items.add([1])
    items.add([2])

    found = items.first(lambda entry: entry[0] == 2)
    assert found is items.get_at(2)
    found.append(99)
    assert items.get_at(2) == [2, 99]
    assert items.first(lambda entry: entry[0] == 7) is None


def test_map_first_short_circuits() -> None:
    items: PriorityCollection[int] = PriorityCollection()
    for value in (1, 2, 3):
        items.add(value)
    visited: list[int] = []

    def triple_two(value: int) -> int | None:
        visited.append(value)
        return value * 3 if value == 2 else None

    assert items.map_first(triple_two) == 6
    assert visited == [1, 2]


def test_map_first_keeps_falsy_results() -> None:
    items: PriorityCollection[int] = PriorityCollection()
    items.add(0)
    items.add(5)

    assert items.map_first(lambda value: value) == 0


def test_map_all_visits_every_item() -> None:
    items: PriorityCollection[int] = PriorityCollection()
    for value in (1, 2, 3, 4):
        items.add(value)
    visited: list[int] = []

    def evens(value: int) -> int | None:
        visited.append(value)
        return value if value % 2 == 0 else None

    assert items.map_all(evens) == [2, 4]
    assert visited == [1, 2, 3, 4]


def test_empty_collection_answers_nothing() -> None:
    items: PriorityCollection[int] = PriorityCollection()

    assert list(items) == []
    assert items.first(lambda _: True) is None
    assert items.map_first(lambda value: value) is None
    assert items.map_all(lambda value: value) == []


OPERATIONS = st.lists(st.tuples(st.booleans(), st.integers()), max_size=20)


@given(OPERATIONS)
def test_add_and_add_top_preserve_relative_order(operations) -> None:
    """Items added on top come out newest-first, appended items oldest-first, tops before defaults."""

    items: PriorityCollection[int] = PriorityCollection()
    tops: list[int] = []
    defaults: list[int] = []
    for on_top, value in operations:
        if on_top:
            items.add_top(value)
            tops.append(value)
        else:
            items.add(value)
            defaults.append(value)

    assert list(items) == list(reversed(tops)) + defaults
    assert len(items) == len(operations)


@given(st.dictionaries(st.integers(min_value=-50, max_value=50), st.text(max_size=3), max_size=15))
def test_set_at_iterates_in_ascending_slot_order(entries) -> None:
    items: PriorityCollection[str] = PriorityCollection()
    for slot, value in entries.items():
        items.set_at(slot, value)

    assert list(items) == [entries[slot] for slot in sorted(entries)]
    assert items.slots() == sorted(entries)
    if entries:
        assert items.lowest == min(0, min(entries))
        assert items.highest == max(0, max(entries))
