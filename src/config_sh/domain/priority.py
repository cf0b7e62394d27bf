"""Sparse, integer-keyed priority collection.

Purpose
-------
Hold items at signed integer slots and visit them in ascending slot order. The
lowest slot is "first": reads and writes in the resolver stop at the first item
that answers, so the slot number *is* the precedence.

Contents
--------
* :class:`PriorityCollection` – generic container with ``add`` (new lowest
  precedence) and ``add_top`` (new highest precedence) plus scanning helpers.

System Role
-----------
:class:`config_sh.application.resolver.ConfigResolver` stores its sources here.
``add_top`` is what lets the environment overlay, registered after every file
scope, still outrank them without renumbering existing slots.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class PriorityCollection(Generic[T]):
    """Ordered container keyed by integer priority slots.

    Slots need not be contiguous and may be negative. Each slot holds at most
    one item; :meth:`set_at` on an occupied slot replaces it. The tracked
    bounds start at ``0`` so the first :meth:`add` lands in slot ``1`` and the
    first :meth:`add_top` in slot ``-1``.

    Examples
    --------
    >>> items = PriorityCollection()
    >>> items.add("potato")
    1
    >>> items.add("tomato")
    2
    >>> items.add_top("onion")
    -1
    >>> list(items)
    ['onion', 'potato', 'tomato']
    """

    def __init__(self) -> None:
        self._items: dict[int, T] = {}
        self._lowest = 0
        self._highest = 0

    @property
    def lowest(self) -> int:
        """Smallest slot seen so far (``0`` when nothing was placed below zero)."""

        return self._lowest

    @property
    def highest(self) -> int:
        """Largest slot seen so far (``0`` when nothing was placed above zero)."""

        return self._highest

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Yield items in ascending slot order.

        The slot order is captured when iteration starts; each call returns a
        fresh iterator.
        """

        for slot in self.slots():
            yield self._items[slot]

    def slots(self) -> list[int]:
        """Return the occupied slots in ascending order."""

        return sorted(self._items)

    def get_at(self, slot: int) -> T | None:
        """Return the item stored at *slot* or ``None``."""

        return self._items.get(slot)

    def set_at(self, slot: int, item: T) -> None:
        """Store *item* at *slot*, replacing any previous occupant, and widen the bounds."""

        self._items[slot] = item
        if slot > self._highest:
            self._highest = slot
        if slot < self._lowest:
            self._lowest = slot

    def add(self, item: T) -> int:
        """Place *item* after everything registered so far and return its slot."""

        slot = self._highest + 1
        self.set_at(slot, item)
        return slot

    def add_top(self, item: T) -> int:
        """Place *item* before everything registered so far and return its slot."""

        slot = self._lowest - 1
        self.set_at(slot, item)
        return slot

    def first(self, predicate: Callable[[T], bool]) -> T | None:
        """Return the first item (ascending slots) for which *predicate* is true.

        The returned object is the stored instance, so callers may mutate it in
        place.
        """

        for item in self:
            if predicate(item):
                return item
        return None

    def map_first(self, func: Callable[[T], U | None]) -> U | None:
        """Return the first non-``None`` result of *func*, short-circuiting.

        Examples
        --------
        >>> numbers = PriorityCollection()
        >>> for value in (1, 2, 3):
        ...     _ = numbers.add(value)
        >>> numbers.map_first(lambda n: n * 3 if n == 2 else None)
        6
        """

        for item in self:
            result = func(item)
            if result is not None:
                return result
        return None

    def map_all(self, func: Callable[[T], U | None]) -> list[U]:
        """Apply *func* to every item and collect the non-``None`` results in order."""

        collected: list[U] = []
        for item in self:
            result = func(item)
            if result is not None:
                collected.append(result)
        return collected
