"""
Tremu Backend — Ordered Collections
=====================================

What:  Keeps the ``order`` values of one parent's children dense (0..n-1).
How:   Loads the siblings into a Python list sorted by (order, id), applies
       insert / move / remove as list operations, then writes each item's
       index back to its ``order`` attribute. Only items whose value actually
       changed are touched, so the session flushes the minimum set of rows.
Who:   ColumnService (columns per board) and TaskService (tasks per column).

Range rules:
    append             always valid, lands at len(collection)
    insert(position)   0 <= position <= len   (item comes from elsewhere)
    move(position)     0 <= position <  len   (item already in collection)

Positions are validated before anything is mutated, so a rejected request
leaves every row untouched.

    >>> cols = OrderedCollection([a, b, c])      # orders 0, 1, 2
    >>> cols.move(c, 0)
    >>> [x.order for x in (a, b, c)]
    [1, 2, 0]
"""

from typing import Generic, Iterable, Iterator, List, Protocol, TypeVar

from tremu.exceptions import ValidationError


class Orderable(Protocol):
    id: int
    order: int


T = TypeVar("T", bound=Orderable)


class OrderedCollection(Generic[T]):
    """Array-backed list of one parent's children with dense ``order`` values."""

    def __init__(self, items: Iterable[T]):
        # id breaks ties left by a concurrent writer; new (unflushed) items
        # have no id yet and sort last
        self._items: List[T] = sorted(
            items,
            key=lambda item: (item.order, item.id if item.id is not None else float("inf")),
        )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return any(existing is item for existing in self._items)

    @property
    def items(self) -> List[T]:
        return list(self._items)

    def append(self, item: T) -> int:
        """Add ``item`` after the last child and return its new order."""
        self._items.append(item)
        self._renumber()
        return item.order

    def insert(self, item: T, position: int) -> None:
        """
        Place an item coming from another parent at ``position``.

        Every child at or after ``position`` shifts up by one.
        """
        self._check_position(position, upper=len(self._items))
        self._items.insert(position, item)
        self._renumber()

    def move(self, item: T, position: int) -> None:
        """
        Move a child to ``position`` within this parent.

        Moving down the list decrements everything in (old, target];
        moving up increments everything in [target, old). Moving to the
        current position leaves every sibling untouched.
        """
        self._check_position(position, upper=len(self._items) - 1)
        index = self._index_of(item)
        if index == position:
            self._renumber()
            return
        self._items.pop(index)
        self._items.insert(position, item)
        self._renumber()

    def remove(self, item: T) -> None:
        """Drop a child; every later sibling moves down by one."""
        self._items.pop(self._index_of(item))
        self._renumber()

    # ── Internals ─────────────────────────────────────────────────────────

    def _index_of(self, item: T) -> int:
        for index, existing in enumerate(self._items):
            if existing is item:
                return index
        raise ValueError(f"{item!r} is not part of this collection")

    @staticmethod
    def _check_position(position: int, upper: int) -> None:
        if position < 0 or position > upper:
            raise ValidationError(
                message="Invalid request: New order is out of bounds",
                field="newOrder",
                context={"new_order": position, "max_order": upper},
            )

    def _renumber(self) -> None:
        for index, item in enumerate(self._items):
            if item.order != index:
                item.order = index
