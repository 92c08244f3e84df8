"""
Tremu Backend — OrderedCollection Unit Tests
==============================================

What we test:
    ✅ append lands at the end
    ✅ move up / move down shift only the affected range
    ✅ move to the current position is a no-op
    ✅ insert from another parent and remove close/open gaps
    ✅ out-of-range positions raise before anything changes
    ✅ gaps or duplicates left by earlier writers are healed
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from tremu.exceptions import ValidationError
from tremu.ordering import OrderedCollection


@dataclass(eq=False)
class Item:
    id: Optional[int]
    order: int
    name: str = ""


def make_items(*names):
    return [Item(id=i + 1, order=i, name=name) for i, name in enumerate(names)]


def names(collection):
    return [item.name for item in collection]


def orders(items):
    return {item.name: item.order for item in items}


class TestAppend:

    def test_append_to_empty(self):
        collection = OrderedCollection([])
        item = Item(id=None, order=0, name="a")
        assert collection.append(item) == 0
        assert len(collection) == 1

    def test_append_goes_last(self):
        items = make_items("a", "b")
        collection = OrderedCollection(items)
        new = Item(id=None, order=0, name="c")
        assert collection.append(new) == 2
        assert names(collection) == ["a", "b", "c"]


class TestMove:

    def test_move_last_to_first(self):
        """A, B, C → move C to 0 gives C=0, A=1, B=2."""
        a, b, c = make_items("A", "B", "C")
        collection = OrderedCollection([a, b, c])

        collection.move(c, 0)

        assert names(collection) == ["C", "A", "B"]
        assert orders([a, b, c]) == {"C": 0, "A": 1, "B": 2}

    def test_move_down_decrements_range(self):
        a, b, c, d = make_items("a", "b", "c", "d")
        collection = OrderedCollection([a, b, c, d])

        collection.move(a, 2)

        assert orders([a, b, c, d]) == {"b": 0, "c": 1, "a": 2, "d": 3}

    def test_move_to_same_position_is_noop(self):
        items = make_items("a", "b", "c")
        collection = OrderedCollection(items)

        collection.move(items[1], 1)

        assert orders(items) == {"a": 0, "b": 1, "c": 2}

    @pytest.mark.parametrize("position", [-1, 3])
    def test_move_out_of_bounds(self, position):
        items = make_items("a", "b", "c")
        collection = OrderedCollection(items)

        with pytest.raises(ValidationError) as exc_info:
            collection.move(items[0], position)

        assert exc_info.value.message == "Invalid request: New order is out of bounds"
        assert orders(items) == {"a": 0, "b": 1, "c": 2}


class TestInsertAndRemove:

    def test_insert_shifts_following_items(self):
        items = make_items("a", "b")
        collection = OrderedCollection(items)
        newcomer = Item(id=99, order=5, name="x")

        collection.insert(newcomer, 1)

        assert names(collection) == ["a", "x", "b"]
        assert orders(items + [newcomer]) == {"a": 0, "x": 1, "b": 2}

    def test_insert_at_end_is_allowed(self):
        items = make_items("a", "b")
        collection = OrderedCollection(items)
        newcomer = Item(id=99, order=0, name="x")

        collection.insert(newcomer, 2)

        assert newcomer.order == 2

    def test_insert_past_end_rejected(self):
        collection = OrderedCollection(make_items("a"))
        with pytest.raises(ValidationError):
            collection.insert(Item(id=99, order=0, name="x"), 2)
        assert len(collection) == 1

    def test_remove_closes_gap(self):
        a, b, c = make_items("a", "b", "c")
        collection = OrderedCollection([a, b, c])

        collection.remove(a)

        assert a not in collection
        assert orders([b, c]) == {"b": 0, "c": 1}

    def test_remove_unknown_item(self):
        collection = OrderedCollection(make_items("a"))
        with pytest.raises(ValueError):
            collection.remove(Item(id=42, order=0))


class TestHealing:

    def test_gaps_are_compacted_on_next_mutation(self):
        a = Item(id=1, order=0, name="a")
        b = Item(id=2, order=4, name="b")
        c = Item(id=3, order=9, name="c")
        collection = OrderedCollection([c, a, b])

        collection.append(Item(id=None, order=0, name="d"))

        assert orders([a, b, c]) == {"a": 0, "b": 1, "c": 2}

    def test_duplicate_orders_break_ties_by_id(self):
        first = Item(id=1, order=0, name="first")
        second = Item(id=2, order=0, name="second")
        collection = OrderedCollection([second, first])

        assert names(collection) == ["first", "second"]

    def test_mixed_sequence_stays_dense(self):
        items = make_items("a", "b", "c", "d", "e")
        collection = OrderedCollection(items)
        newcomer = Item(id=10, order=0, name="f")

        collection.move(items[4], 0)
        collection.remove(items[2])
        collection.insert(newcomer, 2)
        collection.move(items[0], 4)
        collection.append(Item(id=None, order=0, name="g"))

        assert [item.order for item in collection] == list(range(len(collection)))
        assert names(collection) == ["e", "f", "b", "d", "a", "g"]
