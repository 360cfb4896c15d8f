"""Unit tests for each / reduce / conditionals / macros / serialization."""

from __future__ import annotations

import logging
from typing import Any, List

import pytest

from app.Data.Person import Person
from app.Support.Collection import Collection, collect
from app.Support.Exceptions import (
    ArityMismatchException,
    EmptyCollectionException,
    KeyNotFoundException,
)
from app.Testing.TestCase import TestCase


class TestEachAndReduce(TestCase):
    """each / reduce."""

    def test_each_visits_in_order(self) -> None:
        visited: List[Any] = []

        collect({"a": 1, "b": 2}).each(lambda value, key: visited.append((key, value)))

        assert visited == [("a", 1), ("b", 2)]

    def test_each_stops_when_callback_returns_false(self) -> None:
        visited: List[int] = []

        def visit(value: int) -> bool:
            visited.append(value)
            return value != 2

        collection = collect([1, 2, 3])

        assert collection.each(visit) is collection
        assert visited == [1, 2]

    def test_reduce(self) -> None:
        assert collect([1, 2, 3]).reduce(lambda carry, value: carry + value, 0) == 6

    def test_reduce_with_key(self) -> None:
        result = collect({"a": 1, "b": 2}).reduce(lambda carry, value, key: carry + key * value, "")

        assert result == "abb"

    def test_reduce_empty_returns_initial(self) -> None:
        assert collect().reduce(lambda carry, value: carry + value, 10) == 10
        assert collect().reduce(lambda carry, value: carry + value) is None


class TestConditionals(TestCase):
    """when / unless / pipe / tap."""

    def test_when_applies_callback_on_truthy_condition(self) -> None:
        assert collect([1]).when(True, lambda collection: collection.push(2)).all() == [1, 2]

    def test_when_skips_callback_on_falsy_condition(self) -> None:
        collection = collect([1])

        assert collection.when(False, lambda c: c.push(2)) is collection
        assert collection.all() == [1]

    def test_when_uses_default_on_falsy_condition(self) -> None:
        result = collect([1]).when(0, lambda c: c.push(2), lambda c: c.push(3))

        assert result.all() == [1, 3]

    def test_when_passes_condition_value(self) -> None:
        result = collect([1]).when("x", lambda c, value: c.push(value))

        assert result.all() == [1, "x"]

    def test_when_evaluates_callable_condition(self) -> None:
        result = collect([1, 2]).when(lambda c: c.count() > 1, lambda c: c.pop(2))

        assert result.all() == [2, 1]

    def test_when_callback_returning_none_gives_collection(self) -> None:
        collection = collect([1])

        assert collection.when(True, lambda c: None) is collection

    def test_unless(self) -> None:
        assert collect([1]).unless(False, lambda c: c.push(2)).all() == [1, 2]
        assert collect([1]).unless(True, lambda c: c.push(2)).all() == [1]

    def test_pipe_returns_callback_result(self) -> None:
        assert collect([1, 2, 3]).pipe(lambda c: c.count()) == 3

    def test_tap_returns_collection(self) -> None:
        seen: List[int] = []
        collection = collect([1, 2])

        assert collection.tap(lambda c: seen.append(c.count())) is collection
        assert seen == [2]


class TestMacros(TestCase):
    """macro registration."""

    def test_registered_macro_is_callable_on_instances(self) -> None:
        Collection.macro("double", lambda collection: collection.map(lambda value: value * 2))

        assert Collection.has_macro("double")
        assert collect([1, 2]).double().all() == [2, 4]

    def test_macro_receives_arguments(self) -> None:
        Collection.macro("add", lambda collection, amount: collection.map(lambda value: value + amount))

        assert collect([1]).add(5).all() == [6]

    def test_unknown_attribute_raises(self) -> None:
        assert not Collection.has_macro("missing")

        with pytest.raises(AttributeError):
            collect().missing()


class TestSerialization(TestCase):
    """to_array / to_json and container protocol."""

    def test_to_array_converts_nested_collections(self) -> None:
        collection = collect({"names": collect(["Dira"]), "count": 1})

        self.assert_equals({"names": ["Dira"], "count": 1}, collection.to_array())

    def test_to_json(self) -> None:
        assert collect({"a": collect([1, 2])}).to_json() == '{"a": [1, 2]}'
        assert collect([Person("Dira")]).to_json() == '["Dira"]'

    def test_container_protocol(self) -> None:
        collection = collect(["Dira", "Wardana"])

        assert "Dira" in collection
        assert 0 not in collection
        assert len(collection) == 2
        assert collection
        assert not collect()

    def test_setitem_and_delitem(self) -> None:
        collection = collect(["a"])
        collection[5] = "b"
        collection.push("c")
        del collection[0]

        self.assert_equals({5: "b", 6: "c"}, collection.all())

        with pytest.raises(KeyNotFoundException):
            del collection[0]


class TestErrorLogging(TestCase):
    """Errors and macros are reported on the collection log channel."""

    def test_missing_key_is_logged(self, log_records: List[logging.LogRecord]) -> None:
        with pytest.raises(KeyNotFoundException):
            collect([1])["missing"]

        record = log_records[-1]
        assert record.levelno == logging.DEBUG
        assert record.name == "app.collection"
        assert "missing" in record.getMessage()
        assert record.context == {"exception": "KeyNotFoundException", "count": 1}  # type: ignore[attr-defined]

    def test_empty_pop_is_logged(self, log_records: List[logging.LogRecord]) -> None:
        with pytest.raises(EmptyCollectionException):
            collect().pop()

        assert log_records[-1].getMessage() == "Cannot pop() from an empty collection."

    def test_arity_mismatch_is_logged(self, log_records: List[logging.LogRecord]) -> None:
        with pytest.raises(ArityMismatchException):
            collect([[1]]).map_spread(lambda a, b: a + b)

        assert log_records[-1].context["exception"] == "ArityMismatchException"  # type: ignore[attr-defined]

    def test_macro_registration_is_logged(self, log_records: List[logging.LogRecord]) -> None:
        Collection.macro("noop", lambda collection: collection)

        assert log_records[-1].getMessage() == "Collection macro [noop] registered."
