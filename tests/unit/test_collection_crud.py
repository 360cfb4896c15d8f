"""Unit tests for the mutating collection operations."""

from __future__ import annotations

import pytest

from app.Support.Collection import collect
from app.Support.Exceptions import (
    CollectionException,
    EmptyCollectionException,
    KeyNotFoundException,
)
from app.Testing.TestCase import TestCase


class TestPushAndPop(TestCase):
    """push / pop."""
    
    def test_push_returns_same_collection(self) -> None:
        collection = collect([1])
        
        assert collection.push(2, 3) is collection
        assert collection.all() == [1, 2, 3]
    
    def test_push_after_named_keys_uses_next_index(self) -> None:
        collection = collect({"name": "Dira"})
        collection.push("first", "second")
        
        self.assert_equals({"name": "Dira", 0: "first", 1: "second"}, collection.all())
    
    def test_push_after_filter_continues_past_highest_index(self) -> None:
        collection = collect([1, 2, 3, 4]).filter(lambda value: value % 2 == 1)
        collection.push(5)
        
        self.assert_same_keys([0, 2, 3], collection)
    
    def test_pop_gives_back_the_index(self) -> None:
        collection = collect([1, 2, 3])
        collection.pop()
        collection.push(9)
        
        assert collection.all() == [1, 2, 9]
    
    def test_pop_many_returns_collection_last_first(self) -> None:
        collection = collect([1, 2, 3, 4])
        
        popped = collection.pop(2)
        
        assert popped.all() == [4, 3]
        assert collection.all() == [1, 2]
        assert collect().pop(3).all() == []
    
    def test_pop_on_empty_collection_raises(self) -> None:
        with pytest.raises(EmptyCollectionException) as exc_info:
            collect().pop()
        
        assert exc_info.value.operation == "pop"
        assert isinstance(exc_info.value, CollectionException)
        assert isinstance(exc_info.value, IndexError)


class TestShiftAndPrepend(TestCase):
    """shift / prepend and the index renumbering policy."""
    
    def test_shift_renumbers_remaining_indices(self) -> None:
        collection = collect([1, 2, 3])
        
        assert collection.shift() == 1
        assert collection.all() == [2, 3]
    
    def test_shift_many(self) -> None:
        collection = collect([1, 2, 3])
        
        assert collection.shift(2).all() == [1, 2]
        assert collection.all() == [3]
    
    def test_shift_on_empty_collection_raises(self) -> None:
        with pytest.raises(EmptyCollectionException):
            collect().shift()
    
    def test_prepend_renumbers_indices(self) -> None:
        collection = collect([1, 2, 3])
        
        assert collection.prepend(0) is collection
        assert collection.all() == [0, 1, 2, 3]
    
    def test_prepend_closes_gaps_and_keeps_named_keys(self) -> None:
        collection = collect({3: "c", "name": "Dira", 7: "g"})
        collection.prepend("z")
        
        self.assert_equals({0: "z", 1: "c", "name": "Dira", 2: "g"}, collection.all())
    
    def test_prepend_with_key(self) -> None:
        collection = collect({"b": 2, "a": 1})
        collection.prepend(10, "a")
        
        self.assert_equals({"a": 10, "b": 2}, collection.all())
    
    def test_push_after_prepend(self) -> None:
        collection = collect([1]).prepend(0)
        collection.push(2)
        
        assert collection.all() == [0, 1, 2]


class TestPullPutForget(TestCase):
    """pull / put / forget / item assignment."""
    
    def test_pull_removes_without_renumbering(self) -> None:
        collection = collect(["a", "b", "c"])
        
        assert collection.pull(1) == "b"
        assert collection.all() == {0: "a", 2: "c"}
    
    def test_pull_missing_key_raises(self) -> None:
        collection = collect({"name": "Dira"})
        
        with pytest.raises(KeyNotFoundException) as exc_info:
            collection.pull("country")
        
        assert exc_info.value.key == "country"
        assert "country" in str(exc_info.value)
        assert collection.all() == {"name": "Dira"}
    
    def test_pull_missing_key_with_default(self) -> None:
        assert collect().pull("missing", None) is None
    
    def test_put_keeps_position_of_existing_key(self) -> None:
        collection = collect({"a": 1, "b": 2, "c": 3})
        
        assert collection.put("b", 20) is collection
        assert collection.items() == [("a", 1), ("b", 20), ("c", 3)]
    
    def test_put_appends_new_key(self) -> None:
        collection = collect({"a": 1})
        collection.put("b", 2)
        
        assert collection.keys().all() == ["a", "b"]
    
    def test_put_with_large_index_moves_next_index(self) -> None:
        collection = collect([1])
        collection.put(5, 6)
        collection.push(7)
        
        self.assert_same_keys([0, 5, 6], collection)
    
    def test_item_assignment_and_deletion(self) -> None:
        collection = collect({"a": 1})
        collection["b"] = 2
        del collection["a"]
        
        assert collection.all() == {"b": 2}
        
        with pytest.raises(KeyNotFoundException):
            del collection["a"]
    
    def test_forget_ignores_missing_keys(self) -> None:
        collection = collect({"a": 1, "b": 2})
        
        assert collection.forget("a", "missing") is collection
        assert collection.all() == {"b": 2}
