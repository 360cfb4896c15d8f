from __future__ import annotations

from typing import Any, Optional


class CollectionException(Exception):
    """Base exception for Collection"""
    pass


class EmptyCollectionException(CollectionException, IndexError):
    """Exception raised when removing an item from an empty collection"""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}() from an empty collection.")


class KeyNotFoundException(CollectionException, KeyError):
    """Exception raised when a key is not present in the collection"""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Key `{key!r}` does not exist in the collection.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class LengthMismatchException(CollectionException, ValueError):
    """Exception raised when two collections must be paired one-to-one"""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual

        super().__init__(
            f"Cannot combine {expected} key(s) with {actual} value(s). "
            f"Both collections must have the same number of items."
        )


class ArityMismatchException(CollectionException, TypeError):
    """Exception raised when an item cannot be spread into a callback"""

    def __init__(self, expected: str, actual: int, key: Optional[Any] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.key = key

        super().__init__(
            f"Item at key `{key!r}` has {actual} value(s) but the callback "
            f"accepts {expected} positional argument(s)."
        )


class UnexpectedValueException(CollectionException, ValueError):
    """Exception raised when a callback returns a value of the wrong shape"""
    pass
