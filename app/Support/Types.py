"""
Collection Type System

Shared typing helpers for the collection layer:
- Generic key/value type variables
- Callback aliases for key-aware callbacks
- Protocol-based capabilities (arrayable, jsonable, constructible)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import (
    Any,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

# Collection type variables
T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T_co = TypeVar("T_co", covariant=True)

# Callbacks receive (value, key); single-parameter callables receive the value only
KeyAwareCallback: TypeAlias = Callable[..., Any]
Predicate: TypeAlias = Callable[..., bool]
KeyResolver: TypeAlias = "str | Callable[..., Hashable]"


@runtime_checkable
class Arrayable(Protocol):
    """Protocol for objects that can be converted to arrays."""

    def to_array(self) -> list[Any] | dict[Any, Any]:
        """Convert to array representation."""
        ...


@runtime_checkable
class Jsonable(Protocol):
    """Protocol for objects that can be converted to JSON."""

    def to_json(self, **kwargs: Any) -> str:
        """Convert to JSON string."""
        ...


class ConstructibleFromValue(Protocol[T_co]):
    """Capability required by ``Collection.map_into``.

    Any callable that builds an instance from exactly one positional value
    qualifies, which covers plain classes whose constructor takes a single
    argument.
    """

    def __call__(self, value: Any, /) -> T_co:
        ...


def is_index_key(key: Any) -> bool:
    """Check whether a key is an implicit sequential index (an int, not a bool)."""
    return isinstance(key, int) and not isinstance(key, bool)


__all__ = [
    "T",
    "U",
    "K",
    "V",
    "KeyAwareCallback",
    "Predicate",
    "KeyResolver",
    "Arrayable",
    "Jsonable",
    "ConstructibleFromValue",
    "is_index_key",
]
