from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Hashable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)
from collections.abc import Iterable as IterableABC
import inspect
import json

from app.Log import logger
from app.Support.Arr import Arr
from app.Support.Config import config
from app.Support.Exceptions import (
    ArityMismatchException,
    CollectionException,
    EmptyCollectionException,
    KeyNotFoundException,
    LengthMismatchException,
    UnexpectedValueException,
)
from app.Support.Types import (
    Arrayable,
    ConstructibleFromValue,
    Jsonable,
    K,
    KeyAwareCallback,
    KeyResolver,
    Predicate,
    U,
    V,
    is_index_key,
)

if TYPE_CHECKING:
    from typing_extensions import Self

_MISSING: Any = object()


def _positional_parameters(callback: Callable[..., Any]) -> Optional[List[inspect.Parameter]]:
    """Get the positional parameters of a callable, or None when they cannot be known.

    Builtins, builtin classes and methods of builtin types (``str.split``)
    are treated as unknown: their text signatures often describe alternative
    call forms rather than what a single value needs.
    """
    if inspect.isbuiltin(callback) or inspect.ismethoddescriptor(callback) \
            or (inspect.isclass(callback) and callback.__module__ == 'builtins'):
        return None
    
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None
    
    return [
        parameter for parameter in signature.parameters.values()
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
    ]


def _positional_arity(callback: Callable[..., Any]) -> Optional[Tuple[int, Optional[int]]]:
    """Get (required, maximum) positional parameters; maximum is None for ``*args``."""
    parameters = _positional_parameters(callback)
    if parameters is None:
        return None
    return _arity_of(parameters)


def _arity_of(parameters: List[inspect.Parameter]) -> Tuple[int, Optional[int]]:
    required = 0
    maximum: Optional[int] = 0
    for parameter in parameters:
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = None
        else:
            if maximum is not None:
                maximum += 1
            if parameter.default is inspect.Parameter.empty:
                required += 1
    
    return required, maximum


def _trimmed(callback: Callable[..., Any], available: int, fallback: int = 1) -> Callable[..., Any]:
    """Wrap a callback so it only receives as many arguments as it accepts.

    Collection callbacks are offered ``(value, key)`` (or ``(carry, value, key)``);
    a callback declaring fewer positional parameters gets the leading ones.
    """
    arity = _positional_arity(callback)
    if arity is None:
        limit = fallback
    elif arity[1] is None:
        limit = available
    else:
        limit = min(arity[1], available)
    
    if limit >= available:
        return callback
    
    def invoke(*args: Any) -> Any:
        return callback(*args[:limit])
    
    return invoke


class Collection(Generic[K, V]):
    """Laravel-style keyed collection.

    Entries live in an insertion-ordered dict. Integer keys are list-style
    indices, any other hashable is a named key. Key-preserving operations
    (map, filter, reject, partition) copy keys verbatim; operations that
    build a fresh result set number their values from zero.
    """
    
    _macros: ClassVar[Dict[str, Callable[..., Any]]] = {}
    
    def __init__(self, items: Any = None) -> None:
        self._items: Dict[Hashable, V] = self._get_arrayable_items(items)
        self._next_index: int = Arr.next_index(self._items)
    
    @classmethod
    def make(cls, items: Any = None) -> 'Collection[Any, Any]':
        """Create a new collection instance."""
        return cls(items)
    
    @classmethod
    def wrap(cls, value: Any) -> 'Collection[Any, Any]':
        """Wrap a value in a collection if it's not already one."""
        if isinstance(value, cls):
            return value
        return cls(Arr.wrap(value) if not isinstance(value, Mapping) else value)
    
    @classmethod
    def times(cls, number: int, callback: Optional[Callable[[int], Any]] = None) -> 'Collection[int, Any]':
        """Create a collection by invoking callback with 1..number."""
        if callback is None:
            return cls(list(range(1, number + 1)))
        return cls([callback(i) for i in range(1, number + 1)])
    
    @classmethod
    def empty(cls) -> 'Collection[Any, Any]':
        """Create an empty collection."""
        return cls()
    
    @staticmethod
    def _get_arrayable_items(items: Any) -> Dict[Hashable, Any]:
        """Normalize a source into keyed entries."""
        if items is None:
            return {}
        if isinstance(items, Collection):
            return items.to_dict()
        if isinstance(items, Mapping):
            return dict(items.items())
        if isinstance(items, Arrayable):
            return Collection._get_arrayable_items(items.to_array())
        if isinstance(items, Jsonable):
            return Collection._get_arrayable_items(json.loads(items.to_json()))
        if isinstance(items, (str, bytes, bytearray)):
            return {0: items}
        if isinstance(items, IterableABC):
            return dict(enumerate(items))
        return {0: items}
    
    # Core methods
    def all(self) -> Union[List[V], Dict[Any, V]]:
        """Get all items: a list when keys are 0..n-1 in order, else a dict."""
        if Arr.is_list(self._items):
            return list(self._items.values())
        return dict(self._items)
    
    def to_dict(self) -> Dict[Any, V]:
        """Get all entries as a dict, whatever the key shape."""
        return dict(self._items)
    
    def items(self) -> List[Tuple[Any, V]]:
        """Get the (key, value) pairs in order."""
        return list(self._items.items())
    
    def keys(self) -> 'Collection[int, Any]':
        """Get the keys of the collection items."""
        return type(self)(list(self._items.keys()))
    
    def values(self) -> 'Collection[int, V]':
        """Reset the keys on the underlying items."""
        return type(self)(list(self._items.values()))
    
    def count(self) -> int:
        """Get the number of items."""
        return len(self._items)
    
    def is_empty(self) -> bool:
        return not self._items
    
    def is_not_empty(self) -> bool:
        return bool(self._items)
    
    def get(self, key: Any, default: Any = None) -> Any:
        """Get an item by key, or the (lazily evaluated) default."""
        if key in self._items:
            return self._items[key]
        return default() if callable(default) else default
    
    def has(self, *keys: Any) -> bool:
        """Determine if all of the given keys exist."""
        return all(key in self._items for key in keys)
    
    def first(self, callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """Get the first item, or the first one passing a truth test."""
        if callback is None:
            return next(iter(self._items.values()), default)
        
        passes = _trimmed(callback, 2)
        for key, value in self._items.items():
            if passes(value, key):
                return value
        return default
    
    def last(self, callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """Get the last item, or the last one passing a truth test."""
        if callback is None:
            return next(reversed(self._items.values()), default)
        
        passes = _trimmed(callback, 2)
        for key, value in reversed(self._items.items()):
            if passes(value, key):
                return value
        return default
    
    def copy(self) -> 'Collection[K, V]':
        """Get a shallow copy of the collection."""
        return type(self)(self)
    
    # Adding/Removing items
    def push(self, *values: V) -> 'Self':
        """Add items to the end of the collection."""
        for value in values:
            self._items[self._next_index] = value
            self._next_index += 1
        return self
    
    def pop(self, count: int = 1) -> Any:
        """Remove and return the last item, or a collection of the last ``count`` items."""
        if count == 1:
            if not self._items:
                raise self._report(EmptyCollectionException('pop'))
            
            key, value = self._items.popitem()
            if is_index_key(key) and key == self._next_index - 1:
                self._next_index = key
            return value
        
        return type(self)([self.pop() for _ in range(min(count, len(self._items)))])
    
    def shift(self, count: int = 1) -> Any:
        """Remove and return the first item(s); remaining indices are renumbered."""
        if count == 1:
            if not self._items:
                raise self._report(EmptyCollectionException('shift'))
            
            value = self._items.pop(next(iter(self._items)))
            self._reindex()
            return value
        
        return type(self)([self.shift() for _ in range(min(count, len(self._items)))])
    
    def prepend(self, value: V, key: Any = None) -> 'Self':
        """Push an item onto the beginning of the collection.

        Without a key every index key is renumbered from zero; named keys are
        kept. With a key the entry is placed first under that key.
        """
        if key is None:
            self._items = Arr.merge({0: value}, self._items)
        else:
            rest = dict(self._items)
            rest.pop(key, None)
            self._items = {key: value, **rest}
        
        self._next_index = Arr.next_index(self._items)
        return self
    
    def pull(self, key: Any, default: Any = _MISSING) -> Any:
        """Remove an item by key and return it."""
        if key not in self._items:
            if default is _MISSING:
                raise self._report(KeyNotFoundException(key))
            return default
        return self._items.pop(key)
    
    def put(self, key: Any, value: V) -> 'Self':
        """Put an item in the collection by key, keeping its position if it exists."""
        self._items[key] = value
        if is_index_key(key) and key >= self._next_index:
            self._next_index = key + 1
        return self
    
    def forget(self, *keys: Any) -> 'Self':
        """Remove items by key, ignoring missing keys."""
        for key in keys:
            self._items.pop(key, None)
        return self
    
    def _reindex(self) -> None:
        self._items = Arr.merge(self._items)
        self._next_index = Arr.next_index(self._items)
    
    # Transforming
    def map(self, callback: Callable[..., U]) -> 'Collection[K, U]':
        """Run a map over each of the items, keeping keys.

        The callback receives ``(value, key)`` when its signature takes a
        second positional parameter, and the value alone otherwise. Methods of
        builtin types such as ``str.split`` always get the value alone.
        """
        transform = _trimmed(callback, 2)
        return type(self)({key: transform(value, key) for key, value in self._items.items()})
    
    def map_into(self, target: ConstructibleFromValue[U]) -> 'Collection[K, U]':
        """Build a new ``target`` from each item."""
        return type(self)({key: target(value) for key, value in self._items.items()})
    
    def map_spread(self, callback: Callable[..., U]) -> 'Collection[K, U]':
        """Run a map over each nested chunk of items, unpacked as arguments.

        A callback whose last positional parameter is named ``key`` also
        receives the chunk's key. With ``collection.strict_spread`` enabled a
        chunk whose length does not fit the remaining parameters raises
        ``ArityMismatchException`` before the callback runs.
        """
        strict = config.get('collection.strict_spread', True)
        parameters = _positional_parameters(callback)
        arity: Optional[Tuple[int, Optional[int]]] = None
        pass_key = False

        if parameters is not None:
            pass_key = bool(parameters) and parameters[-1].name == 'key' \
                and parameters[-1].kind is not inspect.Parameter.VAR_POSITIONAL
            arity = _arity_of(parameters[:-1] if pass_key else parameters)

        results: Dict[Hashable, U] = {}
        
        for key, chunk in self._items.items():
            if not Arr.accessible(chunk):
                raise self._report(UnexpectedValueException(
                    f"Item at key `{key!r}` of type {type(chunk).__name__} cannot be spread."
                ))
        
            arguments = list(self._get_arrayable_items(chunk).values())
        
            if arity is not None:
                if strict:
                    self._check_spread_arity(arity, len(arguments), key)
                elif arity[1] is not None:
                    arguments = arguments[:arity[1]]
        
            if pass_key:
                arguments.append(key)
        
            results[key] = callback(*arguments)
        
        return type(self)(results)
    
    def _check_spread_arity(self, arity: Tuple[int, Optional[int]], count: int, key: Any) -> None:
        required, maximum = arity
        if count >= required and (maximum is None or count <= maximum):
            return
        
        if maximum is None:
            expected = f"at least {required}"
        elif required == maximum:
            expected = str(required)
        else:
            expected = f"{required} to {maximum}"
        raise self._report(ArityMismatchException(expected, count, key))
    
    def map_to_dictionary(self, callback: KeyAwareCallback) -> 'Collection[Any, List[Any]]':
        """Run a dictionary map over the items.

        The callback returns a single key/value pair; values sharing a key are
        collected into a list in encounter order.
        """
        transform = _trimmed(callback, 2)
        dictionary: Dict[Hashable, List[Any]] = {}
        
        for key, value in self._items.items():
            pairs = self._key_value_pairs(transform(value, key), 'map_to_dictionary')
            if len(pairs) != 1:
                raise self._report(UnexpectedValueException(
                    f"map_to_dictionary() callback must return exactly one key/value pair, got {len(pairs)}."
                ))
            
            group, grouped = pairs[0]
            dictionary.setdefault(group, []).append(grouped)
        
        return type(self)(dictionary)
    
    def map_to_groups(self, callback: Callable[..., Any]) -> 'Collection[Any, Collection[int, Any]]':
        """Run a grouping map over the items into nested collections."""
        groups = self.map_to_dictionary(callback)
        return groups.map(lambda group: type(self)(group))
    
    def map_with_keys(self, callback: KeyAwareCallback) -> 'Collection[Any, Any]':
        """Run an associative map over each of the items."""
        transform = _trimmed(callback, 2)
        result: Dict[Hashable, Any] = {}
        
        for key, value in self._items.items():
            for mapped_key, mapped_value in self._key_value_pairs(transform(value, key), 'map_with_keys'):
                result[mapped_key] = mapped_value
        
        return type(self)(result)
    
    def _key_value_pairs(self, result: Any, operation: str) -> List[Tuple[Any, Any]]:
        """Read the pairs out of a keying callback's result (mapping or 2-tuple)."""
        if isinstance(result, Mapping):
            return list(result.items())
        if isinstance(result, Collection):
            return result.items()
        if isinstance(result, tuple) and len(result) == 2:
            return [result]
        raise self._report(UnexpectedValueException(
            f"{operation}() callback must return a mapping or a (key, value) pair, "
            f"got {type(result).__name__}."
        ))
    
    # Combining
    def zip(self, *items: Any) -> 'Collection[int, Collection[int, Any]]':
        """Zip the collection together with one or more arrays.

        Stops at the shortest input.
        """
        columns = [list(self._items.values())]
        columns.extend(list(self._get_arrayable_items(item).values()) for item in items)
        return type(self)([type(self)(list(row)) for row in zip(*columns)])
    
    def concat(self, source: Any) -> 'Collection[int, Any]':
        """Append the values of a source after this collection's values."""
        values = list(self._items.values())
        values.extend(self._get_arrayable_items(source).values())
        return type(self)(values)
    
    def combine(self, values: Any) -> 'Collection[Any, Any]':
        """Create a collection by using this collection for keys and another for its values."""
        keys = list(self._items.values())
        combined_values = list(self._get_arrayable_items(values).values())
        
        if len(keys) != len(combined_values):
            raise self._report(LengthMismatchException(len(keys), len(combined_values)))
        
        return type(self)(dict(zip(keys, combined_values)))
    
    def merge(self, items: Any) -> 'Collection[Any, Any]':
        """Merge items: named keys overwrite, indexed values are appended."""
        return type(self)(Arr.merge(self._items, self._get_arrayable_items(items)))
    
    # Flattening and grouping
    def collapse(self) -> 'Collection[Any, Any]':
        """Collapse the collection of items into a single array, one level deep."""
        return type(self)(Arr.collapse(self._items.values()))
    
    def flat_map(self, callback: Callable[..., Any]) -> 'Collection[Any, Any]':
        """Map a collection and flatten the result by a single level."""
        return self.map(callback).collapse()
    
    def flatten(self, depth: Union[int, float] = float('inf')) -> 'Collection[int, Any]':
        """Get a flattened array of the items in the collection."""
        return type(self)(Arr.flatten(self._items.values(), depth))
    
    def group_by(self, group_by: KeyResolver, preserve_keys: bool = False) -> 'Collection[Any, Collection[Any, V]]':
        """Group an associative array by a field or using a callback."""
        resolve = self._value_retriever(group_by)
        groups: Dict[Hashable, Dict[Hashable, V]] = {}
        
        for key, value in self._items.items():
            group = groups.setdefault(resolve(value, key), {})
            if preserve_keys:
                group[key] = value
            else:
                group[len(group)] = value
        
        return type(self)({name: type(self)(group) for name, group in groups.items()})
    
    def key_by(self, key_by: KeyResolver) -> 'Collection[Any, V]':
        """Key an associative array by a field or using a callback."""
        resolve = self._value_retriever(key_by)
        return type(self)({resolve(value, key): value for key, value in self._items.items()})
    
    def pluck(self, value: Union[str, int, List[Any]], key: Optional[Union[str, List[Any]]] = None) -> 'Collection[Any, Any]':
        """Get the values of a given key, optionally keyed by another."""
        if key is None:
            return type(self)([Arr.data_get(item, value) for item in self._items.values()])
        return type(self)({
            Arr.data_get(item, key): Arr.data_get(item, value)
            for item in self._items.values()
        })
    
    def _value_retriever(self, value: Union[str, Callable[..., Any]]) -> Callable[[Any, Any], Any]:
        if callable(value):
            return _trimmed(value, 2)
        return lambda item, key: Arr.data_get(item, value)
    
    # Joining
    def join(self, glue: str, final_glue: str = '') -> str:
        """Join all items with a string; the final pair may use a different glue."""
        if final_glue == '':
            return self.implode(glue)
        
        values = [str(value) for value in self._items.values()]
        if not values:
            return ''
        if len(values) == 1:
            return values[-1]
        
        return glue.join(values[:-1]) + final_glue + values[-1]
    
    def implode(self, value: Union[str, Callable[..., Any]], glue: Optional[str] = None) -> str:
        """Concatenate values of a given key (or the items themselves) as a string.

        ``implode(glue)`` joins the items; ``implode(key, glue)`` joins the
        plucked key; ``implode(callback, glue)`` joins the mapped items.
        """
        if callable(value):
            return self.map(value).implode(glue or '')
        if glue is None:
            return value.join(str(item) for item in self._items.values())
        return self.pluck(value).implode(glue)
    
    # Filtering and partitioning
    def filter(self, callback: Optional[Predicate] = None) -> 'Collection[K, V]':
        """Run a filter over each of the items; keys are never renumbered."""
        if callback is None:
            return type(self)({key: value for key, value in self._items.items() if value})
        
        passes = _trimmed(callback, 2)
        return type(self)({key: value for key, value in self._items.items() if passes(value, key)})
    
    def reject(self, callback: Predicate) -> 'Collection[K, V]':
        """Create a collection of all items that do not pass a truth test."""
        passes = _trimmed(callback, 2)
        return self.filter(lambda value, key: not passes(value, key))
    
    def partition(self, callback: Predicate) -> Tuple['Collection[K, V]', 'Collection[K, V]']:
        """Partition the collection into two collections, keeping keys."""
        passes = _trimmed(callback, 2)
        passed: Dict[Hashable, V] = {}
        failed: Dict[Hashable, V] = {}
        
        for key, value in self._items.items():
            if passes(value, key):
                passed[key] = value
            else:
                failed[key] = value
        
        return type(self)(passed), type(self)(failed)
    
    # Utility methods
    def each(self, callback: KeyAwareCallback) -> 'Self':
        """Execute a callback over each item; returning False stops the loop."""
        invoke = _trimmed(callback, 2)
        for key, value in list(self._items.items()):
            if invoke(value, key) is False:
                break
        return self
    
    def reduce(self, callback: Callable[..., Any], initial: Any = None) -> Any:
        """Reduce the collection to a single value with ``callback(carry, value, key)``."""
        invoke = _trimmed(callback, 3, fallback=2)
        carry = initial
        for key, value in self._items.items():
            carry = invoke(carry, value, key)
        return carry
    
    def pipe(self, callback: Callable[['Collection[K, V]'], U]) -> U:
        """Pass the collection to a callback and return the result."""
        return callback(self)
    
    def tap(self, callback: Callable[['Collection[K, V]'], Any]) -> 'Self':
        """Pass the collection to a callback and return the collection."""
        callback(self)
        return self
    
    def when(self, condition: Any, callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        """Apply the callback if the condition is truthy, else the default."""
        value = condition(self) if callable(condition) else condition
        
        if value:
            result = _trimmed(callback, 2)(self, value)
        elif default is not None:
            result = _trimmed(default, 2)(self, value)
        else:
            return self
        
        return self if result is None else result
    
    def unless(self, condition: Any, callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        """Apply the callback if the condition is falsy, else the default."""
        value = condition(self) if callable(condition) else condition
        return self.when(not value, callback, default)
    
    # Serialization
    def to_array(self) -> Union[List[Any], Dict[Any, Any]]:
        """Get the items as plain lists/dicts, converting nested collections."""
        converted = {
            key: value.to_array() if isinstance(value, Collection) else value
            for key, value in self._items.items()
        }
        return list(converted.values()) if Arr.is_list(converted) else converted
    
    def to_json(self, **kwargs: Any) -> str:
        """Convert collection to JSON."""
        return json.dumps(self.to_array(), default=str, **kwargs)
    
    # Magic methods
    def __iter__(self) -> Iterator[Tuple[Any, V]]:
        """Iterate over (key, value) pairs in order."""
        return iter(self._items.items())
    
    def __len__(self) -> int:
        return len(self._items)
    
    def __bool__(self) -> bool:
        return bool(self._items)
    
    def __contains__(self, value: Any) -> bool:
        """Check if a value is in the collection."""
        return value in self._items.values()
    
    def __getitem__(self, key: Any) -> V:
        if key not in self._items:
            raise self._report(KeyNotFoundException(key))
        return self._items[key]
    
    def __setitem__(self, key: Any, value: V) -> None:
        self.put(key, value)
    
    def __delitem__(self, key: Any) -> None:
        if key not in self._items:
            raise self._report(KeyNotFoundException(key))
        del self._items[key]
    
    def __eq__(self, other: object) -> bool:
        """Collections are equal when they hold equal (key, value) pairs in the same order."""
        if not isinstance(other, Collection):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())
    
    __hash__ = None  # type: ignore[assignment]
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.all()!r})"
    
    # Error reporting
    def _report(self, exception: CollectionException) -> CollectionException:
        """Log a collection error on the collection channel and hand it back for raising."""
        channel = config.get('collection.log_channel', 'collection')
        logger(channel).debug(str(exception), {
            'exception': type(exception).__name__,
            'count': len(self._items),
        })
        return exception
    
    # Macro system
    @classmethod
    def macro(cls, name: str, method: Callable[..., Any]) -> None:
        """Register a custom method callable as ``collection.name(*args)``."""
        cls._macros[name] = method
        logger(config.get('collection.log_channel', 'collection')).debug(
            f"Collection macro [{name}] registered.", {'macro': name}
        )
    
    @classmethod
    def has_macro(cls, name: str) -> bool:
        return name in cls._macros
    
    @classmethod
    def flush_macros(cls) -> None:
        cls._macros.clear()
    
    def __getattr__(self, name: str) -> Any:
        """Handle macro calls."""
        if not name.startswith('__') and name in self._macros:
            method = self._macros[name]
            
            def macro_method(*args: Any, **kwargs: Any) -> Any:
                return method(self, *args, **kwargs)
            
            return macro_method
        
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")


# Helper function
def collect(items: Any = None) -> Collection[Any, Any]:
    """Create a collection instance."""
    return Collection.make(items)
