from __future__ import annotations

from collections.abc import Iterator, MappingView, Sequence, Set
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Union

from app.Support.Types import is_index_key

_MISSING = object()


class Arr:
    """Laravel-style array helper class with dot notation support.

    PHP arrays are ordered maps, so the keyed helpers here work on ``dict``
    instances where integer keys play the role of list indices.
    """
    
    @staticmethod
    def accessible(value: Any) -> bool:
        """Determine whether the given value is array accessible.

        Strings and bytes are scalars here even though they are sequences.
        """
        from app.Support.Collection import Collection
        if isinstance(value, (str, bytes, bytearray)):
            return False
        return isinstance(value, (Mapping, Collection, Sequence, Set, MappingView, Iterator))
    
    @staticmethod
    def items(value: Any) -> Dict[Hashable, Any]:
        """Get the keyed entries of an accessible value as a new dict."""
        from app.Support.Collection import Collection
        if isinstance(value, Collection):
            return value.to_dict()
        if isinstance(value, Mapping):
            return dict(value.items())
        if Arr.accessible(value):
            return dict(enumerate(value))
        raise TypeError(f"Value of type {type(value).__name__} is not array accessible")
    
    @staticmethod
    def wrap(value: Any) -> List[Any]:
        """Wrap the given value in an array if it's not already an array."""
        if value is None:
            return []
        if isinstance(value, tuple):
            return list(value)
        return value if isinstance(value, list) else [value]
    
    @staticmethod
    def is_list(data: Mapping[Hashable, Any]) -> bool:
        """Determine if the keys of a keyed array are exactly 0..n-1 in order."""
        return all(key == index and is_index_key(key) for index, key in enumerate(data))
    
    @staticmethod
    def next_index(data: Mapping[Hashable, Any]) -> int:
        """Get the index the next appended value would receive."""
        indices = [key for key in data if is_index_key(key)]
        return max(indices) + 1 if indices else 0
    
    @staticmethod
    def merge(*arrays: Mapping[Hashable, Any]) -> Dict[Hashable, Any]:
        """Merge keyed arrays: index keys are appended and renumbered, named keys overwrite."""
        result: Dict[Hashable, Any] = {}
        index = 0
        
        for array in arrays:
            for key, value in array.items():
                if is_index_key(key):
                    result[index] = value
                    index += 1
                else:
                    result[key] = value
        
        return result
    
    @staticmethod
    def collapse(data: Iterable[Any]) -> Dict[Hashable, Any]:
        """Collapse an array of arrays into a single keyed array.

        Elements that are not array accessible are skipped.
        """
        return Arr.merge(*(Arr.items(item) for item in data if Arr.accessible(item)))
    
    @staticmethod
    def flatten(data: Iterable[Any], depth: Union[int, float] = float('inf')) -> List[Any]:
        """Flatten a multi-dimensional array into a single level of values."""
        result: List[Any] = []
        
        for item in data:
            if not Arr.accessible(item):
                result.append(item)
                continue
            
            values = list(Arr.items(item).values())
            if depth == 1:
                result.extend(values)
            else:
                result.extend(Arr.flatten(values, depth - 1))
        
        return result
    
    @staticmethod
    def get(data: Mapping[Hashable, Any], key: Optional[Union[str, int]], default: Any = None) -> Any:
        """Get an item from an array using dot notation."""
        if key is None:
            return data
        
        if key in data:
            return data[key]
        
        if not isinstance(key, str) or '.' not in key:
            return default
        
        current: Any = data
        for segment in key.split('.'):
            if isinstance(current, Mapping) and segment in current:
                current = current[segment]
            else:
                return default
        
        return current
    
    @staticmethod
    def set(data: Dict[str, Any], key: str, value: Any) -> Dict[str, Any]:
        """Set an array item to a given value using dot notation."""
        keys = key.split('.')
        current = data
        
        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]
        
        current[keys[-1]] = value
        return data
    
    @staticmethod
    def has(data: Mapping[Hashable, Any], key: str) -> bool:
        """Check if an item exists in an array using dot notation."""
        return Arr.get(data, key, _MISSING) is not _MISSING
    
    @staticmethod
    def forget(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Remove an array item using dot notation."""
        keys = key.split('.')
        current: Any = data
        
        for k in keys[:-1]:
            if not isinstance(current, dict) or k not in current:
                return data
            current = current[k]
        
        if isinstance(current, dict):
            current.pop(keys[-1], None)
        
        return data
    
    @staticmethod
    def data_get(target: Any, key: Optional[Union[str, int, List[Any]]], default: Any = None) -> Any:
        """Get an item from an array, collection or object using dot notation."""
        if key is None:
            return target
        
        segments = key if isinstance(key, list) else (key.split('.') if isinstance(key, str) else [key])
        current = target
        
        for segment in segments:
            if Arr.accessible(current):
                entries = Arr.items(current)
                if segment in entries:
                    current = entries[segment]
                elif isinstance(segment, str) and segment.lstrip('-').isdigit() and int(segment) in entries:
                    current = entries[int(segment)]
                else:
                    return default
            elif isinstance(segment, str) and hasattr(current, segment):
                current = getattr(current, segment)
            else:
                return default
        
        return current
