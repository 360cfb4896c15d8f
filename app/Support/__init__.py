from .Arr import Arr
from .Collection import Collection, collect
from .Config import config, ConfigRepository, env
from .Exceptions import (
    CollectionException,
    EmptyCollectionException,
    KeyNotFoundException,
    LengthMismatchException,
    ArityMismatchException,
    UnexpectedValueException,
)

__all__ = [
    "Arr",
    "Collection",
    "collect",
    "config", 
    "ConfigRepository",
    "env",
    "CollectionException",
    "EmptyCollectionException",
    "KeyNotFoundException",
    "LengthMismatchException",
    "ArityMismatchException",
    "UnexpectedValueException",
]
