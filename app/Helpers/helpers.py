from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from app.Log import LogChannel
    from app.Support.Collection import Collection

T = TypeVar('T')


# Application Helpers
def config(key: Optional[str] = None, default: Any = None) -> Any:
    """Get configuration value, or the repository without a key."""
    from app.Support.Config import config as repository
    return repository(key, default)


def env(key: str, default: Any = None) -> Any:
    """Get environment variable, casting true/false/null/(empty) and numbers."""
    from config.env import env as get_env
    return get_env(key, default)


def logger(channel: Optional[str] = None) -> LogChannel:
    """Get log channel."""
    from app.Log import logger as get_logger
    return get_logger(channel)


# Collection Helpers
def collect(items: Any = None) -> Collection[Any, Any]:
    """Create collection instance."""
    from app.Support.Collection import Collection
    return Collection(items)


def data_get(target: Any, key: Any, default: Any = None) -> Any:
    """Get an item from an array, collection or object using dot notation."""
    from app.Support.Arr import Arr
    return Arr.data_get(target, key, default)


# Utility Helpers
def value(value: Union[Any, Callable[[], Any]]) -> Any:
    """Return value or call callable."""
    return value() if callable(value) else value


def tap(value: T, callback: Callable[[T], Any]) -> T:
    """Tap into a value."""
    callback(value)
    return value
