from __future__ import annotations

from typing import Any, Dict, List, Optional
import importlib
import inspect
import pkgutil
from types import ModuleType

from app.Support.Arr import Arr
from config.env import env

_MISSING = object()


class ConfigRepository:
    """Laravel-style configuration repository.

    Every module of the ``config`` package contributes its public,
    non-callable attributes under the module's name, so ``config/logging.py``
    is read back as ``config.get('logging.channels.stderr.level')``.
    """
    
    def __init__(self, package: str = 'config') -> None:
        self._package = package
        self._config: Dict[str, Any] = {}
        self._cached: Dict[str, Any] = {}
        self._load_config()
    
    def _load_config(self, reload_modules: bool = False) -> None:
        """Load configuration from the config package modules."""
        package = importlib.import_module(self._package)
        
        for module_info in pkgutil.iter_modules(package.__path__):
            if module_info.name == 'env':
                continue
            
            module = importlib.import_module(f"{self._package}.{module_info.name}")
            if reload_modules:
                module = importlib.reload(module)
            
            self._config[module_info.name] = self._extract(module)
    
    @staticmethod
    def _extract(module: ModuleType) -> Dict[str, Any]:
        """Get all public, non-callable values defined by a config module."""
        return {
            key: value for key, value in vars(module).items()
            if not key.startswith('_') and not callable(value) and not inspect.ismodule(value)
        }
    
    def __call__(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Get a configuration value, or the repository itself without a key."""
        if key is None:
            return self
        return self.get(key, default)
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation."""
        if key in self._cached:
            return self._cached[key]
        
        value = Arr.get(self._config, key, _MISSING)
        if value is _MISSING:
            return default
        
        self._cached[key] = value
        return value
    
    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation."""
        Arr.set(self._config, key, value)
        self._clear_cache(key)
    
    def has(self, key: str) -> bool:
        """Check if a configuration key exists."""
        return Arr.has(self._config, key)
    
    def all(self) -> Dict[str, Any]:
        """Get all configuration."""
        return self._config.copy()
    
    def forget(self, key: str) -> None:
        """Remove a configuration value."""
        Arr.forget(self._config, key)
        self._clear_cache(key)
    
    def get_many(self, keys: List[str]) -> Dict[str, Any]:
        """Get multiple configuration values at once."""
        return {key: self.get(key) for key in keys}
    
    def _clear_cache(self, key: str) -> None:
        """Clear cache entries that overlap the given key."""
        stale = [k for k in self._cached if k.startswith(key) or key.startswith(k)]
        for k in stale:
            del self._cached[k]
    
    def flush(self) -> None:
        """Flush all cached configuration."""
        self._cached.clear()
    
    def reload(self) -> None:
        """Reload all configuration, re-reading the environment."""
        self._config.clear()
        self._cached.clear()
        self._load_config(reload_modules=True)


# Global config instance
config = ConfigRepository()


__all__ = ['ConfigRepository', 'config', 'env']
