from __future__ import annotations

import os
from typing import Any, Optional
from pathlib import Path


class Environment:
    """Laravel-style environment configuration loader."""
    
    def __init__(self, env_file: Optional[str] = None) -> None:
        self.env_file = env_file or ".env"
        self.loaded = False
        self._load_env_file()
    
    def _load_env_file(self) -> None:
        """Load environment variables from the nearest .env file, if any."""
        if self.loaded:
            return
        
        env_path = Path(self.env_file)
        if not env_path.exists():
            for parent in [Path.cwd()] + list(Path.cwd().parents):
                env_path = parent / self.env_file
                if env_path.exists():
                    break
            else:
                self.loaded = True
                return
        
        with open(env_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                
                key, value = line.split('=', 1)
                key = key.strip()
                value = value.strip()
                
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                    value = value[1:-1]
                
                # Real environment wins over the file
                if key not in os.environ:
                    os.environ[key] = value
        
        self.loaded = True
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get environment variable, casting Laravel-style literals."""
        value = os.getenv(key)
        if value is None:
            return default
        return self._convert_type(value)
    
    def _convert_type(self, value: str) -> Any:
        """Convert string values to appropriate types."""
        lowered = value.lower()
        
        if lowered in ('true', '(true)'):
            return True
        if lowered in ('false', '(false)'):
            return False
        if lowered in ('null', '(null)'):
            return None
        if lowered == '(empty)':
            return ''
        
        if value.isdigit() or (value.startswith('-') and value[1:].isdigit()):
            return int(value)
        
        try:
            if '.' in value:
                return float(value)
        except ValueError:
            pass
        
        return value
    
    def set(self, key: str, value: Any) -> None:
        """Set environment variable."""
        os.environ[key] = str(value)
    
    def has(self, key: str) -> bool:
        """Check if environment variable exists."""
        return key in os.environ


# Global environment instance
environment = Environment()


def env(key: str, default: Any = None) -> Any:
    """Get environment variable."""
    return environment.get(key, default)
