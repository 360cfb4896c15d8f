from __future__ import annotations

import logging
import logging.handlers
from typing import Any, Dict, Optional, Union, List
from pathlib import Path
from datetime import datetime
import json
import sys
from enum import Enum


class LogLevel(Enum):
    """Log levels enum."""
    DEBUG = 'debug'
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'
    CRITICAL = 'critical'


def _resolve_level(level: Union[str, int, LogLevel]) -> int:
    """Turn 'debug', 'DEBUG', LogLevel.DEBUG or logging.DEBUG into an int level."""
    if isinstance(level, LogLevel):
        level = level.value
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


class LogChannel:
    """Laravel-style log channel."""
    
    def __init__(self, name: str, handlers: List[logging.Handler], level: Union[str, int] = logging.INFO) -> None:
        self.name = name
        self.logger = logging.getLogger(f"app.{name}")
        self.logger.setLevel(_resolve_level(level))
        self.logger.handlers = list(handlers)
        self.logger.propagate = False
    
    @property
    def handlers(self) -> List[logging.Handler]:
        return self.logger.handlers
    
    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, context)
    
    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log info message."""
        self._log(logging.INFO, message, context)
    
    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, context)
    
    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, context)
    
    def critical(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log critical message."""
        self._log(logging.CRITICAL, message, context)
    
    def log(self, level: Union[str, int, LogLevel], message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log message at specified level."""
        self._log(_resolve_level(level), message, context)
    
    def _log(self, level: int, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        extra = {'context': context} if context else {}
        self.logger.log(level, message, extra=extra)


class LaravelFormatter(logging.Formatter):
    """Laravel-style log formatter: ``[time] channel.LEVEL: message {context}``."""
    
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        channel = record.name.rsplit('.', 1)[-1]
        
        log_line = f"[{timestamp}] {channel}.{record.levelname}: {record.getMessage()}"
        
        context = getattr(record, 'context', {})
        if context:
            log_line += f" {json.dumps(context, default=str)}"
        
        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"
        
        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""
    
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name.rsplit('.', 1)[-1],
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }
        
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
        
        return json.dumps(log_entry, default=str)


class LogManager:
    """Laravel-style log manager.

    Channels are built on first use from the ``channels`` section of the
    logging configuration; unknown channel names fall back to stderr.
    """
    
    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config: Dict[str, Any] = config or {}
        self._channels: Dict[str, LogChannel] = {}
        self._default_channel: str = self._config.get('default', 'stderr')
    
    def channel(self, name: Optional[str] = None) -> LogChannel:
        """Get a log channel."""
        if name is None:
            name = self._default_channel
        
        if name not in self._channels:
            self._channels[name] = self._create_channel(name, self._channel_config(name))
        
        return self._channels[name]
    
    def _channel_config(self, name: str) -> Dict[str, Any]:
        return dict(self._config.get('channels', {}).get(name, {'driver': 'stderr'}))
    
    def _create_channel(self, name: str, config: Dict[str, Any]) -> LogChannel:
        driver = config.get('driver', 'stderr')
        level = config.get('level', logging.DEBUG)
        
        if driver == 'stack':
            return self._create_stack_channel(name, config)
        
        return LogChannel(name, [self._create_handler(name, driver, config)], level)
    
    def _create_handler(self, name: str, driver: str, config: Dict[str, Any]) -> logging.Handler:
        handler: logging.Handler
        
        if driver == 'single':
            path = Path(config.get('path', f'storage/logs/{name}.log'))
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path)
        elif driver == 'daily':
            path = Path(config.get('path', f'storage/logs/{name}.log'))
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.TimedRotatingFileHandler(
                path, when='midnight', interval=1, backupCount=config.get('days', 14)
            )
        elif driver == 'null':
            handler = logging.NullHandler()
        elif driver == 'stderr':
            handler = logging.StreamHandler(sys.stderr)
        else:
            raise ValueError(f"Log driver [{driver}] is not supported.")
        
        handler.setFormatter(self._get_formatter(config))
        return handler
    
    def _create_stack_channel(self, name: str, config: Dict[str, Any]) -> LogChannel:
        """Create a channel that writes through the handlers of other channels."""
        handlers: List[logging.Handler] = []
        for channel_name in config.get('channels', []):
            handlers.extend(self.channel(channel_name).handlers)
        
        return LogChannel(name, handlers, config.get('level', logging.DEBUG))
    
    def _get_formatter(self, config: Dict[str, Any]) -> logging.Formatter:
        if config.get('formatter', 'laravel') == 'json':
            return JsonFormatter()
        return LaravelFormatter()
    
    def stack(self, channels: List[str], channel: Optional[str] = None) -> LogChannel:
        """Create an on-demand stack of channels."""
        name = channel or f"stack_{'_'.join(channels)}"
        self._channels[name] = self._create_stack_channel(name, {'channels': channels})
        return self._channels[name]
    
    def build(self, config: Dict[str, Any]) -> LogChannel:
        """Build an on-demand channel from a channel definition."""
        name = f"ondemand_{len(self._channels)}"
        self._channels[name] = self._create_channel(name, config)
        return self._channels[name]
    
    def get_default_driver(self) -> str:
        return self._default_channel
    
    def set_default_driver(self, name: str) -> None:
        self._default_channel = name
    
    def get_channels(self) -> Dict[str, LogChannel]:
        return self._channels
    
    def forget_channel(self, name: str) -> None:
        self._channels.pop(name, None)
    
    # Proxy methods to default channel
    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().debug(message, context)
    
    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().info(message, context)
    
    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().warning(message, context)
    
    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().error(message, context)
    
    def critical(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().critical(message, context)
    
    def log(self, level: Union[str, int, LogLevel], message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.channel().log(level, message, context)


# Global log manager instance
log_manager_instance: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global log manager instance, configured from ``config('logging')``."""
    global log_manager_instance
    if log_manager_instance is None:
        from app.Support.Config import config
        log_manager_instance = LogManager(config.get('logging', {}))
    return log_manager_instance


def set_log_manager(manager: Optional[LogManager]) -> None:
    """Replace the global log manager; ``None`` rebuilds it from config on next use."""
    global log_manager_instance
    log_manager_instance = manager


def logger(channel: Optional[str] = None) -> LogChannel:
    """Get a log channel."""
    return get_log_manager().channel(channel)


# Convenience functions
def log_debug(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    get_log_manager().debug(message, context)


def log_info(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    get_log_manager().info(message, context)


def log_warning(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    get_log_manager().warning(message, context)


def log_error(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    get_log_manager().error(message, context)


def log_critical(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    get_log_manager().critical(message, context)
