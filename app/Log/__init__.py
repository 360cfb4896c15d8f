from __future__ import annotations

from .LogManager import (
    LogManager, 
    LogChannel, 
    LogLevel,
    LaravelFormatter,
    JsonFormatter,
    get_log_manager,
    set_log_manager,
    logger,
    log_debug,
    log_info,
    log_warning,
    log_error,
    log_critical
)

__all__ = [
    'LogManager', 
    'LogChannel', 
    'LogLevel',
    'LaravelFormatter',
    'JsonFormatter',
    'get_log_manager',
    'set_log_manager',
    'logger',
    'log_debug',
    'log_info',
    'log_warning',
    'log_error',
    'log_critical'
]
