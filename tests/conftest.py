"""Shared fixtures for the collection test suites."""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from app.Log import LogManager, set_log_manager
from app.Support.Collection import Collection
from app.Support.Config import config


class ListHandler(logging.Handler):
    """Handler that keeps emitted records in memory."""
    
    def __init__(self) -> None:
        super().__init__()
        self.records: List[logging.LogRecord] = []
    
    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def reset_macros() -> Iterator[None]:
    """Start every test without registered macros."""
    Collection.flush_macros()
    yield
    Collection.flush_macros()


@pytest.fixture
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Capture everything written to the collection log channel."""
    handler = ListHandler()
    manager = LogManager({
        'default': 'collection',
        'channels': {'collection': {'driver': 'null', 'level': 'debug'}},
    })
    manager.channel('collection').logger.addHandler(handler)
    set_log_manager(manager)
    
    yield handler.records
    
    set_log_manager(None)


@pytest.fixture
def fresh_config() -> Iterator[None]:
    """Reload configuration after a test that changed the environment or config."""
    yield
    config.reload()
