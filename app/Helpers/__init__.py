from __future__ import annotations

from .helpers import config, env, logger, collect, data_get, value, tap

__all__ = [
    # Application helpers
    'config', 'env', 'logger',
    
    # Collection helpers
    'collect', 'data_get',
    
    # Utility helpers
    'value', 'tap',
]
