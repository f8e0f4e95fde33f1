from .config_loader import ConfigLoader
from .defaults import DEFAULT_CONFIG, CONFIG_SCHEMA

__all__ = [
    'ConfigLoader',
    'DEFAULT_CONFIG',
    'CONFIG_SCHEMA'
]
