"""Configuration management for JSON Node Editor."""

from .models import EditorConfig
from .loader import (
    ConfigLoader,
    ConfigurationError,
    load_config,
)

__all__ = [
    'EditorConfig',
    'ConfigLoader',
    'ConfigurationError',
    'load_config',
]
