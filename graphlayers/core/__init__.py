"""Core library configuration and utilities.

This package contains core functionality including:
- Configuration management (config.py)
- Logging setup (logging.py)
- The common exception base (exceptions.py)
"""

from graphlayers.core.config import Settings, get_settings, settings
from graphlayers.core.exceptions import GraphLayersError
from graphlayers.core.logging import get_logger, setup_logging

__all__ = [
    "GraphLayersError",
    "Settings",
    "get_logger",
    "get_settings",
    "settings",
    "setup_logging",
]
