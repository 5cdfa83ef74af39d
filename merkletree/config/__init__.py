"""
Runtime Configuration Module

Provides configuration loading and management for merkletree.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
]
