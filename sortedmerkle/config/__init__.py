"""
Runtime Configuration Module

Provides configuration loading and management for sortedmerkle.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
