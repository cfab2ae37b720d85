"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    DEFAULT_DOMAIN,
    ContractConfig,
    LoggingConfig,
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_DOMAIN",
    "ContractConfig",
    "LoggingConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
