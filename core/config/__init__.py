"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle tree engine.
"""

from .runtime import (
    ApiConfig,
    LoggingConfig,
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
