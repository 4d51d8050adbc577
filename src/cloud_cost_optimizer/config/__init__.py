"""Configuration management for Cloud Cost Optimizer."""

from cloud_cost_optimizer.config.schema import (
    AWSConfig,
    Config,
    CredentialsConfig,
    LLMConfig,
    SessionConfig,
    StorageConfig,
    ValidationConfig,
)
from cloud_cost_optimizer.config.loader import get_cached_config, load_config

__all__ = [
    "Config",
    "AWSConfig",
    "LLMConfig",
    "CredentialsConfig",
    "StorageConfig",
    "ValidationConfig",
    "SessionConfig",
    "load_config",
    "get_cached_config",
]
