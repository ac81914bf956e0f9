"""Configuration management for job status checks."""

from .config_manager import ConfigManager
from .config_validator import ConfigValidator, UsageError

__all__ = ["ConfigManager", "ConfigValidator", "UsageError"]
