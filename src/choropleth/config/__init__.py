# src/choropleth/config/__init__.py
"""
Configuration system using Pydantic models loaded from YAML
"""

from choropleth.config.exceptions import (
    ConfigurationError,
    ConfigurationNotFoundError,
    ConfigurationValidationError,
)
from choropleth.config.loader import debug_config_loading, get_config, load_config
from choropleth.config.models import (
    AppConfig,
    ClassificationSettings,
    ExportConfig,
    GlobalConfig,
    LoggingConfig,
)

__all__ = [
    "AppConfig",
    "ClassificationSettings",
    "ExportConfig",
    "GlobalConfig",
    "LoggingConfig",
    "ConfigurationError",
    "ConfigurationNotFoundError",
    "ConfigurationValidationError",
    "load_config",
    "get_config",
    "debug_config_loading",
]
