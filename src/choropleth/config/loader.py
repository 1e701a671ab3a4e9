# src/choropleth/config/loader.py
"""
Configuration loader supporting separate environment files and
environment variable overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from choropleth.config.exceptions import (
    ConfigurationNotFoundError,
    ConfigurationValidationError,
)
from choropleth.config.models import AppConfig

console = Console()

ENV_PREFIX = "CHOROPLETH"
SECTIONS = ["global", "classification", "export"]


class ConfigManager:
    """Config manager supporting separate environment files"""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    def load_config(
        self,
        config_path: Optional[Path] = None,
        environment: str = "development",
    ) -> AppConfig:
        """Load base config, merge environment overrides, then validate"""
        logger.debug(f"Loading configuration (environment: {environment})")

        # 1. Load base configuration
        base_config_data = self._load_base_config(config_path)

        # 2. Load environment-specific overrides
        env_config_data = self._load_environment_config(config_path, environment)

        # 3. Merge environment overrides into base config
        if env_config_data:
            self._merge_configs(base_config_data, env_config_data)

        # 4. Apply environment variable overrides
        self._apply_env_overrides(base_config_data)

        # 5. Create and validate config using Pydantic
        try:
            self._config = AppConfig(**base_config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(str(e)) from e
        return self._config

    def get_config(self) -> AppConfig:
        """Get loaded configuration, loading defaults on first access"""
        if self._config is None:
            return self.load_config()
        return self._config

    def _load_base_config(self, config_path: Optional[Path]) -> dict:
        """Load the base configuration file, or an empty dict for defaults"""
        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
        else:
            config_path = self._find_base_config_file()
            if config_path is None:
                logger.debug("No base configuration file found, using defaults")
                return {}

        logger.debug(f"Loading base config: {config_path}")
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data or {}

    def _load_environment_config(
        self, base_config_path: Optional[Path], environment: str
    ) -> Optional[dict]:
        """Load environment-specific configuration file"""
        for env_path in self._find_environment_config_paths(
            base_config_path, environment
        ):
            if env_path.exists():
                logger.debug(f"Loading environment config: {env_path}")
                with open(env_path, "r", encoding="utf-8") as f:
                    env_config = yaml.safe_load(f)
                if env_config:
                    return env_config
                logger.debug(f"Environment config is empty: {env_path}")

        logger.debug(f"No environment config found for '{environment}'")
        return None

    def _find_base_config_file(self) -> Optional[Path]:
        """Find the base configuration file"""
        search_paths = [
            Path("config/choropleth_config.yaml"),
            Path("config/config.yaml"),
            Path("~/.config/choropleth/config.yaml").expanduser(),
        ]

        for path in search_paths:
            if path.exists():
                return path
        return None

    def _find_environment_config_paths(
        self, base_config_path: Optional[Path], environment: str
    ) -> list[Path]:
        """Find possible environment configuration file paths"""
        if base_config_path:
            base_dir = Path(base_config_path).parent
        else:
            base_dir = Path("config")

        return [
            base_dir / "environments" / f"{environment}.yaml",
            base_dir / "environments" / f"{environment}.yml",
            base_dir / f"{environment}.yaml",
        ]

    def _merge_configs(self, base: dict, override: dict) -> None:
        """Recursively merge configuration dictionaries"""
        for key, value in override.items():
            if key.startswith("_"):  # Skip meta keys like _environment
                continue

            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value
                logger.debug(f"Override: {key} = {value}")

    def _apply_env_overrides(self, config: dict) -> None:
        """Apply CHOROPLETH_<SECTION>_<KEY> environment variable overrides"""
        for section in SECTIONS:
            prefix = f"{ENV_PREFIX}_{section.upper()}_"
            for env_var, value in os.environ.items():
                if not env_var.startswith(prefix):
                    continue
                key = env_var[len(prefix) :].lower()
                if not key:
                    continue
                config.setdefault(section, {})
                self._set_nested_value(config[section], key.split("__"), value)
                logger.debug(f"Env override: {env_var} = {value}")

    def _set_nested_value(self, config: dict, path: list[str], value: Any) -> None:
        """Set a nested configuration value"""
        current = config
        for key in path[:-1]:
            current = current.setdefault(key, {})
        current[path[-1]] = value


# Global instance
_config_manager = ConfigManager()


def load_config(
    config_path: Optional[Path] = None,
    environment: str = "development",
) -> AppConfig:
    """Load configuration with separate environment files"""
    return _config_manager.load_config(config_path, environment)


def get_config() -> AppConfig:
    """Get the loaded configuration"""
    return _config_manager.get_config()


def debug_config_loading(
    config_path: Optional[Path] = None, environment: str = "development"
) -> None:
    """Print each configuration layer and the merged result"""
    console.print(f"\n🔍 DEBUG: Loading config for environment '{environment}'")

    manager = ConfigManager()
    try:
        base_config = manager._load_base_config(config_path)
        console.print(
            f"📄 Base config log_level: {base_config.get('global', {}).get('log_level', 'NOT_SET')}"
        )

        env_config = manager._load_environment_config(config_path, environment)
        if env_config:
            console.print(
                f"🌍 Environment config log_level: {env_config.get('global', {}).get('log_level', 'NOT_SET')}"
            )
        else:
            console.print("🌍 No environment config loaded")

        app_config = manager.load_config(config_path, environment)
        console.print(f"✅ Final log_level: {app_config.global_.log_level}")
        console.print_json(data=app_config.to_dict())

    except Exception as e:
        console.print(f"❌ Error: {e}")
