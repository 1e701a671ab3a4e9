# src/choropleth/utils/logging.py
"""
Centralized logging configuration for the choropleth application.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from rich.console import Console

from choropleth.config import load_config

LEVEL_COLORS = {
    "ERROR": "bold red",
    "CRITICAL": "bold red",
    "WARNING": "bold orange1",
    "SUCCESS": "bold green",
}


class ChoroplethLogger:
    """Centralized logger with config integration."""

    def __init__(self):
        self.console = Console(stderr=True)
        self._is_configured = False
        self._current_level = "INFO"
        self._log_file: Optional[Path] = None
        self._environment = "development"

    def setup(
        self,
        verbose: bool = False,
        log_file: Optional[Path] = None,
        environment: str = "development",
        config_path: Optional[Path] = None,
    ):
        """
        Setup logging using the configuration system.

        Args:
            verbose: Enable debug logging (overrides config)
            log_file: Optional custom log file path (overrides config)
            environment: Environment name for config loading
            config_path: Optional path to config file
        """
        if self._is_configured:
            return

        self._environment = environment

        try:
            app_config = load_config(config_path=config_path, environment=environment)
        except Exception as e:
            # Fallback to basic logging if config fails
            self._setup_fallback_logging(verbose)
            logger.warning(f"Failed to load config, using fallback logging: {e}")
            return

        global_config = app_config.global_
        log_level = "DEBUG" if verbose else global_config.log_level
        self._current_level = log_level

        logger.remove()
        self._setup_console_logging(
            log_level, verbose, global_config.logging.console.model_dump()
        )

        if log_file:
            self._log_file = Path(log_file)
            self._setup_file_logging(log_level, {"rotation": "10 MB", "retention": "30 days"})
        elif global_config.logging.file.enabled:
            self._log_file = global_config.logging.get_file_path(environment)
            self._setup_file_logging(log_level, global_config.logging.file.model_dump())

        self._is_configured = True
        logger.debug(
            f"Choropleth logging initialized (level={log_level}, env={environment})"
        )

    def _setup_fallback_logging(self, verbose: bool):
        """Setup basic stderr logging when config loading fails."""
        logger.remove()
        log_level = "DEBUG" if verbose else "INFO"
        self._current_level = log_level
        logger.add(sys.stderr, format="{level}: {message}", level=log_level, colorize=False)
        self._is_configured = True

    def _setup_console_logging(self, log_level: str, verbose: bool, console_config: Dict):
        """Setup console logging through Rich, colouring the level name."""
        detailed = verbose or console_config.get("format") == "detailed"
        show_time = console_config.get("show_time", True)
        show_level = console_config.get("show_level", True)

        if not self.console.is_terminal:
            if detailed:
                format_str = "{time:HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
            else:
                parts = []
                if show_time:
                    parts.append("{time:HH:mm:ss}")
                if show_level:
                    parts.append("{level}")
                parts.append("{message}")
                format_str = " | ".join(parts)

            logger.add(sys.stderr, format=format_str, level=log_level, colorize=False, diagnose=verbose)
            return

        def rich_sink(message):
            record = message.record
            level = record["level"].name
            style = LEVEL_COLORS.get(level, "bold")
            colored_level = f"[{style}]{level}[/{style}]"
            time_str = f"[green]{record['time'].strftime('%H:%M:%S')}[/green]"

            if detailed:
                formatted_msg = (
                    f"{time_str} | {colored_level} | "
                    f"[cyan]{record['name']}:{record['function']}[/cyan] - {record['message']}"
                )
            else:
                msg_parts = []
                if show_time:
                    msg_parts.append(time_str)
                if show_level:
                    msg_parts.append(colored_level)
                msg_parts.append(record["message"])
                formatted_msg = " | ".join(msg_parts)

            try:
                self.console.print(formatted_msg, markup=True, highlight=False)
            except Exception:
                # Fallback to plain text if Rich markup fails
                plain_msg = f"{record['time'].strftime('%H:%M:%S')} | {level} | {record['message']}"
                self.console.print(plain_msg, markup=False, highlight=False)

        logger.add(rich_sink, format="{message}", level=log_level, colorize=False, diagnose=verbose)

    def _setup_file_logging(self, log_level: str, file_config: Dict):
        """Setup rotating file logging."""
        if not self._log_file:
            return

        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self._log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=log_level,
            rotation=file_config.get("rotation", "10 MB"),
            retention=file_config.get("retention", "30 days"),
        )

    def reset(self):
        """Forget the current setup so ``setup`` can run again."""
        self._is_configured = False

    def get_log_file_path(self) -> Optional[Path]:
        return self._log_file

    def show_log_info(self):
        """Display logging information."""
        self.console.print("[bold]Logging Configuration:[/bold]")
        self.console.print(f"  Environment: {self._environment}")
        self.console.print(f"  Level: {self._current_level}")
        self.console.print(f"  Log file: {self._log_file}")
        if self._log_file and self._log_file.exists():
            size_mb = self._log_file.stat().st_size / (1024 * 1024)
            self.console.print(f"  File size: {size_mb:.2f} MB")


# Global logger instance
choropleth_logger = ChoroplethLogger()


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    environment: str = "development",
    config_path: Optional[Path] = None,
):
    """Setup logging for the choropleth application."""
    choropleth_logger.setup(
        verbose=verbose,
        log_file=log_file,
        environment=environment,
        config_path=config_path,
    )
