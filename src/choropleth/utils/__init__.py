"""
Choropleth utilities: logging setup and the shared Rich console.
"""

from choropleth.utils.console import console
from choropleth.utils.logging import choropleth_logger, setup_logging

__all__ = [
    "choropleth_logger",
    "console",
    "setup_logging",
]
