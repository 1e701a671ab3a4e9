"""
CLI module for choropleth.
"""

from choropleth.cli.main import cli, info, main

__all__ = ["cli", "info", "main"]
