#!/usr/bin/env python
"""
Main CLI entry point for choropleth.
"""

import sys
from pathlib import Path

import click
from loguru import logger
from rich import print as rprint

from choropleth import __version__
from choropleth.config import AppConfig, debug_config_loading, load_config
from choropleth.utils.logging import choropleth_logger, setup_logging

env_map = {
    "prod": "production",
    "production": "production",
    "dev": "development",
    "development": "development",
    "test": "test",
}


@click.group(context_settings={"show_default": True})
@click.version_option(version=__version__, prog_name="choropleth")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--env",
    "-e",
    type=click.Choice(list(env_map.keys())),
    default="development",
    envvar="CHOROPLETH_ENVIRONMENT",
    help="Environment (dev/prod/test)",
)
@click.option(
    "--verbose", "-v", is_flag=True, help="Enable verbose output and debug logging"
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Custom log file path (default: from configuration)",
)
@click.option("--log-info", is_flag=True, help="Show logging configuration and exit")
@click.pass_context
def cli(ctx, config, env, verbose, log_file, log_info):
    """choropleth - classify vector attributes into colored classes"""
    ctx.ensure_object(dict)

    environment = env_map[env.lower()]

    try:
        app_config: AppConfig = load_config(config_path=config, environment=environment)
    except Exception as e:
        rprint(f"[red]Configuration error: {e}[/red]")
        if verbose:
            import traceback

            rprint(f"[red]{traceback.format_exc()}[/red]")
        sys.exit(1)

    ctx.obj["app_config"] = app_config
    ctx.obj["config_path"] = config
    ctx.obj["environment"] = environment
    ctx.obj["verbose"] = verbose

    if verbose:
        rprint(f"[cyan]Environment: {environment}[/cyan]")
        rprint(f"[cyan]Log Level: {app_config.global_.log_level}[/cyan]")

    setup_logging(
        verbose=verbose, log_file=log_file, environment=environment, config_path=config
    )

    if log_info:
        choropleth_logger.show_log_info()
        ctx.exit()

    logger.debug(f"choropleth CLI started (environment: {environment})")


@cli.command()
def info() -> None:
    """Display information about the choropleth installation."""
    click.echo(f"choropleth version: {__version__}")
    click.echo(f"Python version: {sys.version.split()[0]}")

    try:
        import geopandas

        click.echo(f"geopandas version: {geopandas.__version__}")
    except ImportError:
        click.echo("geopandas: not available")


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Show how the configuration is resolved."""
    debug_config_loading(ctx.obj.get("config_path"), ctx.obj["environment"])


from choropleth.cli.classify_cmd import (  # noqa: E402
    apply_config,
    attributes,
    classify,
    methods,
    ramps,
)

cli.add_command(ramps)
cli.add_command(methods)
cli.add_command(attributes)
cli.add_command(classify)
cli.add_command(apply_config)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
