# src/choropleth/cli/classify_cmd.py
"""
CLI commands to inspect vector attributes and classify them.
"""

import json
from pathlib import Path
from typing import Optional, Tuple

import click
from loguru import logger
from rich.table import Table

from choropleth.config import AppConfig, ConfigurationError
from choropleth.core.breaks import ClassificationMethod
from choropleth.core.engine import ClassificationEngine
from choropleth.core.exceptions import ChoroplethError
from choropleth.layers.events import EventBus
from choropleth.layers.geodata import load_layer
from choropleth.layers.registry import InMemoryLayerRegistry
from choropleth.publish.batch import BatchConfig, run_batch
from choropleth.publish.export import (
    classify_geodataframe,
    driver_for_path,
    write_classified,
)
from choropleth.utils.console import console

METHOD_CHOICES = [m.value for m in ClassificationMethod]


def _app_config(ctx) -> AppConfig:
    obj = ctx.obj or {}
    return obj.get("app_config") or AppConfig()


def _create_engine(app_config: AppConfig) -> Tuple[ClassificationEngine, InMemoryLayerRegistry]:
    bus = EventBus()
    registry = InMemoryLayerRegistry(events=bus)
    engine = ClassificationEngine(registry, events=bus, settings=app_config.classification)
    engine.connect(bus)
    return engine, registry


def _load(registry: InMemoryLayerRegistry, path: Path, layer: Optional[str]):
    try:
        return load_layer(registry, path, layer=layer)
    except ChoroplethError as e:
        console.print(f"[red]{e}[/red]")
        raise click.Abort()


@click.command()
@click.option("--name", "-n", help="Show the colors of a single ramp")
def ramps(name):
    """List the named color ramps."""
    table = Table(title="Color ramps", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Colors")

    names = [name] if name else ClassificationEngine.list_named_ramps()
    for ramp_name in names:
        colors = ClassificationEngine.get_ramp_colors(ramp_name)
        swatches = "".join(f"[on {c}]  [/]" for c in colors)
        table.add_row(ramp_name, swatches)
    console.print(table)


@click.command()
def methods():
    """List the classification methods."""
    table = Table(title="Classification methods", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    for key, label in ClassificationEngine.list_classification_methods().items():
        table.add_row(key, label)
    console.print(table)


@click.command()
@click.pass_context
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--layer", "-l", help="Layer name (multi-layer sources such as GeoPackage)")
def attributes(ctx, path, layer):
    """List the numeric attributes of a vector file."""
    engine, registry = _create_engine(_app_config(ctx))
    loaded = _load(registry, path, layer)

    names = engine.list_numeric_attributes(loaded.layer_id)
    if not names:
        console.print(f"[yellow]No numeric attributes in {loaded.display_name}[/yellow]")
        return

    console.print(f"[bold]{loaded.display_name}[/bold] numeric attributes:")
    for attribute_name in names:
        console.print(f"  • {attribute_name}")


@click.command()
@click.pass_context
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.argument("attribute")
@click.option("--layer", "-l", help="Layer name (multi-layer sources such as GeoPackage)")
@click.option(
    "--method",
    "-m",
    type=click.Choice(METHOD_CHOICES),
    default=None,
    help="Classification method (default: from configuration)",
)
@click.option("--classes", "-k", type=int, default=None, help="Number of classes")
@click.option("--ramp", "-r", default=None, help="Named color ramp")
@click.option(
    "--color",
    "-C",
    "colors",
    multiple=True,
    help="Custom color stop (repeat, at least two: -C '#ffffcc' -C '#800026')",
)
@click.option("--reverse", is_flag=True, help="Reverse the class colors")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write the classified features to this file",
)
@click.option("--json", "as_json", is_flag=True, help="Print breaks, colors and legend as JSON")
def classify(ctx, path, attribute, layer, method, classes, ramp, colors, reverse, output, as_json):
    """Classify ATTRIBUTE of a vector file and show its legend."""
    app_config = _app_config(ctx)
    settings = app_config.classification

    if classes is not None and not 1 <= classes <= settings.max_classes:
        raise click.BadParameter(
            f"must be between 1 and {settings.max_classes}", param_hint="--classes"
        )
    if len(colors) == 1:
        raise click.BadParameter("give at least two colors", param_hint="--color")

    engine, registry = _create_engine(app_config)
    loaded = _load(registry, path, layer)

    result = engine.apply(
        loaded.layer_id,
        attribute,
        ramp=ramp,
        method=method,
        num_classes=classes,
        reverse=reverse,
        custom_colors=list(colors) or None,
    )
    if not result:
        console.print(
            f"[red]Classification of '{attribute}' failed (see log for details)[/red]"
        )
        ctx.exit(1)

    legend = engine.get_legend(loaded.layer_id)

    if as_json:
        click.echo(
            json.dumps(
                {
                    **result.to_dict(),
                    "config": engine.get_active_config(loaded.layer_id).to_dict(),
                    "legend": legend.to_dict(),
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        legend.display(console)

    if output:
        classified = classify_geodataframe(
            loaded.feature_source.gdf,
            loaded.style_target.get_style(),
            legend,
            app_config.export,
        )
        write_classified(
            classified,
            output,
            layer=f"{loaded.layer_id}_{attribute}",
            driver=driver_for_path(output, app_config.export.driver),
        )
        if not as_json:
            console.print(f"[green]✓ Classified features written to {output}[/green]")


@click.command("apply-config")
@click.pass_context
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output GeoPackage (default: <input>_classified.gpkg)",
)
def apply_config(ctx, path, config_file, output):
    """Apply the classifications listed in a YAML file.

    \b
    Example configuration:
      layers:
        - layer: communes
          attribute: population
          method: quantile
          classes: 5
          ramp: blues
    """
    logger.info(f"COMMAND START: apply-config ({config_file})")
    try:
        batch = BatchConfig.from_yaml(config_file)
    except ConfigurationError as e:
        console.print(f"[red]Invalid batch configuration: {e}[/red]")
        raise click.Abort()

    stats = run_batch(path, batch, output_path=output, app_config=_app_config(ctx))

    table = Table(title="Batch summary", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in stats.items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)

    if stats["classifications_failed"]:
        ctx.exit(1)
