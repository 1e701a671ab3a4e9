#!/usr/bin/env python
"""
YAML-based batch classification of vector layers.

Example configuration::

    layers:
      - layer: communes
        attribute: population
        method: quantile
        classes: 5
        ramp: blues
      - layer: communes
        attribute: density
        colors: ["#ffffcc", "#fd8d3c", "#800026"]
        reverse: true
        output_layer: communes_density
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from choropleth.config.exceptions import ConfigurationValidationError
from choropleth.config.models import AppConfig
from choropleth.core.breaks import ClassificationMethod
from choropleth.core.engine import ClassificationEngine
from choropleth.core.exceptions import ChoroplethError
from choropleth.layers.events import EventBus
from choropleth.layers.geodata import (
    GeoDataFrameFeatureSource,
    list_file_layers,
    read_vector,
)
from choropleth.layers.registry import InMemoryLayerRegistry
from choropleth.publish.export import classify_geodataframe, write_classified
from choropleth.utils.console import console


@dataclass
class LayerClassificationConfig:
    """One classification of one source layer."""

    attribute: str
    layer: Optional[str] = None
    method: Optional[ClassificationMethod] = None
    classes: Optional[int] = None
    ramp: Optional[str] = None
    colors: Optional[List[str]] = None
    reverse: bool = False
    output_layer: Optional[str] = None

    def target_layer(self, default: str) -> str:
        return self.output_layer or f"{self.layer or default}_{self.attribute}"


@dataclass
class BatchConfig:
    """Parsed batch configuration."""

    layers: List[LayerClassificationConfig] = field(default_factory=list)
    source: Optional[Path] = None

    @classmethod
    def from_yaml(cls, config_path: Path) -> "BatchConfig":
        """
        Load batch configuration from YAML.

        Raises:
            ConfigurationValidationError: On a missing attribute or bad method
        """
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

        layers = []
        for i, entry in enumerate(raw_config.get("layers", []), 1):
            if not isinstance(entry, dict) or "attribute" not in entry:
                raise ConfigurationValidationError(
                    f"Entry {i} in {config_path.name} needs an 'attribute'"
                )
            try:
                method = (
                    ClassificationMethod.coerce(entry["method"])
                    if entry.get("method")
                    else None
                )
            except ValueError as e:
                raise ConfigurationValidationError(f"Entry {i}: {e}") from e

            layers.append(
                LayerClassificationConfig(
                    attribute=entry["attribute"],
                    layer=entry.get("layer"),
                    method=method,
                    classes=entry.get("classes"),
                    ramp=entry.get("ramp"),
                    colors=entry.get("colors"),
                    reverse=bool(entry.get("reverse", False)),
                    output_layer=entry.get("output_layer"),
                )
            )

        logger.info(f"Loaded batch config with {len(layers)} classifications")
        return cls(layers=layers, source=config_path)


def run_batch(
    input_path: Path,
    batch: BatchConfig,
    output_path: Optional[Path] = None,
    app_config: Optional[AppConfig] = None,
) -> Dict[str, Any]:
    """
    Apply every classification of ``batch`` and write one layer per entry.

    Args:
        input_path: Source vector file
        batch: Parsed batch configuration
        output_path: Output GeoPackage (default: ``<input>_classified.gpkg``)
        app_config: Application configuration

    Returns:
        Dictionary with processing statistics
    """
    app_config = app_config or AppConfig()
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.parent / f"{input_path.stem}_classified.gpkg"

    stats = {
        "classifications_applied": 0,
        "classifications_failed": 0,
        "features_total": 0,
        "features_unclassified": 0,
        "output": str(output_path),
    }

    available_layers = list_file_layers(input_path)
    bus = EventBus()
    registry = InMemoryLayerRegistry(events=bus)
    engine = ClassificationEngine(registry, events=bus, settings=app_config.classification)
    engine.connect(bus)

    written = False
    for i, entry in enumerate(batch.layers, 1):
        source_layer = entry.layer or available_layers[0]
        console.print(
            f"\n[bold blue][{i}/{len(batch.layers)}] {source_layer}.{entry.attribute}[/bold blue]"
        )

        if source_layer not in registry:
            try:
                gdf = read_vector(input_path, layer=entry.layer)
            except ChoroplethError as e:
                logger.error(f"Skipping entry {i}: {e}")
                stats["classifications_failed"] += 1
                continue
            registry.add_layer(source_layer, GeoDataFrameFeatureSource(gdf))

        layer = registry.get_layer(source_layer)
        result = engine.apply(
            source_layer,
            entry.attribute,
            ramp=entry.ramp,
            method=entry.method,
            num_classes=entry.classes,
            reverse=entry.reverse,
            custom_colors=entry.colors,
        )
        if not result:
            console.print(f"    [red]✗ Classification of {entry.attribute} failed[/red]")
            stats["classifications_failed"] += 1
            continue

        legend = engine.get_legend(source_layer)
        classified = classify_geodataframe(
            layer.feature_source.gdf,
            layer.style_target.get_style(),
            legend,
            app_config.export,
        )
        write_classified(
            classified,
            output_path,
            layer=entry.target_layer(source_layer),
            driver=app_config.export.driver,
            append=written,
        )
        written = True

        unclassified = int(classified[app_config.export.class_field].isna().sum())
        stats["classifications_applied"] += 1
        stats["features_total"] += len(classified)
        stats["features_unclassified"] += unclassified
        console.print(
            f"    [green]✓ {result.num_classes} classes, {len(classified) - unclassified} features classified[/green]"
        )
        legend.display(console)

    return stats
