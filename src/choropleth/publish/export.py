# src/choropleth/publish/export.py
"""
Write classified features: class index, fill, outline and legend label
columns computed by the style installed on a layer.
"""

from pathlib import Path
from typing import Optional

import geopandas as gpd
import pandas as pd
from loguru import logger

from choropleth.config.models import ExportConfig
from choropleth.core.models import LegendModel
from choropleth.core.style import ComputedStyle
from choropleth.layers.geodata import GeoDataFrameFeatureSource

DRIVERS_BY_SUFFIX = {
    ".gpkg": "GPKG",
    ".geojson": "GeoJSON",
    ".json": "GeoJSON",
    ".shp": "ESRI Shapefile",
    ".fgb": "FlatGeobuf",
}


def driver_for_path(path: Path, default: str = "GPKG") -> str:
    """OGR driver matching the output file extension."""
    return DRIVERS_BY_SUFFIX.get(Path(path).suffix.lower(), default)


def classify_geodataframe(
    gdf: gpd.GeoDataFrame,
    style: ComputedStyle,
    legend: Optional[LegendModel] = None,
    export: Optional[ExportConfig] = None,
) -> gpd.GeoDataFrame:
    """
    Return a copy of ``gdf`` with the resolved symbol of every feature.

    Args:
        gdf: Features to classify
        style: Computed style installed by the engine
        legend: Legend of the classification, for the label column
        export: Column names

    Returns:
        GeoDataFrame with class, fill, outline (and label) columns added
    """
    export = export or ExportConfig()
    features = GeoDataFrameFeatureSource(gdf).get_features()
    symbols = [style(feature) for feature in features]

    result = gdf.copy()
    result[export.class_field] = pd.array(
        [s.class_index for s in symbols], dtype="Int64"
    )
    result[export.fill_field] = [s.fill_color for s in symbols]
    result[export.outline_field] = [s.outline_color for s in symbols]

    if legend is not None:
        labels = {c.index: c.label for c in legend.classes}
        result[export.label_field] = [labels.get(s.class_index) for s in symbols]

    unclassified = sum(1 for s in symbols if s.class_index is None)
    if unclassified:
        logger.warning(f"{unclassified} features without a numeric value (fallback symbol)")
    return result


def write_classified(
    gdf: gpd.GeoDataFrame,
    output_path: Path,
    layer: Optional[str] = None,
    driver: str = "GPKG",
    append: bool = False,
) -> Path:
    """Write a classified GeoDataFrame; ``append`` adds a layer to an existing file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    kwargs = {"driver": driver}
    if layer:
        kwargs["layer"] = layer
    if append and output_path.exists():
        kwargs["mode"] = "a"

    gdf.to_file(output_path, **kwargs)
    logger.info(f"Wrote {len(gdf)} features to {output_path}" + (f" ({layer})" if layer else ""))
    return output_path
